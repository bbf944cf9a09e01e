import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from badminton.config import EXPORT_DIR, LOG_LEVEL, SAVE_FILE
from badminton.match_session import MatchSession
from badminton.models import MatchPhase, MatchState
from render.summary import MatchSummaryRenderer

logger = logging.getLogger(__name__)

HELP = """Commands:
  1 / 2          point for player 1 / player 2
  -1 / -2        take a point back
  u              undo
  n              start next set
  r              reset match
  s              start match
  l              switch language (ko/en)
  m              switch announcement style (bwf/simple)
  v              mute / unmute
  name 1 <text>  rename a player
  x              save result image
  q              quit"""


def render_board(state: MatchState) -> str:
    names = state.player_names
    lines = [f"Set {state.current_set}  [{state.language.upper()} / {state.scores_mode.upper()}]"]

    for player in ("player1", "player2"):
        marker = "*" if state.server == player else " "
        lines.append(
            f"{marker} {names[player]:<16} {state.scores[player]:>2}   sets: {state.sets[player]}"
        )

    if state.phase is MatchPhase.SET_FINISHED:
        lines.append(f"Set won by {names[state.set_winner]} - 'n' for the next set")
    elif state.phase is MatchPhase.GAME_FINISHED:
        lines.append(f"{names[state.winner]} wins!")
        for index, score in enumerate(state.set_scores_history, 1):
            lines.append(f"  Set {index}: {score.player1} - {score.player2}")
    elif state.phase is MatchPhase.NOT_STARTED:
        lines.append("Press 's' to start the match")

    return "\n".join(lines)


def handle_command(session: MatchSession, line: str, export_dir: Path = EXPORT_DIR) -> Optional[str]:
    """
    Apply one operator command. Returns a message to print, or None to quit.
    """
    command = line.strip()
    state = session.state

    if command == "q":
        return None
    if command in ("1", "2"):
        session.increment_score(f"player{command}")
    elif command in ("-1", "-2"):
        session.decrement_score(f"player{command[1]}")
    elif command == "u":
        session.undo()
    elif command == "n":
        session.next_set()
    elif command == "r":
        session.reset()
    elif command == "s":
        session.start_match()
    elif command == "l":
        session.set_language("en" if state.language == "ko" else "ko")
    elif command == "m":
        session.set_scores_mode("simple" if state.scores_mode == "bwf" else "bwf")
    elif command == "v":
        return "Muted" if session.toggle_mute() else "Sound on"
    elif command.startswith("name "):
        parts = command.split(maxsplit=2)
        if len(parts) < 3 or parts[1] not in ("1", "2"):
            return "Usage: name <1|2> <text>"
        session.set_player_name(f"player{parts[1]}", parts[2])
    elif command == "x":
        return _export(session, export_dir)
    else:
        return HELP

    return render_board(session.state)


def _export(session: MatchSession, export_dir: Path) -> str:
    summary = session.summary()
    if not summary.is_finished:
        return "Match is not finished yet"

    try:
        path = MatchSummaryRenderer(summary).save(export_dir)
    except RuntimeError as e:
        logger.error("Failed to save image: %s", e)
        return "Failed to save image."

    return f"Saved: {path}"


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Badminton scoreboard for the terminal.")
    p.add_argument("--save-file", type=Path, default=SAVE_FILE, help="JSON file the match is kept in")
    p.add_argument("--export-dir", type=Path, default=EXPORT_DIR, help="Where result images are written")
    p.add_argument("--language", choices=["ko", "en"], default=None)
    p.add_argument("--scores-mode", choices=["bwf", "simple"], default=None)
    p.add_argument("--mute", action="store_true")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=LOG_LEVEL,
    )
    args = p.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = MatchSession(save_file=args.save_file)
    session.load()
    session.voice.muted = args.mute

    if args.language:
        session.set_language(args.language)
    if args.scores_mode:
        session.set_scores_mode(args.scores_mode)

    print(render_board(session.state))
    print("Type 'h' for help.")

    for line in sys.stdin:
        message = handle_command(session, line, args.export_dir)
        if message is None:
            break
        print(message)

    return 0


if __name__ == "__main__":
    sys.exit(main())
