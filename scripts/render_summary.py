import argparse
from pathlib import Path

from badminton.config import EXPORT_DIR
from badminton.match_session import MatchSession
from badminton.models import StartMatch
from badminton.timeline import build_match_timeline, rally_events
from render.summary import MatchSummaryRenderer


def main():
    ap = argparse.ArgumentParser(description="Replay a scripted match and save its result image.")
    ap.add_argument(
        "--points",
        type=str,
        default="1" * 21 + "n" + "2" * 21 + "n" + "12" * 20 + "11",
        help="1/2 = point for player1/player2, n = next set",
    )
    ap.add_argument("--player1", type=str, default="Player 1")
    ap.add_argument("--player2", type=str, default="Player 2")
    ap.add_argument("--out-dir", type=str, default=str(EXPORT_DIR))
    args = ap.parse_args()

    session = MatchSession()
    session.set_player_name("player1", args.player1)
    session.set_player_name("player2", args.player2)

    timeline = build_match_timeline([StartMatch()] + rally_events(args.points), session.state)
    session = MatchSession(state=timeline[-1])

    summary = session.summary()
    if not summary.is_finished:
        raise SystemExit("ERROR: the point sequence does not finish the match")

    path = MatchSummaryRenderer(summary).save(Path(args.out_dir))
    print(f"Saved: {path}")


if __name__ == "__main__":
    main()
