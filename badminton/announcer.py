"""Score announcement text.

Everything here is a pure function of scores and display settings; the
spoken output itself lives in `badminton.speech`.
"""

from typing import Optional

from badminton.models import LANGUAGES, SCORES_MODES, MatchState, Score, validate_player


_LOVE = {"ko": "러브", "en": "Love"}
_ALL = {"ko": "올", "en": "All"}

_MATCH_START = {"ko": "경기를 시작합니다", "en": "Match Start"}
_SET_OPENER = {
    ("ko", "bwf"): "러브 올",
    ("ko", "simple"): "영 대 영",
    ("en", "bwf"): "Love All",
    ("en", "simple"): "Zero - Zero",
}


def _check(scores_mode: str, language: str):
    if scores_mode not in SCORES_MODES:
        raise ValueError(f"Invalid scores mode: {scores_mode!r}")
    if language not in LANGUAGES:
        raise ValueError(f"Invalid language: {language!r}")


def announce(server_score: int, receiver_score: int, scores_mode: str, language: str) -> str:
    """
    Call the score, server first.

    BWF style says "Love" for zero and "<n> All" for level scores; the simple
    style reads plain numbers, joined by "대" in Korean.
    """
    _check(scores_mode, language)

    def point(value: int) -> str:
        if scores_mode == "bwf" and value == 0:
            return _LOVE[language]
        return str(value)

    if server_score == receiver_score:
        if scores_mode == "bwf":
            return f"{point(server_score)} {_ALL[language]}"
        if language == "ko":
            return f"{server_score} 대 {receiver_score}"
        return f"{server_score} All"

    if scores_mode == "bwf":
        return f"{point(server_score)} - {point(receiver_score)}"
    if language == "ko":
        return f"{server_score} 대 {receiver_score}"
    return f"{server_score} - {receiver_score}"


def score_announcement(scores: Score, server: Optional[str], scores_mode: str, language: str) -> str:
    # no server yet: call it from player1's side
    if server is None:
        server = "player1"
    validate_player(server)

    receiver = "player1" if server == "player2" else "player2"
    return announce(scores[server], scores[receiver], scores_mode, language)


def point_announcement(state: MatchState, player: str) -> str:
    """Text for the point `player` is about to win, spoken before it is recorded."""
    scores = state.scores.add(validate_player(player), 1)
    return score_announcement(scores, player, state.scores_mode, state.language)


def match_start_announcement(language: str) -> str:
    if language not in LANGUAGES:
        raise ValueError(f"Invalid language: {language!r}")
    return _MATCH_START[language]


def set_opener_announcement(scores_mode: str, language: str) -> str:
    _check(scores_mode, language)
    return _SET_OPENER[(language, scores_mode)]
