import pytest

from badminton.announcer import (
    announce,
    match_start_announcement,
    point_announcement,
    score_announcement,
    set_opener_announcement,
)
from badminton.models import MatchState, Score


@pytest.mark.parametrize("server, receiver, mode, language, expected", [
    (0, 0, "bwf", "en", "Love All"),
    (0, 0, "simple", "en", "0 All"),
    (0, 0, "bwf", "ko", "러브 올"),
    (0, 0, "simple", "ko", "0 대 0"),
    (5, 5, "bwf", "en", "5 All"),
    (5, 5, "bwf", "ko", "5 올"),
    (20, 20, "simple", "en", "20 All"),
    (1, 0, "bwf", "en", "1 - Love"),
    (0, 3, "bwf", "ko", "러브 - 3"),
    (11, 9, "bwf", "en", "11 - 9"),
    (1, 0, "simple", "en", "1 - 0"),
    (7, 12, "simple", "ko", "7 대 12"),
])
def test_announce(server, receiver, mode, language, expected):
    assert announce(server, receiver, mode, language) == expected


def test_server_score_is_called_first():
    scores = Score(player1=4, player2=9)

    assert score_announcement(scores, "player2", "simple", "en") == "9 - 4"
    assert score_announcement(scores, "player1", "simple", "en") == "4 - 9"


def test_no_server_reads_from_player1():
    assert score_announcement(Score(2, 6), None, "bwf", "en") == "2 - 6"


def test_point_announcement_uses_score_after_the_point():
    state = MatchState(scores=Score(0, 0), language="en")

    assert point_announcement(state, "player2") == "1 - Love"

    state = MatchState(scores=Score(19, 20), language="en", server="player2")
    assert point_announcement(state, "player1") == "20 All"


def test_fixed_phrases():
    assert match_start_announcement("en") == "Match Start"
    assert match_start_announcement("ko") == "경기를 시작합니다"
    assert set_opener_announcement("bwf", "en") == "Love All"
    assert set_opener_announcement("simple", "en") == "Zero - Zero"
    assert set_opener_announcement("simple", "ko") == "영 대 영"


@pytest.mark.parametrize("mode, language", [("itf", "en"), ("bwf", "de")])
def test_unknown_settings_rejected(mode, language):
    with pytest.raises(ValueError):
        announce(1, 2, mode, language)
