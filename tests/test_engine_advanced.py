import random
from dataclasses import replace

import pytest

from badminton.config import HISTORY_LIMIT
from badminton.engine import reduce
from badminton.models import (
    DecrementScore,
    IncrementScore,
    MatchState,
    NextSet,
    Score,
    SetLanguage,
    SetPlayerName,
    SetScoresMode,
    Undo,
)
from badminton.timeline import rally_events


# ---------------------------------------------------------
# Helpers
# ---------------------------------------------------------

def play(sequence, state=None):
    state = state if state is not None else MatchState(is_match_started=True)
    for event in rally_events(sequence):
        state = reduce(state, event)
    return state


def assert_consistent(state):
    assert 0 <= state.scores.player1 <= 30
    assert 0 <= state.scores.player2 <= 30
    assert not (state.is_set_finished and state.is_game_finished)
    assert (state.set_winner is not None) == state.is_set_finished
    assert (state.winner is not None) == state.is_game_finished
    assert len(state.history) <= HISTORY_LIMIT
    assert all(h.history == () for h in state.history)

    if 30 in (state.scores.player1, state.scores.player2):
        assert state.is_set_finished or state.is_game_finished

    if state.is_set_finished or state.is_game_finished:
        assert len(state.set_scores_history) == state.current_set
    else:
        assert len(state.set_scores_history) == state.current_set - 1


# ---------------------------------------------------------
# Undo
# ---------------------------------------------------------

def test_undo_restores_previous_state():
    before = play("1122")
    after = reduce(reduce(before, IncrementScore("player1")), Undo())

    assert after == before


def test_undo_keeps_language_mode_and_names():
    state = play("1")
    state = reduce(state, SetLanguage("en"))
    state = reduce(state, SetScoresMode("simple"))
    state = reduce(state, SetPlayerName("player1", "Kim"))

    state = reduce(state, Undo())

    assert state.scores == Score(0, 0)
    assert state.server is None
    assert state.language == "en"
    assert state.scores_mode == "simple"
    assert state.player_names.player1 == "Kim"
    assert state.history == ()


def test_undo_with_empty_history_is_noop():
    state = MatchState()
    assert reduce(state, Undo()) is state


def test_undo_reopens_finished_set():
    before = play("1" * 20)
    finished = reduce(before, IncrementScore("player1"))
    assert finished.is_set_finished

    assert reduce(finished, Undo()) == before


def test_undo_next_set():
    finished = play("1" * 21)
    state = reduce(finished, NextSet())

    assert reduce(state, Undo()) == finished


# ---------------------------------------------------------
# Decrement
# ---------------------------------------------------------

def test_decrement_right_after_increment_is_full_undo():
    before = play("1" * 20)
    finished = reduce(before, IncrementScore("player1"))

    restored = reduce(finished, DecrementScore("player1"))

    assert restored == before
    assert restored.is_set_finished is False
    assert restored.sets == Score(0, 0)
    assert restored.set_scores_history == ()


def test_decrement_reverts_game_win():
    before = play("1" * 21 + "n" + "1" * 20)
    finished = reduce(before, IncrementScore("player1"))
    assert finished.is_game_finished

    assert reduce(finished, DecrementScore("player1")) == before


def test_decrement_after_other_players_point_is_plain():
    state = play("112")
    assert state.scores == Score(2, 1)

    state = reduce(state, DecrementScore("player1"))

    assert state.scores == Score(1, 1)
    assert state.server == "player2"
    assert len(state.history) == 4
    assert state.history[-1].scores == Score(2, 1)


def test_plain_decrement_never_reopens_set():
    finished = play("12" * 20 + "11")
    assert finished.scores == Score(22, 20)

    state = reduce(finished, DecrementScore("player2"))

    assert state.scores == Score(22, 19)
    assert state.is_set_finished is True
    assert state.sets == Score(1, 0)


def test_decrement_at_zero_is_noop():
    state = play("1")
    assert reduce(state, DecrementScore("player2")) is state


def test_decrement_with_empty_history_is_noop():
    state = MatchState(scores=Score(3, 0))
    assert reduce(state, DecrementScore("player1")) is state


def test_decrement_after_next_set_at_zero_is_noop():
    state = reduce(play("1" * 21), NextSet())
    assert reduce(state, DecrementScore("player1")) is state


# ---------------------------------------------------------
# History bound
# ---------------------------------------------------------

def test_history_keeps_last_50_snapshots():
    state = play("12" * 29)

    assert state.scores == Score(29, 29)
    assert len(state.history) == HISTORY_LIMIT
    assert state.history[0].scores == Score(4, 4)
    assert state.history[-1].scores == Score(29, 28)


def test_undo_stops_at_oldest_kept_snapshot():
    state = play("12" * 29)

    for _ in range(HISTORY_LIMIT + 5):
        state = reduce(state, Undo())

    assert state.scores == Score(4, 4)
    assert state.history == ()


# ---------------------------------------------------------
# Purity
# ---------------------------------------------------------

def test_reduce_does_not_modify_input():
    state = play("1" * 20 + "2")
    copy = replace(state)

    reduce(state, IncrementScore("player1"))
    reduce(state, DecrementScore("player2"))
    reduce(state, Undo())

    assert state == copy


def test_replay_is_deterministic():
    sequence = "1212211" * 5 + "n" + "22"

    assert play(sequence) == play(sequence)


# ---------------------------------------------------------
# Random simulation
# ---------------------------------------------------------

@pytest.mark.parametrize("seed", range(10))
def test_random_events_keep_invariants(seed):
    rng = random.Random(seed)
    state = MatchState(is_match_started=True)

    for _ in range(600):
        roll = rng.random()
        player = rng.choice(["player1", "player2"])

        if roll < 0.75:
            event = IncrementScore(player)
        elif roll < 0.85:
            event = DecrementScore(player)
        elif roll < 0.92:
            event = Undo()
        else:
            event = NextSet()

        state = reduce(state, event)
        assert_consistent(state)


def test_frozen_state_only_moves_by_next_set():
    state = play("1" * 21)

    for player in ("player1", "player2"):
        assert reduce(state, IncrementScore(player)) is state

    assert reduce(state, NextSet()).scores == Score(0, 0)
