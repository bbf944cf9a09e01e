from dataclasses import replace

from badminton.config import DEUCE_POINTS, HISTORY_LIMIT, MAX_POINTS, MAX_SETS, POINT_CAP
from badminton.models import (
    DecrementScore,
    Event,
    IncrementScore,
    LoadGame,
    MatchState,
    NextSet,
    ResetGame,
    Score,
    SetLanguage,
    SetPlayerName,
    SetScoresMode,
    SetServer,
    StartMatch,
    Undo,
    LANGUAGES,
    SCORES_MODES,
    opponent,
    validate_player,
)
from badminton.exceptions import InvalidEventError


def reduce(state: MatchState, event: Event) -> MatchState:
    """
    Apply one event and return the resulting state.

    Pure: `state` is never modified and nothing outside the return value
    changes. Events that are not valid in the current phase return `state`
    itself.
    """

    if isinstance(event, IncrementScore):
        return _increment_score(state, validate_player(event.player))
    if isinstance(event, DecrementScore):
        return _decrement_score(state, validate_player(event.player))
    if isinstance(event, NextSet):
        return _next_set(state)
    if isinstance(event, Undo):
        return _undo(state)
    if isinstance(event, ResetGame):
        return _reset(state)
    if isinstance(event, StartMatch):
        return replace(state, is_match_started=True)
    if isinstance(event, SetServer):
        return replace(state, server=validate_player(event.player))
    if isinstance(event, SetPlayerName):
        return replace(
            state,
            player_names=state.player_names.rename(event.player, str(event.name)),
        )
    if isinstance(event, SetLanguage):
        if event.language not in LANGUAGES:
            raise InvalidEventError(f"Invalid language: {event.language!r}")
        return replace(state, language=event.language)
    if isinstance(event, SetScoresMode):
        if event.mode not in SCORES_MODES:
            raise InvalidEventError(f"Invalid scores mode: {event.mode!r}")
        return replace(state, scores_mode=event.mode)
    if isinstance(event, LoadGame):
        return MatchState.from_dict(event.state)

    raise TypeError(f"Unsupported event: {type(event).__name__}")


# =========================================================
# HISTORY
# =========================================================

def _push_history(state: MatchState):
    history = state.history + (state.snapshot(),)
    return history[-HISTORY_LIMIT:]


def _restore_previous(state: MatchState) -> MatchState:
    previous = state.history[-1]
    return replace(
        previous,
        language=state.language,
        scores_mode=state.scores_mode,
        player_names=state.player_names,
        history=state.history[:-1],
    )


# =========================================================
# SET LOGIC
# =========================================================

def is_set_won(scores: Score, player: str) -> bool:
    """
    True when `player` has just taken the set at `scores`.

    21 points wins outright unless both sides reached 20, in which case a
    two point lead is needed. Reaching 30 always wins.
    """
    own = scores[player]
    other = scores[opponent(player)]

    if own >= POINT_CAP:
        return True

    if own >= DEUCE_POINTS and other >= DEUCE_POINTS:
        return own - other >= 2

    return own >= MAX_POINTS


# =========================================================
# MATCH LOGIC
# =========================================================

def _sets_needed() -> int:
    # best-of-3: more than half of the sets
    return MAX_SETS // 2 + 1


def _increment_score(state: MatchState, player: str) -> MatchState:
    if state.is_game_finished or state.is_set_finished:
        return state

    scores = state.scores.add(player, 1)
    updated = replace(
        state,
        scores=scores,
        server=player,
        history=_push_history(state),
    )

    if not is_set_won(scores, player):
        return updated

    sets = state.sets.add(player, 1)
    updated = replace(
        updated,
        sets=sets,
        set_scores_history=state.set_scores_history + (scores,),
        is_set_finished=True,
        set_winner=player,
    )

    needed = _sets_needed()
    if sets.player1 >= needed or sets.player2 >= needed:
        # game over replaces the between-sets screen
        updated = replace(
            updated,
            is_game_finished=True,
            winner="player1" if sets.player1 > sets.player2 else "player2",
            is_set_finished=False,
            set_winner=None,
        )

    return updated


def _decrement_score(state: MatchState, player: str) -> MatchState:
    if not state.history:
        return state

    previous = state.history[-1]
    other = opponent(player)

    last_was_increment = (
        state.scores[player] - previous.scores[player] == 1
        and state.scores[other] - previous.scores[other] == 0
    )
    if last_was_increment:
        return _restore_previous(state)

    if state.scores[player] <= 0:
        return state

    return replace(
        state,
        scores=state.scores.add(player, -1),
        history=_push_history(state),
    )


def _next_set(state: MatchState) -> MatchState:
    if not state.is_set_finished or state.is_game_finished:
        return state

    return replace(
        state,
        current_set=state.current_set + 1,
        scores=Score(),
        is_set_finished=False,
        set_winner=None,
        history=_push_history(state),
    )


def _undo(state: MatchState) -> MatchState:
    if not state.history:
        return state
    return _restore_previous(state)


def _reset(state: MatchState) -> MatchState:
    return MatchState(
        language=state.language,
        scores_mode=state.scores_mode,
        player_names=state.player_names,
    )
