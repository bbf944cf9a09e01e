from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Union

from badminton.config import (
    DEFAULT_LANGUAGE,
    DEFAULT_PLAYER_NAMES,
    DEFAULT_SCORES_MODE,
    HISTORY_LIMIT,
    POINT_CAP,
)
from badminton.exceptions import InvalidEventError


Player = Literal["player1", "player2"]
Language = Literal["ko", "en"]
ScoresMode = Literal["bwf", "simple"]

PLAYERS: Tuple[str, str] = ("player1", "player2")
LANGUAGES: Tuple[str, str] = ("ko", "en")
SCORES_MODES: Tuple[str, str] = ("bwf", "simple")


def validate_player(player: Any) -> str:
    if player not in PLAYERS:
        raise InvalidEventError(f"Invalid player: {player!r}")
    return player


def opponent(player: str) -> str:
    return "player2" if validate_player(player) == "player1" else "player1"


# =============================================================================
# Value types
# =============================================================================

@dataclass(frozen=True)
class Score:
    player1: int = 0
    player2: int = 0

    def __getitem__(self, player: str) -> int:
        return getattr(self, validate_player(player))

    def add(self, player: str, delta: int) -> "Score":
        return replace(self, **{player: self[player] + delta})

    def to_dict(self) -> Dict[str, int]:
        return {"player1": self.player1, "player2": self.player2}

    @staticmethod
    def from_dict(d: Any, upper: Optional[int] = None) -> "Score":
        """
        Key-wise parse; a missing or invalid value falls back to 0.
        """
        if not isinstance(d, Mapping):
            return Score()
        return Score(
            player1=_count(d.get("player1"), upper),
            player2=_count(d.get("player2"), upper),
        )


@dataclass(frozen=True)
class PlayerNames:
    player1: str = DEFAULT_PLAYER_NAMES["player1"]
    player2: str = DEFAULT_PLAYER_NAMES["player2"]

    def __getitem__(self, player: str) -> str:
        return getattr(self, validate_player(player))

    def rename(self, player: str, name: str) -> "PlayerNames":
        return replace(self, **{validate_player(player): name})

    def to_dict(self) -> Dict[str, str]:
        return {"player1": self.player1, "player2": self.player2}

    @staticmethod
    def from_dict(d: Any) -> "PlayerNames":
        names = PlayerNames()
        if not isinstance(d, Mapping):
            return names
        for player in PLAYERS:
            value = d.get(player)
            if isinstance(value, str):
                names = names.rename(player, value)
        return names


class MatchPhase(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SET_FINISHED = "set_finished"
    GAME_FINISHED = "game_finished"


@dataclass(frozen=True)
class MatchState:
    """
    Complete scoreboard state.

    Instances are never mutated: every transition builds a new one.
    `history` holds snapshots of earlier states (their own history emptied),
    oldest first, at most HISTORY_LIMIT of them.
    """
    scores: Score = field(default_factory=Score)
    sets: Score = field(default_factory=Score)
    current_set: int = 1
    server: Optional[Player] = None
    is_set_finished: bool = False
    is_game_finished: bool = False
    set_winner: Optional[Player] = None
    winner: Optional[Player] = None
    set_scores_history: Tuple[Score, ...] = ()
    player_names: PlayerNames = field(default_factory=PlayerNames)
    is_match_started: bool = False
    language: Language = DEFAULT_LANGUAGE
    scores_mode: ScoresMode = DEFAULT_SCORES_MODE
    history: Tuple["MatchState", ...] = ()

    @property
    def phase(self) -> MatchPhase:
        if self.is_game_finished:
            return MatchPhase.GAME_FINISHED
        if self.is_set_finished:
            return MatchPhase.SET_FINISHED
        if self.is_match_started:
            return MatchPhase.IN_PROGRESS
        return MatchPhase.NOT_STARTED

    def snapshot(self) -> "MatchState":
        return replace(self, history=())

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "scores": self.scores.to_dict(),
            "sets": self.sets.to_dict(),
            "currentSet": self.current_set,
            "server": self.server,
            "isGameFinished": self.is_game_finished,
            "isSetFinished": self.is_set_finished,
            "setWinner": self.set_winner,
            "winner": self.winner,
            "setScoresHistory": [s.to_dict() for s in self.set_scores_history],
            "playerNames": self.player_names.to_dict(),
            "isMatchStarted": self.is_match_started,
            "language": self.language,
            "scoresMode": self.scores_mode,
        }
        d["history"] = [h.snapshot().to_dict() for h in self.history]
        return d

    @staticmethod
    def from_dict(d: Any, with_history: bool = True) -> "MatchState":
        """
        Merge a persisted blob over the defaults, field by field.

        Nothing about the blob's shape is trusted: a field that is missing
        or has the wrong type/range keeps its default value, and flags that
        contradict each other are cleared.
        """
        defaults = MatchState()
        if not isinstance(d, Mapping):
            return defaults

        history: Tuple[MatchState, ...] = ()
        if with_history and isinstance(d.get("history"), list):
            entries = [
                MatchState.from_dict(h, with_history=False)
                for h in d["history"]
                if isinstance(h, Mapping)
            ]
            history = tuple(entries[-HISTORY_LIMIT:])

        current_set = d.get("currentSet")
        if not _is_int(current_set) or current_set < 1:
            current_set = defaults.current_set

        raw_history = d.get("setScoresHistory")
        set_scores = tuple(
            Score.from_dict(s) for s in (raw_history if isinstance(raw_history, list) else [])
            if isinstance(s, Mapping)
        )

        return _repair(MatchState(
            scores=Score.from_dict(d.get("scores"), upper=POINT_CAP),
            sets=Score.from_dict(d.get("sets")),
            current_set=current_set,
            server=_optional_player(d.get("server")),
            is_set_finished=_flag(d.get("isSetFinished"), defaults.is_set_finished),
            is_game_finished=_flag(d.get("isGameFinished"), defaults.is_game_finished),
            set_winner=_optional_player(d.get("setWinner")),
            winner=_optional_player(d.get("winner")),
            set_scores_history=set_scores,
            player_names=PlayerNames.from_dict(d.get("playerNames")),
            is_match_started=_flag(d.get("isMatchStarted"), defaults.is_match_started),
            language=d.get("language") if d.get("language") in LANGUAGES else defaults.language,
            scores_mode=(
                d.get("scoresMode") if d.get("scoresMode") in SCORES_MODES else defaults.scores_mode
            ),
            history=history,
        ))


def _repair(state: MatchState) -> MatchState:
    """
    Bring fields that were loaded one by one back in line with each other.
    """
    is_game_finished = state.is_game_finished and state.winner is not None
    is_set_finished = (
        state.is_set_finished and state.set_winner is not None and not is_game_finished
    )
    scores = state.scores

    # 30 always closes the set, so an open set cannot sit at the cap
    if not (is_set_finished or is_game_finished) and POINT_CAP in (scores.player1, scores.player2):
        scores = Score()

    return replace(
        state,
        scores=scores,
        is_game_finished=is_game_finished,
        is_set_finished=is_set_finished,
        winner=state.winner if is_game_finished else None,
        set_winner=state.set_winner if is_set_finished else None,
    )


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _count(x: Any, upper: Optional[int]) -> int:
    if not _is_int(x) or x < 0:
        return 0
    if upper is not None and x > upper:
        return 0
    return x


def _flag(x: Any, default: bool) -> bool:
    return x if isinstance(x, bool) else default


def _optional_player(x: Any) -> Optional[str]:
    return x if x in PLAYERS else None


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class StartMatch:
    pass


@dataclass(frozen=True)
class IncrementScore:
    player: Player


@dataclass(frozen=True)
class DecrementScore:
    player: Player


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class ResetGame:
    pass


@dataclass(frozen=True)
class NextSet:
    pass


@dataclass(frozen=True)
class SetServer:
    player: Player


@dataclass(frozen=True)
class SetPlayerName:
    player: Player
    name: str


@dataclass(frozen=True)
class SetLanguage:
    language: Language


@dataclass(frozen=True)
class SetScoresMode:
    mode: ScoresMode


@dataclass(frozen=True)
class LoadGame:
    state: Any


Event = Union[
    StartMatch,
    IncrementScore,
    DecrementScore,
    Undo,
    ResetGame,
    NextSet,
    SetServer,
    SetPlayerName,
    SetLanguage,
    SetScoresMode,
    LoadGame,
]


# --- EXPORT TYPES ---

@dataclass(frozen=True)
class MatchSummary:
    winner: Optional[Player]
    winner_name: Optional[str]
    set_scores: Tuple[Score, ...]
    sets: Score
    player_names: PlayerNames

    @property
    def is_finished(self) -> bool:
        return self.winner is not None
