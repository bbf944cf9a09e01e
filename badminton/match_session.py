import logging
from pathlib import Path
from typing import Optional

from badminton import announcer
from badminton.engine import reduce
from badminton.models import (
    DecrementScore,
    Event,
    IncrementScore,
    LoadGame,
    MatchState,
    MatchSummary,
    NextSet,
    ResetGame,
    SetLanguage,
    SetPlayerName,
    SetScoresMode,
    SetServer,
    StartMatch,
    Undo,
)
from badminton.speech import LoggingSpeechBackend, VoiceAnnouncer
from badminton.storage import load_state, save_state

logger = logging.getLogger(__name__)


class MatchSession:
    """
    Single local scoreboard session.

    Responsibilities:
    - Own the current MatchState (no module-level singleton)
    - Apply one event at a time through the pure reducer
    - Speak the announcement before a point is recorded
    - Persist the state after every change
    """

    def __init__(
        self,
        save_file: Optional[Path] = None,
        voice: Optional[VoiceAnnouncer] = None,
        state: Optional[MatchState] = None,
    ):
        self._save_file = save_file
        self.voice = voice if voice is not None else VoiceAnnouncer(LoggingSpeechBackend())
        self._state = state if state is not None else MatchState()

    @property
    def state(self) -> MatchState:
        return self._state

    # ---------------------------------------------------------
    # Core API
    # ---------------------------------------------------------

    def dispatch(self, event: Event) -> MatchState:
        new_state = reduce(self._state, event)

        if new_state is self._state:
            logger.debug("Ignored %s in phase %s", type(event).__name__, self._state.phase.value)
            return new_state

        self._state = new_state
        if self._save_file is not None:
            save_state(self._save_file, new_state)

        return new_state

    def load(self) -> MatchState:
        """
        Restore the saved state once at startup. A missing or corrupt save
        leaves the defaults in place.
        """
        if self._save_file is None:
            return self._state

        blob = load_state(self._save_file)
        if blob is None:
            return self._state

        self._state = reduce(self._state, LoadGame(blob))
        logger.info("Loaded game state from %s", self._save_file)
        return self._state

    # ---------------------------------------------------------
    # Gameplay
    # ---------------------------------------------------------

    def start_match(self) -> MatchState:
        if not self._state.is_match_started:
            self._speak(announcer.match_start_announcement(self._state.language))
        return self.dispatch(StartMatch())

    def increment_score(self, player: str) -> MatchState:
        state = self._state
        if not (state.is_set_finished or state.is_game_finished):
            self._speak(announcer.point_announcement(state, player))
        return self.dispatch(IncrementScore(player))

    def decrement_score(self, player: str) -> MatchState:
        return self.dispatch(DecrementScore(player))

    def next_set(self) -> MatchState:
        state = self._state
        if state.is_set_finished and not state.is_game_finished:
            self._speak(announcer.set_opener_announcement(state.scores_mode, state.language))
        return self.dispatch(NextSet())

    def undo(self) -> MatchState:
        return self.dispatch(Undo())

    def reset(self) -> MatchState:
        return self.dispatch(ResetGame())

    # ---------------------------------------------------------
    # Settings
    # ---------------------------------------------------------

    def set_server(self, player: str) -> MatchState:
        return self.dispatch(SetServer(player))

    def set_player_name(self, player: str, name: str) -> MatchState:
        return self.dispatch(SetPlayerName(player, name))

    def set_language(self, language: str) -> MatchState:
        return self.dispatch(SetLanguage(language))

    def set_scores_mode(self, mode: str) -> MatchState:
        return self.dispatch(SetScoresMode(mode))

    def toggle_mute(self) -> bool:
        return self.voice.toggle_mute()

    # ---------------------------------------------------------
    # Export
    # ---------------------------------------------------------

    def summary(self) -> MatchSummary:
        state = self._state
        return MatchSummary(
            winner=state.winner,
            winner_name=state.player_names[state.winner] if state.winner else None,
            set_scores=state.set_scores_history,
            sets=state.sets,
            player_names=state.player_names,
        )

    def _speak(self, text: str):
        self.voice.speak(text, self._state.language)
