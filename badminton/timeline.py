from typing import Iterable, List, Optional

from badminton.engine import reduce
from badminton.models import Event, IncrementScore, MatchState, NextSet


def build_match_timeline(events: Iterable[Event], state: Optional[MatchState] = None) -> List[MatchState]:
    """
    Replays events from `state` (defaults when omitted).
    Returns the state after each event.
    Does NOT mutate external state.
    """

    current = state if state is not None else MatchState()
    timeline: List[MatchState] = []

    for event in events:
        current = reduce(current, event)
        timeline.append(current)

    return timeline


def rally_events(winner_sequence: str) -> List[Event]:
    """
    Shorthand for scripted matches: "1" and "2" are points for player1 and
    player2, "n" advances to the next set, anything else is ignored.
    """
    events: List[Event] = []
    for code in winner_sequence:
        if code in ("1", "2"):
            events.append(IncrementScore(f"player{code}"))
        elif code == "n":
            events.append(NextSet())
    return events
