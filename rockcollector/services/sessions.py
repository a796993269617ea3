"""
Transient per-player state.

Conversion selections and minigame rounds never reach the save blob. They
live here for as long as the process does, keyed by player id.
"""

from dataclasses import dataclass, field

from rockcollector.services.converter import ConversionSelection
from rockcollector.services.minigames import FishingGame, SiftingRound


@dataclass
class PlayerSession:
    """Unsaved UI-adjacent state for one player."""

    selection: ConversionSelection = field(default_factory=ConversionSelection)
    fishing: FishingGame = field(default_factory=FishingGame)
    sifting: SiftingRound = field(default_factory=SiftingRound)


# Module-level registry
_sessions: dict[str, PlayerSession] = {}


def get_player_session(player_id: str) -> PlayerSession:
    """Get or create the transient session for a player."""
    session = _sessions.get(player_id)
    if session is None:
        session = PlayerSession()
        _sessions[player_id] = session
    return session


def drop_player_session(player_id: str) -> None:
    """Forget a player's transient state (e.g., on save reset)."""
    _sessions.pop(player_id, None)


def reset_player_sessions() -> None:
    """Forget all transient state (for testing)."""
    _sessions.clear()
