"""
Failure classification for engine operations.

Every failure an operation can surface belongs to exactly one class:

- Fatal: static catalogs could not be loaded. The game does not start.
- Configuration: the operation referenced content that does not exist or
  cannot be resolved (unknown pack type, empty candidate pool). The single
  operation aborts with no state mutation.
- Rejected: a precondition did not hold (no packs left, slot busy, nothing
  to convert). No state mutation.
- Invariant: content data broke an assumption the engine relies on.

Recoverable substitutions (fallback draws) are NOT failures. They are
reported on result objects and logged, never raised.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Fatal
    CATALOG_UNAVAILABLE = "catalog_unavailable"

    # Configuration errors
    UNKNOWN_PACK = "unknown_pack"
    MISSING_RARITY_TABLE = "missing_rarity_table"
    NO_CANDIDATES = "no_candidates"
    UNKNOWN_SLOT = "unknown_slot"

    # Rejected preconditions
    NO_PACKS_LEFT = "no_packs_left"
    SLOT_BUSY = "slot_busy"
    SLOT_NOT_COMPLETE = "slot_not_complete"
    NO_QUALIFYING_REWARD = "no_qualifying_reward"
    INVALID_SELECTION = "invalid_selection"
    NOT_OWNED = "not_owned"

    # Content invariants
    INVARIANT_VIOLATION = "invariant_violation"


class FailureDetail(BaseModel):
    """Error body returned to the collaborator layer."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    fatal: bool = Field(
        default=False,
        description="True when the game cannot continue without reloading content",
    )


class GameError(Exception):
    """
    Base class for all classified engine failures.

    Subclasses fix the failure class; `kind` narrows it.
    """

    fatal = False

    def __init__(self, kind: FailureKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        return FailureDetail(kind=self.kind, message=self.message, fatal=self.fatal)


class CatalogLoadError(GameError):
    """A static catalog is missing or malformed. Halts initialization."""

    fatal = True

    def __init__(self, message: str) -> None:
        super().__init__(FailureKind.CATALOG_UNAVAILABLE, message)


class ConfigurationError(GameError):
    """Content needed by one operation is missing. Aborts that operation only."""


class NoCandidatesError(ConfigurationError):
    """A card draw found no eligible card even after fallback."""

    def __init__(self, message: str) -> None:
        super().__init__(FailureKind.NO_CANDIDATES, message)


class PreconditionRejected(GameError):
    """The action is not currently allowed. Nothing was changed."""


class InvariantViolation(GameError):
    """Content data broke an engine invariant (e.g., no region unlocked)."""

    def __init__(self, message: str) -> None:
        super().__init__(FailureKind.INVARIANT_VIOLATION, message)
