"""Result types for slot placement."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .slot_assignment import SlotAssignment
from .value_objects import CardDefinition


class PlacementErrorKind(str, Enum):
    """Categories of placement failure."""

    SLOT_OCCUPIED = "slot_occupied"
    SLOT_NOT_ALLOWED = "slot_not_allowed"
    UNSUPPORTED_FOR_CHASSIS = "unsupported_for_chassis"
    CHASSIS_TYPE_UNRESOLVED = "chassis_type_unresolved"
    NO_FREE_SLOT = "no_free_slot"
    SLOT_EMPTY = "slot_empty"


@dataclass(frozen=True)
class PlacementError:
    """A recoverable placement failure, shown to the user as validation.

    Attributes:
        kind: Failure category.
        message: Human-readable explanation.
        card_id: Card that could not be placed, if known.
        slot: Slot involved in the failure, if any.
    """

    kind: PlacementErrorKind
    message: str
    card_id: str | None = None
    slot: int | None = None


@dataclass(frozen=True)
class DisplacedCard:
    """A card cleared from the chassis as a side effect of a placement.

    Attributes:
        card: The removed card.
        slots: Slots it occupied.
        superseded: True when replaced by a newer card of the same class,
            False when evicted to make room for a different class.
    """

    card: CardDefinition
    slots: tuple[int, ...]
    superseded: bool = False


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a placement request.

    On success ``assignment`` is the new slot map. On failure it is the
    unchanged input and ``error`` explains why.

    Attributes:
        assignment: Resulting (or untouched) slot map.
        error: Failure reason, None on success.
        slots: Slots the card now occupies; empty for outside-chassis
            cards and failures.
        displaced: Cards cleared to make room.
    """

    assignment: SlotAssignment
    error: PlacementError | None = None
    slots: tuple[int, ...] = ()
    displaced: tuple[DisplacedCard, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """True when the card was placed."""
        return self.error is None

    @classmethod
    def success(
        cls,
        assignment: SlotAssignment,
        slots: tuple[int, ...] = (),
        displaced: tuple[DisplacedCard, ...] = (),
    ) -> PlacementResult:
        return cls(assignment=assignment, slots=slots, displaced=displaced)

    @classmethod
    def fail(
        cls,
        assignment: SlotAssignment,
        kind: PlacementErrorKind,
        message: str,
        card_id: str | None = None,
        slot: int | None = None,
    ) -> PlacementResult:
        """Create a failed result carrying the unchanged assignment."""
        return cls(
            assignment=assignment,
            error=PlacementError(kind=kind, message=message, card_id=card_id, slot=slot),
        )
