"""Immutable value objects for the rack configuration domain."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

# Card specification values form a small closed set of kinds.
SpecValue = Union[int, float, str, tuple[str, ...]]

BUSHING_CLASS = "bushing"
DEFAULT_CARD_CLASS = "generic"


class OutsideChassisOrder(str, Enum):
    """Ordering of outside-chassis codes in the part number suffix."""

    SELECTION = "selection"
    CATALOG = "catalog"


class SpanCode(str, Enum):
    """Code rendered in the continuation slots of a multi-slot card."""

    REPEAT = "repeat"
    ONCE = "once"
    PLACEHOLDER = "placeholder"


def _freeze_specifications(specs: Mapping[str, object]) -> Mapping[str, SpecValue]:
    frozen: dict[str, SpecValue] = {}
    for key, value in specs.items():
        if isinstance(value, bool):
            raise ValueError(f"Specification '{key}' must be a number, string or list of strings")
        if isinstance(value, (int, float, str)):
            frozen[key] = value
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            frozen[key] = tuple(value)
        else:
            raise ValueError(f"Specification '{key}' must be a number, string or list of strings")
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class ChassisType:
    """Static slot layout of a chassis model.

    Slots are numbered by physical position ``0..total_slots``. The CPU
    occupies ``cpu_slot_index`` and is always reserved; card slots are the
    remaining positions.

    Attributes:
        code: Canonical chassis code (e.g. "LTX").
        name: Human-readable chassis name.
        total_slots: Number of card slots.
        cpu_slot_index: Physical position of the CPU card.
        reserved_slots: Positions that can never hold a card.
        placement_groups: Ordered placement groups per special card class.
            The first group is the primary placement, later groups are
            fallbacks.
        price: List price of the bare chassis.
        cost: Internal cost of the bare chassis.
    """

    code: str
    name: str
    total_slots: int
    cpu_slot_index: int = 0
    reserved_slots: frozenset[int] = field(default_factory=frozenset)
    placement_groups: Mapping[str, tuple[tuple[int, ...], ...]] = field(
        default_factory=dict, hash=False
    )
    price: float = 0.0
    cost: float = 0.0

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Chassis code must not be empty")
        if self.total_slots < 1:
            raise ValueError("Chassis must have at least one card slot")
        if not 0 <= self.cpu_slot_index <= self.total_slots:
            raise ValueError("CPU slot index must be within the chassis")

        reserved = frozenset(self.reserved_slots) | {self.cpu_slot_index}
        object.__setattr__(self, "reserved_slots", reserved)

        groups: dict[str, tuple[tuple[int, ...], ...]] = {}
        for card_class, class_groups in self.placement_groups.items():
            normalized = tuple(tuple(group) for group in class_groups)
            for group in normalized:
                if len(group) < 2:
                    raise ValueError(
                        f"Placement group {list(group)} for '{card_class}' must span at least two slots"
                    )
                for slot in group:
                    if not self.contains(slot) or slot in reserved:
                        raise ValueError(
                            f"Placement group {list(group)} for '{card_class}' "
                            f"uses slot {slot}, which is not a card slot of {self.code}"
                        )
            groups[card_class] = normalized
        object.__setattr__(self, "placement_groups", MappingProxyType(groups))

    def contains(self, slot: int) -> bool:
        """Check whether a position exists in this chassis."""
        return 0 <= slot <= self.total_slots

    def is_assignable(self, slot: int) -> bool:
        """Check whether a card may ever be placed at a position."""
        return self.contains(slot) and slot not in self.reserved_slots

    @property
    def card_slots(self) -> tuple[int, ...]:
        """All assignable positions in ascending order."""
        return tuple(s for s in range(self.total_slots + 1) if s not in self.reserved_slots)

    def groups_for(self, card_class: str) -> tuple[tuple[int, ...], ...]:
        """Ordered placement groups for a special card class."""
        return self.placement_groups.get(card_class, ())


@dataclass(frozen=True)
class CardDefinition:
    """A placeable catalog card (Level 3 product).

    Attributes:
        id: Unique catalog identifier.
        name: Display name.
        card_class: Class of card; cards sharing a class supersede each
            other in multi-slot placement (e.g. "bushing").
        slot_span: Number of contiguous slots occupied.
        is_standard: Card is auto-included in every configuration.
        standard_position: Slot a standard card is pinned to, if any.
        designated_only: Card may only occupy ``designated_positions``.
        designated_positions: Allow-list of slots for designated cards.
        outside_chassis: Card has no physical slot but still contributes
            to the part number.
        remote_enable: Card turns on the remote indicator code.
        template: Part number code template with ``{key}`` placeholders.
        specifications: Attribute values used for template substitution.
        compatible_chassis: Chassis codes the card fits; empty means all.
        sort_order: Catalog sort position.
        price: List price.
        cost: Internal cost.
    """

    id: str
    name: str
    card_class: str = DEFAULT_CARD_CLASS
    slot_span: int = 1
    is_standard: bool = False
    standard_position: int | None = None
    designated_only: bool = False
    designated_positions: tuple[int, ...] = ()
    outside_chassis: bool = False
    remote_enable: bool = False
    template: str = "X"
    specifications: Mapping[str, SpecValue] = field(default_factory=dict, hash=False)
    compatible_chassis: frozenset[str] = field(default_factory=frozenset)
    sort_order: int = 0
    price: float = 0.0
    cost: float = 0.0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Card id must not be empty")
        if self.slot_span < 1:
            raise ValueError("Card slot span must be at least 1")
        if self.designated_only and not self.designated_positions:
            raise ValueError(
                f"Designated-only card '{self.id}' needs at least one designated position"
            )
        object.__setattr__(self, "designated_positions", tuple(self.designated_positions))
        object.__setattr__(
            self,
            "compatible_chassis",
            frozenset(code.upper() for code in self.compatible_chassis),
        )
        object.__setattr__(
            self, "specifications", _freeze_specifications(self.specifications)
        )

    @property
    def is_multi_slot(self) -> bool:
        """True when the card occupies more than one slot."""
        return self.slot_span > 1

    def allows_slot(self, slot: int) -> bool:
        """Check a slot against the designated allow-list."""
        return not self.designated_only or slot in self.designated_positions

    def fits_chassis(self, chassis: ChassisType) -> bool:
        """Check chassis compatibility."""
        return not self.compatible_chassis or chassis.code.upper() in self.compatible_chassis

    def with_specifications(self, **values: SpecValue) -> CardDefinition:
        """Return a copy with extra per-instance specification values.

        Used for Level 4 configuration, e.g. the number of bushings
        configured on a bushing card.
        """
        merged = dict(self.specifications)
        merged.update(values)
        return replace(self, specifications=merged)


@dataclass(frozen=True)
class PartNumberConfig:
    """Part number layout for one chassis type.

    Attributes:
        prefix: Leading text, e.g. "QTMS-LTX-".
        slot_placeholder: Code emitted for an empty slot.
        slot_count: Number of slot positions rendered, starting at slot 1.
        suffix_separator: Separator between slot codes and suffix.
        remote_off_code: Suffix code when no card enables remote access.
        remote_on_code: Suffix code when any card enables remote access.
        span_code: What continuation slots of a multi-slot card render:
            the anchor code again, nothing, or the empty-slot placeholder.
        outside_chassis_order: Ordering of outside-chassis codes.
    """

    prefix: str
    slot_count: int
    slot_placeholder: str = "0"
    suffix_separator: str = "-"
    remote_off_code: str = "0"
    remote_on_code: str = "1"
    span_code: SpanCode = SpanCode.REPEAT
    outside_chassis_order: OutsideChassisOrder = OutsideChassisOrder.SELECTION

    def __post_init__(self) -> None:
        if self.slot_count < 0:
            raise ValueError("Part number slot count cannot be negative")

    @classmethod
    def default_for(cls, chassis: ChassisType) -> PartNumberConfig:
        """Fallback configuration when the catalog defines none."""
        return cls(prefix=f"QTMS-{chassis.code.upper()}-", slot_count=chassis.total_slots)
