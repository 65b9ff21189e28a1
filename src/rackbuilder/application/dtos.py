"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from rackbuilder.domain import (
    BOMLineItem,
    CardDefinition,
    ChassisType,
    DiscountSummary,
    MarginSummary,
    PartNumberResult,
    PlacementError,
    SlotAssignment,
)


@dataclass
class RackBuildOutput:
    """Output DTO for a rack built from a rack file."""

    chassis: ChassisType | None = None
    assignment: SlotAssignment = field(default_factory=SlotAssignment)
    outside_cards: list[CardDefinition] = field(default_factory=list)
    part_number: PartNumberResult | None = None
    line_item: BOMLineItem | None = None
    margin: MarginSummary | None = None
    discount: DiscountSummary | None = None
    errors: list[PlacementError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if every card was placed."""
        return not self.errors and self.chassis is not None

    @property
    def warnings(self) -> list[str]:
        """Catalog data warnings raised while rendering the part number."""
        if self.part_number is None:
            return []
        return [issue.message for issue in self.part_number.unresolved]
