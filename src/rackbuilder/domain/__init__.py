"""Domain layer - slot placement and part number rules."""

from .part_number import (
    PartNumberResult,
    UnresolvedPlaceholder,
    assemble_part_number,
    render_part_number,
    render_template,
)
from .pricing import (
    BOMLineItem,
    DiscountSummary,
    MarginSummary,
    PricedOption,
    calculate_discounted_margin,
    calculate_total_margin,
)
from .results import DisplacedCard, PlacementError, PlacementErrorKind, PlacementResult
from .slot_assignment import SlotAssignment, SlotOccupant
from .slot_config import (
    CHASSIS_ALIASES,
    DEFAULT_CHASSIS_TYPES,
    ChassisTypeUnresolved,
    SlotConfigurationTable,
    normalize_chassis_key,
    resolve_chassis_config,
)
from .slot_engine import (
    move_card,
    place_card,
    place_standard_cards,
    rebuild_assignment,
    remove_card,
)
from .value_objects import (
    BUSHING_CLASS,
    CardDefinition,
    ChassisType,
    OutsideChassisOrder,
    PartNumberConfig,
    SpanCode,
    SpecValue,
)

__all__ = [
    "BOMLineItem",
    "BUSHING_CLASS",
    "CHASSIS_ALIASES",
    "CardDefinition",
    "ChassisType",
    "ChassisTypeUnresolved",
    "DEFAULT_CHASSIS_TYPES",
    "DiscountSummary",
    "DisplacedCard",
    "MarginSummary",
    "OutsideChassisOrder",
    "PartNumberConfig",
    "PartNumberResult",
    "PlacementError",
    "PlacementErrorKind",
    "PlacementResult",
    "PricedOption",
    "SlotAssignment",
    "SlotConfigurationTable",
    "SlotOccupant",
    "SpanCode",
    "SpecValue",
    "UnresolvedPlaceholder",
    "assemble_part_number",
    "calculate_discounted_margin",
    "calculate_total_margin",
    "move_card",
    "normalize_chassis_key",
    "place_card",
    "place_standard_cards",
    "rebuild_assignment",
    "remove_card",
    "render_part_number",
    "render_template",
    "resolve_chassis_config",
]
