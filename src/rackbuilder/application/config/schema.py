"""Pydantic models for catalog and rack configuration files.

Two file kinds share this schema module:

- Catalog files describe chassis types, cards and part number layouts.
- Rack files describe one configured chassis: the chassis type and the
  cards placed into it, in the order the user added them.
"""

from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from rackbuilder.domain.value_objects import (
    BUSHING_CLASS,
    DEFAULT_CARD_CLASS,
    OutsideChassisOrder,
    SpanCode,
)

# Supported schema versions for configuration files
# Version 1.0: Initial catalog and rack schema
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

SpecValueConfig = int | float | str | list[str]


def _check_version(v: str) -> str:
    if v not in SUPPORTED_VERSIONS:
        supported = ", ".join(sorted(SUPPORTED_VERSIONS))
        raise ValueError(f"Unsupported schema version '{v}'. Supported: {supported}")
    return v


class ChassisTypeConfig(BaseModel):
    """Slot layout of one chassis type.

    Attributes:
        code: Canonical chassis code (e.g. "LTX")
        name: Display name
        total_slots: Number of card slots (1 to 32)
        cpu_slot_index: Physical position of the CPU card
        reserved_slots: Additional positions that can never hold a card
        placement_groups: Ordered placement groups per special card class,
            primary first
        price: List price of the bare chassis
        cost: Internal cost of the bare chassis
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(..., min_length=1, max_length=32)
    name: str = ""
    total_slots: int = Field(..., ge=1, le=32)
    cpu_slot_index: int = Field(default=0, ge=0)
    reserved_slots: list[int] = Field(default_factory=list)
    placement_groups: dict[str, list[list[int]]] = Field(default_factory=dict)
    price: float = Field(default=0.0, ge=0)
    cost: float = Field(default=0.0, ge=0)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Chassis codes are stored upper-case."""
        return v.strip().upper()

    @model_validator(mode="after")
    def validate_slots(self) -> "ChassisTypeConfig":
        """Validate that every referenced slot exists on the chassis."""
        if self.cpu_slot_index > self.total_slots:
            raise ValueError("cpu_slot_index must be within the chassis")
        for slot in self.reserved_slots:
            if not 0 <= slot <= self.total_slots:
                raise ValueError(f"reserved slot {slot} is outside the chassis")
        for card_class, groups in self.placement_groups.items():
            for group in groups:
                if len(group) < 2:
                    raise ValueError(
                        f"placement group {group} for '{card_class}' must span at least two slots"
                    )
                for slot in group:
                    if not 1 <= slot <= self.total_slots:
                        raise ValueError(
                            f"placement group {group} for '{card_class}' uses slot {slot}, "
                            f"outside 1..{self.total_slots}"
                        )
        return self


class CardConfig(BaseModel):
    """A Level 3 card and its part number template.

    Attributes:
        id: Unique catalog identifier
        name: Display name
        card_class: Card class; "bushing" cards use placement groups
        slot_span: Number of contiguous slots occupied (1 to 4)
        template: Part number code template with {key} placeholders
        is_standard: Auto-included in every configuration
        standard_position: Slot a standard card is pinned to
        designated_only: Restricted to designated_positions
        designated_positions: Allow-list of slots
        outside_chassis: Contributes to the part number without a slot
        remote_enable: Turns on the remote indicator code
        specifications: Attribute values for template substitution
        compatible_chassis: Chassis codes the card fits (empty means all)
        sort_order: Catalog sort position
        price: List price
        cost: Internal cost
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    card_class: str = DEFAULT_CARD_CLASS
    slot_span: int = Field(default=1, ge=1, le=4)
    template: str = "X"
    is_standard: bool = False
    standard_position: int | None = Field(default=None, ge=0)
    designated_only: bool = False
    designated_positions: list[int] = Field(default_factory=list)
    outside_chassis: bool = False
    remote_enable: bool = False
    specifications: dict[str, SpecValueConfig] = Field(default_factory=dict)
    compatible_chassis: list[str] = Field(default_factory=list)
    sort_order: int = 0
    price: float = Field(default=0.0, ge=0)
    cost: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def validate_placement_flags(self) -> "CardConfig":
        """Validate combinations of placement flags."""
        if self.designated_only and not self.designated_positions:
            raise ValueError("designated_only cards need designated_positions")
        if self.outside_chassis and (self.standard_position is not None or self.designated_only):
            raise ValueError("outside_chassis cards cannot be pinned to a slot")
        if self.card_class == BUSHING_CLASS and self.slot_span < 2:
            raise ValueError("bushing cards must span at least two slots")
        return self


class PartNumberConfigSchema(BaseModel):
    """Part number layout of one chassis type.

    Attributes:
        chassis_type: Chassis code this layout belongs to
        prefix: Leading text of the part number
        slot_count: Slot positions rendered (defaults to the chassis slots)
        slot_placeholder: Code for an empty slot
        suffix_separator: Separator before the suffix
        remote_off_code: Suffix code without remote access
        remote_on_code: Suffix code with remote access
        span_code: Continuation slots of a multi-slot card render the
            anchor code again ("repeat"), nothing ("once"), or the
            empty-slot placeholder ("placeholder")
        outside_chassis_order: "selection" or "catalog"
    """

    model_config = ConfigDict(extra="forbid")

    chassis_type: str = Field(..., min_length=1)
    prefix: str
    slot_count: int | None = Field(default=None, ge=0, le=32)
    slot_placeholder: str = "0"
    suffix_separator: str = "-"
    remote_off_code: str = "0"
    remote_on_code: str = "1"
    span_code: SpanCode = SpanCode.REPEAT
    outside_chassis_order: OutsideChassisOrder = OutsideChassisOrder.SELECTION


class CatalogConfiguration(BaseModel):
    """Root model of a catalog file.

    Attributes:
        schema_version: Version string in format "major.minor"
        chassis_types: Chassis slot layouts
        aliases: Legacy chassis identifiers mapped to chassis codes
        cards: Card catalog
        part_numbers: Part number layouts, one per chassis type
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    chassis_types: list[ChassisTypeConfig] = Field(..., min_length=1)
    aliases: dict[str, str] = Field(default_factory=dict)
    cards: list[CardConfig] = Field(default_factory=list)
    part_numbers: list[PartNumberConfigSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported."""
        return _check_version(v)

    @model_validator(mode="after")
    def validate_references(self) -> "CatalogConfiguration":
        """Validate ids are unique and references point at known chassis."""
        codes = [c.code for c in self.chassis_types]
        if len(set(codes)) != len(codes):
            raise ValueError("chassis type codes must be unique")
        card_ids = [c.id for c in self.cards]
        if len(set(card_ids)) != len(card_ids):
            raise ValueError("card ids must be unique")
        for alias, code in self.aliases.items():
            if code.upper() not in codes:
                raise ValueError(f"alias '{alias}' points at unknown chassis '{code}'")
        for pn in self.part_numbers:
            if pn.chassis_type.upper() not in codes:
                raise ValueError(
                    f"part number layout for unknown chassis '{pn.chassis_type}'"
                )
        return self


class RackCardConfig(BaseModel):
    """One card selection in a rack file.

    Attributes:
        card_id: Catalog card id
        slot: Requested slot (auto-picked when omitted)
        specifications: Per-card Level 4 values merged over the catalog's
    """

    model_config = ConfigDict(extra="forbid")

    card_id: str = Field(..., min_length=1)
    slot: int | None = Field(default=None, ge=0)
    specifications: dict[str, SpecValueConfig] = Field(default_factory=dict)


class RackConfiguration(BaseModel):
    """Root model of a rack file.

    Attributes:
        schema_version: Version string in format "major.minor"
        chassis_type: Chassis code or legacy alias
        include_standard_cards: Auto-include the catalog's standard cards
        cards: Card selections applied in order
        quantity: Number of identical racks quoted
        discount_percentage: Quote-level discount (0 to 100)
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    chassis_type: str = Field(..., min_length=1)
    include_standard_cards: bool = True
    cards: list[RackCardConfig] = Field(default_factory=list)
    quantity: int = Field(default=1, ge=1)
    discount_percentage: float = Field(default=0.0, ge=0, le=100)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported."""
        return _check_version(v)
