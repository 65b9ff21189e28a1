"""Adapter to convert configuration models into domain value objects."""

from rackbuilder.application.config.schema import (
    CardConfig,
    ChassisTypeConfig,
    PartNumberConfigSchema,
)
from rackbuilder.domain.value_objects import (
    CardDefinition,
    ChassisType,
    PartNumberConfig,
)


def config_to_chassis_type(config: ChassisTypeConfig) -> ChassisType:
    """Convert a ChassisTypeConfig into a ChassisType.

    Raises:
        ValueError: If the slot layout breaks a domain invariant, such as a
            placement group using a reserved slot.
    """
    return ChassisType(
        code=config.code,
        name=config.name or f"{config.code} Chassis",
        total_slots=config.total_slots,
        cpu_slot_index=config.cpu_slot_index,
        reserved_slots=frozenset(config.reserved_slots),
        placement_groups={
            card_class: tuple(tuple(group) for group in groups)
            for card_class, groups in config.placement_groups.items()
        },
        price=config.price,
        cost=config.cost,
    )


def config_to_card(config: CardConfig) -> CardDefinition:
    """Convert a CardConfig into a CardDefinition."""
    return CardDefinition(
        id=config.id,
        name=config.name or config.id,
        card_class=config.card_class,
        slot_span=config.slot_span,
        is_standard=config.is_standard,
        standard_position=config.standard_position,
        designated_only=config.designated_only,
        designated_positions=tuple(config.designated_positions),
        outside_chassis=config.outside_chassis,
        remote_enable=config.remote_enable,
        template=config.template,
        specifications=dict(config.specifications),
        compatible_chassis=frozenset(config.compatible_chassis),
        sort_order=config.sort_order,
        price=config.price,
        cost=config.cost,
    )


def config_to_part_number_config(
    config: PartNumberConfigSchema, chassis: ChassisType
) -> PartNumberConfig:
    """Convert a PartNumberConfigSchema into a PartNumberConfig.

    The slot count defaults to the chassis' card slot count.
    """
    return PartNumberConfig(
        prefix=config.prefix,
        slot_count=chassis.total_slots if config.slot_count is None else config.slot_count,
        slot_placeholder=config.slot_placeholder,
        suffix_separator=config.suffix_separator,
        remote_off_code=config.remote_off_code,
        remote_on_code=config.remote_on_code,
        span_code=config.span_code,
        outside_chassis_order=config.outside_chassis_order,
    )
