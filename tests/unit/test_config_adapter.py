"""Unit tests for the configuration to domain adapter."""

from rackbuilder.application.config import (
    CardConfig,
    ChassisTypeConfig,
    PartNumberConfigSchema,
    config_to_card,
    config_to_chassis_type,
    config_to_part_number_config,
)
from rackbuilder.domain import BUSHING_CLASS, OutsideChassisOrder, SpanCode


class TestConfigToChassisType:
    """Tests for config_to_chassis_type."""

    def test_converts_layout(self) -> None:
        chassis = config_to_chassis_type(
            ChassisTypeConfig(
                code="ltx",
                total_slots=14,
                reserved_slots=[12],
                placement_groups={BUSHING_CLASS: [[6, 7], [13, 14]]},
                price=3200,
            )
        )

        assert chassis.code == "LTX"
        assert chassis.name == "LTX Chassis"
        assert chassis.reserved_slots == frozenset({0, 12})
        assert chassis.groups_for(BUSHING_CLASS) == ((6, 7), (13, 14))
        assert chassis.price == 3200


class TestConfigToCard:
    """Tests for config_to_card."""

    def test_converts_card(self) -> None:
        card = config_to_card(
            CardConfig(
                id="fiber",
                template="F{inputs}",
                specifications={"inputs": 6, "protocols": ["GOOSE"]},
                compatible_chassis=["ltx"],
                designated_only=True,
                designated_positions=[2, 3],
            )
        )

        assert card.name == "fiber"
        assert card.specifications["inputs"] == 6
        assert card.specifications["protocols"] == ("GOOSE",)
        assert card.compatible_chassis == frozenset({"LTX"})
        assert card.designated_positions == (2, 3)


class TestConfigToPartNumberConfig:
    """Tests for config_to_part_number_config."""

    def test_slot_count_defaults_to_chassis(self) -> None:
        chassis = config_to_chassis_type(ChassisTypeConfig(code="STX", total_slots=4))

        config = config_to_part_number_config(
            PartNumberConfigSchema(chassis_type="STX", prefix="STX-"), chassis
        )

        assert config.slot_count == 4
        assert config.span_code == SpanCode.REPEAT
        assert config.outside_chassis_order == OutsideChassisOrder.SELECTION

    def test_explicit_slot_count(self) -> None:
        chassis = config_to_chassis_type(ChassisTypeConfig(code="STX", total_slots=4))

        config = config_to_part_number_config(
            PartNumberConfigSchema(chassis_type="STX", prefix="STX-", slot_count=2), chassis
        )

        assert config.slot_count == 2
