"""Unit tests for configuration schema and loader.

These tests verify:
- Valid catalog and rack files are loaded correctly
- Unknown fields are rejected (extra="forbid")
- Schema version validation
- Loader error handling (file not found, JSON parse errors)
- Validation errors carry JSON paths
"""

from pathlib import Path
from typing import Any

import pytest

from rackbuilder.application.config import (
    SUPPORTED_VERSIONS,
    CardConfig,
    ChassisTypeConfig,
    ConfigError,
    load_catalog,
    load_catalog_from_dict,
    load_rack_config,
    load_rack_config_from_dict,
)
from rackbuilder.domain import OutsideChassisOrder

# Get path to test fixtures
FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


def _catalog(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "schema_version": "1.0",
        "chassis_types": [{"code": "STX", "total_slots": 4}],
    }
    data.update(overrides)
    return data


class TestChassisTypeConfig:
    """Tests for ChassisTypeConfig model."""

    def test_code_is_upper_cased(self) -> None:
        config = ChassisTypeConfig(code=" stx ", total_slots=4)

        assert config.code == "STX"

    def test_group_outside_chassis_rejected(self) -> None:
        with pytest.raises(ValueError, match="outside 1..4"):
            ChassisTypeConfig(code="STX", total_slots=4, placement_groups={"bushing": [[4, 5]]})

    def test_short_group_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least two slots"):
            ChassisTypeConfig(code="STX", total_slots=4, placement_groups={"bushing": [[4]]})


class TestCardConfig:
    """Tests for CardConfig model."""

    def test_defaults(self) -> None:
        config = CardConfig(id="relay")

        assert config.slot_span == 1
        assert config.template == "X"
        assert config.card_class == "generic"

    def test_designated_needs_positions(self) -> None:
        with pytest.raises(ValueError, match="designated_positions"):
            CardConfig(id="d", designated_only=True)

    def test_outside_card_cannot_be_pinned(self) -> None:
        with pytest.raises(ValueError, match="cannot be pinned"):
            CardConfig(id="r", outside_chassis=True, standard_position=3)

    def test_bushing_must_span_slots(self) -> None:
        with pytest.raises(ValueError, match="at least two slots"):
            CardConfig(id="b", card_class="bushing")


class TestCatalogConfiguration:
    """Tests for catalog file validation."""

    def test_minimal_catalog(self) -> None:
        config = load_catalog_from_dict(_catalog())

        assert config.chassis_types[0].code == "STX"
        assert config.cards == []

    def test_supported_versions(self) -> None:
        assert "1.0" in SUPPORTED_VERSIONS

    def test_unsupported_version(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog_from_dict(_catalog(schema_version="2.0"))

        assert exc_info.value.error_type == "validation"
        assert "Unsupported schema version" in exc_info.value.message

    def test_duplicate_card_ids(self) -> None:
        with pytest.raises(ConfigError, match="card ids must be unique"):
            load_catalog_from_dict(_catalog(cards=[{"id": "a"}, {"id": "a"}]))

    def test_alias_to_unknown_chassis(self) -> None:
        with pytest.raises(ConfigError, match="unknown chassis"):
            load_catalog_from_dict(_catalog(aliases={"4-card": "LTX"}))

    def test_part_number_for_unknown_chassis(self) -> None:
        with pytest.raises(ConfigError, match="unknown chassis"):
            load_catalog_from_dict(
                _catalog(part_numbers=[{"chassis_type": "LTX", "prefix": "L-"}])
            )

    def test_error_details_carry_json_path(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog_from_dict(_catalog(cards=[{"id": "a", "slot_span": 0}]))

        paths = [detail["path"] for detail in exc_info.value.details]
        assert "cards[0].slot_span" in paths

    def test_outside_chassis_order_parsed(self) -> None:
        config = load_catalog_from_dict(
            _catalog(
                part_numbers=[
                    {"chassis_type": "STX", "prefix": "S-", "outside_chassis_order": "catalog"}
                ]
            )
        )

        assert config.part_numbers[0].outside_chassis_order == OutsideChassisOrder.CATALOG


class TestLoadCatalogFile:
    """Tests for loading catalog files from disk."""

    def test_load_minimal_fixture(self) -> None:
        config = load_catalog(FIXTURES_PATH / "catalog_minimal.json")

        assert [c.id for c in config.cards] == ["relay", "bushing"]

    def test_file_not_found(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(FIXTURES_PATH / "nonexistent.json")

        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == FIXTURES_PATH / "nonexistent.json"

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(FIXTURES_PATH / "invalid_json.json")

        assert exc_info.value.error_type == "json_parse"
        assert exc_info.value.details[0]["line"] == 4

    def test_unknown_field(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(FIXTURES_PATH / "unknown_field.json")

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "chassis_types[0].colour"


class TestRackConfiguration:
    """Tests for rack files."""

    def test_load_fixture(self) -> None:
        rack = load_rack_config(FIXTURES_PATH / "rack_stx.json")

        assert rack.chassis_type == "4-card"
        assert [c.card_id for c in rack.cards] == [
            "relay-8in-2out",
            "bushing-monitor",
            "remote-display",
        ]
        assert rack.cards[1].specifications == {"numberOfBushings": 3}
        assert rack.quantity == 2

    def test_defaults(self) -> None:
        rack = load_rack_config_from_dict({"schema_version": "1.0", "chassis_type": "LTX"})

        assert rack.include_standard_cards
        assert rack.cards == []
        assert rack.discount_percentage == 0.0

    def test_discount_range(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_rack_config_from_dict(
                {"schema_version": "1.0", "chassis_type": "LTX", "discount_percentage": 150}
            )

        assert exc_info.value.details[0]["path"] == "discount_percentage"

    def test_missing_chassis_type(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_rack_config_from_dict({"schema_version": "1.0"})

        assert exc_info.value.details[0]["path"] == "chassis_type"
