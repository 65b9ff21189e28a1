"""Unit tests for slot map serialization."""

import pytest

from rackbuilder.application.catalog import InMemoryCatalog, UnknownCardError, require_card
from rackbuilder.application.serialization import (
    SerializedSlot,
    deserialize_assignment,
    serialize_assignment,
)
from rackbuilder.domain import ChassisType, SlotAssignment


class TestSerializeAssignment:
    """Tests for serialize_assignment."""

    def test_multi_slot_card_rows(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        bushing = require_card(catalog, "bushing-monitor").with_specifications(numberOfBushings=3)
        relay = require_card(catalog, "relay-8in-2out")
        assignment = SlotAssignment.from_placements([(1, relay), (6, bushing)])

        rows = serialize_assignment(assignment, catalog)

        assert [row.slot for row in rows] == [1, 6, 7]
        single, primary, secondary = rows
        assert not single.is_primary and not single.is_secondary
        assert single.pair_slot is None
        assert primary.is_primary and primary.pair_slot == 7
        assert secondary.is_secondary and secondary.pair_slot == 6
        assert primary.code == "B3"
        assert primary.slot_span == 2

    def test_only_instance_specifications_stored(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        bushing = require_card(catalog, "bushing-monitor").with_specifications(numberOfBushings=3)
        assignment = SlotAssignment.from_placements([(6, bushing)])

        rows = serialize_assignment(assignment, catalog)

        assert rows[0].specifications == {"numberOfBushings": 3}

    def test_without_catalog_stores_all_specifications(self, catalog: InMemoryCatalog) -> None:
        fiber = require_card(catalog, "fiber-4port")
        rows = serialize_assignment(SlotAssignment.from_placements([(2, fiber)]))

        assert rows[0].specifications["inputs"] == 4
        assert rows[0].specifications["protocols"] == ["IEC 61850", "GOOSE"]


@pytest.fixture
def ltx_chassis(catalog: InMemoryCatalog) -> ChassisType:
    chassis = catalog.get_chassis_type("LTX")
    assert chassis is not None
    return chassis


class TestDeserializeAssignment:
    """Tests for deserialize_assignment."""

    def test_restores_serialized_map(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        bushing = require_card(catalog, "bushing-monitor").with_specifications(numberOfBushings=3)
        relay = require_card(catalog, "relay-8in-2out")
        assignment = SlotAssignment.from_placements([(1, relay), (6, bushing)])

        rows = [row.model_dump() for row in serialize_assignment(assignment, catalog)]

        assert deserialize_assignment(rows, catalog, ltx_chassis) == assignment

    def test_accepts_stored_rows_with_extra_keys(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        rows = [{"slot": 2, "product_id": "analog-8ch", "quote_id": "Q-1"}]

        assignment = deserialize_assignment(rows, catalog, ltx_chassis)

        assert assignment[2].id == "analog-8ch"

    def test_unknown_card(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        with pytest.raises(UnknownCardError):
            deserialize_assignment(
                [SerializedSlot(slot=1, product_id="gone")], catalog, ltx_chassis
            )

    def test_overlapping_rows(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        rows = [
            {"slot": 6, "product_id": "bushing-monitor", "is_primary": True},
            {"slot": 7, "product_id": "relay-8in-2out"},
        ]

        with pytest.raises(ValueError, match="already occupied"):
            deserialize_assignment(rows, catalog, ltx_chassis)

    def test_bushing_row_off_placement_group(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        rows = [{"slot": 1, "product_id": "bushing-monitor", "is_primary": True}]

        with pytest.raises(ValueError, match="not on a placement group"):
            deserialize_assignment(rows, catalog, ltx_chassis)

    def test_designated_card_outside_allow_list(
        self, catalog: InMemoryCatalog, ltx_chassis: ChassisType
    ) -> None:
        rows = [{"slot": 3, "product_id": "display-oncard"}]

        with pytest.raises(ValueError, match="can only be placed in slots 8"):
            deserialize_assignment(rows, catalog, ltx_chassis)
