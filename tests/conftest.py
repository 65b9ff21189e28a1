"""Pytest configuration and shared fixtures for rack configuration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from rackbuilder.application.catalog import InMemoryCatalog
from rackbuilder.domain import (
    BUSHING_CLASS,
    CardDefinition,
    ChassisType,
    PartNumberConfig,
    SlotAssignment,
)

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


# =============================================================================
# Chassis layouts
# =============================================================================


@pytest.fixture
def ltx() -> ChassisType:
    """14-slot chassis with bushing groups [6,7] then [13,14]."""
    return ChassisType(
        code="LTX",
        name="LTX Chassis",
        total_slots=14,
        placement_groups={BUSHING_CLASS: ((6, 7), (13, 14))},
    )


@pytest.fixture
def stx() -> ChassisType:
    """4-slot chassis with a single bushing group [3,4]."""
    return ChassisType(
        code="STX",
        name="STX Chassis",
        total_slots=4,
        placement_groups={BUSHING_CLASS: ((3, 4),)},
    )


# =============================================================================
# Cards
# =============================================================================


@pytest.fixture
def relay() -> CardDefinition:
    return CardDefinition(id="relay", name="Relay Card", card_class="relay", template="R")


@pytest.fixture
def analog() -> CardDefinition:
    return CardDefinition(id="analog", name="Analog Card", card_class="analog", template="A")


@pytest.fixture
def bushing() -> CardDefinition:
    """Two-slot bushing card rendering "B"."""
    return CardDefinition(
        id="bushing",
        name="Bushing Card",
        card_class=BUSHING_CLASS,
        slot_span=2,
        template="B",
    )


@pytest.fixture
def empty() -> SlotAssignment:
    return SlotAssignment.empty()


@pytest.fixture
def stx_part_number() -> PartNumberConfig:
    return PartNumberConfig(prefix="STX-", slot_count=4)


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """The bundled QTMS catalog."""
    return InMemoryCatalog.default()
