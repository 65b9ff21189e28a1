"""Chassis slot configuration table and chassis type resolution.

Chassis type strings reach the engine in several historical spellings
("LTX", "14-card", "QTMS-LTX"). All of them are normalized here, in one
declarative table, so no other module compares chassis strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping

from .value_objects import BUSHING_CLASS, ChassisType


@dataclass(frozen=True)
class ChassisTypeUnresolved:
    """Typed result for a chassis type string that maps to no chassis.

    Attributes:
        raw: The string as received.
        normalized: The string after case and alias normalization.
    """

    raw: str
    normalized: str

    @property
    def message(self) -> str:
        return f"Unsupported chassis type: {self.raw!r}"


DEFAULT_CHASSIS_TYPES: tuple[ChassisType, ...] = (
    ChassisType(
        code="LTX",
        name="LTX Chassis",
        total_slots=14,
        placement_groups={BUSHING_CLASS: ((6, 7), (13, 14))},
    ),
    ChassisType(
        code="MTX",
        name="MTX Chassis",
        total_slots=7,
        placement_groups={BUSHING_CLASS: ((6, 7),)},
    ),
    ChassisType(
        code="STX",
        name="STX Chassis",
        total_slots=4,
        placement_groups={BUSHING_CLASS: ((3, 4),)},
    ),
)

# Legacy identifiers -> canonical chassis codes
CHASSIS_ALIASES: dict[str, str] = {
    "14-CARD": "LTX",
    "7-CARD": "MTX",
    "4-CARD": "STX",
}

_PRODUCT_PREFIX = re.compile(r"^QTMS[-_ ]+")
_SEPARATORS = re.compile(r"[\s_]+")


def normalize_chassis_key(raw: str) -> str:
    """Normalize case, whitespace and separators of a chassis string.

    Examples:
        >>> normalize_chassis_key(" qtms-ltx ")
        'LTX'
        >>> normalize_chassis_key("14 card")
        '14-CARD'
    """
    key = raw.strip().upper()
    key = _PRODUCT_PREFIX.sub("", key)
    key = _SEPARATORS.sub("-", key)
    return key.replace("-SLOT", "-CARD")


class SlotConfigurationTable:
    """Lookup of chassis slot layouts by code or legacy alias."""

    def __init__(
        self,
        chassis_types: Iterable[ChassisType] = DEFAULT_CHASSIS_TYPES,
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._by_code: dict[str, ChassisType] = {}
        for chassis in chassis_types:
            code = chassis.code.upper()
            if code in self._by_code:
                raise ValueError(f"Chassis type '{code}' defined twice")
            self._by_code[code] = chassis

        self._aliases: dict[str, str] = {}
        for alias, code in (CHASSIS_ALIASES if aliases is None else aliases).items():
            self._aliases[normalize_chassis_key(alias)] = code.upper()

    def resolve(self, raw: str) -> ChassisType | ChassisTypeUnresolved:
        """Resolve a chassis type string to its slot layout.

        Args:
            raw: Chassis code or legacy alias, in any case.

        Returns:
            The matching ChassisType, or ChassisTypeUnresolved when the
            string names no known chassis.
        """
        key = normalize_chassis_key(raw or "")
        code = self._aliases.get(key, key)
        chassis = self._by_code.get(code)
        if chassis is None:
            return ChassisTypeUnresolved(raw=raw, normalized=key)
        return chassis

    def codes(self) -> list[str]:
        """Return every known chassis code in table order."""
        return list(self._by_code)

    def chassis_types(self) -> list[ChassisType]:
        return list(self._by_code.values())

    @property
    def aliases(self) -> dict[str, str]:
        """Normalized alias -> canonical code."""
        return dict(self._aliases)


_default_table = SlotConfigurationTable()


def resolve_chassis_config(
    chassis_type_raw: str, table: SlotConfigurationTable | None = None
) -> ChassisType | ChassisTypeUnresolved:
    """Resolve a chassis type string using the default (or given) table."""
    return (table or _default_table).resolve(chassis_type_raw)
