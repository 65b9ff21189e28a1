"""Part number assembly for configured chassis.

A part number is built from:
- the configured prefix (e.g. "QTMS-LTX-")
- one code per card slot, in slot order, starting at slot 1
- a suffix separator, the remote indicator code, and the codes of any
  outside-chassis cards

Example, for an STX chassis with a bushing card in slots 3 and 4:

    STX-  00  BB  -  0
    ^     ^   ^   ^  ^ remote indicator (off)
    |     |   |   +--- suffix separator
    |     |   +------- bushing card code, repeated across its run
    |     +----------- empty slots 1 and 2
    +----------------- prefix

Assembly is a pure function of its inputs.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .slot_assignment import SlotAssignment
from .value_objects import (
    CardDefinition,
    ChassisType,
    OutsideChassisOrder,
    PartNumberConfig,
    SpanCode,
    SpecValue,
)

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")


@dataclass(frozen=True)
class UnresolvedPlaceholder:
    """A template placeholder with no matching card specification.

    Attributes:
        card_id: Card whose template referenced the key.
        key: Placeholder name.
        slot: Anchor slot of the card, None for outside-chassis cards.
    """

    card_id: str
    key: str
    slot: int | None = None

    @property
    def message(self) -> str:
        location = f" in slot {self.slot}" if self.slot is not None else ""
        return f"Card '{self.card_id}'{location} has no value for template placeholder '{{{self.key}}}'"


@dataclass(frozen=True)
class PartNumberResult:
    """A rendered part number plus catalog data warnings.

    Attributes:
        part_number: The assembled part number.
        slot_codes: Code rendered for each slot position, in order.
        unresolved: Placeholders that rendered as empty text.
    """

    part_number: str
    slot_codes: tuple[str, ...] = ()
    unresolved: tuple[UnresolvedPlaceholder, ...] = field(default_factory=tuple)


def _format_value(value: SpecValue) -> str:
    if isinstance(value, tuple):
        return ",".join(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_template(
    template: str, specifications: Mapping[str, SpecValue]
) -> tuple[str, list[str]]:
    """Substitute ``{key}`` placeholders from a card's specifications.

    Keys match exactly. A key missing from ``specifications`` renders as an
    empty string so quoting is never blocked by incomplete catalog data.

    Args:
        template: Code template such as "F{inputs}".
        specifications: Card attribute values.

    Returns:
        The rendered code and the list of unresolved keys.

    Example:
        >>> render_template("F{inputs}", {"inputs": 6})
        ('F6', [])
        >>> render_template("F{inputs}", {})
        ('F', ['inputs'])
    """
    missing: list[str] = []

    def substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in specifications:
            return _format_value(specifications[key])
        missing.append(key)
        return ""

    return _PLACEHOLDER.sub(substitute, template), missing


def _render_card(
    card: CardDefinition,
    slot: int | None,
    unresolved: list[UnresolvedPlaceholder],
) -> str:
    code, missing = render_template(card.template, card.specifications)
    for key in missing:
        issue = UnresolvedPlaceholder(card_id=card.id, key=key, slot=slot)
        logger.warning(issue.message)
        unresolved.append(issue)
    return code


def _order_outside_cards(
    cards: Iterable[CardDefinition], order: OutsideChassisOrder
) -> list[CardDefinition]:
    selected = [card for card in cards if card.outside_chassis]
    if order == OutsideChassisOrder.CATALOG:
        # sorted() is stable, so equal sort orders keep selection order
        return sorted(selected, key=lambda card: card.sort_order)
    return selected


def render_part_number(
    chassis: ChassisType,
    config: PartNumberConfig,
    assignment: SlotAssignment,
    outside_chassis_cards: Iterable[CardDefinition] = (),
) -> PartNumberResult:
    """Render the part number for a configured chassis.

    Args:
        chassis: Chassis being configured.
        config: Part number layout for the chassis.
        assignment: Final slot map.
        outside_chassis_cards: Selected cards without a physical slot, in
            selection order.

    Returns:
        PartNumberResult with the part number and any unresolved
        placeholders.
    """
    unresolved: list[UnresolvedPlaceholder] = []
    slot_codes: list[str] = []
    rendered_runs: dict[int, str] = {}

    # Card slots are numbered from 1; position 0 is the CPU.
    for slot in range(1, config.slot_count + 1):
        occupant = assignment.occupant(slot)
        if occupant is None:
            slot_codes.append(config.slot_placeholder)
            continue

        if occupant.anchor not in rendered_runs:
            rendered_runs[occupant.anchor] = _render_card(
                occupant.card, occupant.anchor, unresolved
            )
            slot_codes.append(rendered_runs[occupant.anchor])
        elif config.span_code == SpanCode.REPEAT:
            slot_codes.append(rendered_runs[occupant.anchor])
        elif config.span_code == SpanCode.PLACEHOLDER:
            slot_codes.append(config.slot_placeholder)
        else:
            slot_codes.append("")

    outside = _order_outside_cards(outside_chassis_cards, config.outside_chassis_order)
    remote_enabled = any(card.remote_enable for card in assignment.cards()) or any(
        card.remote_enable for card in outside
    )
    suffix = config.remote_on_code if remote_enabled else config.remote_off_code
    suffix += "".join(_render_card(card, None, unresolved) for card in outside)

    part_number = f"{config.prefix}{''.join(slot_codes)}{config.suffix_separator}{suffix}"
    logger.debug(f"Assembled part number {part_number} for {chassis.code}")
    return PartNumberResult(
        part_number=part_number,
        slot_codes=tuple(slot_codes),
        unresolved=tuple(unresolved),
    )


def assemble_part_number(
    chassis: ChassisType,
    config: PartNumberConfig,
    assignment: SlotAssignment,
    outside_chassis_cards: Iterable[CardDefinition] = (),
) -> str:
    """Return only the part number string. See ``render_part_number``."""
    return render_part_number(chassis, config, assignment, outside_chassis_cards).part_number
