"""Slot assignment engine.

This module decides which chassis slots a card occupies when it is added,
removed or dragged to a new position. All functions are pure: they take
the current SlotAssignment and return a new one inside a PlacementResult,
never modifying their input.

Placement rules:
1. Outside-chassis cards never touch the slot map; they only need to fit
   the chassis.
2. Standard cards pinned to a slot go to exactly that slot.
3. Designated-only cards stay within their allow-list.
4. Other single-slot cards take the requested slot, or the lowest free
   card slot when no slot is requested.
5. Multi-slot cards (e.g. bushing cards) use the chassis' ordered
   placement groups, superseding any card of the same class and evicting
   foreign cards from the primary group when every group is blocked.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .results import DisplacedCard, PlacementErrorKind, PlacementResult
from .slot_assignment import SlotAssignment
from .slot_config import ChassisTypeUnresolved
from .value_objects import CardDefinition, ChassisType

logger = logging.getLogger(__name__)


def place_card(
    chassis: ChassisType | ChassisTypeUnresolved,
    assignment: SlotAssignment,
    card: CardDefinition,
    target_slot: int | None = None,
) -> PlacementResult:
    """Place a card into a chassis.

    Args:
        chassis: Resolved chassis layout (an unresolved chassis fails).
        assignment: Current slot map; left untouched.
        card: Card to place.
        target_slot: Slot requested by the user, if any.

    Returns:
        PlacementResult with the new slot map on success, or the unchanged
        map and a typed error on failure.
    """
    if isinstance(chassis, ChassisTypeUnresolved):
        return PlacementResult.fail(
            assignment,
            PlacementErrorKind.CHASSIS_TYPE_UNRESOLVED,
            chassis.message,
            card_id=card.id,
        )

    if not card.fits_chassis(chassis):
        return PlacementResult.fail(
            assignment,
            PlacementErrorKind.UNSUPPORTED_FOR_CHASSIS,
            f"{card.name} is not compatible with the {chassis.code} chassis",
            card_id=card.id,
        )

    if card.outside_chassis:
        return PlacementResult.success(assignment)

    if card.is_multi_slot:
        return _place_multi_slot(chassis, assignment, card, target_slot)

    if card.is_standard and card.standard_position is not None:
        return _place_pinned(chassis, assignment, card, card.standard_position)

    if target_slot is not None:
        return _place_at(chassis, assignment, card, target_slot)

    return _place_auto(chassis, assignment, card)


def remove_card(assignment: SlotAssignment, slot: int) -> SlotAssignment:
    """Remove the card at ``slot``, clearing its whole run.

    Other cards are not moved. Removing from an empty slot returns the
    assignment unchanged.
    """
    return assignment.without([slot])


def move_card(
    chassis: ChassisType | ChassisTypeUnresolved,
    assignment: SlotAssignment,
    from_slot: int,
    to_slot: int,
) -> PlacementResult:
    """Move the card at ``from_slot`` to ``to_slot``.

    The card is lifted out and placed again with the normal rules. If the
    new placement fails, the result carries the original assignment.
    """
    occupant = assignment.occupant(from_slot)
    if occupant is None:
        return PlacementResult.fail(
            assignment,
            PlacementErrorKind.SLOT_EMPTY,
            f"Slot {from_slot} has no card to move",
            slot=from_slot,
        )

    lifted = remove_card(assignment, from_slot)
    result = place_card(chassis, lifted, occupant.card, to_slot)
    if not result.ok:
        return PlacementResult(assignment=assignment, error=result.error)
    return result


def place_standard_cards(
    chassis: ChassisType | ChassisTypeUnresolved,
    assignment: SlotAssignment,
    cards: Iterable[CardDefinition],
) -> tuple[SlotAssignment, list[PlacementResult]]:
    """Auto-include every standard card that is not already placed.

    Returns:
        The updated assignment and the failed results, one per standard
        card that could not be placed.
    """
    failures: list[PlacementResult] = []
    for card in cards:
        if not card.is_standard or card.outside_chassis:
            continue
        if any(placed.id == card.id for placed in assignment.cards()):
            continue
        result = place_card(chassis, assignment, card)
        if result.ok:
            assignment = result.assignment
        else:
            failures.append(result)
    return assignment, failures


def rebuild_assignment(
    chassis: ChassisType, placements: Iterable[tuple[int, CardDefinition]]
) -> SlotAssignment:
    """Rebuild a slot map from (anchor slot, card) pairs.

    Used for slot maps that arrive from outside the engine, such as API
    requests and stored quotes. Nothing is moved, superseded or evicted:
    every placement must already sit where ``place_card`` could have put
    it.

    Raises:
        ValueError: If a placement breaks a chassis rule or two placements
            overlap.
    """
    assignment = SlotAssignment()
    for anchor, card in placements:
        problem = _placement_problem(chassis, card, anchor)
        if problem is not None:
            raise ValueError(problem)
        assignment = assignment.with_card(card, range(anchor, anchor + card.slot_span))
    return assignment


def _placement_problem(chassis: ChassisType, card: CardDefinition, anchor: int) -> str | None:
    run = tuple(range(anchor, anchor + card.slot_span))
    if card.outside_chassis:
        return f"Outside-chassis card '{card.id}' cannot occupy slot {anchor}"
    if not card.fits_chassis(chassis):
        return f"Card '{card.id}' is not compatible with the {chassis.code} chassis"

    for slot in run:
        if not chassis.is_assignable(slot):
            return (
                f"Card '{card.id}' at slot {anchor} covers slot {slot}, "
                f"which is not a card slot of the {chassis.code} chassis"
            )
        if not card.allows_slot(slot):
            allowed = ", ".join(str(s) for s in card.designated_positions)
            return f"Card '{card.id}' can only be placed in slots {allowed}"

    if card.is_multi_slot:
        groups = chassis.groups_for(card.card_class)
        if run not in groups:
            return (
                f"Card '{card.id}' at slots {list(run)} is not on a placement group "
                f"of the {chassis.code} chassis: {[list(g) for g in groups]}"
            )
    elif card.is_standard and card.standard_position is not None:
        if anchor != card.standard_position:
            return f"Card '{card.id}' is pinned to slot {card.standard_position}"
    return None


def _occupy(
    assignment: SlotAssignment, card: CardDefinition, slot: int
) -> PlacementResult:
    logger.debug(f"Placing {card.id} in slot {slot}")
    return PlacementResult.success(assignment.with_card(card, (slot,)), slots=(slot,))


def _check_slot(
    chassis: ChassisType, assignment: SlotAssignment, card: CardDefinition, slot: int
) -> PlacementResult | None:
    """Return a failed result if ``card`` cannot go in ``slot``."""
    if not chassis.is_assignable(slot):
        return PlacementResult.fail(
            assignment,
            PlacementErrorKind.SLOT_NOT_ALLOWED,
            f"Slot {slot} is not a card slot of the {chassis.code} chassis",
            card_id=card.id,
            slot=slot,
        )
    if not card.allows_slot(slot):
        allowed = ", ".join(str(s) for s in card.designated_positions)
        return PlacementResult.fail(
            assignment,
            PlacementErrorKind.SLOT_NOT_ALLOWED,
            f"{card.name} can only be placed in slots {allowed}",
            card_id=card.id,
            slot=slot,
        )
    return None


def _place_pinned(
    chassis: ChassisType, assignment: SlotAssignment, card: CardDefinition, slot: int
) -> PlacementResult:
    rejected = _check_slot(chassis, assignment, card, slot)
    if rejected is not None:
        return rejected

    occupant = assignment.occupant(slot)
    if occupant is None:
        return _occupy(assignment, card, slot)
    if occupant.card.id == card.id:
        return PlacementResult.success(assignment, slots=(slot,))
    return PlacementResult.fail(
        assignment,
        PlacementErrorKind.SLOT_OCCUPIED,
        f"Slot {slot} is reserved for {card.name} but holds {occupant.card.name}",
        card_id=card.id,
        slot=slot,
    )


def _place_at(
    chassis: ChassisType, assignment: SlotAssignment, card: CardDefinition, slot: int
) -> PlacementResult:
    rejected = _check_slot(chassis, assignment, card, slot)
    if rejected is not None:
        return rejected

    if not assignment.is_free(slot):
        return PlacementResult.fail(
            assignment,
            PlacementErrorKind.SLOT_OCCUPIED,
            f"Slot {slot} is already occupied by {assignment[slot].name}",
            card_id=card.id,
            slot=slot,
        )
    return _occupy(assignment, card, slot)


def _place_auto(
    chassis: ChassisType, assignment: SlotAssignment, card: CardDefinition
) -> PlacementResult:
    if card.designated_only:
        candidates = sorted(card.designated_positions)
    else:
        candidates = list(chassis.card_slots)

    for slot in candidates:
        if chassis.is_assignable(slot) and assignment.is_free(slot):
            return _occupy(assignment, card, slot)

    return PlacementResult.fail(
        assignment,
        PlacementErrorKind.NO_FREE_SLOT,
        f"No free slot available for {card.name} in the {chassis.code} chassis",
        card_id=card.id,
    )


def _place_multi_slot(
    chassis: ChassisType,
    assignment: SlotAssignment,
    card: CardDefinition,
    target_slot: int | None,
) -> PlacementResult:
    """Place a multi-slot card using the chassis placement groups.

    Algorithm:
    1. Record slots already held by cards of the same class; the new card
       supersedes them.
    2. Try each group in priority order. A slot only blocks a group when
       it holds a card of a different class. The first unblocked group
       wins.
    3. If every group is blocked, take the primary group anyway, evicting
       the foreign cards in it.
    4. A chassis with no groups for the card's class cannot host it.

    A requested ``target_slot`` that lies in an unblocked group moves that
    group to the front of the priority order.
    """
    groups = [
        group
        for group in chassis.groups_for(card.card_class)
        if len(group) == card.slot_span and all(card.allows_slot(s) for s in group)
    ]
    if not groups:
        return PlacementResult.fail(
            assignment,
            PlacementErrorKind.UNSUPPORTED_FOR_CHASSIS,
            f"The {chassis.code} chassis has no placement for {card.name}",
            card_id=card.id,
        )

    existing_special = assignment.slots_of_class(card.card_class)

    def is_blocked(slot: int) -> bool:
        occupant = assignment.occupant(slot)
        return occupant is not None and occupant.card.card_class != card.card_class

    ordered = list(groups)
    if target_slot is not None:
        preferred = [g for g in groups if target_slot in g]
        ordered = preferred + [g for g in groups if g not in preferred]

    chosen: tuple[int, ...] | None = None
    for group in ordered:
        if not any(is_blocked(slot) for slot in group):
            chosen = group
            break

    if chosen is None:
        chosen = groups[0]
        logger.info(
            f"All placements for {card.id} on {chassis.code} are blocked, "
            f"clearing primary slots {list(chosen)}"
        )

    cleared = set(existing_special) | {s for s in chosen if not assignment.is_free(s)}
    displaced = _displaced_cards(assignment, cleared, card.card_class)
    for item in displaced:
        logger.info(
            f"{'Superseding' if item.superseded else 'Evicting'} {item.card.id} "
            f"from slots {list(item.slots)} for {card.id}"
        )

    updated = assignment.without(cleared).with_card(card, chosen)
    return PlacementResult.success(updated, slots=chosen, displaced=displaced)


def _displaced_cards(
    assignment: SlotAssignment, slots: set[int], card_class: str
) -> tuple[DisplacedCard, ...]:
    displaced: list[DisplacedCard] = []
    seen_anchors: set[int] = set()
    for slot in sorted(slots):
        occupant = assignment.occupant(slot)
        if occupant is None or occupant.anchor in seen_anchors:
            continue
        seen_anchors.add(occupant.anchor)
        displaced.append(
            DisplacedCard(
                card=occupant.card,
                slots=occupant.slots,
                superseded=occupant.card.card_class == card_class,
            )
        )
    return tuple(displaced)
