"""Persistent slot-to-card mapping for a chassis being configured."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from .value_objects import CardDefinition


@dataclass(frozen=True)
class SlotOccupant:
    """A card sitting in one slot of its run.

    Attributes:
        card: The occupying card.
        anchor: First slot of the run the card occupies.
        slots: Every slot of the run, anchor first.
    """

    card: CardDefinition
    anchor: int
    slots: tuple[int, ...]


class SlotAssignment(Mapping[int, CardDefinition]):
    """Copy-on-write map from slot position to occupying card.

    Reading behaves like a ``dict[int, CardDefinition]``. Every write
    (``with_card``, ``without``) returns a new SlotAssignment and leaves
    the original untouched, so engine functions stay pure.

    A multi-slot card is stored once per slot, each entry pointing at the
    same ``SlotOccupant`` so the full run can be recovered from any of
    its slots.
    """

    __slots__ = ("_occupants",)

    def __init__(self, occupants: Mapping[int, SlotOccupant] | None = None) -> None:
        self._occupants: dict[int, SlotOccupant] = dict(occupants or {})

    @classmethod
    def empty(cls) -> SlotAssignment:
        return cls()

    @classmethod
    def from_placements(
        cls, placements: Iterable[tuple[int, CardDefinition]]
    ) -> SlotAssignment:
        """Build an assignment from (anchor slot, card) pairs.

        Each card occupies ``slot_span`` consecutive slots starting at its
        anchor.

        Raises:
            ValueError: If two placements overlap or a card is an
                outside-chassis card.
        """
        assignment = cls()
        for anchor, card in placements:
            run = tuple(range(anchor, anchor + card.slot_span))
            assignment = assignment.with_card(card, run)
        return assignment

    def __getitem__(self, slot: int) -> CardDefinition:
        return self._occupants[slot].card

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._occupants))

    def __len__(self) -> int:
        return len(self._occupants)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SlotAssignment):
            return self._occupants == other._occupants
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(tuple(sorted((s, o.anchor, o.card.id) for s, o in self._occupants.items())))

    def __repr__(self) -> str:
        body = ", ".join(f"{slot}: {self[slot].id}" for slot in self)
        return f"SlotAssignment({{{body}}})"

    def occupant(self, slot: int) -> SlotOccupant | None:
        """Return the occupant record for a slot, if any."""
        return self._occupants.get(slot)

    def run_of(self, slot: int) -> tuple[int, ...]:
        """Return every slot held by the card at ``slot`` (empty if free)."""
        occupant = self._occupants.get(slot)
        return occupant.slots if occupant else ()

    def is_free(self, slot: int) -> bool:
        return slot not in self._occupants

    def anchors(self) -> list[tuple[int, CardDefinition]]:
        """Return (anchor slot, card) for each placed card, in slot order."""
        seen: list[tuple[int, CardDefinition]] = []
        for slot in self:
            occupant = self._occupants[slot]
            if slot == occupant.anchor:
                seen.append((slot, occupant.card))
        return seen

    def cards(self) -> list[CardDefinition]:
        """Return each placed card once, in slot order."""
        return [card for _, card in self.anchors()]

    def slots_of_class(self, card_class: str) -> tuple[int, ...]:
        """Return every slot currently held by a card of ``card_class``."""
        return tuple(s for s in self if self._occupants[s].card.card_class == card_class)

    def with_card(self, card: CardDefinition, slots: Iterable[int]) -> SlotAssignment:
        """Return a copy with ``card`` occupying ``slots``.

        Raises:
            ValueError: If any target slot is already occupied or the card
                is an outside-chassis card.
        """
        run = tuple(slots)
        if not run:
            raise ValueError("A card must occupy at least one slot")
        if card.outside_chassis:
            raise ValueError(f"Outside-chassis card '{card.id}' cannot occupy a slot")
        taken = [s for s in run if s in self._occupants]
        if taken:
            raise ValueError(f"Slots {taken} are already occupied")
        occupant = SlotOccupant(card=card, anchor=run[0], slots=run)
        updated = dict(self._occupants)
        for slot in run:
            updated[slot] = occupant
        return SlotAssignment(updated)

    def without(self, slots: Iterable[int]) -> SlotAssignment:
        """Return a copy with the full runs touching ``slots`` cleared."""
        cleared: set[int] = set()
        for slot in slots:
            cleared.update(self.run_of(slot))
        if not cleared:
            return self
        return SlotAssignment(
            {s: o for s, o in self._occupants.items() if s not in cleared}
        )
