"""
The score-slot catalog.

Every ballot has the same 28 slots, 14 per side, in a fixed order. That order
is the display order, the CSV column order and the tie-break order for role
inference, so the table below is written out by hand and never generated.

Each slot carries its category and, for examination slots, the sequence
number (1-3) used to pair it with its counterpart on the other side.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field

from src.models import Side


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class Category(str, Enum):
    OPENING_STATEMENT = "opening-statement"
    CLOSING_STATEMENT = "closing-statement"
    DIRECT_ATTORNEY = "direct-attorney"
    DIRECT_WITNESS = "direct-witness"
    CROSS_ATTORNEY = "cross-attorney"
    CROSS_WITNESS = "cross-witness"

    @property
    def is_statement(self) -> bool:
        return self in (Category.OPENING_STATEMENT, Category.CLOSING_STATEMENT)

    @property
    def is_attorney_exam(self) -> bool:
        return self in (Category.DIRECT_ATTORNEY, Category.CROSS_ATTORNEY)


class SlotSpec(BaseModel, frozen=True):
    """A single scoring position on a ballot."""

    key: str = Field(description="Stored label and CSV column header")
    side: Side
    category: Category
    sequence: Optional[int] = Field(
        default=None, description="1-3 for examination slots, None for statements"
    )


# ---------------------------------------------------------------------------
# The table
# ---------------------------------------------------------------------------

MAX_WITNESSES = 3  # witness roles per side

_OPEN = Category.OPENING_STATEMENT
_CLOSE = Category.CLOSING_STATEMENT
_DA = Category.DIRECT_ATTORNEY
_DW = Category.DIRECT_WITNESS
_CA = Category.CROSS_ATTORNEY
_CW = Category.CROSS_WITNESS

# The prosecution "Cross  n: Witness" labels carry two spaces; they are the
# stored keys and export headers, so they stay as they are.
_PROSECUTION_SLOTS: tuple[tuple[str, Category, Optional[int]], ...] = (
    ("P. Open", _OPEN, None),

    ("P. Direct 1: Attorney", _DA, 1),
    ("P. Direct 1: Witness", _DW, 1),
    ("P. Cross  1: Witness", _CW, 1),

    ("P. Direct 2: Attorney", _DA, 2),
    ("P. Direct 2: Witness", _DW, 2),
    ("P. Cross  2: Witness", _CW, 2),

    ("P. Direct 3: Attorney", _DA, 3),
    ("P. Direct 3: Witness", _DW, 3),
    ("P. Cross  3: Witness", _CW, 3),

    ("P. Cross  1: Attorney", _CA, 1),
    ("P. Cross  2: Attorney", _CA, 2),
    ("P. Cross  3: Attorney", _CA, 3),

    ("P. Close", _CLOSE, None),
)

_DEFENSE_SLOTS: tuple[tuple[str, Category, Optional[int]], ...] = (
    ("D. Open", _OPEN, None),

    ("D. Cross 1: Attorney", _CA, 1),
    ("D. Cross 2: Attorney", _CA, 2),
    ("D. Cross 3: Attorney", _CA, 3),

    ("D. Direct 1: Attorney", _DA, 1),
    ("D. Direct 1: Witness", _DW, 1),
    ("D. Cross 1: Witness", _CW, 1),

    ("D. Direct 2: Attorney", _DA, 2),
    ("D. Direct 2: Witness", _DW, 2),
    ("D. Cross 2: Witness", _CW, 2),

    ("D. Direct 3: Attorney", _DA, 3),
    ("D. Direct 3: Witness", _DW, 3),
    ("D. Cross 3: Witness", _CW, 3),

    ("D. Close", _CLOSE, None),
)


# ---------------------------------------------------------------------------
# Taxonomy value
# ---------------------------------------------------------------------------

class SlotTaxonomy(BaseModel, frozen=True):
    """Immutable catalog of all slots, prosecution first, in canonical order."""

    slots: tuple[SlotSpec, ...]

    def keys(self, side: Optional[Side] = None) -> list[str]:
        """Slot labels in canonical order, optionally for one side only."""
        return [s.key for s in self.slots if side is None or s.side == side]

    def spec(self, key: str) -> SlotSpec:
        for s in self.slots:
            if s.key == key:
                return s
        raise KeyError(f"Unknown score slot: {key!r}")

    def classify(self, side: Side, key: str) -> Category:
        """Category of a slot on the given side."""
        s = self.spec(key)
        if s.side != side:
            raise KeyError(f"Slot {key!r} does not belong to side {side.value}")
        return s.category

    def slots_for(self, side: Side, category: Category) -> list[SlotSpec]:
        """All slots of one category on one side, in canonical order."""
        return [s for s in self.slots if s.side == side and s.category == category]

    def find(
        self, side: Side, category: Category, sequence: Optional[int] = None,
    ) -> Optional[SlotSpec]:
        """The slot at (side, category, sequence), or None if there is none."""
        for s in self.slots:
            if s.side == side and s.category == category and s.sequence == sequence:
                return s
        return None


def build_taxonomy() -> SlotTaxonomy:
    """Build the 28-slot catalog from the hand-written tables."""
    slots = [
        SlotSpec(key=key, side=Side.PROSECUTION, category=cat, sequence=seq)
        for key, cat, seq in _PROSECUTION_SLOTS
    ] + [
        SlotSpec(key=key, side=Side.DEFENSE, category=cat, sequence=seq)
        for key, cat, seq in _DEFENSE_SLOTS
    ]
    return SlotTaxonomy(slots=tuple(slots))


@lru_cache(maxsize=1)
def default_taxonomy() -> SlotTaxonomy:
    """The shared catalog used when a caller does not pass one explicitly."""
    return build_taxonomy()
