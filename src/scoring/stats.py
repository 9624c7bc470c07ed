"""
Per-competitor score buckets and pickups for one side of a tournament.

Pickup is how a competitor scored against their direct counterpart in the
same ballot:

  statement  opening vs opposing opening, closing vs opposing closing
  cross      cross attorney n vs opposing cross witness n,
             cross witness n vs opposing cross attorney n
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from src.models import Ballot, ScoredSlot, Side
from src.scoring.taxonomy import Category, SlotSpec, SlotTaxonomy

AVERAGE_DECIMALS = 2  # averages are reported to the hundredth
_QUANTUM = Decimal(1).scaleb(-AVERAGE_DECIMALS)


class StatBuckets(BaseModel):
    """Raw samples for one competitor."""

    direct: list[int] = Field(default_factory=list)
    cross: list[int] = Field(default_factory=list)
    statement: list[int] = Field(default_factory=list)
    witness_direct: list[int] = Field(default_factory=list)
    witness_cross: list[int] = Field(default_factory=list)
    statement_pickups: list[int] = Field(default_factory=list)
    cross_pickups: list[int] = Field(default_factory=list)

    def bucket_for(self, category: Category) -> list[int]:
        if category.is_statement:
            return self.statement
        return {
            Category.DIRECT_ATTORNEY: self.direct,
            Category.CROSS_ATTORNEY: self.cross,
            Category.DIRECT_WITNESS: self.witness_direct,
            Category.CROSS_WITNESS: self.witness_cross,
        }[category]


def average(values: list[int]) -> Optional[float]:
    """Mean rounded to two places, halves away from zero. Empty -> None."""
    if not values:
        return None
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(_QUANTUM, rounding=ROUND_HALF_UP))


# Opposing category paired with each of our categories for pickups.
_COUNTERPART = {
    Category.OPENING_STATEMENT: Category.OPENING_STATEMENT,
    Category.CLOSING_STATEMENT: Category.CLOSING_STATEMENT,
    Category.CROSS_ATTORNEY: Category.CROSS_WITNESS,
    Category.CROSS_WITNESS: Category.CROSS_ATTORNEY,
}


def _opposing_slot(
    ballot: Ballot, spec: SlotSpec, taxonomy: SlotTaxonomy,
) -> Optional[ScoredSlot]:
    target = taxonomy.find(spec.side.opposing, _COUNTERPART[spec.category], spec.sequence)
    if target is None:
        return None
    return ballot.find(target.key)


def ingest_scores(
    ballots: Iterable[Ballot],
    side: Side,
    taxonomy: SlotTaxonomy,
) -> dict[str, StatBuckets]:
    """Bucket every named score on ``side`` by competitor name."""
    stats: dict[str, StatBuckets] = {}

    for ballot in ballots:
        if ballot.our_side != side:
            continue
        named = ballot.named_slots()

        # Catalog order keeps bucket contents stable regardless of storage order
        for key in taxonomy.keys(side):
            slot = named.get(key)
            if slot is None:
                continue
            spec = taxonomy.spec(key)
            buckets = stats.setdefault(slot.name, StatBuckets())
            buckets.bucket_for(spec.category).append(slot.score)

            if spec.category not in _COUNTERPART:
                continue
            opposing = _opposing_slot(ballot, spec, taxonomy)
            if opposing is None:
                continue
            pickup = slot.score - opposing.score
            if spec.category.is_statement:
                buckets.statement_pickups.append(pickup)
            else:
                buckets.cross_pickups.append(pickup)

    return stats
