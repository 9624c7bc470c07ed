"""
Ballot totals: side sums, differential, margin and winner.
"""

from __future__ import annotations

from typing import Mapping, Optional

from src.models import Ballot, Side, Totals, Winner
from src.scoring.ballots import scores_to_record
from src.scoring.taxonomy import SlotTaxonomy, default_taxonomy


def compute_totals(
    scores: Mapping[str, int],
    taxonomy: Optional[SlotTaxonomy] = None,
) -> Totals:
    """Sum a slot -> score map into side totals and a verdict.

    Slots missing from the map count as 0, so partially filled ballots
    (e.g. a form being edited) still produce a result.
    """
    taxonomy = taxonomy or default_taxonomy()

    prosecution_total = sum(scores.get(k, 0) for k in taxonomy.keys(Side.PROSECUTION))
    defense_total = sum(scores.get(k, 0) for k in taxonomy.keys(Side.DEFENSE))

    diff = prosecution_total - defense_total
    if diff > 0:
        winner = Winner.PROSECUTION
    elif diff < 0:
        winner = Winner.DEFENSE
    else:
        winner = Winner.TIE

    return Totals(
        prosecution_total=prosecution_total,
        defense_total=defense_total,
        diff=diff,
        margin=abs(diff),
        winner=winner,
    )


def ballot_totals(ballot: Ballot, taxonomy: Optional[SlotTaxonomy] = None) -> Totals:
    return compute_totals(scores_to_record(ballot.scores), taxonomy)
