"""
Ballot construction helpers.

A stored ballot always has one scored slot per catalog entry, in catalog
order, with names only on the side the team argued.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional

from src.models import Ballot, ScoredSlot, Side
from src.scoring.taxonomy import SlotTaxonomy, default_taxonomy


def scores_to_record(scores: Iterable[ScoredSlot]) -> dict[str, int]:
    """Flatten scored slots into a label -> score map."""
    return {s.key: s.score for s in scores}


def build_ballot(
    *,
    tournament_id: str,
    round_number: int,
    judge_name: str,
    prosecution_team_number: str,
    defense_team_number: str,
    our_side: Side,
    scores: Mapping[str, int],
    names: Optional[Mapping[str, str]] = None,
    ballot_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
    taxonomy: Optional[SlotTaxonomy] = None,
) -> Ballot:
    """Build a complete 28-slot ballot.

    Slots missing from ``scores`` are scored 0. Names given for the opposing
    side are dropped, and blank names are stored as None.
    """
    taxonomy = taxonomy or default_taxonomy()
    names = names or {}

    slots = []
    for spec in taxonomy.slots:
        name = None
        if spec.side == our_side:
            name = (names.get(spec.key) or "").strip() or None
        slots.append(ScoredSlot(
            side=spec.side,
            key=spec.key,
            score=scores.get(spec.key, 0),
            name=name,
        ))

    extra = {}
    if ballot_id is not None:
        extra["id"] = ballot_id
    if created_at is not None:
        extra["created_at"] = created_at

    return Ballot(
        tournament_id=tournament_id,
        round_number=round_number,
        judge_name=judge_name,
        prosecution_team_number=prosecution_team_number,
        defense_team_number=defense_team_number,
        our_side=our_side,
        scores=slots,
        **extra,
    )
