"""
Roster back-fill.

A tournament roster lists who the team fields on each side. Saving a roster
can rewrite existing ballots so their statement and witness slots carry the
roster names and the team's own team number. Attorney examination slots are
left alone: the roster doesn't say which attorney took which witness.
"""

from __future__ import annotations

from typing import Optional, Sequence

from src.models import Ballot, Side, TournamentRoster
from src.scoring.taxonomy import Category, SlotTaxonomy, default_taxonomy


def roster_name_for_slot(
    roster: TournamentRoster,
    side: Side,
    key: str,
    taxonomy: Optional[SlotTaxonomy] = None,
) -> Optional[str]:
    """The roster name for a slot on ``side``, or None if it has none."""
    taxonomy = taxonomy or default_taxonomy()
    category = taxonomy.classify(side, key)
    side_roster = roster.for_side(side)

    if category == Category.OPENING_STATEMENT:
        name = side_roster.opener
    elif category == Category.CLOSING_STATEMENT:
        name = side_roster.closer
    elif category in (Category.DIRECT_WITNESS, Category.CROSS_WITNESS):
        index = taxonomy.spec(key).sequence - 1
        name = side_roster.witnesses[index] if index < len(side_roster.witnesses) else ""
    else:
        return None

    return name.strip() or None


def apply_roster(
    ballots: Sequence[Ballot],
    roster: TournamentRoster,
    taxonomy: Optional[SlotTaxonomy] = None,
) -> list[Ballot]:
    """Copies of ``ballots`` with roster names and team number filled in."""
    taxonomy = taxonomy or default_taxonomy()
    team_number = roster.team_number.strip()

    updated = []
    for ballot in ballots:
        changes: dict = {}
        if team_number:
            if ballot.our_side is Side.PROSECUTION:
                changes["prosecution_team_number"] = team_number
            else:
                changes["defense_team_number"] = team_number

        scores = []
        for slot in ballot.scores:
            if slot.side != ballot.our_side:
                scores.append(slot)
                continue
            name = roster_name_for_slot(roster, slot.side, slot.key, taxonomy)
            scores.append(slot if name is None else slot.model_copy(update={"name": name}))
        changes["scores"] = scores

        updated.append(ballot.model_copy(update=changes))
    return updated
