"""
Role inference.

Ballots only record which competitor filled which slot. The roles a team
plays over a tournament (opener, middle attorney, closer, three witnesses)
are inferred from those slot names:

  Per ballot
    The opener and closer are whoever gave the opening and closing
    statements. The middle attorney is the first other name found on an
    attorney examination slot, walking the catalog in order. Witnesses are
    the first three distinct names on the direct-witness slots, then the
    cross-witness slots.

  Across ballots
    The first ballot (in insertion order) that names a role fixes who plays
    it. Later ballots never replace a resolved role, even when they name
    someone else. Witnesses are appended in first-seen order until three
    are known.

Exact-string names are the only identity; a misspelt name is a different
competitor.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from src.models import Ballot, Side
from src.scoring.taxonomy import MAX_WITNESSES, Category, SlotTaxonomy


class RoleNames(BaseModel):
    """Who fills each role on one side. None or short lists mean unresolved."""

    opener: Optional[str] = None
    middle: Optional[str] = None
    closer: Optional[str] = None
    witnesses: list[str] = Field(default_factory=list)


def names_by_role(ballot: Ballot, taxonomy: SlotTaxonomy) -> RoleNames:
    """Infer role names from the named slots of one ballot's own side."""
    side = ballot.our_side
    named = ballot.named_slots()

    def name_at(key: str) -> Optional[str]:
        slot = named.get(key)
        return slot.name if slot else None

    opener = name_at(taxonomy.find(side, Category.OPENING_STATEMENT).key)
    closer = name_at(taxonomy.find(side, Category.CLOSING_STATEMENT).key)

    # First attorney-exam name in catalog order that isn't the opener/closer.
    # With two such names on one ballot the second is never a role holder.
    middle = None
    for key in taxonomy.keys(side):
        if not taxonomy.classify(side, key).is_attorney_exam:
            continue
        name = name_at(key)
        if name and name not in (opener, closer):
            middle = name
            break

    witnesses: list[str] = []
    witness_specs = (
        taxonomy.slots_for(side, Category.DIRECT_WITNESS)
        + taxonomy.slots_for(side, Category.CROSS_WITNESS)
    )
    for spec in witness_specs:
        name = name_at(spec.key)
        if name and name not in witnesses:
            witnesses.append(name)
            if len(witnesses) == MAX_WITNESSES:
                break

    return RoleNames(opener=opener, middle=middle, closer=closer, witnesses=witnesses)


def assign_roles(
    ballots: Iterable[Ballot],
    side: Side,
    taxonomy: SlotTaxonomy,
) -> RoleNames:
    """Fold the ballots argued on ``side`` into one role map, first-observed-wins."""
    resolved = RoleNames()

    for ballot in ballots:
        if ballot.our_side != side:
            continue
        found = names_by_role(ballot, taxonomy)

        if resolved.opener is None and found.opener:
            resolved.opener = found.opener
        if resolved.middle is None and found.middle:
            resolved.middle = found.middle
        if resolved.closer is None and found.closer:
            resolved.closer = found.closer
        for w in found.witnesses:
            if w not in resolved.witnesses and len(resolved.witnesses) < MAX_WITNESSES:
                resolved.witnesses.append(w)

    return resolved
