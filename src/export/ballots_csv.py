"""
Per-ballot CSV export.

One row per ballot: header fields, totals, the 28 raw scores in catalog
order, then 28 name columns in the same order. Name columns are filled only
for the side the team argued on that ballot.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, Sequence

import pandas as pd

from src.models import Ballot
from src.scoring.ballots import scores_to_record
from src.scoring.taxonomy import SlotTaxonomy, default_taxonomy
from src.scoring.totals import compute_totals

HEADER_COLUMNS = [
    "tournamentName",
    "roundNumber",
    "judgeName",
    "prosecutionTeamNumber",
    "defenseTeamNumber",
    "ourSide",
    "prosecutionTotal",
    "defenseTotal",
    "winner",
    "diff",
]


def ballot_csv_columns(taxonomy: Optional[SlotTaxonomy] = None) -> list[str]:
    taxonomy = taxonomy or default_taxonomy()
    keys = taxonomy.keys()
    return HEADER_COLUMNS + keys + [f"{k}_name" for k in keys]


def ballot_csv_row(
    ballot: Ballot,
    tournament_name: str,
    taxonomy: Optional[SlotTaxonomy] = None,
) -> list[str]:
    """Cells for one ballot, all as strings, in column order."""
    taxonomy = taxonomy or default_taxonomy()
    record = scores_to_record(ballot.scores)
    totals = compute_totals(record, taxonomy)
    names = {s.key: s.name for s in ballot.scores if s.name}

    row = [
        tournament_name,
        str(ballot.round_number),
        ballot.judge_name,
        ballot.prosecution_team_number,
        ballot.defense_team_number,
        ballot.our_side.value,
        str(totals.prosecution_total),
        str(totals.defense_total),
        totals.winner.value,
        str(totals.diff),
    ]
    row += [str(record[k]) if k in record else "" for k in taxonomy.keys()]
    row += [
        names.get(spec.key, "") if spec.side == ballot.our_side else ""
        for spec in taxonomy.slots
    ]
    return row


def export_ballots_to_csv(
    ballots: Sequence[Ballot],
    tournament_name: str,
    taxonomy: Optional[SlotTaxonomy] = None,
) -> str:
    taxonomy = taxonomy or default_taxonomy()
    rows = [ballot_csv_row(b, tournament_name, taxonomy) for b in ballots]
    df = pd.DataFrame(rows, columns=ballot_csv_columns(taxonomy), dtype=str)
    buf = StringIO()
    df.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()
