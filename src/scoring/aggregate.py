"""
Tournament-wide aggregation: role rows per side and the aggregated CSV.

The report is always rebuilt from the full ballot list; nothing is updated
incrementally.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from io import StringIO
from typing import Optional, Sequence

import pandas as pd

from src.models import AggregatedEntry, AggregatedReport, Ballot, Side, SideReport
from src.scoring.roles import RoleNames, assign_roles
from src.scoring.stats import StatBuckets, average, ingest_scores
from src.scoring.taxonomy import SlotTaxonomy, default_taxonomy


class Role(str, Enum):
    OPENER = "Opening attorney"
    MIDDLE = "Middle attorney"
    CLOSER = "Closing attorney"
    WITNESS_1 = "Witness 1"
    WITNESS_2 = "Witness 2"
    WITNESS_3 = "Witness 3"

    @property
    def is_witness(self) -> bool:
        return self in _WITNESS_ROLES

    @property
    def gives_statement(self) -> bool:
        return self in (Role.OPENER, Role.CLOSER)


_WITNESS_ROLES = (Role.WITNESS_1, Role.WITNESS_2, Role.WITNESS_3)

AGGREGATED_CSV_COLUMNS = [
    "side", "role", "name", "avgDirect", "avgCross",
    "avgStatement", "statementPickup", "crossPickup",
]


def _resolved_roles(names: RoleNames) -> list[tuple[Role, str]]:
    """Roles with a name, in report order. Unresolved roles are dropped."""
    ordered = [
        (Role.OPENER, names.opener),
        (Role.MIDDLE, names.middle),
        (Role.CLOSER, names.closer),
    ] + list(zip(_WITNESS_ROLES, names.witnesses))
    return [(role, name) for role, name in ordered if name]


def _entry(role: Role, name: str, stats: StatBuckets) -> AggregatedEntry:
    if role.is_witness:
        avg_direct = average(stats.witness_direct)
        avg_cross = average(stats.witness_cross)
    else:
        avg_direct = average(stats.direct)
        avg_cross = average(stats.cross)

    return AggregatedEntry(
        role=role.value,
        name=name,
        avg_direct=avg_direct,
        avg_cross=avg_cross,
        avg_statement=average(stats.statement) if role.gives_statement else None,
        statement_pickup=average(stats.statement_pickups) if role.gives_statement else None,
        cross_pickup=average(stats.cross_pickups),
    )


def aggregate_side(
    ballots: Sequence[Ballot],
    side: Side,
    taxonomy: SlotTaxonomy,
) -> SideReport:
    """Role rows for one side. Only ballots argued on that side contribute."""
    names = assign_roles(ballots, side, taxonomy)
    stats = ingest_scores(ballots, side, taxonomy)
    entries = [
        _entry(role, name, stats.get(name, StatBuckets()))
        for role, name in _resolved_roles(names)
    ]
    return SideReport(side=side, entries=entries)


def aggregate_ballot_data(
    tournament_id: str,
    ballots: Sequence[Ballot],
    taxonomy: Optional[SlotTaxonomy] = None,
    generated_at: Optional[datetime] = None,
) -> AggregatedReport:
    """Build the aggregated report for a tournament, prosecution first."""
    taxonomy = taxonomy or default_taxonomy()
    return AggregatedReport(
        tournament_id=tournament_id,
        generated_at=generated_at or datetime.now(timezone.utc),
        sides=[
            aggregate_side(ballots, side, taxonomy)
            for side in (Side.PROSECUTION, Side.DEFENSE)
        ],
    )


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

def format_number(value: Optional[float]) -> str:
    """CSV cell for an average: blank for no data, no trailing '.0'."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def aggregated_report_to_csv(report: AggregatedReport) -> str:
    rows = []
    for side_report in report.sides:
        for e in side_report.entries:
            rows.append([
                side_report.side.label,
                e.role,
                e.name,
                format_number(e.avg_direct),
                format_number(e.avg_cross),
                format_number(e.avg_statement),
                format_number(e.statement_pickup),
                format_number(e.cross_pickup),
            ])

    df = pd.DataFrame(rows, columns=AGGREGATED_CSV_COLUMNS, dtype=str)
    buf = StringIO()
    df.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()
