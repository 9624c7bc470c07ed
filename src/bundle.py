"""
Tournament bundle: one tournament, its ballots and the aggregated report.

This is the shareable document the application stores and the CLI reads.
Every helper that changes the ballot set returns a new bundle with the
report rebuilt from scratch; the input bundle is never modified.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from src.models import Ballot, TournamentBundle, TournamentRoster
from src.roster.names import apply_roster
from src.scoring.aggregate import aggregate_ballot_data
from src.scoring.taxonomy import SlotTaxonomy


def load_bundle(filepath: Path | str) -> TournamentBundle:
    """Read a bundle from JSON. Raises OSError or pydantic.ValidationError."""
    return TournamentBundle.model_validate_json(
        Path(filepath).read_text(encoding="utf-8")
    )


def save_bundle(bundle: TournamentBundle, filepath: Path | str) -> Path:
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(bundle.model_dump_json(indent=2), encoding="utf-8")
    return filepath


def refresh_aggregate(
    bundle: TournamentBundle,
    ballots: Optional[list[Ballot]] = None,
    taxonomy: Optional[SlotTaxonomy] = None,
    generated_at: Optional[datetime] = None,
) -> TournamentBundle:
    """Return a copy of ``bundle`` (optionally with new ballots) and a fresh report."""
    if ballots is None:
        ballots = list(bundle.ballots)
    report = aggregate_ballot_data(
        bundle.tournament.id, ballots, taxonomy=taxonomy, generated_at=generated_at,
    )
    return bundle.model_copy(update={"ballots": ballots, "aggregated_data": report})


def _index_of(bundle: TournamentBundle, ballot_id: str) -> int:
    for i, b in enumerate(bundle.ballots):
        if b.id == ballot_id:
            return i
    raise ValueError(f"Ballot not found: {ballot_id}")


def add_ballot(
    bundle: TournamentBundle, ballot: Ballot, taxonomy: Optional[SlotTaxonomy] = None,
) -> TournamentBundle:
    return refresh_aggregate(bundle, list(bundle.ballots) + [ballot], taxonomy)


def replace_ballot(
    bundle: TournamentBundle, ballot: Ballot, taxonomy: Optional[SlotTaxonomy] = None,
) -> TournamentBundle:
    """Swap in an edited ballot, keeping its position and creation time."""
    index = _index_of(bundle, ballot.id)
    existing = bundle.ballots[index]
    ballots = list(bundle.ballots)
    ballots[index] = ballot.model_copy(update={"created_at": existing.created_at})
    return refresh_aggregate(bundle, ballots, taxonomy)


def delete_ballot(
    bundle: TournamentBundle, ballot_id: str, taxonomy: Optional[SlotTaxonomy] = None,
) -> TournamentBundle:
    index = _index_of(bundle, ballot_id)
    ballots = bundle.ballots[:index] + bundle.ballots[index + 1:]
    return refresh_aggregate(bundle, ballots, taxonomy)


def apply_roster_to_bundle(
    bundle: TournamentBundle,
    roster: Optional[TournamentRoster] = None,
    taxonomy: Optional[SlotTaxonomy] = None,
) -> TournamentBundle:
    """Store ``roster`` on the tournament (if given) and back-fill the ballots."""
    roster = roster or bundle.tournament.roster
    tournament = bundle.tournament.model_copy(update={"roster": roster})
    bundle = bundle.model_copy(update={"tournament": tournament})
    return refresh_aggregate(bundle, apply_roster(bundle.ballots, roster, taxonomy), taxonomy)
