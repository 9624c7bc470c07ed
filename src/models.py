"""
Core Pydantic data models for mock-trial ballots and the aggregated report.

Ballots and tournaments are what the surrounding application stores; Totals
and the aggregated report are derived and recomputed on demand.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Side(str, Enum):
    PROSECUTION = "P"
    DEFENSE = "D"

    @property
    def opposing(self) -> "Side":
        return Side.DEFENSE if self is Side.PROSECUTION else Side.PROSECUTION

    @property
    def label(self) -> str:
        return "Prosecution" if self is Side.PROSECUTION else "Defense"


class Winner(str, Enum):
    PROSECUTION = "Prosecution"
    DEFENSE = "Defense"
    TIE = "Tie"


# ---------------------------------------------------------------------------
# Ballots
# ---------------------------------------------------------------------------

class ScoredSlot(BaseModel):
    """One judge score on one slot of a ballot."""

    side: Side
    key: str = Field(description="Slot label, e.g. 'P. Open'")
    score: int = Field(description="Judge score, 0-10")
    name: Optional[str] = Field(
        default=None,
        description="Competitor name; only set on the ballot's own side",
    )


class Ballot(BaseModel):
    """One judge's complete scoring of one round (28 scored slots)."""

    id: str = Field(default_factory=_new_id)
    tournament_id: str
    round_number: int
    judge_name: str
    prosecution_team_number: str
    defense_team_number: str
    our_side: Side = Field(description="The side the reporting team argued")
    created_at: datetime = Field(default_factory=_now)
    scores: list[ScoredSlot] = Field(default_factory=list)

    def find(self, key: str) -> Optional[ScoredSlot]:
        """Return the scored slot for a slot label, or None if absent."""
        for slot in self.scores:
            if slot.key == key:
                return slot
        return None

    def named_slots(self) -> dict[str, ScoredSlot]:
        """Our-side slots that carry a competitor name, keyed by label."""
        return {
            s.key: s for s in self.scores
            if s.side == self.our_side and s.name
        }


class Totals(BaseModel):
    """Side totals and verdict for a single ballot."""

    prosecution_total: int
    defense_total: int
    diff: int = Field(description="prosecution_total - defense_total")
    margin: int = Field(description="abs(diff)")
    winner: Winner


# ---------------------------------------------------------------------------
# Roster & tournament
# ---------------------------------------------------------------------------

class RosterSide(BaseModel):
    """Who the team fields on one side. Blank strings mean unknown."""

    opener: str = ""
    middle: str = ""
    closer: str = ""
    witnesses: list[str] = Field(default_factory=lambda: ["", "", ""])


class TournamentRoster(BaseModel):
    team_number: str = ""
    prosecution: RosterSide = Field(default_factory=RosterSide)
    defense: RosterSide = Field(default_factory=RosterSide)

    def for_side(self, side: Side) -> RosterSide:
        return self.prosecution if side is Side.PROSECUTION else self.defense


class Tournament(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    created_at: datetime = Field(default_factory=_now)
    share_id: Optional[str] = None
    roster: TournamentRoster = Field(default_factory=TournamentRoster)


# ---------------------------------------------------------------------------
# Aggregated report
# ---------------------------------------------------------------------------

class AggregatedEntry(BaseModel):
    """Averages for one competitor in one role. None means no data."""

    role: str
    name: str
    avg_direct: Optional[float] = None
    avg_cross: Optional[float] = None
    avg_statement: Optional[float] = None
    statement_pickup: Optional[float] = None
    cross_pickup: Optional[float] = None


class SideReport(BaseModel):
    side: Side
    entries: list[AggregatedEntry] = Field(default_factory=list)


class AggregatedReport(BaseModel):
    """Per-role statistics for both sides of one tournament."""

    tournament_id: str
    generated_at: datetime = Field(default_factory=_now)
    sides: list[SideReport]

    def for_side(self, side: Side) -> SideReport:
        for report in self.sides:
            if report.side == side:
                return report
        return SideReport(side=side)


# ---------------------------------------------------------------------------
# Tournament bundle (top-level container)
# ---------------------------------------------------------------------------

class TournamentBundle(BaseModel):
    """A tournament with its ballots and the last aggregated report."""

    tournament: Tournament
    ballots: list[Ballot] = Field(default_factory=list)
    aggregated_data: Optional[AggregatedReport] = None
