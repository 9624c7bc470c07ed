from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.models import Side
from src.scoring.ballots import build_ballot
from src.scoring.taxonomy import build_taxonomy

TOURNAMENT_ID = "t-1"


@pytest.fixture
def taxonomy():
    return build_taxonomy()


@pytest.fixture
def make_ballot(taxonomy):
    """Factory: every slot scores ``default`` unless overridden in ``scores``."""
    counter = {"n": 0}

    def _make(
        our_side: Side = Side.PROSECUTION,
        scores: dict[str, int] | None = None,
        names: dict[str, str] | None = None,
        default: int = 5,
        round_number: int | None = None,
        judge_name: str = "Judge Judy",
    ):
        counter["n"] += 1
        all_scores = {k: default for k in taxonomy.keys()}
        all_scores.update(scores or {})
        return build_ballot(
            tournament_id=TOURNAMENT_ID,
            round_number=round_number or counter["n"],
            judge_name=judge_name,
            prosecution_team_number="1001",
            defense_team_number="2002",
            our_side=our_side,
            scores=all_scores,
            names=names,
            ballot_id=f"b-{counter['n']}",
            created_at=datetime(2026, 3, counter["n"], 9, 0, tzinfo=timezone.utc),
            taxonomy=taxonomy,
        )

    return _make


@pytest.fixture
def prosecution_names():
    """A full prosecution lineup: opener, middle, closer and three witnesses."""
    return {
        "P. Open": "Alice",
        "P. Direct 1: Attorney": "Alice",
        "P. Direct 2: Attorney": "Mo",
        "P. Direct 3: Attorney": "Cleo",
        "P. Cross  1: Attorney": "Mo",
        "P. Cross  2: Attorney": "Alice",
        "P. Cross  3: Attorney": "Cleo",
        "P. Close": "Cleo",
        "P. Direct 1: Witness": "Wren",
        "P. Cross  1: Witness": "Wren",
        "P. Direct 2: Witness": "Xavi",
        "P. Cross  2: Witness": "Xavi",
        "P. Direct 3: Witness": "Yara",
        "P. Cross  3: Witness": "Yara",
    }


@pytest.fixture
def canonical_keys():
    """Every slot label, written out in the order ballots and exports use."""
    return [
        "P. Open",
        "P. Direct 1: Attorney",
        "P. Direct 1: Witness",
        "P. Cross  1: Witness",
        "P. Direct 2: Attorney",
        "P. Direct 2: Witness",
        "P. Cross  2: Witness",
        "P. Direct 3: Attorney",
        "P. Direct 3: Witness",
        "P. Cross  3: Witness",
        "P. Cross  1: Attorney",
        "P. Cross  2: Attorney",
        "P. Cross  3: Attorney",
        "P. Close",
        "D. Open",
        "D. Cross 1: Attorney",
        "D. Cross 2: Attorney",
        "D. Cross 3: Attorney",
        "D. Direct 1: Attorney",
        "D. Direct 1: Witness",
        "D. Cross 1: Witness",
        "D. Direct 2: Attorney",
        "D. Direct 2: Witness",
        "D. Cross 2: Witness",
        "D. Direct 3: Attorney",
        "D. Direct 3: Witness",
        "D. Cross 3: Witness",
        "D. Close",
    ]
