from io import StringIO

import pandas as pd

from src.export.ballots_csv import HEADER_COLUMNS, ballot_csv_columns, export_ballots_to_csv
from src.models import Side


def _read(csv_text):
    return pd.read_csv(StringIO(csv_text), dtype=str, keep_default_na=False)


def test_columns_are_header_scores_then_names(taxonomy, canonical_keys):
    columns = ballot_csv_columns(taxonomy)
    keys = canonical_keys
    assert len(columns) == 10 + 28 + 28
    assert columns[:10] == HEADER_COLUMNS
    assert columns[10:38] == keys
    assert columns[38:] == [f"{k}_name" for k in keys]
    assert ballot_csv_columns()[10:38] == keys


def test_rows_have_every_slot_in_catalog_order(make_ballot, taxonomy, prosecution_names):
    ballots = [
        make_ballot(scores={"P. Open": 9}, names=prosecution_names),
        make_ballot(our_side=Side.DEFENSE, default=3, names={"D. Close": "Dina"}),
    ]
    df = _read(export_ballots_to_csv(ballots, "Spring Invitational", taxonomy))

    assert list(df.columns) == ballot_csv_columns(taxonomy)
    assert len(df) == 2

    first = df.iloc[0]
    assert first["tournamentName"] == "Spring Invitational"
    assert first["ourSide"] == "P"
    assert first["prosecutionTotal"] == "74"
    assert first["defenseTotal"] == "70"
    assert first["winner"] == "Prosecution"
    assert first["diff"] == "4"
    assert first["P. Open"] == "9"
    assert first["P. Open_name"] == "Alice"
    assert first["P. Cross  3: Witness_name"] == "Yara"
    assert all(first[f"{k}_name"] == "" for k in taxonomy.keys(Side.DEFENSE))

    second = df.iloc[1]
    assert second["winner"] == "Tie"
    assert second["D. Close_name"] == "Dina"
    assert second["D. Open_name"] == ""
    assert all(second[f"{k}_name"] == "" for k in taxonomy.keys(Side.PROSECUTION))


def test_missing_slot_exports_empty_score(make_ballot, taxonomy):
    ballot = make_ballot()
    trimmed = ballot.model_copy(update={
        "scores": [s for s in ballot.scores if s.key != "D. Cross 2: Witness"],
    })
    df = _read(export_ballots_to_csv([trimmed], "T", taxonomy))
    assert df.iloc[0]["D. Cross 2: Witness"] == ""
    assert df.iloc[0]["defenseTotal"] == "65"
    assert len(df.columns) == 66


def test_text_fields_are_quoted(make_ballot, taxonomy):
    ballot = make_ballot(judge_name='Hon. "Ace" Smith, III', names={"P. Open": "O'Neil, Pat"})
    csv_text = export_ballots_to_csv([ballot], "Cup, 2026", taxonomy)
    row = csv_text.splitlines()[1]
    assert row.startswith('"Cup, 2026",1,"Hon. ""Ace"" Smith, III",1001,2002,P,70,70,Tie,0,')

    df = _read(csv_text)
    assert df.iloc[0]["judgeName"] == 'Hon. "Ace" Smith, III'
    assert df.iloc[0]["P. Open_name"] == "O'Neil, Pat"


def test_no_ballots_writes_header_only(taxonomy):
    csv_text = export_ballots_to_csv([], "T", taxonomy)
    assert csv_text.splitlines() == [",".join(ballot_csv_columns(taxonomy))]
