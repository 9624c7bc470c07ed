import pytest
from pydantic import ValidationError

from src.models import Side
from src.scoring.taxonomy import MAX_WITNESSES, Category, default_taxonomy


def test_catalog_has_fourteen_slots_per_side(taxonomy):
    keys = taxonomy.keys()
    assert len(keys) == 28
    assert len(set(keys)) == 28
    assert len(taxonomy.keys(Side.PROSECUTION)) == 14
    assert len(taxonomy.keys(Side.DEFENSE)) == 14
    assert keys[:14] == taxonomy.keys(Side.PROSECUTION)


def test_canonical_order_is_fixed(taxonomy, canonical_keys):
    assert taxonomy.keys() == canonical_keys
    assert taxonomy.keys(Side.PROSECUTION) == canonical_keys[:14]
    assert taxonomy.keys(Side.DEFENSE) == canonical_keys[14:]


def test_witness_cap_matches_catalog(taxonomy):
    for side in Side:
        assert len(taxonomy.slots_for(side, Category.DIRECT_WITNESS)) == MAX_WITNESSES


@pytest.mark.parametrize("side", [Side.PROSECUTION, Side.DEFENSE])
def test_categories_partition_each_side(taxonomy, side):
    counts = {c: len(taxonomy.slots_for(side, c)) for c in Category}
    assert counts == {
        Category.OPENING_STATEMENT: 1,
        Category.CLOSING_STATEMENT: 1,
        Category.DIRECT_ATTORNEY: 3,
        Category.DIRECT_WITNESS: 3,
        Category.CROSS_ATTORNEY: 3,
        Category.CROSS_WITNESS: 3,
    }
    for category in (Category.DIRECT_ATTORNEY, Category.CROSS_WITNESS):
        assert [s.sequence for s in taxonomy.slots_for(side, category)] == [1, 2, 3]


def test_classify(taxonomy):
    assert taxonomy.classify(Side.PROSECUTION, "P. Open") == Category.OPENING_STATEMENT
    assert taxonomy.classify(Side.PROSECUTION, "P. Cross  2: Attorney") == Category.CROSS_ATTORNEY
    assert taxonomy.classify(Side.DEFENSE, "D. Cross 2: Witness") == Category.CROSS_WITNESS
    assert taxonomy.classify(Side.DEFENSE, "D. Direct 3: Attorney") == Category.DIRECT_ATTORNEY


def test_classify_rejects_unknown_or_foreign_slot(taxonomy):
    with pytest.raises(KeyError):
        taxonomy.classify(Side.PROSECUTION, "P. Rebuttal")
    with pytest.raises(KeyError):
        taxonomy.classify(Side.DEFENSE, "P. Open")


def test_find_locates_counterparts(taxonomy):
    assert taxonomy.find(Side.DEFENSE, Category.CROSS_WITNESS, 2).key == "D. Cross 2: Witness"
    assert taxonomy.find(Side.PROSECUTION, Category.CROSS_ATTORNEY, 3).key == "P. Cross  3: Attorney"
    assert taxonomy.find(Side.DEFENSE, Category.OPENING_STATEMENT).key == "D. Open"
    assert taxonomy.find(Side.DEFENSE, Category.CROSS_WITNESS, 4) is None


def test_taxonomy_is_immutable_and_shared(taxonomy):
    with pytest.raises(ValidationError):
        taxonomy.slots = ()
    assert default_taxonomy() is default_taxonomy()
    assert default_taxonomy() == taxonomy
