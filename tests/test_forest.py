"""
Unit tests for Forest collection operations.
"""
import random

import pytest

from canforest.core.config import RandomTreeConfig
from canforest.core.datatypes import Species, Tree
from canforest.core.errors import TreeIndexError
from canforest.core.forest import Forest


def heights(forest):
    return [t.height for t in forest]


def test_accessors(sample_forest):
    assert sample_forest.size == 2
    assert len(sample_forest) == 2
    assert sample_forest.contains_index(0)
    assert sample_forest.contains_index(1)
    assert not sample_forest.contains_index(2)
    assert not sample_forest.contains_index(-1)
    assert sample_forest.tree_at(1).species is Species.MAPLE


def test_trees_property_is_a_copy(sample_forest):
    snapshot = sample_forest.trees
    sample_forest.add_random_tree()
    assert len(snapshot) == 2
    assert sample_forest.size == 3


def test_average_height_is_arithmetic_mean(sample_forest):
    assert sample_forest.average_height() == pytest.approx(17.75)
    sample_forest.add_random_tree()
    assert sample_forest.average_height() == pytest.approx(sum(heights(sample_forest)) / 3)


def test_render_sample_forest(sample_forest):
    assert sample_forest.render() == [
        "Forest name: sample",
        "    0 BIRCH  2010  15.00'  12.0%",
        "    1 MAPLE  2015  20.50'  15.0%",
        "There are 2 trees, with an average height of 17.75 feet.",
        "",
    ]


def test_empty_forest_reports_no_trees():
    forest = Forest(name="bare")
    assert forest.average_height() is None
    lines = []
    forest.print_forest(lines.append)
    assert lines == ["Forest name: bare", "There are no trees in the forest.", ""]


def test_unnamed_forest_renders_none():
    assert Forest().render()[0] == "Forest name: None"


def test_add_random_tree_appends(sample_forest):
    tree = sample_forest.add_random_tree()
    assert sample_forest.size == 3
    assert sample_forest.tree_at(2) is tree
    assert tree.species is not Species.UNKNOWN


def test_add_random_tree_is_deterministic_with_seeded_rng():
    a = Forest(name="a", rng=random.Random(5))
    b = Forest(name="b", rng=random.Random(5))
    for _ in range(4):
        a.add_random_tree()
        b.add_random_tree()
    assert a.trees == b.trees


def test_cut_removes_one_and_shifts(sample_forest):
    removed = sample_forest.cut_tree_by_index(0)
    assert removed.species is Species.BIRCH
    assert sample_forest.size == 1
    assert sample_forest.tree_at(0).species is Species.MAPLE
    assert sample_forest.tree_at(0).height == 20.5


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_cut_out_of_range_raises_and_leaves_forest_unchanged(sample_forest, index):
    before = sample_forest.trees
    with pytest.raises(TreeIndexError) as exc:
        sample_forest.cut_tree_by_index(index)
    assert exc.value.index == index
    assert str(exc.value) == f"Tree number {index} does not exist."
    assert isinstance(exc.value, IndexError)
    assert sample_forest.trees == before


def test_growth_once_applies_each_trees_factor(sample_forest):
    sample_forest.simulate_tree_growth()
    assert heights(sample_forest) == pytest.approx([15.0 * 1.12, 20.5 * 1.15])


def test_growth_compounds_over_years(sample_forest):
    sample_forest.simulate_tree_growth(years=5)
    assert heights(sample_forest) == pytest.approx([15.0 * 1.12 ** 5, 20.5 * 1.15 ** 5])


def test_growth_repeated_single_years_equals_multi_year():
    a = Forest(rng=random.Random(8))
    for _ in range(5):
        a.add_random_tree()
    b = Forest(trees=[t.model_copy() for t in a])
    for _ in range(3):
        a.simulate_tree_growth()
    b.simulate_tree_growth(years=3)
    assert heights(a) == pytest.approx(heights(b))


def test_reap_replaces_only_tall_trees(sample_forest):
    birch, maple = sample_forest.trees
    events = sample_forest.reap_forest(18)
    assert sample_forest.size == 2
    assert sample_forest.tree_at(0) is birch
    assert sample_forest.tree_at(1) is not maple
    assert [e.index for e in events] == [1]
    assert events[0].reaped is maple
    assert events[0].replacement is sample_forest.tree_at(1)


def test_reap_limit_is_inclusive(sample_forest):
    events = sample_forest.reap_forest(20.5)
    assert [e.index for e in events] == [1]


def test_reap_below_every_tree_keeps_forest(sample_forest):
    before = sample_forest.trees
    assert sample_forest.reap_forest(100) == []
    assert sample_forest.trees == before


def test_reap_does_not_recheck_replacements():
    # Replacements are always taller than the limit; each slot is still reaped once.
    tall = RandomTreeConfig(min_height=100.0, max_height=200.0)
    forest = Forest(name="tall", rng=random.Random(2), limits=tall)
    for _ in range(4):
        forest.add_random_tree()
    originals = forest.trees
    events = forest.reap_forest(50)
    assert [e.index for e in events] == [0, 1, 2, 3]
    assert [e.reaped for e in events] == list(originals)
    assert all(t.height >= 50 for t in forest)
    assert all(new is not old for new, old in zip(forest.trees, originals))


def test_reap_notices_are_interleaved_with_replacement(rng):
    forest = Forest(
        name="mixed",
        trees=[
            Tree(species=Species.FIR, year_planted=2001, height=40.0, growth_rate=10.0),
            Tree(species=Species.BIRCH, year_planted=2002, height=5.0, growth_rate=10.0),
            Tree(species=Species.MAPLE, year_planted=2003, height=45.0, growth_rate=10.0),
        ],
        rng=rng,
    )
    last = forest.tree_at(2)
    seen = []

    def on_reap(index, old, new):
        assert forest.tree_at(index) is new
        # the later tall tree is still in place while the first notice is emitted
        seen.append((index, forest.tree_at(2) is last))

    forest.reap_forest(30, on_reap=on_reap)
    assert seen == [(0, True), (2, False)]
