"""
Shared pytest fixtures for canforest tests.
"""
import io
import random

import pytest
from rich.console import Console

from canforest.core.config import ForestryConfig
from canforest.core.datatypes import Species, Tree
from canforest.core.forest import Forest


SAMPLE_CSV = "Birch, 2010, 15.00, 12.0\nmaple,2015,20.50,15.0\n"


def scripted(lines):
    """Return a read_line callable that replays `lines`, then raises EOFError."""
    it = iter(lines)

    def _read():
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _read


@pytest.fixture
def script():
    return scripted


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding sample.csv with one birch and one maple."""
    (tmp_path / "sample.csv").write_text(SAMPLE_CSV)
    return tmp_path


@pytest.fixture
def cfg(data_dir):
    return ForestryConfig.from_dict({"data_dir": str(data_dir), "run": {"random_seed": 99}})


@pytest.fixture
def sample_forest(rng):
    """The two-tree forest described by sample.csv."""
    return Forest(
        name="sample",
        trees=[
            Tree(species=Species.BIRCH, year_planted=2010, height=15.0, growth_rate=12.0),
            Tree(species=Species.MAPLE, year_planted=2015, height=20.5, growth_rate=15.0),
        ],
        rng=rng,
    )


@pytest.fixture
def console():
    """Console writing to an in-memory buffer; read it back with console.file.getvalue()."""
    return Console(file=io.StringIO(), highlight=False, soft_wrap=True, width=200)
