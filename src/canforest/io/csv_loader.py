# canforest/io/csv_loader.py
from __future__ import annotations
import csv
import math
import random
from pathlib import Path
from typing import List, Optional
from loguru import logger

from ..core.config import RandomTreeConfig
from ..core.datatypes import Species, Tree
from ..core.errors import ForestFileFormatError
from ..core.forest import Echo, Forest, console_echo

# species,year_planted,height,growth_rate
N_FIELDS = 4


def _parse_row(row: List[str], path: Path, line_no: int) -> Tree:
    fields = [c.strip() for c in row]
    if len(fields) != N_FIELDS:
        raise ForestFileFormatError(path, line_no, f"expected {N_FIELDS} fields, got {len(fields)}")
    try:
        species = Species.parse(fields[0])
    except KeyError:
        raise ForestFileFormatError(path, line_no, f"unknown species {fields[0]!r}") from None
    try:
        year = int(fields[1])
        height = float(fields[2])
        rate = float(fields[3])
    except ValueError as e:
        raise ForestFileFormatError(path, line_no, str(e)) from e
    if not (math.isfinite(height) and math.isfinite(rate)):
        raise ForestFileFormatError(path, line_no, "height and growth rate must be finite numbers")
    return Tree(species=species, year_planted=year, height=height, growth_rate=rate)


def read_trees(path: Path) -> List[Tree]:
    """Parse every non-blank line of a tabular forest file; the first bad line aborts the read."""
    trees: List[Tree] = []
    with path.open(newline="", encoding="utf-8") as f:
        rdr = csv.reader(f)
        try:
            for row in rdr:
                if not row or all(not c.strip() for c in row):
                    continue
                trees.append(_parse_row(row, path, rdr.line_num))
        except UnicodeDecodeError as e:
            raise ForestFileFormatError(path, rdr.line_num + 1, f"not UTF-8 text ({e.reason})") from e
        except csv.Error as e:
            raise ForestFileFormatError(path, rdr.line_num, str(e)) from e
    return trees


def next_forest(filename: str, data_dir: str | Path = ".", *,
                suffix: str = ".csv",
                rng: Optional[random.Random] = None,
                limits: Optional[RandomTreeConfig] = None,
                echo: Echo = console_echo) -> Optional[Forest]:
    """Build the forest `filename` from `<data_dir>/<filename>.csv`.

    Returns None (after reporting) when the file does not exist or cannot be
    read. A malformed line raises ForestFileFormatError.
    """
    path = Path(data_dir) / f"{filename}{suffix}"
    if not path.is_file():
        logger.warning("Tabular forest file missing: {}", path)
        echo(f"File not found: {path}")
        return None
    try:
        trees = read_trees(path)
    except OSError as e:
        logger.warning("Reading tabular forest file {} failed: {}", path, e)
        echo(f"Error opening/reading {path}: {e}")
        return None
    logger.info("Loaded {} trees for forest {!r} from {}", len(trees), filename, path)
    return Forest(name=filename, trees=trees, rng=rng, limits=limits)
