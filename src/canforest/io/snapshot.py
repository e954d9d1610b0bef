# canforest/io/snapshot.py
"""
Versioned snapshot files (`<name>.db`) for saving and resuming a forest.

A snapshot is a UTF-8 JSON document:

    {"format": "canforest-snapshot", "version": 1,
     "forest": {"name": "...", "trees": [{"species": "BIRCH", ...}, ...]}}

Floats are written with their shortest round-trip representation, so a
save followed by a load restores every tree attribute exactly.
"""
from __future__ import annotations
import math
import random
from pathlib import Path
from typing import List, Optional
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from ..core.config import RandomTreeConfig
from ..core.datatypes import Tree
from ..core.errors import SnapshotError
from ..core.forest import Echo, Forest, console_echo

SNAPSHOT_FORMAT = "canforest-snapshot"
SNAPSHOT_VERSION = 1


class ForestState(BaseModel):
    name: Optional[str] = None
    trees: List[Tree] = Field(default_factory=list)


class Snapshot(BaseModel):
    format: str = SNAPSHOT_FORMAT
    version: int = SNAPSHOT_VERSION
    forest: ForestState


def encode_forest(forest: Forest) -> str:
    state = ForestState(name=forest.name, trees=[t.model_copy() for t in forest])
    return Snapshot(forest=state).model_dump_json(indent=2)


def decode_forest(text: str, path: str | Path = "<memory>", *,
                  rng: Optional[random.Random] = None,
                  limits: Optional[RandomTreeConfig] = None) -> Forest:
    try:
        snap = Snapshot.model_validate_json(text)
    except ValidationError as e:
        raise SnapshotError(path, f"not a forest snapshot ({e.error_count()} validation error(s))") from e
    if snap.format != SNAPSHOT_FORMAT:
        raise SnapshotError(path, f"unexpected format {snap.format!r}")
    if snap.version != SNAPSHOT_VERSION:
        raise SnapshotError(path, f"unsupported snapshot version {snap.version}")
    return Forest(name=snap.forest.name, trees=snap.forest.trees, rng=rng, limits=limits)


def snapshot_path(name: Optional[str], data_dir: str | Path = ".", suffix: str = ".db") -> Path:
    return Path(data_dir) / f"{name}{suffix}"


def save_forest(forest: Forest, data_dir: str | Path = ".", *,
                suffix: str = ".db", echo: Echo = console_echo) -> bool:
    """Write `forest` to `<data_dir>/<forest.name>.db`, replacing any existing file."""
    path = snapshot_path(forest.name, data_dir, suffix)
    bad = [i for i, t in enumerate(forest) if not (math.isfinite(t.height) and math.isfinite(t.growth_rate))]
    if bad:
        logger.warning("Refusing to save forest {!r}: non-finite values in trees {}", forest.name, bad)
        echo(f"Error in saving to {path}: tree(s) {', '.join(map(str, bad))} have non-finite height or growth rate")
        return False
    try:
        path.write_text(encode_forest(forest), encoding="utf-8")
    except OSError as e:
        logger.warning("Saving forest {!r} to {} failed: {}", forest.name, path, e)
        echo(f"Error in saving to {path}: {e}")
        return False
    logger.info("Saved forest {!r} ({} trees) to {}", forest.name, len(forest), path)
    return True


def load_forest(file_name: str | Path, *,
                rng: Optional[random.Random] = None,
                limits: Optional[RandomTreeConfig] = None,
                echo: Echo = console_echo) -> Optional[Forest]:
    """Restore a forest from the snapshot at `file_name`; None (after reporting) on any failure."""
    path = Path(file_name)
    try:
        forest = decode_forest(path.read_text(encoding="utf-8"), path, rng=rng, limits=limits)
    except (OSError, UnicodeDecodeError, SnapshotError) as e:
        logger.warning("Loading snapshot {} failed: {}", path, e)
        echo(f"Error opening/reading {path}: {e}")
        return None
    logger.info("Loaded forest {!r} ({} trees) from {}", forest.name, len(forest), path)
    return forest
