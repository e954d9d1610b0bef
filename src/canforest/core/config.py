# canforest/core/config.py
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional
import pathlib
import yaml

# ---------- leaf configs ----------
@dataclass
class RandomTreeConfig:
    """Bounds used when planting a random tree. Growth rates are percent per year."""
    min_year_planted: int = 2000
    max_year_planted: int = 2024
    min_height: float = 10.0
    max_height: float = 30.0
    min_growth_rate: float = 10.0
    max_growth_rate: float = 20.0

@dataclass
class FilesConfig:
    tabular_suffix: str = ".csv"
    snapshot_suffix: str = ".db"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

@dataclass
class RunConfig:
    random_seed: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level {self.log_level!r}; expected one of {', '.join(LOG_LEVELS)}")

# ---------- helpers ----------
def _as(cls, obj, defaults: Optional[Dict[str, Any]] = None):
    """Coerce a possibly-dict `obj` into dataclass `cls` (overlaying defaults)."""
    if isinstance(obj, cls):
        return obj
    if isinstance(obj, dict):
        base = {} if defaults is None else dict(defaults)
        base.update(obj)
        return cls(**base)  # type: ignore[arg-type]
    # nothing provided: build from defaults or empty
    return cls(**({} if defaults is None else defaults))  # type: ignore[arg-type]

# ---------- top-level ----------
@dataclass
class ForestryConfig:
    random_tree: RandomTreeConfig = field(default_factory=RandomTreeConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    run: RunConfig = field(default_factory=RunConfig)
    data_dir: str = "."

    def __post_init__(self):
        self.random_tree = _as(RandomTreeConfig, self.random_tree, RandomTreeConfig().__dict__)
        self.files = _as(FilesConfig, self.files, FilesConfig().__dict__)
        self.run = _as(RunConfig, self.run, RunConfig().__dict__)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ForestryConfig":
        d = d or {}
        return cls(
            random_tree=_as(RandomTreeConfig, d.get("random_tree"), RandomTreeConfig().__dict__),
            files=_as(FilesConfig, d.get("files"), FilesConfig().__dict__),
            run=_as(RunConfig, d.get("run"), RunConfig().__dict__),
            data_dir=str(d.get("data_dir", ".")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

def load_config(path_or_dict: str | pathlib.Path | Dict[str, Any] | ForestryConfig | None = None) -> ForestryConfig:
    """Accept YAML path, dict, ForestryConfig or None; always return a fully-typed ForestryConfig."""
    if path_or_dict is None:
        return ForestryConfig()
    if isinstance(path_or_dict, ForestryConfig):
        return ForestryConfig.from_dict(path_or_dict.__dict__)
    if isinstance(path_or_dict, dict):
        return ForestryConfig.from_dict(path_or_dict)
    path = pathlib.Path(path_or_dict)
    with path.open("r") as f:
        d = yaml.safe_load(f) or {}
    return ForestryConfig.from_dict(d)
