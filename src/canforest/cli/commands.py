from __future__ import annotations
import sys
from pathlib import Path
from typing import List, Optional
import typer
import yaml
from rich import print
from rich.markup import escape
from loguru import logger
from ..core.config import load_config
from ..core.sim import ForestrySession

app = typer.Typer(no_args_is_help=True, help="canforest — interactive managed-forest simulation")

SAMPLE_CSV = """\
Birch, 2010, 15.00, 12.0
maple,2015,20.50,15.0
Fir, 2018, 11.25, 17.5
"""

def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())

@app.command("init")
def init_cmd(target: str = typer.Argument("examples/minimal", help="Directory to write example files into")):
    dst = Path(target)
    dst.mkdir(parents=True, exist_ok=True)
    cfg = {
        "data_dir": str(dst / "data"),
        "random_tree": {
            "min_year_planted": 2000, "max_year_planted": 2024,
            "min_height": 10.0, "max_height": 30.0,
            "min_growth_rate": 10.0, "max_growth_rate": 20.0,
        },
        "files": {"tabular_suffix": ".csv", "snapshot_suffix": ".db"},
        "run": {"random_seed": None, "log_level": "WARNING"},
    }
    (dst / "configs").mkdir(parents=True, exist_ok=True)
    (dst / "configs" / "forestry.yaml").write_text(yaml.safe_dump(cfg, sort_keys=False))
    (dst / "data").mkdir(parents=True, exist_ok=True)
    (dst / "data" / "sample.csv").write_text(SAMPLE_CSV)
    print(f"[green]Initialized examples at {dst}[/green]")

@app.command("run")
def run_cmd(names: Optional[List[str]] = typer.Argument(None, help="Forest base names, loaded from <name>.csv in order"),
            config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config"),
            data_dir: Optional[str] = typer.Option(None, "--data-dir", "-d", help="Directory holding .csv and .db files"),
            seed: Optional[int] = typer.Option(None, "--seed", help="Seed for random trees"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="DEBUG logging"),
            quiet: bool = typer.Option(False, "--quiet", "-q", help="Only ERROR+")):
    try:
        cfg = load_config(config)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        print(f"[red]Could not load config {escape(str(config))}:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)
    if data_dir is not None:
        cfg.data_dir = data_dir
    if seed is not None:
        cfg.run.random_seed = seed
    if verbose:
        _configure_logging("DEBUG")
    elif quiet:
        _configure_logging("ERROR")
    else:
        _configure_logging(cfg.run.log_level)

    ForestrySession(cfg).run(names or [])
