from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Any, List, Optional, Sequence
from loguru import logger
from rich.console import Console

from .config import ForestryConfig
from .errors import ForestFileFormatError
from ..io.csv_loader import next_forest
from ..cli.menu import ForestMenu

@dataclass
class SessionState:
    names: List[str]
    position: int = 0
    visited: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    exited: bool = False

class ForestrySession:
    """Walks the startup forest names left to right, serving the menu for each one that loads."""

    def __init__(self, cfg: Optional[ForestryConfig] = None, *,
                 console: Optional[Console] = None,
                 read_line: Optional[Callable[[], str]] = None,
                 rng: Optional[random.Random] = None):
        self.cfg = cfg or ForestryConfig()
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.read_line = read_line
        self.rng = rng if rng is not None else random.Random(self.cfg.run.random_seed)

    def echo(self, line: str = "") -> None:
        self.console.print(line, markup=False, highlight=False, emoji=False)

    def open_forest(self, name: str):
        try:
            return next_forest(name, self.cfg.data_dir,
                               suffix=self.cfg.files.tabular_suffix,
                               rng=self.rng, limits=self.cfg.random_tree, echo=self.echo)
        except ForestFileFormatError as e:
            logger.error("Malformed forest file {}: {}", e.path, e.reason)
            self.echo(f"Error reading {e.path} (line {e.line_no}): {e.reason}")
            return None

    def run(self, names: Sequence[str]) -> Dict[str, Any]:
        state = SessionState(names=list(names))
        self.echo("Welcome to the Forestry Simulation")
        self.echo("----------------------------------")
        logger.info("Starting session over {} forest(s): {}", len(state.names), state.names)
        while not state.exited and state.position < len(state.names):
            name = state.names[state.position]
            self.echo(f"Initializing forest from: {name}")
            self.echo()
            forest = self.open_forest(name)
            if forest is None:
                self.echo(f"Failed to load forest: {name}")
                state.failed.append(name)
            else:
                state.visited.append(name)
                menu = ForestMenu(forest, self.cfg, console=self.console, read_line=self.read_line)
                state.exited = not menu.run()
            state.position += 1
        self.echo()
        self.echo("Exiting the simulation")
        logger.info("Session finished: visited={} failed={}", state.visited, state.failed)
        return {"visited": state.visited, "failed": state.failed, "exited": state.exited}
