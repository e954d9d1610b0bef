from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional
from loguru import logger
from rich.console import Console

from .config import RandomTreeConfig
from .datatypes import Tree
from .errors import TreeIndexError

Echo = Callable[[str], None]

_console = Console(highlight=False, soft_wrap=True)


def console_echo(line: str) -> None:
    _console.print(line, markup=False, emoji=False)


@dataclass
class ReapEvent:
    index: int
    reaped: Tree
    replacement: Tree


class Forest:
    """A named, ordered collection of trees.

    Trees are addressed by position; cutting shifts later trees down by one.
    Every random tree the forest creates is drawn from `rng`, so a seeded
    generator makes add and reap reproducible.
    """

    def __init__(self, name: Optional[str] = None, trees: Optional[Iterable[Tree]] = None,
                 rng: Optional[random.Random] = None, limits: Optional[RandomTreeConfig] = None):
        self.name = name
        self._trees: List[Tree] = list(trees) if trees is not None else []
        self.rng = rng if rng is not None else random.Random()
        self.limits = limits or RandomTreeConfig()

    # ---------- accessors ----------
    @property
    def size(self) -> int:
        return len(self._trees)

    def __len__(self) -> int:
        return len(self._trees)

    def __iter__(self) -> Iterator[Tree]:
        return iter(self._trees)

    @property
    def trees(self) -> tuple[Tree, ...]:
        return tuple(self._trees)

    def contains_index(self, index: int) -> bool:
        return 0 <= index < len(self._trees)

    def tree_at(self, index: int) -> Tree:
        if not self.contains_index(index):
            raise TreeIndexError(index)
        return self._trees[index]

    # ---------- reporting ----------
    def total_height(self) -> float:
        return sum(t.height for t in self._trees)

    def average_height(self) -> Optional[float]:
        """Mean tree height in feet, or None for an empty forest."""
        if not self._trees:
            return None
        return self.total_height() / len(self._trees)

    def render(self) -> List[str]:
        lines = [f"Forest name: {self.name}"]
        lines.extend(t.format_row(i) for i, t in enumerate(self._trees))
        avg = self.average_height()
        if avg is None:
            lines.append("There are no trees in the forest.")
        else:
            lines.append(f"There are {len(self._trees)} trees, with an average height of {avg:.2f} feet.")
        lines.append("")
        return lines

    def print_forest(self, echo: Echo = console_echo) -> None:
        for line in self.render():
            echo(line)

    # ---------- mutation ----------
    def add_random_tree(self) -> Tree:
        tree = Tree.create_random(self.rng, self.limits)
        self._trees.append(tree)
        logger.debug("Planted {} in forest {!r} (now {} trees)", tree, self.name, len(self._trees))
        return tree

    def cut_tree_by_index(self, index: int) -> Tree:
        if not self.contains_index(index):
            raise TreeIndexError(index)
        tree = self._trees.pop(index)
        logger.debug("Cut tree {} ({}) from forest {!r}", index, tree, self.name)
        return tree

    def simulate_tree_growth(self, years: int = 1) -> None:
        for _ in range(years):
            for tree in self._trees:
                tree.grow()
        logger.debug("Grew forest {!r} by {} year(s)", self.name, years)

    def reap_forest(self, limit: float,
                    on_reap: Optional[Callable[[int, Tree, Tree], None]] = None) -> List[ReapEvent]:
        """Replace every tree at or above `limit` feet with a new random tree.

        One forward pass: a replacement is never checked against the limit in
        the same call. `on_reap(index, old, new)` fires right after each swap.
        """
        events: List[ReapEvent] = []
        for index in range(len(self._trees)):
            old = self._trees[index]
            if old.height >= limit:
                new = Tree.create_random(self.rng, self.limits)
                self._trees[index] = new
                events.append(ReapEvent(index=index, reaped=old, replacement=new))
                if on_reap is not None:
                    on_reap(index, old, new)
        logger.info("Reaped {} tree(s) at >= {} ft in forest {!r}", len(events), limit, self.name)
        return events

    def __repr__(self) -> str:
        return f"Forest(name={self.name!r}, trees={len(self._trees)})"
