"""
Interactive menu for a single forest.

Each menu letter is bound to a handler through the registry; a handler
receives the running ForestMenu and returns what the session should do next.
"""
from __future__ import annotations
import re
from enum import Enum
from typing import Callable, Optional
from loguru import logger
from rich.console import Console

from ..core.config import ForestryConfig
from ..core.forest import Forest
from ..io.snapshot import load_forest, save_forest, snapshot_path
from .registry import register, get as get_command, keys as command_keys

MENU_PROMPT = "(P)rint, (A)dd, (C)ut, (G)row, (R)eap, (S)ave, (L)oad, (N)ext, e(X)it : "
_INTEGER = re.compile(r"[+-]?[0-9]+")


class MenuAction(Enum):
    STAY = "stay"
    NEXT = "next"
    EXIT = "exit"


class ForestMenu:
    def __init__(self, forest: Forest, cfg: Optional[ForestryConfig] = None, *,
                 console: Optional[Console] = None,
                 read_line: Optional[Callable[[], str]] = None):
        self.forest = forest
        self.cfg = cfg or ForestryConfig()
        self.console = console or Console(highlight=False, soft_wrap=True)
        self._read_line = read_line or (lambda: self.console.input())

    def echo(self, line: str = "") -> None:
        self.console.print(line, markup=False, highlight=False, emoji=False)

    def ask(self, prompt: str) -> str:
        """Show `prompt` and read one line; EOFError propagates to `run`."""
        self.echo(prompt)
        return self._read_line()

    # ---------- input validation ----------
    def choose(self) -> str:
        choice = self.ask(MENU_PROMPT).strip().upper()
        while choice not in command_keys():
            self.echo("Invalid menu option, try again")
            choice = self.ask(MENU_PROMPT).strip().upper()
        return choice

    def ask_int(self, prompt: str) -> Optional[int]:
        text = self.ask(prompt).strip()
        if not _INTEGER.fullmatch(text):
            self.echo("That is not an integer.")
            return None
        return int(text)

    def ask_tree_index(self) -> int:
        while True:
            index = self.ask_int("Tree to cut down:")
            if index is None:
                continue
            if self.forest.contains_index(index):
                return index
            self.echo(f"Error. Tree {index} does not exist. Tree to cut down:")

    def ask_reap_height(self) -> int:
        while True:
            height = self.ask_int("Height to reap from:")
            if height is None:
                continue
            if height >= 0:
                return height
            self.echo("Error. That is not a valid height.")

    # ---------- loop ----------
    def run(self) -> bool:
        """Serve the menu until (N)ext or e(X)it. True means go on to the next forest."""
        try:
            while True:
                action = get_command(self.choose())(self)
                if action is MenuAction.NEXT:
                    return True
                if action is MenuAction.EXIT:
                    return False
        except EOFError:
            logger.debug("End of input while serving forest {!r}", self.forest.name)
            return False


@register("P")
def print_cmd(menu: ForestMenu) -> MenuAction:
    menu.forest.print_forest(menu.echo)
    return MenuAction.STAY

@register("A")
def add_cmd(menu: ForestMenu) -> MenuAction:
    menu.forest.add_random_tree()
    return MenuAction.STAY

@register("C")
def cut_cmd(menu: ForestMenu) -> MenuAction:
    if menu.forest.size == 0:
        menu.echo("There are no trees to cut.")
        return MenuAction.STAY
    menu.forest.cut_tree_by_index(menu.ask_tree_index())
    return MenuAction.STAY

@register("G")
def grow_cmd(menu: ForestMenu) -> MenuAction:
    menu.forest.simulate_tree_growth()
    return MenuAction.STAY

@register("R")
def reap_cmd(menu: ForestMenu) -> MenuAction:
    limit = menu.ask_reap_height()

    def _notice(_index, old, new):
        menu.echo(f"Reaping the tall tree: {old}")
        menu.echo(f"Replaced with a new tree: {new}")

    menu.forest.reap_forest(limit, on_reap=_notice)
    return MenuAction.STAY

@register("S")
def save_cmd(menu: ForestMenu) -> MenuAction:
    files = menu.cfg.files
    if save_forest(menu.forest, menu.cfg.data_dir, suffix=files.snapshot_suffix, echo=menu.echo):
        menu.echo(f"Forest saved to {snapshot_path(menu.forest.name, menu.cfg.data_dir, files.snapshot_suffix)}")
    return MenuAction.STAY

@register("L")
def load_cmd(menu: ForestMenu) -> MenuAction:
    name = menu.ask("Enter forest name:").strip()
    path = snapshot_path(name, menu.cfg.data_dir, menu.cfg.files.snapshot_suffix)
    loaded = load_forest(path, rng=menu.forest.rng, limits=menu.forest.limits, echo=menu.echo)
    if loaded is not None:
        menu.forest = loaded
    else:
        menu.echo("Old forest retained")
    return MenuAction.STAY

@register("N")
def next_cmd(menu: ForestMenu) -> MenuAction:
    menu.echo("Moving to the next forest")
    return MenuAction.NEXT

@register("X")
def exit_cmd(menu: ForestMenu) -> MenuAction:
    return MenuAction.EXIT
