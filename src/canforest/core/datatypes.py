from __future__ import annotations
import random
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from .config import RandomTreeConfig


class Species(str, Enum):
    BIRCH = "BIRCH"
    MAPLE = "MAPLE"
    FIR = "FIR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, token: str) -> "Species":
        """Match a species name case-insensitively; raises KeyError for unknown names."""
        return cls[token.strip().upper()]

    @classmethod
    def plantable(cls) -> list["Species"]:
        return [s for s in cls if s is not cls.UNKNOWN]


class Tree(BaseModel):
    """A single tree.

    `growth_rate` is an annual percentage: 12.0 grows the tree by 12 % a year.
    Values are not range-checked; year_planted >= 2000 and height >= 10 ft are
    conventions of the random factory only.
    """
    species: Species = Species.UNKNOWN
    year_planted: int = 0
    height: float = 0.0          # feet
    growth_rate: float = 0.0     # percent per year

    @classmethod
    def create_random(cls, rng: random.Random, limits: Optional[RandomTreeConfig] = None) -> "Tree":
        lim = limits or RandomTreeConfig()
        return cls(
            species=rng.choice(Species.plantable()),
            year_planted=rng.randint(lim.min_year_planted, lim.max_year_planted),
            height=lim.min_height + (lim.max_height - lim.min_height) * rng.random(),
            growth_rate=lim.min_growth_rate + (lim.max_growth_rate - lim.min_growth_rate) * rng.random(),
        )

    @property
    def growth_factor(self) -> float:
        return 1 + self.growth_rate / 100

    def grow(self) -> None:
        """Simulate one year of growth in place."""
        self.height *= self.growth_factor

    def format_row(self, index: int) -> str:
        return f"{index:5d} {self.species.value:<6} {self.year_planted:4d} {self.height:6.2f}' {self.growth_rate:5.1f}%"

    def __str__(self) -> str:
        return f"{self.species.value:<4} {self.year_planted:4d} {self.height:6.2f}' {self.growth_rate:5.1f}%"
