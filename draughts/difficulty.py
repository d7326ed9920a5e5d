from __future__ import annotations

from enum import Enum


class Difficulty(Enum):
    """AI tiers: (level index, search depth in plies, randomness between equal moves)."""

    EASY = (0, 0, True)
    MEDIUM = (1, 1, True)
    HARD = (2, 3, False)
    EXPERT = (3, 5, False)
    GRANDMASTER = (4, 6, False)

    def __init__(self, index: int, search_depth: int, randomness_allowed: bool) -> None:
        self.index = index
        self.search_depth = search_depth
        self.randomness_allowed = randomness_allowed

    @classmethod
    def from_level_index(cls, level: int) -> Difficulty:
        """Map a stored level to a tier, clamping out-of-range values."""
        for tier in cls:
            if tier.index == level:
                return tier
        if level <= cls.EASY.index:
            return cls.EASY
        if level >= cls.GRANDMASTER.index:
            return cls.GRANDMASTER
        return cls.MEDIUM


__all__ = ["Difficulty"]
