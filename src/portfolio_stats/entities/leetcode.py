"""LeetCode domain entities."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LeetCodeDifficulty:
    """Accepted problems for one difficulty bucket."""

    difficulty: str
    solved: int = 0
    total: int = 0


@dataclass(frozen=True)
class LeetCodeStats:
    """Solved-problem summary for a LeetCode user."""

    username: str
    ranking: int = 0
    difficulties: tuple[LeetCodeDifficulty, ...] = field(default_factory=tuple)
