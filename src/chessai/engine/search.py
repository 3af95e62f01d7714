"""Shared engine search models, difficulty settings and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

from chessai.core.enums import Color

if TYPE_CHECKING:
    from chessai.core.board import Board
    from chessai.core.move import Move


class Difficulty(IntEnum):
    """AI strength: search depth below the root move, inverse randomisation."""

    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def depth(self) -> int:
        return int(self)

    @property
    def jitter(self) -> float:
        """Randomisation factor; the score is perturbed by up to ±factor×50."""
        return (4 - int(self)) * 0.2


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    depth: int = 2
    jitter: float = 0.0

    @classmethod
    def for_difficulty(cls, difficulty: int) -> SearchLimits:
        try:
            level = Difficulty(difficulty)
        except ValueError:
            raise ValueError(f"Difficulty must be 1, 2 or 3, got {difficulty!r}") from None
        return cls(depth=level.depth, jitter=level.jitter)


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: float
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the game layer."""

    def search(
        self,
        board: Board,
        limits: SearchLimits,
        color: Color = Color.BLACK,
        last_move: Move | None = None,
    ) -> SearchResult: ...
