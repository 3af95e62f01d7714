"""Enumerations and abstract interfaces for the game layer.

Follows Dependency Inversion: callers depend on :class:`IGameController`,
not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, IntEnum, auto
from typing import TYPE_CHECKING

from chessai.core.enums import Color

if TYPE_CHECKING:
    from chessai.core.board import Board
    from chessai.core.move import Move
    from chessai.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # AI is computing
    GAME_OVER = auto()


class GameMode(IntEnum):
    """Two humans at one board, or a human (white) against the engine (black)."""

    LOCAL = auto()
    AI = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    CHECKMATE = auto()
    STALEMATE = auto()
    TIMEOUT = auto()
    RESIGNATION = auto()

    @property
    def label(self) -> str:
        return self.name.capitalize()


# ── Timer presets ────────────────────────────────────────────────────────────


class TimerMode(Enum):
    """Per-player time budget in milliseconds (0 = unlimited).

    Only the budget is modelled here; counting down is the caller's job,
    which reports an expired flag through ``time_expired``.
    """

    NONE = 0
    BLITZ = 5 * 60 * 1000
    RAPID = 10 * 60 * 1000
    CLASSICAL = 30 * 60 * 1000

    @property
    def initial_ms(self) -> int:
        return self.value

    @property
    def is_timed(self) -> bool:
        return self.value > 0


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        mode: GameMode = GameMode.AI,
        difficulty: int = 2,
        timer_mode: TimerMode = TimerMode.NONE,
        board: Board | None = None,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def play_ai_move(self) -> Move | None:
        """Let the engine move if it is its turn."""

    @abstractmethod
    def undo(self) -> bool:
        """Undo the last move (or move pair against the engine)."""

    @abstractmethod
    def resign(self, color: Color) -> None:
        """Player of *color* resigns."""

    @abstractmethod
    def time_expired(self, color: Color) -> None:
        """*color* exceeded its time budget."""
