"""GameController, the central orchestrator of a chess game.

Coordinates: GameState, MoveGenerator and the engine for the AI side.
Emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessai.core.board import Board
from chessai.core.enums import Color
from chessai.core.move import Move
from chessai.core.types import Square
from chessai.engine.minimax import MinimaxEngine
from chessai.engine.search import Difficulty, IEngine, SearchLimits
from chessai.game.interfaces import GameMode, GamePhase, IGameController, TimerMode
from chessai.game.state import GameState, GameStats

_LOGGER = logging.getLogger(__name__)

AI_COLOR = Color.BLACK

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
GameOverCallback = Callable[[GameStats], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, switches turns,
    runs the engine for black in AI mode, notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  A search running in an ``EngineWorker`` hands its
    result back through :meth:`play_ai_move` on that thread.
    """

    __slots__ = (
        "_state",
        "_engine",
        "_mode",
        "_difficulty",
        "events",
    )

    def __init__(self, engine: IEngine | None = None) -> None:
        self._state = GameState()
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._mode = GameMode.AI
        self._difficulty = Difficulty.MEDIUM
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def is_ai_turn(self) -> bool:
        return (
            self._mode == GameMode.AI
            and not self._state.is_game_over
            and self._state.side_to_move == AI_COLOR
        )

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        mode: GameMode = GameMode.AI,
        difficulty: int = 2,
        timer_mode: TimerMode = TimerMode.NONE,
        board: Board | None = None,
    ) -> None:
        self._mode = mode
        self._difficulty = Difficulty(difficulty)

        self._state = GameState()
        self._state.setup(board, timer_mode=timer_mode)
        _LOGGER.debug(
            "New %s game (difficulty %s, timer %s)",
            mode.name,
            self._difficulty.name,
            timer_mode.name,
        )

        if self._state.is_game_over:
            self._emit_game_over()
        else:
            self._emit_phase(GamePhase.AWAITING_MOVE)

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        if self._state.is_game_over:
            return False
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return False
        if self.is_ai_turn:
            return False

        move = self._state.find_move(from_sq, to_sq)
        if move is None:
            return False

        self._apply(move)
        return True

    def play_ai_move(self, move: Move | None = None) -> Move | None:
        """Make the engine's move for black.

        With *move* given (a result computed elsewhere, e.g. by an
        ``EngineWorker``) it is validated and applied; otherwise the search
        runs synchronously here.
        """
        if not self.is_ai_turn:
            return None

        if move is None:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            try:
                result = self._engine.search(
                    self._state.board.copy(),
                    SearchLimits.for_difficulty(self._difficulty),
                    AI_COLOR,
                    self._state.last_move,
                )
            finally:
                self._state.phase = GamePhase.AWAITING_MOVE
            move = result.best_move
            if move is None:
                _LOGGER.warning("Engine returned no move for %s", AI_COLOR)
                self._emit_phase(GamePhase.AWAITING_MOVE)
                return None
        elif move not in self._state.legal_moves():
            _LOGGER.warning("Discarding stale engine move %s", move)
            return None

        self._apply(move)
        return move

    def undo(self) -> bool:
        """Take back one ply (local) or the last move pair (against the engine)."""
        if self._state.is_game_over or not self._state.move_history:
            return False
        if self._state.phase == GamePhase.THINKING:
            return False

        plies = 2 if self._mode == GameMode.AI else 1
        for _ in range(min(plies, self._state.ply_count)):
            self._state.undo_last_move()

        self._state.phase = GamePhase.AWAITING_MOVE
        self._emit_phase(GamePhase.AWAITING_MOVE)
        return True

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._state.resign(color)
        self._emit_game_over()

    def time_expired(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._state.flag_fall(color)
        self._emit_game_over()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _apply(self, move: Move) -> None:
        self._state.apply_move(move)
        _LOGGER.debug("Move %d: %s", self._state.ply_count, move)
        self._emit_move(move)

        if self._state.is_game_over:
            self._emit_game_over()
        else:
            self._emit_phase(GamePhase.AWAITING_MOVE)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_game_over(self) -> None:
        stats = self._state.stats
        _LOGGER.info(
            "Game over: %s, winner %s",
            stats.reason.label if stats.reason else "?",
            stats.winner if stats.winner is not None else "none",
        )
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(stats)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
