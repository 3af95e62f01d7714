"""Game state machine: tracks phase, statistics and move history."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chessai.core.board import Board
from chessai.core.enums import Color, OutcomeKind
from chessai.core.move_generator import MoveGenerator
from chessai.core.rules import GameOutcome, Rules
from chessai.game.interfaces import GameEndReason, GamePhase, TimerMode

if TYPE_CHECKING:
    from chessai.core.move import Move
    from chessai.core.types import Square


class IllegalMoveError(ValueError):
    """Raised when a move cannot be applied to the current board."""


@dataclass
class GameStats:
    """Running statistics of a single game.

    ``white_captures`` counts the pieces taken *by* white.  ``winner`` stays
    ``None`` for a draw; ``is_draw`` tells a draw apart from an unfinished game.
    """

    white_captures: int = 0
    black_captures: int = 0
    total_moves: int = 0
    started_at: float = field(default_factory=time.time)
    ended_at: float | None = None
    winner: Color | None = None
    is_draw: bool = False
    reason: GameEndReason | None = None
    timer_mode: TimerMode = TimerMode.NONE

    @property
    def initial_time_ms(self) -> int:
        return self.timer_mode.initial_ms

    @property
    def is_finished(self) -> bool:
        return self.reason is not None

    @property
    def duration(self) -> float:
        """Elapsed seconds, up to the end of the game if it has finished."""
        end = self.ended_at if self.ended_at is not None else time.time()
        return end - self.started_at

    def captures(self, color: Color) -> int:
        return self.white_captures if color == Color.WHITE else self.black_captures

    def record_move(self, move: Move) -> None:
        self.total_moves += 1
        if move.is_capture:
            self._add_capture(move.piece.color, 1)

    def revert_move(self, move: Move) -> None:
        self.total_moves -= 1
        if move.is_capture:
            self._add_capture(move.piece.color, -1)

    def finish(self, reason: GameEndReason, winner: Color | None) -> None:
        self.reason = reason
        self.winner = winner
        self.is_draw = winner is None
        self.ended_at = time.time()

    def reopen(self) -> None:
        self.reason = None
        self.winner = None
        self.is_draw = False
        self.ended_at = None

    def _add_capture(self, color: Color, delta: int) -> None:
        if color == Color.WHITE:
            self.white_captures += delta
        else:
            self.black_captures += delta


@dataclass
class GameState:
    """Manages game lifecycle: board, side to move, history and stats.

    This is a pure data/logic class with no threading and no UI.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    move_history: list[Move] = field(default_factory=list, init=False)
    stats: GameStats = field(default_factory=GameStats, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        timer_mode: TimerMode = TimerMode.NONE,
    ) -> None:
        """Initialise (or reset) the game."""
        self.board = board.copy() if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.phase = GamePhase.AWAITING_MOVE
        self.move_history.clear()
        self.stats = GameStats(timer_mode=timer_mode)
        # A position handed in may already be decided.
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> GameOutcome:
        """Apply a validated move and return the outcome for the next side.

        Caller is responsible for the legality check.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on origin square of {move.uci}")
        if piece.color != self.side_to_move:
            raise IllegalMoveError(
                f"{move.uci} moves a {piece.color} piece but {self.side_to_move} is to move"
            )

        self.board.make_move(move)
        self.move_history.append(move)
        self.stats.record_move(move)
        self.side_to_move = self.side_to_move.opposite
        return self._check_game_over()

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        move = self.move_history.pop()
        self.board.unmake_move(move)
        self.stats.revert_move(move)
        self.side_to_move = move.piece.color

        # Reset result if we un-did a game-ending move
        if self.phase == GamePhase.GAME_OVER:
            self.stats.reopen()
            self.phase = GamePhase.AWAITING_MOVE

        return move

    # ── Resignation / timeout ────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self._finish(GameEndReason.RESIGNATION, color.opposite)

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*."""
        self._finish(GameEndReason.TIMEOUT, color.opposite)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1] if self.move_history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        gen = MoveGenerator(self.board, self.last_move)
        return gen.generate_legal_moves(self.side_to_move)

    def find_move(self, from_sq: Square, to_sq: Square) -> Move | None:
        """The legal move joining *from_sq* and *to_sq*, if there is one."""
        for move in self.legal_moves():
            if move.from_sq == from_sq and move.to_sq == to_sq:
                return move
        return None

    def outcome(self) -> GameOutcome:
        return Rules.game_outcome(self.board, self.side_to_move, self.last_move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> GameOutcome:
        outcome = self.outcome()
        if outcome.kind == OutcomeKind.CHECKMATE:
            self._finish(GameEndReason.CHECKMATE, outcome.winner)
        elif outcome.kind == OutcomeKind.STALEMATE:
            self._finish(GameEndReason.STALEMATE, None)
        return outcome

    def _finish(self, reason: GameEndReason, winner: Color | None) -> None:
        self.stats.finish(reason, winner)
        self.phase = GamePhase.GAME_OVER
