"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessai.core.enums import Color, OutcomeKind
from chessai.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessai.core.board import Board
    from chessai.core.move import Move


@dataclass(frozen=True, slots=True)
class GameOutcome:
    """Derived classification of a board for the side to move."""

    kind: OutcomeKind
    side_to_move: Color

    @property
    def is_terminal(self) -> bool:
        return self.kind.is_terminal

    @property
    def winner(self) -> Color | None:
        """The side that delivered mate, if any."""
        if self.kind == OutcomeKind.CHECKMATE:
            return self.side_to_move.opposite
        return None


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    All checks are pure functions of board + side; nothing is cached.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color, last_move: Move | None = None) -> bool:
        gen = MoveGenerator(board, last_move)
        if not gen.is_in_check(color):
            return False
        return len(gen.generate_legal_moves(color)) == 0

    @staticmethod
    def is_stalemate(board: Board, color: Color, last_move: Move | None = None) -> bool:
        gen = MoveGenerator(board, last_move)
        if gen.is_in_check(color):
            return False
        return len(gen.generate_legal_moves(color)) == 0

    @staticmethod
    def game_outcome(
        board: Board, color: Color, last_move: Move | None = None
    ) -> GameOutcome:
        """Classify the position for *color* to move."""
        gen = MoveGenerator(board, last_move)
        in_check = gen.is_in_check(color)
        has_moves = bool(gen.generate_legal_moves(color))

        if not has_moves:
            kind = OutcomeKind.CHECKMATE if in_check else OutcomeKind.STALEMATE
        elif in_check:
            kind = OutcomeKind.CHECK
        else:
            kind = OutcomeKind.ONGOING
        return GameOutcome(kind, color)


def is_king_in_check(board: Board, color: Color) -> bool:
    """``True`` iff *color*'s king is attacked; ``False`` when there is no king."""
    return Rules.is_in_check(board, color)


def is_checkmate(board: Board, color: Color) -> bool:
    return Rules.is_checkmate(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    return Rules.is_stalemate(board, color)


def game_outcome(
    board: Board, color: Color, last_move: Move | None = None
) -> GameOutcome:
    return Rules.game_outcome(board, color, last_move)
