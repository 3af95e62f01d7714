"""Static board evaluation: material plus small positional bonuses.

Scores are in pawns; positive favours white, negative favours black.
"""

from __future__ import annotations

from chessai.core.board import Board
from chessai.core.enums import Color, PieceType
from chessai.core.types import Square

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 1000,
}

POSITIONAL_SCALE = 0.1
_CENTER = 3.5


def positional_bonus(piece_type: PieceType, color: Color, sq: Square) -> float:
    row, col = sq
    if piece_type == PieceType.PAWN:
        # Ranks advanced from the starting row.
        advanced = 6 - row if color == Color.WHITE else row - 1
        return advanced * POSITIONAL_SCALE
    if piece_type in (PieceType.KNIGHT, PieceType.BISHOP):
        center_distance = abs(_CENTER - row) + abs(_CENTER - col)
        return (7 - center_distance) * POSITIONAL_SCALE
    return 0.0


def evaluate(board: Board) -> float:
    """Pure static evaluation of *board*; no lookahead."""
    score = 0.0
    for sq, piece in board.occupied():
        value = PIECE_VALUES[piece.piece_type] + positional_bonus(
            piece.piece_type, piece.color, sq
        )
        score += value if piece.color == Color.WHITE else -value
    return score
