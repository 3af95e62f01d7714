"""FEN-style board serialisation for fixtures and debugging.

Only the placement field (plus an optional castling field used to seed the
moved flags) is understood.  Move notation strings are produced by the move
generator and have no parser.
"""

from __future__ import annotations

from chessai.core.board import Board
from chessai.core.enums import Color, PieceType
from chessai.core.piece import Piece
from chessai.core.types import BOARD_SIZE, Square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_KING_HOME: dict[Color, Square] = {Color.WHITE: (7, 4), Color.BLACK: (0, 4)}

# castling letter -> (color, rook home square)
_ROOK_HOMES: dict[str, tuple[Color, Square]] = {
    "K": (Color.WHITE, (7, 7)),
    "Q": (Color.WHITE, (7, 0)),
    "k": (Color.BLACK, (0, 7)),
    "q": (Color.BLACK, (0, 0)),
}


def _is_home_square(piece: Piece, sq: Square) -> bool:
    row, col = sq
    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        return row == (6 if piece.color == Color.WHITE else 1)
    if ptype == PieceType.KING:
        return sq == _KING_HOME[piece.color]
    if ptype == PieceType.ROOK:
        return any(
            color == piece.color and home == sq for color, home in _ROOK_HOMES.values()
        )
    return True


def board_from_fen(fen: str) -> Board:
    """Parse a FEN (or bare placement) string into a :class:`Board`.

    Pawns, kings and rooks away from their starting squares are flagged as
    moved.  When a castling field is present, kings and rooks without the
    matching right are flagged as moved too.
    """
    parts = fen.split()
    if not parts:
        raise ValueError(f"Invalid FEN (empty): {fen!r}")

    ranks = parts[0].split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
                continue
            if col >= BOARD_SIZE:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
            piece = Piece.from_char(ch)
            if not _is_home_square(piece, (row, col)):
                piece = piece.moved()
            board[(row, col)] = piece
            col += 1
        if col != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    if len(parts) >= 3:
        _apply_castling_field(board, parts[2])
    return board


def _apply_castling_field(board: Board, field: str) -> None:
    if field != "-" and any(ch not in _ROOK_HOMES for ch in field):
        raise ValueError(f"Invalid FEN castling field: {field!r}")

    for letter, (color, rook_sq) in _ROOK_HOMES.items():
        rook = board[rook_sq]
        if letter not in field and rook is not None and rook.color == color:
            board[rook_sq] = rook.moved()

    for color, king_sq in _KING_HOME.items():
        letters = ("K", "Q") if color == Color.WHITE else ("k", "q")
        king = board[king_sq]
        if king is None or king.piece_type != PieceType.KING:
            continue
        if not any(letter in field for letter in letters):
            board[king_sq] = king.moved()


def board_to_fen(board: Board) -> str:
    """Placement field of *board*, e.g. ``rnbqkbnr/pppppppp/8/...``."""
    ranks: list[str] = []
    for row in range(BOARD_SIZE):
        text = ""
        empty = 0
        for col in range(BOARD_SIZE):
            piece = board[(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def side_from_fen(fen: str) -> Color:
    """Side to move from the second FEN field (white when absent)."""
    parts = fen.split()
    if len(parts) < 2:
        return Color.WHITE
    if parts[1] not in ("w", "b"):
        raise ValueError(f"Invalid FEN side-to-move field: {parts[1]!r}")
    return Color.WHITE if parts[1] == "w" else Color.BLACK
