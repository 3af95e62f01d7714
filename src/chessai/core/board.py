"""Board - piece placement on an 8x8 grid, plus make/unmake of moves."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessai.core.enums import Color, PieceType
from chessai.core.piece import Piece
from chessai.core.types import BOARD_SIZE, Square

if TYPE_CHECKING:
    from chessai.core.move import Move

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid; each square owns at most one :class:`Piece` value.

    Hypothetical moves are explored on copies (:meth:`after`) so search and
    king-safety checks never touch the caller's board.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = sq
        return self._grid[row][col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        self._grid[row][col] = piece

    def is_empty(self, sq: Square) -> bool:
        row, col = sq
        return self._grid[row][col] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, row-major."""
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if (piece := self._grid[row][col]) is not None and piece.color == color
        ]

    def occupied(self) -> list[tuple[Square, Piece]]:
        """All (square, piece) pairs, row-major."""
        return [
            ((row, col), piece)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if (piece := self._grid[row][col]) is not None
        ]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if there is none."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self._grid[row][col]
                if (
                    piece is not None
                    and piece.piece_type == PieceType.KING
                    and piece.color == color
                ):
                    return (row, col)
        return None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def make_move(self, move: Move) -> None:
        """Apply *move* in place, including its castling / en-passant side effects."""
        piece = self[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        self[move.from_sq] = None
        if move.is_en_passant and move.captured_pawn_sq is not None:
            self[move.captured_pawn_sq] = None
        self[move.to_sq] = piece.moved()

        if move.rook_move is not None:
            rook = self[move.rook_move.from_sq]
            assert rook is not None
            self[move.rook_move.from_sq] = None
            self[move.rook_move.to_sq] = rook.moved()

    def unmake_move(self, move: Move) -> None:
        """Reverse a :meth:`make_move` using only the metadata stored on *move*."""
        piece = self[move.to_sq]
        assert piece is not None

        if move.rook_move is not None:
            rook = self[move.rook_move.to_sq]
            assert rook is not None
            had_moved = (
                move.rook_had_moved
                if move.rook_had_moved is not None
                else move.rook_move.piece.has_moved
            )
            self[move.rook_move.to_sq] = None
            self[move.rook_move.from_sq] = rook.with_moved_flag(had_moved)

        self[move.from_sq] = piece.with_moved_flag(move.piece_had_moved)
        if move.is_en_passant and move.captured_pawn_sq is not None:
            self[move.to_sq] = None
            self[move.captured_pawn_sq] = move.captured
        else:
            self[move.to_sq] = move.captured

    def after(self, move: Move) -> Board:
        """New board with *move* applied; this board is left untouched."""
        b = self.copy()
        b.make_move(move)
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, every moved flag false."""
        b = cls()
        for col in range(BOARD_SIZE):
            b[(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[(6, col)] = Piece(Color.WHITE, PieceType.PAWN)

        for col, pt in enumerate(_BACK_RANK):
            b[(0, col)] = Piece(Color.BLACK, pt)
            b[(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def initialize_board() -> Board:
    """Standard chess starting position."""
    return Board.initial()
