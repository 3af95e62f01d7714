"""Move value object carrying everything needed to apply and undo it."""

from __future__ import annotations

from dataclasses import dataclass

from chessai.core.piece import Piece
from chessai.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class RookMove:
    """Rook relocation paired with a castling king move."""

    from_sq: Square
    to_sq: Square
    piece: Piece


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    ``piece`` and ``captured`` are snapshots taken when the move was
    generated.  ``piece_had_moved`` / ``rook_had_moved`` hold the moved flags
    from before the move so that undo restores castling rights exactly.
    For en passant, ``captured_pawn_sq`` is the square the captured pawn
    actually stood on (not ``to_sq``).
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    notation: str = ""
    piece_had_moved: bool = False
    rook_move: RookMove | None = None
    rook_had_moved: bool | None = None
    is_en_passant: bool = False
    captured_pawn_sq: Square | None = None

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castling(self) -> bool:
        return self.rook_move is not None

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def uci(self) -> str:
        """Long-algebraic coordinates, e.g. 'e2e4'."""
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    def __str__(self) -> str:
        return self.notation or self.uci
