"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from chessai.core.board import Board
from chessai.core.enums import Color, PieceType
from chessai.core.move import Move, RookMove
from chessai.core.piece import Piece
from chessai.core.types import Square, is_on_board, square_name

# Offsets are (d_row, d_col). White pawns move towards row 0.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

KINGSIDE_NOTATION = "O-O"
QUEENSIDE_NOTATION = "O-O-O"


def pawn_direction(color: Color) -> int:
    """Row delta of a pawn push for *color*."""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def move_notation(piece: Piece, from_sq: Square, to_sq: Square) -> str:
    """Display string such as ``pawne2-e4`` (not SAN, not parseable)."""
    return f"{piece.piece_type}{square_name(from_sq)}-{square_name(to_sq)}"


# -- Geometry ----------------------------------------------------------------


def is_path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Every square strictly between *from_sq* and *to_sq* is empty.

    Only meaningful for squares on a common rank, file or diagonal.
    """
    d_row = (to_sq[0] > from_sq[0]) - (to_sq[0] < from_sq[0])
    d_col = (to_sq[1] > from_sq[1]) - (to_sq[1] < from_sq[1])
    row, col = from_sq[0] + d_row, from_sq[1] + d_col
    while (row, col) != to_sq:
        if not board.is_empty((row, col)):
            return False
        row += d_row
        col += d_col
    return True


def is_valid_move(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Geometric validity of a single move, ignoring king safety.

    Castling and en passant are never valid here; they depend on more than
    the two squares involved.
    """
    if not is_on_board(*from_sq) or not is_on_board(*to_sq) or from_sq == to_sq:
        return False

    piece = board[from_sq]
    if piece is None:
        return False
    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False

    d_row = to_sq[0] - from_sq[0]
    d_col = to_sq[1] - from_sq[1]
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        forward = pawn_direction(piece.color)
        if d_col == 0:
            if d_row == forward:
                return target is None
            if d_row == 2 * forward and from_sq[0] == pawn_start_row(piece.color):
                return target is None and board.is_empty(
                    (from_sq[0] + forward, from_sq[1])
                )
            return False
        return abs(d_col) == 1 and d_row == forward and target is not None

    if ptype == PieceType.KNIGHT:
        return (abs(d_row), abs(d_col)) in ((1, 2), (2, 1))

    if ptype == PieceType.KING:
        return abs(d_row) <= 1 and abs(d_col) <= 1

    straight = d_row == 0 or d_col == 0
    diagonal = abs(d_row) == abs(d_col)
    if ptype == PieceType.ROOK and not straight:
        return False
    if ptype == PieceType.BISHOP and not diagonal:
        return False
    if ptype == PieceType.QUEEN and not (straight or diagonal):
        return False
    return is_path_clear(board, from_sq, to_sq)


class MoveGenerator:
    """Generates moves for either side of a :class:`Board`.

    *last_move* is the move that produced the board; it is only consulted
    for en passant.  The board itself is never mutated: king safety is
    checked on copies.
    """

    __slots__ = ("_board", "_last_move")

    def __init__(self, board: Board, last_move: Move | None = None) -> None:
        self._board = board
        self._last_move = last_move

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """Pseudo-legal moves that keep the king safe, then castling, then en passant."""
        board = self._board
        legal = [
            move
            for move in self.generate_pseudo_legal_moves(color)
            if not _king_attacked(board.after(move), color)
        ]
        self._gen_castling(color, legal)
        self._gen_en_passant(color, legal)
        return legal

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All geometric moves of *color*, row-major by origin then destination."""
        moves: list[Move] = []
        board = self._board
        for from_sq in board.pieces(color):
            piece = board[from_sq]
            assert piece is not None
            for to_sq in sorted(self._targets(from_sq, piece)):
                moves.append(
                    Move(
                        from_sq,
                        to_sq,
                        piece,
                        captured=board[to_sq],
                        notation=move_notation(piece, from_sq, to_sq),
                        piece_had_moved=piece.has_moved,
                    )
                )
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?  ``False`` without a king."""
        return _king_attacked(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific targets (private) ----------------------------------

    def _targets(self, sq: Square, piece: Piece) -> list[Square]:
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            return self._pawn_targets(sq, piece.color)
        if ptype == PieceType.KNIGHT:
            return self._step_targets(sq, piece.color, KNIGHT_OFFSETS)
        if ptype == PieceType.KING:
            return self._step_targets(sq, piece.color, KING_OFFSETS)
        return self._sliding_targets(sq, piece.color, _SLIDER_DIRS[ptype])

    def _pawn_targets(self, sq: Square, color: Color) -> list[Square]:
        board = self._board
        row, col = sq
        forward = pawn_direction(color)
        targets: list[Square] = []

        one_row = row + forward
        if is_on_board(one_row, col) and board.is_empty((one_row, col)):
            targets.append((one_row, col))
            two_row = row + 2 * forward
            if row == pawn_start_row(color) and board.is_empty((two_row, col)):
                targets.append((two_row, col))

        for d_col in (-1, 1):
            if not is_on_board(one_row, col + d_col):
                continue
            target = board[(one_row, col + d_col)]
            if target is not None and target.color != color:
                targets.append((one_row, col + d_col))
        return targets

    def _step_targets(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        targets: list[Square] = []
        for d_row, d_col in offsets:
            to_sq = (sq[0] + d_row, sq[1] + d_col)
            if not is_on_board(*to_sq):
                continue
            target = board[to_sq]
            if target is None or target.color != color:
                targets.append(to_sq)
        return targets

    def _sliding_targets(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        targets: list[Square] = []
        for d_row, d_col in directions:
            row, col = sq[0] + d_row, sq[1] + d_col
            while is_on_board(row, col):
                target = board[(row, col)]
                if target is None:
                    targets.append((row, col))
                else:
                    if target.color != color:
                        targets.append((row, col))
                    break
                row += d_row
                col += d_col
        return targets

    # -- Special moves (private) -------------------------------------------

    def _gen_castling(self, color: Color, moves: list[Move]) -> None:
        board = self._board
        king_sq = board.king_square(color)
        if king_sq is None:
            return
        king = board[king_sq]
        assert king is not None
        if king.has_moved or self.is_in_check(color):
            return

        opponent = color.opposite
        row, king_col = king_sq
        for rook_col, step, notation in (
            (7, 1, KINGSIDE_NOTATION),
            (0, -1, QUEENSIDE_NOTATION),
        ):
            if abs(rook_col - king_col) < 3:
                continue
            rook_sq = (row, rook_col)
            rook = board[rook_sq]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != color
                or rook.has_moved
            ):
                continue

            low, high = sorted((king_col, rook_col))
            if any(not board.is_empty((row, c)) for c in range(low + 1, high)):
                continue

            pass_sq = (row, king_col + step)
            land_sq = (row, king_col + 2 * step)
            if self.is_square_attacked(pass_sq, opponent) or self.is_square_attacked(
                land_sq, opponent
            ):
                continue

            moves.append(
                Move(
                    king_sq,
                    land_sq,
                    king,
                    notation=notation,
                    piece_had_moved=king.has_moved,
                    rook_move=RookMove(rook_sq, pass_sq, rook),
                    rook_had_moved=rook.has_moved,
                )
            )

    def _gen_en_passant(self, color: Color, moves: list[Move]) -> None:
        last = self._last_move
        if last is None:
            return
        if last.piece.piece_type != PieceType.PAWN or last.piece.color == color:
            return
        if abs(last.from_sq[0] - last.to_sq[0]) != 2:
            return

        board = self._board
        victim_sq = last.to_sq
        victim = board[victim_sq]
        if (
            victim is None
            or victim.piece_type != PieceType.PAWN
            or victim.color == color
        ):
            return

        row, col = victim_sq
        to_sq = (row + pawn_direction(color), col)
        if not is_on_board(*to_sq) or not board.is_empty(to_sq):
            return

        for d_col in (-1, 1):
            from_sq = (row, col + d_col)
            if not is_on_board(*from_sq):
                continue
            pawn = board[from_sq]
            if pawn is None or pawn.piece_type != PieceType.PAWN or pawn.color != color:
                continue

            move = Move(
                from_sq,
                to_sq,
                pawn,
                captured=victim,
                notation=f"e.p. {square_name(from_sq)}x{square_name(to_sq)}",
                piece_had_moved=pawn.has_moved,
                is_en_passant=True,
                captured_pawn_sq=victim_sq,
            )
            if not _king_attacked(board.after(move), color):
                moves.append(move)


# -- Module-level helpers ----------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Could any piece of *by_color* move onto *sq* if it were empty?

    Pawns attack their forward diagonals only; sliders are blocked by the
    first occupied square.
    """
    row, col = sq

    # A white pawn attacks towards row 0, so its attackers sit one row below.
    pawn_row = row - pawn_direction(by_color)
    for d_col in (-1, 1):
        if is_on_board(pawn_row, col + d_col):
            piece = board[(pawn_row, col + d_col)]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.PAWN
            ):
                return True

    for offsets, ptype in (
        (KNIGHT_OFFSETS, PieceType.KNIGHT),
        (KING_OFFSETS, PieceType.KING),
    ):
        for d_row, d_col in offsets:
            if not is_on_board(row + d_row, col + d_col):
                continue
            piece = board[(row + d_row, col + d_col)]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == ptype
            ):
                return True

    for directions, sliders in (
        (BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
        (ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for d_row, d_col in directions:
            r, c = row + d_row, col + d_col
            while is_on_board(r, c):
                piece = board[(r, c)]
                if piece is not None:
                    if piece.color == by_color and piece.piece_type in sliders:
                        return True
                    break
                r += d_row
                c += d_col

    return False


def _king_attacked(board: Board, color: Color) -> bool:
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


def pseudo_legal_moves(board: Board, color: Color) -> list[Move]:
    return MoveGenerator(board).generate_pseudo_legal_moves(color)


def legal_moves(board: Board, color: Color, last_move: Move | None = None) -> list[Move]:
    """Fully legal moves of *color*; *last_move* enables en passant."""
    return MoveGenerator(board, last_move).generate_legal_moves(color)
