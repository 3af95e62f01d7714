"""Move generation tests: geometry, perft, castling and en passant.

Perft reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from chessai.core.board import Board
from chessai.core.enums import Color, PieceType
from chessai.core.move import Move
from chessai.core.move_generator import (
    MoveGenerator,
    is_path_clear,
    is_square_attacked,
    is_valid_move,
    legal_moves,
    pseudo_legal_moves,
)
from chessai.core.notation import board_from_fen
from chessai.core.piece import Piece
from chessai.core.rules import is_king_in_check
from chessai.core.types import parse_square


def perft(board: Board, color: Color, depth: int, last_move: Move | None = None) -> int:
    """Count leaf nodes at *depth* using make/unmake."""
    if depth == 0:
        return 1
    nodes = 0
    for move in legal_moves(board, color, last_move):
        board.make_move(move)
        nodes += perft(board, color.opposite, depth - 1, move)
        board.unmake_move(move)
    return nodes


def _double_push(board: Board, from_name: str, to_name: str) -> Move:
    from_sq = parse_square(from_name)
    pawn = board[from_sq]
    assert pawn is not None
    move = Move(from_sq, parse_square(to_name), pawn, piece_had_moved=pawn.has_moved)
    board.make_move(move)
    return move


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self, start_board: Board) -> None:
        assert perft(start_board, Color.WHITE, 1) == 20

    def test_depth_2(self, start_board: Board) -> None:
        assert perft(start_board, Color.WHITE, 2) == 400

    def test_depth_3(self, start_board: Board) -> None:
        assert perft(start_board, Color.WHITE, 3) == 8_902

    def test_perft_leaves_board_unchanged(self, start_board: Board) -> None:
        perft(start_board, Color.WHITE, 2)
        assert start_board == Board.initial()


class TestOpeningMoves:
    def test_twenty_moves_each_side(self, start_board: Board) -> None:
        assert len(legal_moves(start_board, Color.WHITE)) == 20
        assert len(legal_moves(start_board, Color.BLACK)) == 20

    def test_notation_format(self, start_board: Board) -> None:
        notations = {m.notation for m in legal_moves(start_board, Color.WHITE)}
        assert "pawne2-e4" in notations
        assert "knightg1-f3" in notations

    def test_row_major_order(self, start_board: Board) -> None:
        moves = pseudo_legal_moves(start_board, Color.WHITE)
        origins = [m.from_sq for m in moves]
        assert origins == sorted(origins)
        first = [m.to_sq for m in moves if m.from_sq == (6, 0)]
        assert first == [(4, 0), (5, 0)]

    def test_moves_carry_snapshot(self, start_board: Board) -> None:
        for move in legal_moves(start_board, Color.WHITE):
            assert move.piece == start_board[move.from_sq]
            assert move.captured is None
            assert move.piece_had_moved is False


class TestGeometry:
    def test_path_clear(self, start_board: Board) -> None:
        assert not is_path_clear(start_board, (7, 0), (4, 0))
        assert is_path_clear(start_board, (6, 0), (2, 0))

    def test_pawn_moves(self, start_board: Board) -> None:
        assert is_valid_move(start_board, (6, 4), (5, 4))
        assert is_valid_move(start_board, (6, 4), (4, 4))
        assert not is_valid_move(start_board, (6, 4), (3, 4))
        assert not is_valid_move(start_board, (6, 4), (5, 5))  # empty diagonal
        assert not is_valid_move(start_board, (6, 4), (7, 4))  # backwards

    def test_pawn_diagonal_capture(self) -> None:
        board = board_from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
        assert is_valid_move(board, (4, 4), (3, 3))
        assert is_valid_move(board, (4, 4), (3, 4))

    def test_blocked_double_push(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/4n3/4P3/4K3")
        assert not is_valid_move(board, (6, 4), (4, 4))
        assert not is_valid_move(board, (6, 4), (5, 4))

    def test_knight_jumps(self, start_board: Board) -> None:
        assert is_valid_move(start_board, (7, 6), (5, 5))
        assert not is_valid_move(start_board, (7, 6), (6, 4))  # own piece

    def test_invalid_inputs(self, start_board: Board) -> None:
        assert not is_valid_move(start_board, (4, 4), (3, 4))  # empty origin
        assert not is_valid_move(start_board, (7, 0), (7, 0))  # same square
        assert not is_valid_move(start_board, (7, 0), (8, 0))  # off board

    def test_off_board_origin(self, start_board: Board) -> None:
        # Row -1 must not wrap around to the white back rank.
        assert not is_valid_move(start_board, (-1, 4), (0, 4))
        assert not is_valid_move(start_board, (8, 0), (7, 0))
        assert not is_valid_move(start_board, (0, -1), (0, 0))

    def test_sliders_blocked(self, start_board: Board) -> None:
        assert not is_valid_move(start_board, (7, 2), (4, 5))
        assert not is_valid_move(start_board, (7, 3), (5, 3))


class TestAttacks:
    def test_pawn_attacks_diagonals_only(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/4P3/4K3")
        assert is_square_attacked(board, (5, 3), Color.WHITE)
        assert is_square_attacked(board, (5, 5), Color.WHITE)
        assert not is_square_attacked(board, (5, 4), Color.WHITE)

    def test_slider_blocked(self) -> None:
        board = board_from_fen("4k3/8/8/8/r3P2K/8/8/8")
        assert is_square_attacked(board, (4, 3), Color.BLACK)
        assert not is_square_attacked(board, (4, 7), Color.BLACK)

    def test_generator_facade_agrees(self) -> None:
        board = board_from_fen("4k3/8/8/8/r3P2K/8/8/8")
        gen = MoveGenerator(board)
        assert gen.is_square_attacked((4, 3), Color.BLACK)
        assert not gen.is_in_check(Color.WHITE)


class TestLegality:
    @pytest.mark.parametrize(
        "fen, color",
        [
            ("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq -", Color.WHITE),
            ("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R b KQkq -", Color.BLACK),
            ("4k3/8/8/8/4r3/8/4B3/4K3", Color.WHITE),
        ],
    )
    def test_king_never_left_in_check(self, fen: str, color: Color) -> None:
        board = board_from_fen(fen)
        for move in legal_moves(board, color):
            assert not is_king_in_check(board.after(move), color)

    def test_pinned_piece_cannot_leave_file(self) -> None:
        board = board_from_fen("4k3/8/8/8/4r3/8/4B3/4K3")
        bishop_moves = [m for m in legal_moves(board, Color.WHITE) if m.from_sq == (6, 4)]
        assert bishop_moves == []

    def test_must_answer_check(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/r3K3")
        moves = legal_moves(board, Color.WHITE)
        assert moves
        assert all(m.piece.piece_type == PieceType.KING for m in moves)
        assert all(m.to_sq[0] == 6 for m in moves)

    def test_missing_king_is_not_in_check(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/r7")
        assert not is_king_in_check(board, Color.WHITE)
        assert legal_moves(board, Color.WHITE) == []


class TestCastling:
    def test_both_sides_available(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        castles = [m for m in legal_moves(board, Color.WHITE) if m.is_castling]
        assert [m.notation for m in castles] == ["O-O", "O-O-O"]
        kingside = castles[0]
        assert kingside.to_sq == (7, 6)
        assert kingside.rook_move is not None
        assert kingside.rook_move.from_sq == (7, 7)
        assert kingside.rook_move.to_sq == (7, 5)
        assert kingside.rook_had_moved is False
        assert kingside.piece_had_moved is False

    def test_castling_comes_after_normal_moves(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        moves = legal_moves(board, Color.WHITE)
        flags = [m.is_castling for m in moves]
        assert flags[-2:] == [True, True]
        assert not any(flags[:-2])

    def test_revoked_by_moved_rook(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Qkq - 0 1")
        notations = [m.notation for m in legal_moves(board, Color.WHITE)]
        assert "O-O" not in notations
        assert "O-O-O" in notations

    def test_revoked_by_moved_king(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w kq - 0 1")
        assert not any(m.is_castling for m in legal_moves(board, Color.WHITE))

    def test_revoked_after_king_returns_home(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        for from_name, to_name in (("e1", "f1"), ("f1", "e1")):
            move = next(
                m
                for m in legal_moves(board, Color.WHITE)
                if m.from_sq == parse_square(from_name)
                and m.to_sq == parse_square(to_name)
            )
            board.make_move(move)
        assert board[parse_square("e1")] == Piece(Color.WHITE, PieceType.KING, True)
        assert not any(m.is_castling for m in legal_moves(board, Color.WHITE))

    def test_not_out_of_check(self) -> None:
        board = board_from_fen("4r1k1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert not any(m.is_castling for m in legal_moves(board, Color.WHITE))

    def test_not_through_attacked_square(self) -> None:
        board = board_from_fen("5rk1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        notations = [m.notation for m in legal_moves(board, Color.WHITE)]
        assert "O-O" not in notations
        assert "O-O-O" in notations

    def test_not_through_pieces(self, start_board: Board) -> None:
        assert not any(m.is_castling for m in legal_moves(start_board, Color.WHITE))

    def test_black_castles(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/4K3 b kq - 0 1")
        castles = [m for m in legal_moves(board, Color.BLACK) if m.is_castling]
        assert [m.to_sq for m in castles] == [(0, 6), (0, 2)]

    def test_castling_round_trip_restores_flags(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        before = board.copy()
        for move in [m for m in legal_moves(board, Color.WHITE) if m.is_castling]:
            board.make_move(move)
            board.unmake_move(move)
            assert board == before


class TestEnPassant:
    def test_capture_available_after_double_push(self) -> None:
        board = board_from_fen("4k3/3p4/8/4P3/8/8/8/4K3")
        last = _double_push(board, "d7", "d5")
        ep = [m for m in legal_moves(board, Color.WHITE, last) if m.is_en_passant]
        assert len(ep) == 1
        move = ep[0]
        assert move.notation == "e.p. e5xd6"
        assert move.from_sq == parse_square("e5")
        assert move.to_sq == parse_square("d6")
        assert move.captured_pawn_sq == last.to_sq
        assert move.captured == Piece(Color.BLACK, PieceType.PAWN, True)

    def test_en_passant_is_last(self) -> None:
        board = board_from_fen("4k3/3p4/8/4P3/8/8/8/4K3")
        last = _double_push(board, "d7", "d5")
        moves = legal_moves(board, Color.WHITE, last)
        assert moves[-1].is_en_passant

    def test_requires_last_move(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3")
        assert not any(m.is_en_passant for m in legal_moves(board, Color.WHITE))

    def test_not_after_single_push(self) -> None:
        board = board_from_fen("4k3/8/3p4/4P3/8/8/8/4K3")
        last = _double_push(board, "d6", "d5")
        assert not any(m.is_en_passant for m in legal_moves(board, Color.WHITE, last))

    def test_apply_and_undo(self) -> None:
        board = board_from_fen("4k3/3p4/8/4P3/8/8/8/4K3")
        last = _double_push(board, "d7", "d5")
        before = board.copy()
        ep = next(m for m in legal_moves(board, Color.WHITE, last) if m.is_en_passant)
        board.make_move(ep)
        assert board.is_empty(parse_square("d5"))
        assert board[parse_square("d6")] == Piece(Color.WHITE, PieceType.PAWN, True)
        board.unmake_move(ep)
        assert board == before

    def test_rejected_when_exposing_king(self) -> None:
        # Removing both pawns from the fifth rank opens the rook's line.
        board = board_from_fen("8/3p4/8/K3P2r/8/8/8/7k")
        last = _double_push(board, "d7", "d5")
        assert not any(m.is_en_passant for m in legal_moves(board, Color.WHITE, last))

    def test_black_captures(self) -> None:
        board = board_from_fen("4k3/8/8/8/3p4/8/4P3/4K3")
        last = _double_push(board, "e2", "e4")
        ep = [m for m in legal_moves(board, Color.BLACK, last) if m.is_en_passant]
        assert [m.notation for m in ep] == ["e.p. d4xe3"]
