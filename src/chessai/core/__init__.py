"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chessai.core import Color, initialize_board, legal_moves

    board = initialize_board()
    for move in legal_moves(board, Color.WHITE):
        print(move)
"""

from chessai.core.board import Board, initialize_board
from chessai.core.enums import Color, OutcomeKind, PieceType
from chessai.core.evaluation import PIECE_VALUES, evaluate
from chessai.core.move import Move, RookMove
from chessai.core.move_generator import (
    MoveGenerator,
    is_path_clear,
    is_square_attacked,
    is_valid_move,
    legal_moves,
    pseudo_legal_moves,
)
from chessai.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessai.core.piece import Piece
from chessai.core.rules import (
    GameOutcome,
    Rules,
    game_outcome,
    is_checkmate,
    is_king_in_check,
    is_stalemate,
)
from chessai.core.types import Square, make_square, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "OutcomeKind",
    "PieceType",
    # Types / helpers
    "Square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "GameOutcome",
    "Move",
    "MoveGenerator",
    "Piece",
    "RookMove",
    "Rules",
    # Operations
    "PIECE_VALUES",
    "evaluate",
    "game_outcome",
    "initialize_board",
    "is_checkmate",
    "is_king_in_check",
    "is_path_clear",
    "is_square_attacked",
    "is_stalemate",
    "is_valid_move",
    "legal_moves",
    "pseudo_legal_moves",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
