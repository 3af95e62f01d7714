"""Pure-Python chess engine search (fixed-depth minimax + alpha-beta)."""

from __future__ import annotations

import logging
import math
import random

from chessai.core.board import Board
from chessai.core.enums import Color
from chessai.core.evaluation import PIECE_VALUES, evaluate
from chessai.core.move import Move
from chessai.core.move_generator import MoveGenerator
from chessai.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

MATE_SCORE = 10_000
_INF_SCORE = math.inf

# The evaluator is white-positive, so white is always the maximizing side.
MAXIMIZING_COLOR = Color.WHITE


def _side_to_move(maximizing: bool) -> Color:
    return MAXIMIZING_COLOR if maximizing else MAXIMIZING_COLOR.opposite


class MinimaxEngine(IEngine):
    """Fixed-depth minimax with alpha-beta pruning and capture-first ordering.

    No transposition table, no iterative deepening, no quiescence.  Every
    child position is searched on its own board copy.  The only source of
    non-determinism is the score jitter, drawn from an injectable
    :class:`random.Random`.
    """

    __slots__ = ("_rng", "_nodes")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._nodes = 0

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent :meth:`search`."""
        return self._nodes

    def search(
        self,
        board: Board,
        limits: SearchLimits,
        color: Color = Color.BLACK,
        last_move: Move | None = None,
    ) -> SearchResult:
        if limits.depth < 0:
            raise ValueError("Search depth must be >= 0")

        self._nodes = 0
        root_moves = MoveGenerator(board, last_move).generate_legal_moves(color)
        if not root_moves:
            _LOGGER.warning("Search requested for %s with no legal moves", color)
            return SearchResult(None, 0.0, limits.depth, self._nodes)

        maximizing = color == MAXIMIZING_COLOR
        best_move: Move | None = None
        best_score = -_INF_SCORE if maximizing else _INF_SCORE

        for move in self.order_moves(root_moves):
            score = self.minimax(
                board.after(move),
                limits.depth,
                not maximizing,
                -_INF_SCORE,
                _INF_SCORE,
                move,
            )
            if limits.jitter > 0:
                score += (self._rng.random() - 0.5) * limits.jitter * 100

            # Strict comparison keeps the first-seen move on ties.
            if best_move is None or (
                score > best_score if maximizing else score < best_score
            ):
                best_score = score
                best_move = move

        _LOGGER.debug(
            "Best move for %s: %s (score %.2f, depth %d, %d nodes)",
            color,
            best_move,
            best_score,
            limits.depth,
            self._nodes,
        )
        return SearchResult(best_move, best_score, limits.depth, self._nodes)

    def minimax(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        alpha: float = -_INF_SCORE,
        beta: float = _INF_SCORE,
        last_move: Move | None = None,
    ) -> float:
        """Score *board* from white's point of view, *depth* plies deep.

        White is the maximizing side: ``maximizing=True`` searches white's
        moves, ``False`` black's.  Each child is searched with the move that
        produced it as ``last_move`` so en passant stays available.
        """
        self._nodes += 1
        if depth <= 0:
            return evaluate(board)

        color = _side_to_move(maximizing)
        gen = MoveGenerator(board, last_move)
        moves = gen.generate_legal_moves(color)

        if not moves:
            if gen.is_in_check(color):
                return -MATE_SCORE if maximizing else MATE_SCORE
            return 0.0

        if maximizing:
            best = -_INF_SCORE
            for move in moves:
                value = self.minimax(
                    board.after(move), depth - 1, False, alpha, beta, move
                )
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return best

        best = _INF_SCORE
        for move in moves:
            value = self.minimax(board.after(move), depth - 1, True, alpha, beta, move)
            best = min(best, value)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return best

    @staticmethod
    def order_moves(moves: list[Move]) -> list[Move]:
        """Captures first by victim value; ties keep generation order."""
        return sorted(
            moves,
            key=lambda move: (
                -PIECE_VALUES[move.captured.piece_type] if move.captured else 0
            ),
        )


def minimax(
    board: Board,
    depth: int,
    maximizing: bool,
    alpha: float = -_INF_SCORE,
    beta: float = _INF_SCORE,
    last_move: Move | None = None,
) -> float:
    """Stand-alone minimax; see :meth:`MinimaxEngine.minimax`.

    Scores are white positive, so ``maximizing=True`` means white is to move
    and ``maximizing=False`` means black is.
    """
    return MinimaxEngine().minimax(board, depth, maximizing, alpha, beta, last_move)


def best_move(
    board: Board,
    difficulty: int,
    last_move: Move | None = None,
    *,
    color: Color = Color.BLACK,
    rng: random.Random | None = None,
) -> Move | None:
    """Move chosen for *color* at *difficulty* (1–3), or ``None`` if it has none."""
    limits = SearchLimits.for_difficulty(difficulty)
    return MinimaxEngine(rng).search(board, limits, color, last_move).best_move
