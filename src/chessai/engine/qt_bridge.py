"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessai.core.board import Board
from chessai.core.enums import Color
from chessai.core.move import Move
from chessai.engine.minimax import MinimaxEngine
from chessai.engine.search import Difficulty, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    The search has no cancellation primitive of its own; :meth:`cancel`
    only suppresses the result of the search currently running.
    """

    best_move_ready = pyqtSignal(int, object, float, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_color", "_engine", "_limits")

    def __init__(
        self,
        *,
        difficulty: int = Difficulty.MEDIUM,
        color: Color = Color.BLACK,
    ) -> None:
        super().__init__()
        self._engine = MinimaxEngine()
        self._limits = SearchLimits.for_difficulty(difficulty)
        self._color = color
        self._cancel_event = threading.Event()

    @pyqtSlot(object, object, int)
    def request_move(
        self, board_obj: object, last_move: object, request_id: int
    ) -> None:
        """Search for the best move on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return
        if last_move is not None and not isinstance(last_move, Move):
            self.search_error.emit(request_id, "Engine received invalid last move")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                board_obj, self._limits, self._color, last_move
            )
        except Exception as exc:
            _LOGGER.exception("Engine search failed")
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Discard the result of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_difficulty(self, difficulty: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits.for_difficulty(difficulty)
