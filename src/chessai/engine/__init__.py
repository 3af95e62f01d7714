"""Chess engine package: minimax search and difficulty settings.

The Qt worker lives in :mod:`chessai.engine.qt_bridge` and is imported
explicitly so the search stays usable without a Qt runtime.
"""

from chessai.engine.minimax import MATE_SCORE, MinimaxEngine, best_move, minimax
from chessai.engine.search import Difficulty, IEngine, SearchLimits, SearchResult

__all__ = [
    "MATE_SCORE",
    "Difficulty",
    "IEngine",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "best_move",
    "minimax",
]
