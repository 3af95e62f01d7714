"""Game session layer: turn flow, history, statistics and the AI turn."""

from chessai.game.controller import AI_COLOR, GameController, GameEvents
from chessai.game.interfaces import (
    GameEndReason,
    GameMode,
    GamePhase,
    IGameController,
    TimerMode,
)
from chessai.game.state import GameState, GameStats, IllegalMoveError

__all__ = [
    "AI_COLOR",
    "GameController",
    "GameEndReason",
    "GameEvents",
    "GameMode",
    "GamePhase",
    "GameState",
    "GameStats",
    "IGameController",
    "IllegalMoveError",
    "TimerMode",
]
