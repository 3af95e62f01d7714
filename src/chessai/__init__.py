"""chessai: chess rules, a minimax opponent and a UI-free game session."""

__version__ = "0.1.0"
