from __future__ import annotations

from typing import Callable, Dict

import chess


class Evaluator:
    """Static material evaluation for chess positions.

    Positive scores favor the side passed as ``perspective`` (the maximizing
    side), negative scores favor its opponent. There are no positional,
    mobility or king-safety terms.
    """

    MATERIAL_VALUES: Dict[chess.PieceType, int] = {
        chess.PAWN: 10,
        chess.KNIGHT: 30,
        chess.BISHOP: 30,
        chess.ROOK: 50,
        chess.QUEEN: 90,
        chess.KING: 900,
    }

    @classmethod
    def evaluate(cls, board: chess.Board, perspective: chess.Color = chess.WHITE) -> int:
        score = 0
        for piece_type, value in cls.MATERIAL_VALUES.items():
            score += value * len(board.pieces(piece_type, perspective))
            score -= value * len(board.pieces(piece_type, not perspective))
        return score

    @classmethod
    def for_side(cls, perspective: chess.Color) -> Callable[[chess.Board], int]:
        """Return a one-argument evaluation function bound to ``perspective``."""

        def evaluate(board: chess.Board) -> int:
            return cls.evaluate(board, perspective)

        return evaluate
