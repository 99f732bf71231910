from __future__ import annotations

from typing import Dict, List, Optional

import random
import chess
import chess.pgn

from .evaluator import Evaluator


def parse_side(name: str) -> chess.Color:
    side = name.strip().lower()
    if side == "white":
        return chess.WHITE
    if side == "black":
        return chess.BLACK
    raise ValueError(f"Unknown side: {name}")


class Game:
    """Owns the live board the players move on.

    The search only ever sees copies of ``self.board``; moves chosen by the
    AI, a human or the random opponent are applied here.
    """

    def __init__(self, starting_fen: Optional[str] = None) -> None:
        self.board = chess.Board(fen=starting_fen) if starting_fen else chess.Board()

    def reset(self, starting_fen: Optional[str] = None) -> None:
        self.board = chess.Board(fen=starting_fen) if starting_fen else chess.Board()

    def get_full_fen(self) -> str:
        return self.board.fen()

    def get_turn_color(self) -> str:
        return "white" if self.board.turn == chess.WHITE else "black"

    def get_legal_moves(self) -> List[str]:
        return [move.uci() for move in self.board.legal_moves]

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    def get_result(self) -> Optional[str]:
        if not self.board.is_game_over():
            return None
        return self.board.result()

    def get_termination(self) -> Optional[str]:
        outcome = self.board.outcome()
        if outcome is None:
            return None
        return outcome.termination.name.lower()

    def push_move(self, move: chess.Move) -> None:
        if move not in self.board.legal_moves:
            raise ValueError(f"Illegal move: {move.uci()}")
        self.board.push(move)

    def push_uci(self, uci: str) -> None:
        try:
            move = chess.Move.from_uci(uci)
        except ValueError:
            raise ValueError(f"Invalid move provided, {uci}. It should be like 'e2e4'") from None
        if move in self.board.legal_moves:
            self.board.push(move)
            return

        # Auto-queen promotion if user sends e7e8 or similar without suffix
        if len(uci) == 4 and move.promotion is None:
            piece = self.board.piece_at(move.from_square)
            if piece and piece.piece_type == chess.PAWN:
                to_rank = chess.square_rank(move.to_square)
                if (piece.color == chess.WHITE and to_rank == 7) or (
                    piece.color == chess.BLACK and to_rank == 0
                ):
                    promo_move = chess.Move(move.from_square, move.to_square, promotion=chess.QUEEN)
                    if promo_move in self.board.legal_moves:
                        self.board.push(promo_move)
                        return

        raise ValueError(f"Illegal move: {uci}")

    def random_move(self, rng: Optional[random.Random] = None) -> chess.Move:
        """Pick a uniformly random legal move without playing it."""
        moves = list(self.board.legal_moves)
        if not moves:
            raise ValueError("There are no valid moves left")
        return (rng or random).choice(moves)

    def get_pgn(self) -> str:
        return str(chess.pgn.Game.from_board(self.board))

    def snapshot(self) -> Dict[str, object]:
        last_uci: Optional[str] = None
        if self.board.move_stack:
            last_uci = self.board.move_stack[-1].uci()

        game_over = self.is_game_over()
        return {
            "fen": self.get_full_fen(),
            "turn": self.get_turn_color(),
            "legal_moves": self.get_legal_moves(),
            "evaluation": Evaluator.evaluate(self.board, chess.WHITE),
            "game_over": game_over,
            "result": self.get_result(),
            "termination": self.get_termination(),
            "last_move": last_uci,
            "in_check": self.board.is_check(),
            "pgn": self.get_pgn() if game_over else None,
        }
