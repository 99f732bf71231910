from __future__ import annotations

import chess
import pytest

from gametree import Config


# Fool's mate: White to move and checkmated.
CHECKMATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
# Black to move with no legal moves and not in check.
STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"


@pytest.fixture
def checkmate_fen() -> str:
    return CHECKMATE_FEN


@pytest.fixture(params=[CHECKMATE_FEN, STALEMATE_FEN], ids=["checkmate", "stalemate"])
def terminal_board(request) -> chess.Board:
    return chess.Board(request.param)


@pytest.fixture
def shallow_config() -> Config:
    cfg = Config()
    cfg.search.depth = 2
    return cfg
