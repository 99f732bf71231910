"""Material-balance chess AI built on alpha-beta game-tree search.

Modules:
- evaluator: Material evaluation from the maximizing side's point of view
- rules: Game-state capability over python-chess boards
- tree: Search nodes and the tree builder
- search: Alpha-beta / minimax and the AI player
- game: Live game wrapper used by the driver
"""

from .config import Config, load_config
from .errors import EmptySearchResult, NoLegalMoves, SearchError
from .evaluator import Evaluator
from .game import Game
from .rules import ChessRules, GameRules
from .search import AIPlayer, SearchResult, alpha_beta, minimax
from .tree import SearchNode, TreeBuilder, build_tree

__all__ = [
    "AIPlayer",
    "ChessRules",
    "Config",
    "EmptySearchResult",
    "Evaluator",
    "Game",
    "GameRules",
    "NoLegalMoves",
    "SearchError",
    "SearchNode",
    "SearchResult",
    "TreeBuilder",
    "alpha_beta",
    "build_tree",
    "load_config",
    "minimax",
]
