"""Minimax search with alpha-beta pruning over :class:`SearchNode` trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import logging
import time
import chess

from .config import MAX_BOUND, MIN_BOUND, Config
from .errors import EmptySearchResult, NoLegalMoves
from .rules import ChessRules, GameRules
from .tree import SearchNode, TreeBuilder, count_nodes

logger = logging.getLogger(__name__)


def _max_node(best: Optional[SearchNode], candidate: Optional[SearchNode]) -> Optional[SearchNode]:
    # Ties keep the node found first.
    if best is None:
        return candidate
    if candidate is None or candidate.evaluation <= best.evaluation:
        return best
    return candidate


def _min_node(best: Optional[SearchNode], candidate: Optional[SearchNode]) -> Optional[SearchNode]:
    if best is None:
        return candidate
    if candidate is None or candidate.evaluation >= best.evaluation:
        return best
    return candidate


def _children_for(node: SearchNode, depth: int, builder: Optional[TreeBuilder]) -> List[SearchNode]:
    if not node.is_expanded and builder is not None and depth > 0:
        builder.expand(node, 0)
    return node.children or []


def alpha_beta(
    node: SearchNode,
    depth: int,
    alpha: int = MIN_BOUND,
    beta: int = MAX_BOUND,
    maximizing: bool = True,
    builder: Optional[TreeBuilder] = None,
) -> Optional[SearchNode]:
    """Return the leaf at the end of the best line below ``node``.

    The value carried up is the static evaluation of that leaf. Unexpanded
    nodes are expanded one ply at a time through ``builder``; without a
    builder they count as leaves.
    """
    children = _children_for(node, depth, builder)
    if depth == 0 or not children:
        return node

    best: Optional[SearchNode] = None
    if maximizing:
        for child in children:
            value = alpha_beta(child, depth - 1, alpha, beta, False, builder)
            best = _max_node(best, value)
            if best is None:
                continue
            alpha = max(alpha, best.evaluation)
            if best.evaluation >= beta:
                break
    else:
        for child in children:
            value = alpha_beta(child, depth - 1, alpha, beta, True, builder)
            best = _min_node(best, value)
            if best is None:
                continue
            beta = min(beta, best.evaluation)
            if best.evaluation <= alpha:
                break
    return best


def minimax(
    node: SearchNode,
    depth: int,
    maximizing: bool = True,
    builder: Optional[TreeBuilder] = None,
) -> Optional[SearchNode]:
    """Exhaustive minimax with the same tie-break as :func:`alpha_beta`."""
    children = _children_for(node, depth, builder)
    if depth == 0 or not children:
        return node

    best: Optional[SearchNode] = None
    for child in children:
        value = minimax(child, depth - 1, not maximizing, builder)
        best = _max_node(best, value) if maximizing else _min_node(best, value)
    return best


def first_move_of(root: SearchNode, leaf: SearchNode, rules: GameRules) -> Any:
    """Read back the move played from ``root`` on the way to ``leaf``."""
    root_ply = len(rules.move_history(root.position))
    history = rules.move_history(leaf.position)
    if len(history) <= root_ply:
        raise EmptySearchResult("Search result does not extend past the root position")
    return history[root_ply]


@dataclass
class SearchResult:
    best_move: chess.Move
    score: int
    line: List[chess.Move]
    nodes: int


class AIPlayer:
    """Plays the side to move by searching a fresh tree for every decision."""

    def __init__(self, config: Optional[Config] = None, rules: Optional[GameRules] = None) -> None:
        self.config = config or Config()
        self.rules = rules or ChessRules()

    def choose_move(self, board: chess.Board) -> chess.Move:
        result = self.analyse(board)
        return result.best_move

    def analyse(self, board: chess.Board) -> SearchResult:
        """Search ``board`` for the side to move, which is the maximizing side.

        Raises :class:`NoLegalMoves` when there is nothing to search and
        :class:`EmptySearchResult` when the search yields no line.
        """
        search_cfg = self.config.search
        if search_cfg.depth < 1:
            raise ValueError("Search depth must be >= 1")
        builder = TreeBuilder(rules=self.rules, perspective=board.turn)

        t1 = time.time()
        root = builder.build_tree(board, min(search_cfg.tree_depth, search_cfg.depth))
        builder.expand(root, 0)
        logger.info("Time spent building game tree: %.3fs", time.time() - t1)
        if not root.children:
            raise NoLegalMoves("There are no legal moves to choose from")

        t2 = time.time()
        leaf = alpha_beta(
            root,
            search_cfg.depth,
            search_cfg.alpha_bound,
            search_cfg.beta_bound,
            True,
            builder,
        )
        nodes = count_nodes(root)
        logger.info("Time spent during alpha-beta: %.3fs (%d nodes)", time.time() - t2, nodes)
        if leaf is None or leaf is root:
            raise EmptySearchResult("It seems that there is no best line to choose")

        root_ply = len(self.rules.move_history(root.position))
        line = self.rules.move_history(leaf.position)[root_ply:]
        best_move = first_move_of(root, leaf, self.rules)
        logger.debug("Best line %s scores %d", " ".join(m.uci() for m in line), leaf.evaluation)
        return SearchResult(best_move=best_move, score=leaf.evaluation, line=line, nodes=nodes)
