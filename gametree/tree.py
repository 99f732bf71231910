from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import logging

import chess

from .evaluator import Evaluator
from .rules import ChessRules, GameRules

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """One position in the search tree.

    ``children`` is ``None`` while the node is unexpanded and an empty list
    once it is known to be terminal. ``evaluation`` is the static score of
    ``position`` and is never backed up from the children.
    """

    position: Any
    evaluation: int
    children: Optional[List["SearchNode"]] = None

    @property
    def is_expanded(self) -> bool:
        return self.children is not None

    @property
    def is_terminal(self) -> bool:
        return self.children is not None and not self.children


class TreeBuilder:
    """Expands search nodes by cloning the position once per legal move."""

    def __init__(
        self,
        rules: Optional[GameRules] = None,
        evaluate: Optional[Callable[[Any], int]] = None,
        perspective: chess.Color = chess.WHITE,
    ) -> None:
        self.rules = rules or ChessRules()
        self.evaluate = evaluate or Evaluator.for_side(perspective)

    def new_node(self, position: Any) -> SearchNode:
        return SearchNode(position=position, evaluation=self.evaluate(position))

    def expand(self, node: SearchNode, depth: int) -> None:
        """Populate ``node.children`` with one child per legal move.

        With ``depth > 0`` every new child is expanded again with
        ``depth - 1``, so ``expand(node, d)`` materializes ``d + 1`` plies
        below ``node``. Children appear in move-generation order. A node that
        already has children is left alone.
        """
        if depth < 0:
            raise ValueError("Expansion depth must be >= 0")
        if node.is_expanded:
            return

        children: List[SearchNode] = []
        for move in self.rules.legal_moves(node.position):
            children.append(self.new_node(self.rules.apply(node.position, move)))
        node.children = children

        if depth > 0:
            for child in children:
                self.expand(child, depth - 1)

    def build_tree(self, position: Any, depth: int) -> SearchNode:
        """Return a root for ``position`` with ``depth`` plies already built."""
        if depth < 0:
            raise ValueError("Tree depth must be >= 0")
        root = self.new_node(position)
        if depth > 0:
            self.expand(root, depth - 1)
        logger.debug("Built tree of depth %d with %d nodes", depth, count_nodes(root))
        return root


def build_tree(position: Any, depth: int, perspective: chess.Color = chess.WHITE) -> SearchNode:
    return TreeBuilder(perspective=perspective).build_tree(position, depth)


def count_nodes(node: SearchNode) -> int:
    total = 1
    stack = list(node.children or [])
    while stack:
        current = stack.pop()
        total += 1
        if current.children:
            stack.extend(current.children)
    return total
