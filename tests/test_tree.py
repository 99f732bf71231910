from __future__ import annotations

import chess
import pytest

from gametree import ChessRules, Evaluator, SearchNode, TreeBuilder, build_tree
from gametree.tree import count_nodes


def test_expand_depth_zero_one_child_per_legal_move():
    board = chess.Board()
    builder = TreeBuilder()
    root = builder.new_node(board)
    builder.expand(root, 0)

    moves = list(board.legal_moves)
    assert len(root.children) == len(moves) == 20
    for move, child in zip(moves, root.children):
        assert child.children is None
        assert child.position.move_stack[-1] == move
        assert child.evaluation == Evaluator.evaluate(child.position)


def test_expand_does_not_touch_parent_position():
    board = chess.Board()
    root = build_tree(board, 2)
    assert root.position is board
    assert board.fen() == chess.STARTING_FEN
    assert board.move_stack == []
    # Siblings must not share a board
    assert len({id(child.position) for child in root.children}) == 20


def test_build_tree_depth_one_has_twenty_children():
    root = build_tree(chess.Board(), 1)
    assert len(root.children) == 20
    assert all(child.children is None for child in root.children)


def test_build_tree_node_count_matches_branching():
    root = build_tree(chess.Board(), 2)
    assert count_nodes(root) == 1 + 20 + 20 * 20


def test_build_tree_depth_zero_leaves_root_unexpanded():
    root = build_tree(chess.Board(), 0)
    assert root.children is None
    assert not root.is_expanded
    assert root.evaluation == 0


def test_terminal_positions_get_no_children(terminal_board):
    root = build_tree(terminal_board, 3)
    assert root.children == []
    assert root.is_terminal


def test_expand_is_idempotent():
    builder = TreeBuilder()
    root = builder.new_node(chess.Board())
    builder.expand(root, 0)
    children = root.children
    assert root.is_expanded
    first = children[0]
    builder.expand(root, 1)
    assert root.children is children
    assert root.children[0] is first


def test_negative_depth_rejected():
    builder = TreeBuilder()
    with pytest.raises(ValueError):
        builder.expand(builder.new_node(chess.Board()), -1)
    with pytest.raises(ValueError):
        builder.build_tree(chess.Board(), -1)


def test_perspective_sets_evaluation_sign():
    board = chess.Board("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
    assert TreeBuilder(perspective=chess.WHITE).new_node(board).evaluation == 50
    assert TreeBuilder(perspective=chess.BLACK).new_node(board).evaluation == -50


class _ListRules:
    """Toy game: a position is a tuple of moves, moves are small integers."""

    def __init__(self, branching):
        self.branching = branching

    def legal_moves(self, position):
        if len(position) >= len(self.branching):
            return []
        return list(range(self.branching[len(position)]))

    def apply(self, position, move):
        return position + (move,)

    def clone(self, position):
        return tuple(position)

    def move_history(self, position):
        return list(position)


def test_builder_accepts_other_rules():
    builder = TreeBuilder(rules=_ListRules([3, 2]), evaluate=lambda position: sum(position))
    root = builder.build_tree((), 2)
    assert [child.position for child in root.children] == [(0,), (1,), (2,)]
    assert count_nodes(root) == 1 + 3 + 6
    assert root.children[2].children[1].evaluation == 3
    assert all(grandchild.children is None for child in root.children for grandchild in child.children)


def test_chess_rules_apply_copies():
    rules = ChessRules()
    board = chess.Board()
    after = rules.apply(board, chess.Move.from_uci("e2e4"))
    assert board.move_stack == []
    assert rules.move_history(after) == [chess.Move.from_uci("e2e4")]
    assert SearchNode(after, 0).children is None
