"""Game-state capability consumed by the tree builder and the search.

The search core never inspects positions directly; it only enumerates,
applies and reads back moves through a :class:`GameRules` implementation.
"""

from __future__ import annotations

from typing import Any, List, Protocol

import chess


class GameRules(Protocol):
    def legal_moves(self, position: Any) -> List[Any]:
        ...

    def apply(self, position: Any, move: Any) -> Any:
        ...

    def clone(self, position: Any) -> Any:
        ...

    def move_history(self, position: Any) -> List[Any]:
        ...


class ChessRules:
    """:class:`GameRules` over python-chess boards.

    Moves come back in python-chess generation order, which keeps the whole
    search deterministic.
    """

    def legal_moves(self, position: chess.Board) -> List[chess.Move]:
        return list(position.legal_moves)

    def apply(self, position: chess.Board, move: chess.Move) -> chess.Board:
        # Never push onto the caller's board; siblings share the parent.
        board = self.clone(position)
        board.push(move)
        return board

    def clone(self, position: chess.Board) -> chess.Board:
        return position.copy(stack=True)

    def move_history(self, position: chess.Board) -> List[chess.Move]:
        return list(position.move_stack)
