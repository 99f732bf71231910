from __future__ import annotations


class SearchError(Exception):
    """Base class for failures reported by the search core."""


class NoLegalMoves(SearchError):
    """The position handed to the search has no legal moves."""


class EmptySearchResult(SearchError):
    """Alpha-beta produced no line to play."""
