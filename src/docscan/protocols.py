"""Protocols for docscan.

Defines the accumulator contract used by ParseState to collect tokens.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from docscan.engine import ParseState
    from docscan.tokens import TokenInstance


class Accumulator(Protocol):
    """Decides what happens to each produced token and what a run returns.

    The default accumulator, TokenList, builds a flat list. Consumers that
    build a richer context implement this protocol instead of subclassing
    ParseState.

    """

    def add(self, token: TokenInstance, state: ParseState) -> None:
        """Receive a token produced by ``state``."""
        ...

    def result(self) -> Any:
        """Final result returned by ParseState.run()."""
        ...


class TokenList:
    """Accumulator that appends every token to a list."""

    __slots__ = ("tokens",)

    def __init__(self) -> None:
        self.tokens: list[TokenInstance] = []

    def add(self, token: TokenInstance, state: ParseState) -> None:
        self.tokens.append(token)

    def result(self) -> list[TokenInstance]:
        return self.tokens


__all__ = ["Accumulator", "TokenList"]
