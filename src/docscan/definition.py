"""TokenDefinition: binds a token type to a recognition pattern and a fetch strategy.

A grammar is an ordered list of TokenDefinitions. The engine asks each
definition in turn to fetch a token from the head of the remaining input;
the first one that succeeds wins, regardless of how long the other matches
would have been.

Fetch strategies:
    None            consume exactly the text matched by ``pattern``
    Pattern         consume what this second pattern matches at the head
    callable        ``fetch(buffer, match)`` returning the consumed text, a
                    ``(value, consumed)`` pair, or None for no match
    build=callable  consume the full match; ``build(match)`` supplies the value

"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any

from docscan.errors import APIUsageError, FetchContractError
from docscan.patterns import Match, Pattern
from docscan.position import FilePosition
from docscan.tokens import TokenInstance

FetchResult = str | tuple[Any, str] | None
FetchFunc = Callable[[str, Match], FetchResult]
BuildFunc = Callable[[Match], Any]


def _consume_match(buffer: str, match: Match) -> str:
    return match.text


def _consume_pattern(pattern: Pattern) -> FetchFunc:
    def fetch(buffer: str, match: Match) -> str | None:
        found = pattern.match(buffer)
        return None if found is None else found.text

    return fetch


def _build_value(build: BuildFunc) -> FetchFunc:
    def fetch(buffer: str, match: Match) -> tuple[Any, str]:
        return build(match), match.text

    return fetch


class TokenDefinition:
    """Recognition pattern and fetch strategy for one token type.

    Attributes:
        type: Token type tag stamped on produced TokenInstances
        pattern: Pattern matched against the head of the buffer
        discard: Tokens of this type advance the input but are not
            handed to the accumulator (e.g. whitespace)

    """

    __slots__ = ("type", "pattern", "discard", "_fetch")

    def __init__(
        self,
        type: Hashable,
        pattern: Pattern,
        fetch: FetchFunc | Pattern | None = None,
        *,
        build: BuildFunc | None = None,
        discard: bool = False,
    ) -> None:
        if not isinstance(pattern, Pattern):
            raise APIUsageError(
                f"TokenDefinition {type!r} needs a Pattern, got {pattern.__class__.__name__}"
            )
        if fetch is not None and build is not None:
            raise APIUsageError(f"TokenDefinition {type!r} accepts either fetch or build, not both")

        if fetch is None:
            strategy = _consume_match if build is None else _build_value(build)
        elif isinstance(fetch, Pattern):
            strategy = _consume_pattern(fetch)
        elif callable(fetch):
            strategy = fetch
        else:
            raise APIUsageError(
                f"Invalid fetch argument for TokenDefinition {type!r}: {fetch.__class__.__name__}"
            )
        if build is not None and not callable(build):
            raise APIUsageError(f"Invalid build argument for TokenDefinition {type!r}")

        self.type = type
        self.pattern = pattern
        self.discard = discard
        self._fetch = strategy

    def fetch(self, buffer: str, position: FilePosition) -> tuple[TokenInstance, str] | None:
        """Try to fetch a token of this type from the head of ``buffer``.

        On success ``position`` is advanced in place past the consumed text.
        On failure neither ``buffer`` nor ``position`` is touched.

        Args:
            buffer: Remaining input
            position: Live position of the first character of ``buffer``

        Returns:
            ``(token, rest_of_buffer)``, or None when this definition does not
            apply.

        Raises:
            FetchContractError: The fetch strategy returned consumed text that
                is not the head of ``buffer``.
        """
        found = self.pattern.match(buffer)
        if found is None:
            return None

        result = self._fetch(buffer, found)
        if result is None:
            return None
        if isinstance(result, tuple):
            value, consumed = result
        else:
            value = consumed = result
        if value is None:
            return None
        if not isinstance(consumed, str) or not buffer.startswith(consumed):
            raise FetchContractError(self.type, str(consumed), buffer)

        token = TokenInstance(self.type, value, consumed, position.copy())
        position.advance(consumed)
        return token, buffer[len(consumed) :]

    def __repr__(self) -> str:
        return f"TokenDefinition({self.type!r}, {self.pattern!r})"


__all__ = ["BuildFunc", "FetchFunc", "FetchResult", "TokenDefinition"]
