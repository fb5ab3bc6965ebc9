"""Grammar construction context.

GrammarBuilder provides the combinators used to assemble larger named
patterns, and owns the name generator that hands out fresh names for
recursive groups. A builder is created for one grammar-build pass; two
builders never share names or state, so repeated builds produce the same
grammar.

Thread Safety:
A builder is single-use state. Create one per grammar build.

"""

from __future__ import annotations

import re
from collections.abc import Callable

from docscan.errors import APIUsageError
from docscan.patterns.core import (
    Alternation,
    Balanced,
    Capture,
    Literal,
    Optional,
    Pattern,
    Regex,
    Repeat,
    Sequence,
    as_pattern,
)

# An element of a separated list: a pattern, or a zero-argument factory
# called once per occurrence so each occurrence draws its own names.
Element = Pattern | str | Callable[[], Pattern]


class NameGenerator:
    """Monotonic generator of recursive-group names (``_g1``, ``_g2``, ...).

    Never reset; a fresh generator starts at ``_g1``.
    """

    __slots__ = ("prefix", "_count")

    def __init__(self, prefix: str = "_g") -> None:
        self.prefix = prefix
        self._count = 0

    def __call__(self) -> str:
        self._count += 1
        return f"{self.prefix}{self._count}"

    @property
    def issued(self) -> int:
        """Number of names handed out so far."""
        return self._count


class GrammarBuilder:
    """Combinator library for one grammar-build pass.

    Usage:
        >>> g = GrammarBuilder()
        >>> args = g.separated(",", g.regex(r"[a-z]+"))
        >>> g.seq("(", g.ws, args, g.ws, ")").fullmatch("(a, b ,c)") is not None
        True

    """

    def __init__(self) -> None:
        self.names = NameGenerator()
        self.ws = Regex(r"\s*")
        self.ws1 = Regex(r"\s+")

    def fresh_name(self) -> str:
        """Draw the next unused recursive-group name."""
        return self.names()

    # =========================================================================
    # Primitive combinators
    # =========================================================================

    @staticmethod
    def literal(text: str) -> Literal:
        """Escaped verbatim text."""
        return Literal(text)

    @staticmethod
    def regex(source: str | re.Pattern[str], flags: int = 0) -> Regex:
        """Primitive leaf from a regular expression."""
        return Regex(source, flags)

    @staticmethod
    def seq(*parts: object) -> Sequence:
        return Sequence(*parts)

    @staticmethod
    def alt(*alternatives: object) -> Alternation:
        return Alternation(*alternatives)

    @staticmethod
    def optional(*parts: object) -> Optional:
        """Optional clause; several parts are matched as one sequence."""
        if len(parts) == 1:
            return Optional(parts[0])
        return Optional(Sequence(*parts))

    @staticmethod
    def many(pattern: object, minimum: int = 0) -> Repeat:
        return Repeat(pattern, minimum)

    @staticmethod
    def capture(name: str, pattern: object) -> Capture:
        return Capture(name, pattern)

    # =========================================================================
    # Structural combinators
    # =========================================================================

    def separated(self, sep: object, element: Element) -> Sequence:
        """One or more ``element`` separated by ``sep``, whitespace allowed.

        A trailing separator is not part of the list.

        Args:
            sep: Separator; strings are literal text
            element: Element pattern, or a factory producing one per use

        Returns:
            Pattern ``element (\\s* sep \\s* element)*``
        """
        sep = as_pattern(sep)
        if callable(element) and not isinstance(element, Pattern):
            first, rest = element(), element()
        else:
            first = rest = as_pattern(element)
        return Sequence(first, Repeat(Sequence(self.ws, sep, self.ws, rest)))

    def balanced(self, delimiters: str | tuple[str, str], name: str | None = None) -> Balanced:
        """Nesting region between two single-character delimiters.

        Args:
            delimiters: Two characters, e.g. ``"{}"`` or ``("<", ">")``
            name: Capture name; a fresh name is drawn when omitted

        Returns:
            Balanced pattern capturing under ``name``
        """
        if len(delimiters) != 2 or not all(isinstance(d, str) and len(d) == 1 for d in delimiters):
            raise APIUsageError(
                f"balanced() needs two single-character delimiters, got {delimiters!r}"
            )
        opening, closing = delimiters
        return Balanced(opening, closing, name or self.fresh_name())


__all__ = ["Element", "GrammarBuilder", "NameGenerator"]
