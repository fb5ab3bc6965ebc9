"""Composable backtracking patterns.

A Pattern is a matcher over text. Every pattern enumerates the positions at
which it can end, in order of preference, given a start position and the
captures collected so far. Composite patterns backtrack by pulling the next
candidate from their children, which gives the same results as a
backtracking regular-expression engine for the constructs defined here.

Self-similar structures (braces inside braces, generics inside generics)
are handled by Balanced, an explicit depth-counting scanner, and by
Forward, a late-bound reference for patterns that mention themselves.

Leaves (Literal, Regex, Balanced) produce at most one candidate. Regex
leaves are matched with the standard ``re`` module and are never
backtracked into: ``Regex("a*") + Literal("a")`` cannot match ``"aa"``.

Thread Safety:
Patterns are immutable once built (Forward is set once during grammar
construction). Matching keeps all state in local variables and is safe to
run from several threads.

"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

from docscan.errors import APIUsageError

# Named capture spans, keyed by group name. Treated as immutable: every
# pattern that records a capture makes a new dict.
Captures = Mapping[str, tuple[int, int]]

_NO_CAPTURES: Captures = {}


class Match:
    """Result of a successful pattern match.

    Attributes:
        string: The text that was matched against
        start: Start offset of the match
        end: End offset of the match

    """

    __slots__ = ("string", "start", "end", "_captures")

    def __init__(self, string: str, start: int, end: int, captures: Captures) -> None:
        self.string = string
        self.start = start
        self.end = end
        self._captures = captures

    def span(self, name: int | str = 0) -> tuple[int, int] | None:
        """Span of the whole match (``0``) or of a named capture."""
        if name == 0:
            return self.start, self.end
        if isinstance(name, int):
            raise IndexError(f"no such group: {name}")
        return self._captures.get(name)

    def group(self, name: int | str = 0) -> str | None:
        """Text of the whole match (``0``) or of a named capture.

        Returns None for a capture that did not participate in the match.
        """
        span = self.span(name)
        if span is None:
            return None
        return self.string[span[0] : span[1]]

    __getitem__ = group

    def groupdict(self) -> dict[str, str]:
        """All captures that participated in the match."""
        return {name: self.string[s:e] for name, (s, e) in self._captures.items()}

    @property
    def text(self) -> str:
        """The matched text."""
        return self.string[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"<Match span=({self.start}, {self.end}) text={self.text[:40]!r}>"


class Pattern:
    """Base class for all patterns."""

    __slots__ = ()

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        """Yield every ``(end, captures)`` this pattern allows, best first."""
        raise NotImplementedError

    def match(self, text: str, pos: int = 0) -> Match | None:
        """Match anchored at ``pos``.

        Args:
            text: Text to match against
            pos: Offset at which the match must start

        Returns:
            The preferred Match, or None.
        """
        for end, caps in self._ends(text, pos, _NO_CAPTURES):
            return Match(text, pos, end, caps)
        return None

    def fullmatch(self, text: str, pos: int = 0) -> Match | None:
        """Match anchored at ``pos`` that must extend to the end of ``text``."""
        target = len(text)
        for end, caps in self._ends(text, pos, _NO_CAPTURES):
            if end == target:
                return Match(text, pos, end, caps)
        return None

    def search(self, text: str, pos: int = 0) -> Match | None:
        """First match starting at or after ``pos``."""
        for start in range(pos, len(text) + 1):
            found = self.match(text, start)
            if found is not None:
                return found
        return None

    def all_matches(self, text: str, pos: int = 0) -> list[Match]:
        """All successive non-overlapping matches from ``pos`` onwards.

        An empty match advances the search by one character so the scan
        always terminates.
        """
        matches: list[Match] = []
        while pos < len(text):
            found = self.search(text, pos)
            if found is None:
                break
            matches.append(found)
            pos = found.end if found.end > found.start else found.end + 1
        return matches

    def __add__(self, other: object) -> Sequence:
        return Sequence(self, as_pattern(other))

    def __radd__(self, other: object) -> Sequence:
        return Sequence(as_pattern(other), self)

    def __or__(self, other: object) -> Alternation:
        return Alternation(self, as_pattern(other))

    def __ror__(self, other: object) -> Alternation:
        return Alternation(as_pattern(other), self)


class Literal(Pattern):
    """Verbatim text; no character has special meaning."""

    __slots__ = ("literal",)

    def __init__(self, literal: str) -> None:
        self.literal = literal

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        if text.startswith(self.literal, pos):
            yield pos + len(self.literal), caps

    def __repr__(self) -> str:
        return f"Literal({self.literal!r})"


class Regex(Pattern):
    """Primitive leaf backed by a compiled regular expression.

    Named groups in the expression are recorded as captures.
    """

    __slots__ = ("regex",)

    def __init__(self, source: str | re.Pattern[str], flags: int = 0) -> None:
        if isinstance(source, re.Pattern):
            if flags:
                raise APIUsageError("flags cannot be combined with a compiled expression")
            self.regex = source
        else:
            self.regex = re.compile(source, flags)

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        found = self.regex.match(text, pos)
        if found is None:
            return
        if self.regex.groupindex:
            caps = dict(caps)
            for name in self.regex.groupindex:
                span = found.span(name)
                if span[0] != -1:
                    caps[name] = span
        yield found.end(), caps

    def __repr__(self) -> str:
        return f"Regex({self.regex.pattern!r})"


class Sequence(Pattern):
    """Concatenation of patterns, backtracking into earlier parts on failure."""

    __slots__ = ("parts",)

    def __init__(self, *parts: object) -> None:
        flat: list[Pattern] = []
        for part in parts:
            part = as_pattern(part)
            if type(part) is Sequence:
                flat.extend(part.parts)
            else:
                flat.append(part)
        self.parts: tuple[Pattern, ...] = tuple(flat)

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        return self._chain(0, text, pos, caps)

    def _chain(
        self, index: int, text: str, pos: int, caps: Captures
    ) -> Iterator[tuple[int, Captures]]:
        if index == len(self.parts):
            yield pos, caps
            return
        for end, inner in self.parts[index]._ends(text, pos, caps):
            yield from self._chain(index + 1, text, end, inner)

    def __repr__(self) -> str:
        return f"Sequence{self.parts!r}"


class Alternation(Pattern):
    """Ordered choice: earlier alternatives are always preferred."""

    __slots__ = ("alternatives",)

    def __init__(self, *alternatives: object) -> None:
        flat: list[Pattern] = []
        for alternative in alternatives:
            alternative = as_pattern(alternative)
            if type(alternative) is Alternation:
                flat.extend(alternative.alternatives)
            else:
                flat.append(alternative)
        self.alternatives: tuple[Pattern, ...] = tuple(flat)

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        for alternative in self.alternatives:
            yield from alternative._ends(text, pos, caps)

    def __repr__(self) -> str:
        return f"Alternation{self.alternatives!r}"


class Repeat(Pattern):
    """Greedy repetition between ``minimum`` and ``maximum`` times.

    Implemented with an explicit stack so that long runs of repetitions do
    not consume Python stack frames. An iteration that matches the empty
    string ends the repetition; when fewer than ``minimum`` iterations
    have matched, it also fills the remaining ones.
    """

    __slots__ = ("pattern", "minimum", "maximum")

    def __init__(self, pattern: object, minimum: int = 0, maximum: int | None = None) -> None:
        if minimum < 0 or (maximum is not None and maximum < minimum):
            raise APIUsageError(f"invalid repetition bounds {minimum}..{maximum}")
        self.pattern = as_pattern(pattern)
        self.minimum = minimum
        self.maximum = maximum

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        pattern = self.pattern
        maximum = self.maximum
        # Frames are (position, captures, repetitions so far, candidate iterator).
        first = pattern._ends(text, pos, caps) if maximum != 0 else iter(())
        stack = [(pos, caps, 0, first)]
        while stack:
            at, at_caps, count, candidates = stack[-1]
            step = next(candidates, None)
            if step is None:
                stack.pop()
                if count >= self.minimum:
                    yield at, at_caps
                continue
            end, inner = step
            if end == at:
                # An empty iteration can stand in for every missing one.
                if count < self.minimum:
                    yield at, inner
                continue
            count += 1
            if maximum is None or count < maximum:
                deeper = pattern._ends(text, end, inner)
            else:
                deeper = iter(())
            stack.append((end, inner, count, deeper))

    def __repr__(self) -> str:
        return f"Repeat({self.pattern!r}, {self.minimum}, {self.maximum})"


class Optional(Repeat):
    """Zero or one occurrence, preferring one."""

    __slots__ = ()

    def __init__(self, pattern: object) -> None:
        super().__init__(pattern, 0, 1)

    def __repr__(self) -> str:
        return f"Optional({self.pattern!r})"


class Capture(Pattern):
    """Record the span matched by ``pattern`` under ``name``."""

    __slots__ = ("name", "pattern")

    def __init__(self, name: str, pattern: object) -> None:
        self.name = name
        self.pattern = as_pattern(pattern)

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        name = self.name
        for end, inner in self.pattern._ends(text, pos, caps):
            yield end, {**inner, name: (pos, end)}

    def __repr__(self) -> str:
        return f"Capture({self.name!r}, {self.pattern!r})"


class Forward(Pattern):
    """Placeholder for a pattern that refers to itself.

    Example:
        >>> chain = Forward("chain")
        >>> chain.set(Literal("a") + Optional(Literal(",") + chain))
        Forward('chain')
    """

    __slots__ = ("name", "pattern")

    def __init__(self, name: str) -> None:
        self.name = name
        self.pattern: Pattern | None = None

    def set(self, pattern: object) -> Forward:
        if self.pattern is not None:
            raise APIUsageError(f"forward pattern {self.name!r} is already defined")
        self.pattern = as_pattern(pattern)
        return self

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        if self.pattern is None:
            raise APIUsageError(f"forward pattern {self.name!r} used before it was defined")
        return self.pattern._ends(text, pos, caps)

    def __repr__(self) -> str:
        return f"Forward({self.name!r})"


class Balanced(Pattern):
    """Delimited region whose delimiters nest, e.g. ``{a{b}c}``.

    Walks forward from an opening delimiter keeping a depth counter and
    succeeds exactly where the depth returns to zero at a closing
    delimiter. Delimiters of other kinds are ordinary characters. Input
    without a matching close fails; the scan is linear in the input size.
    """

    __slots__ = ("open", "close", "name", "_delimiters")

    def __init__(self, opening: str, closing: str, name: str | None = None) -> None:
        if not opening or not closing or opening == closing:
            raise APIUsageError(
                f"balanced delimiters must be two distinct strings, got {opening!r}, {closing!r}"
            )
        self.open = opening
        self.close = closing
        self.name = name
        self._delimiters = re.compile(f"{re.escape(opening)}|{re.escape(closing)}")

    def _ends(self, text: str, pos: int, caps: Captures) -> Iterator[tuple[int, Captures]]:
        if not text.startswith(self.open, pos):
            return
        depth = 1
        at = pos + len(self.open)
        while depth:
            found = self._delimiters.search(text, at)
            if found is None:
                return
            depth += 1 if found.group() == self.open else -1
            at = found.end()
        if self.name:
            caps = {**caps, self.name: (pos, at)}
        yield at, caps

    def __repr__(self) -> str:
        return f"Balanced({self.open!r}, {self.close!r}, {self.name!r})"


def as_pattern(value: object) -> Pattern:
    """Coerce ``value`` to a Pattern.

    Patterns pass through, strings become Literal (escaped text) and
    compiled regular expressions become Regex leaves.
    """
    if isinstance(value, Pattern):
        return value
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, re.Pattern):
        return Regex(value)
    raise APIUsageError(f"cannot build a pattern from {type(value).__name__}")


__all__ = [
    "Alternation",
    "Balanced",
    "Capture",
    "Captures",
    "Forward",
    "Literal",
    "Match",
    "Optional",
    "Pattern",
    "Regex",
    "Repeat",
    "Sequence",
    "as_pattern",
]
