"""Composable pattern grammar.

patterns/
├── __init__.py          # Re-exports
├── core.py              # Pattern variants, Match
└── builder.py           # GrammarBuilder, NameGenerator

Usage:
    >>> from docscan.patterns import GrammarBuilder
    >>> g = GrammarBuilder()
    >>> g.balanced("{}").match("{a{b}c} rest").text
    '{a{b}c}'

"""

from docscan.patterns.builder import Element, GrammarBuilder, NameGenerator
from docscan.patterns.core import (
    Alternation,
    Balanced,
    Capture,
    Captures,
    Forward,
    Literal,
    Match,
    Optional,
    Pattern,
    Regex,
    Repeat,
    Sequence,
    as_pattern,
)

__all__ = [
    "Alternation",
    "Balanced",
    "Capture",
    "Captures",
    "Element",
    "Forward",
    "GrammarBuilder",
    "Literal",
    "Match",
    "NameGenerator",
    "Optional",
    "Pattern",
    "Regex",
    "Repeat",
    "Sequence",
    "as_pattern",
]
