"""docscan: a tokenizing pattern engine.

Composable patterns (including nesting, self-similar regions) describe
tokens; an ordered list of token definitions forms a grammar; ParseState
walks an in-memory buffer front to back and produces positioned tokens.

Quick Start:
    >>> from docscan import ParseState, TokenDefinition, Regex
    >>> tokens = [
    ...     TokenDefinition("word", Regex(r"\\w+")),
    ...     TokenDefinition("space", Regex(r"\\s+"), discard=True),
    ... ]
    >>> [t.value for t in ParseState("hello world", tokens).run()]
    ['hello', 'world']

"""

from __future__ import annotations

from docscan.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from docscan.definition import TokenDefinition
from docscan.engine import ParseState
from docscan.errors import (
    APIUsageError,
    DocscanError,
    FetchContractError,
    GrammarError,
    ZeroProgressError,
)
from docscan.parser import Tokenizer
from docscan.patterns import (
    Alternation,
    Balanced,
    Capture,
    Forward,
    GrammarBuilder,
    Literal,
    Match,
    Optional,
    Pattern,
    Regex,
    Repeat,
    Sequence,
)
from docscan.position import FilePosition
from docscan.protocols import Accumulator, TokenList
from docscan.tokens import TokenInstance

__version__ = "0.1.0"

__all__ = [
    "APIUsageError",
    "Accumulator",
    "Alternation",
    "Balanced",
    "Capture",
    "DocscanError",
    "FetchContractError",
    "FilePosition",
    "Forward",
    "GrammarBuilder",
    "GrammarError",
    "Literal",
    "Match",
    "Optional",
    "ParseConfig",
    "ParseState",
    "Pattern",
    "Regex",
    "Repeat",
    "Sequence",
    "TokenDefinition",
    "TokenInstance",
    "TokenList",
    "Tokenizer",
    "ZeroProgressError",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
