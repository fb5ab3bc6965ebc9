"""Tokenizer front end.

A Tokenizer subclass names its ordered token set and, optionally, the
ParseState subclass that runs it. The class methods build a fresh state per
input and return the run's result.

Usage:
    class IdentTokenizer(Tokenizer):
        tokens = (
            TokenDefinition("ident", Regex(r"[a-z]+")),
            TokenDefinition("space", Regex(r"\\s+"), discard=True),
        )

    IdentTokenizer.parse_string("a bc")   # -> [TokenInstance(ident, ...), ...]

"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, ClassVar

from docscan.definition import TokenDefinition
from docscan.engine import DEFAULT_FILENAME, ParseState


class Tokenizer:
    """Binds a token set to the tokenizing engine."""

    tokens: ClassVar[Sequence[TokenDefinition]] = ()
    state_class: ClassVar[type[ParseState]] = ParseState

    @classmethod
    def new_state(cls, text: str, **options: Any) -> ParseState:
        """Create a ParseState over ``text`` using this tokenizer's token set."""
        return cls.state_class(text, cls.tokens, **options)

    @classmethod
    def parse_string(cls, text: str, **options: Any) -> Any:
        """Tokenize an in-memory string.

        Args:
            text: Input text
            **options: ParseState keyword arguments (``filename`` defaults
                to "(buffer)")

        Returns:
            The accumulated result (a token list by default).
        """
        options.setdefault("filename", DEFAULT_FILENAME)
        return cls.new_state(text, **options).run()

    @classmethod
    def parse_file(cls, path: str | Path, **options: Any) -> Any:
        """Tokenize a UTF-8 text file; errors report its path."""
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        options["filename"] = str(path)
        return cls.new_state(text, **options).run()


__all__ = ["Tokenizer"]
