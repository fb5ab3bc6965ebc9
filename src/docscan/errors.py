"""Exception classes for docscan.

Two kinds of failure unwind a tokenizing run: GrammarError when no token
definition matches the buffer head, and ZeroProgressError when a step
reports success without consuming input. APIUsageError covers mistakes
made while assembling a grammar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docscan.position import FilePosition


class DocscanError(Exception):
    """Base exception for all docscan errors."""

    pass


class GrammarError(DocscanError):
    """No token definition matched the input at the current position.

    Formatted as ``<file>:<line>:<column>: <message>``.
    """

    def __init__(
        self,
        message: str,
        filename: str | None,
        line: int | FilePosition,
        column: int | None = None,
    ) -> None:
        """Initialize grammar error.

        Args:
            message: Error description
            filename: File name used for reporting (may be None)
            line: Line number, or a FilePosition supplying line and column
            column: Column number; required when ``line`` is an int
        """
        if column is None and not isinstance(line, int):
            line, column = line.line, line.column

        self.message = message
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(f"{filename}:{line}:{column}: {message}")


class ZeroProgressError(DocscanError):
    """A tokenizing step succeeded without consuming any input.

    Always a defect in the grammar: continuing would loop forever.
    """

    def __init__(self, buffer: str, position: FilePosition) -> None:
        """Initialize zero-progress error.

        Args:
            buffer: Remaining (unconsumed) input
            position: Position at which the step was attempted
        """
        self.buffer = buffer
        self.position = position.copy()
        preview = buffer[:32] + ("..." if len(buffer) > 32 else "")
        super().__init__(
            f"{position.line}:{position.column}: token step consumed no input at {preview!r}"
        )


class APIUsageError(DocscanError):
    """Invalid arguments supplied while building a grammar."""

    pass


class FetchContractError(APIUsageError):
    """A fetch strategy returned text that is not the head of the buffer.

    Raised instead of guessing how much input the strategy meant to consume.
    """

    def __init__(self, token_type: object, consumed: str, buffer: str) -> None:
        """Initialize fetch contract error.

        Args:
            token_type: Type of the definition whose fetch misbehaved
            consumed: Text the fetch reported as consumed
            buffer: Remaining input at the time of the fetch
        """
        self.token_type = token_type
        self.consumed = consumed
        super().__init__(
            f"fetch for {token_type!r} returned {consumed[:32]!r}, "
            f"which is not a prefix of the remaining input {buffer[:32]!r}"
        )
