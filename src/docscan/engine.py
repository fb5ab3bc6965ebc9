"""Tokenizing engine.

ParseState owns the yet-to-process suffix of the input (the buffer) and the
live FilePosition of its first character. Each step tries the token
definitions in order against the head of the buffer; the first definition
that fetches a token wins. The run ends when the buffer is empty or the
consumer requests termination.

States:
    running  -> buffer non-empty, no termination requested
    stepping -> trying definitions in order
    error    -> GrammarError (nothing matched) or ZeroProgressError
                (a step matched but consumed nothing)
    done     -> finish() returns the accumulated result

Thread Safety:
ParseState instances are single-use. Create one per input.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping, Sequence
from typing import IO, Any

from docscan.config import ParseConfig, resolve_config
from docscan.definition import TokenDefinition
from docscan.errors import APIUsageError, GrammarError, ZeroProgressError
from docscan.position import FilePosition
from docscan.protocols import Accumulator, TokenList
from docscan.tokens import TokenInstance
from docscan.utils.logger import get_logger

logger = get_logger(__name__)

# Longest unmatched-input preview included in a GrammarError.
PREVIEW_LENGTH = 32

# Name reported for input that did not come from a file.
DEFAULT_FILENAME = "(buffer)"


class ParseState:
    """State of one tokenizing run.

    Usage:
        >>> state = ParseState("fn a() {}", RustTokenizer.tokens)
        >>> [t.type for t in state.run()]
        [<RustToken.FN: 'fn'>]

    Attributes:
        input_string: The full, unmodified input
        buffer: Portion of the input that has yet to be tokenized
        filename: Name used when reporting errors
        position: Live position of the first character of ``buffer``
        prev_token: Token handled by the previous step, if any
        token_set: Ordered token definitions tried at each step
        config: Options in effect for this run

    """

    # Junk removed from the head of the buffer when ``trim_input`` is set.
    INPUT_TRIM_REGEXP = re.compile(r"[ \t\v\n]+")

    def __init__(
        self,
        input_string: str,
        token_set: Sequence[TokenDefinition] | None = None,
        *,
        filename: str | None = None,
        position: FilePosition | None = None,
        line: int | None = None,
        column: int | None = None,
        offset: int | None = None,
        config: ParseConfig | Mapping[str, Any] | None = None,
        accumulator: Accumulator | None = None,
        dump_stream: IO[str] | None = None,
    ) -> None:
        """Initialize a parse state.

        Args:
            input_string: Text to tokenize
            token_set: Ordered token definitions; may also be assigned later
            filename: File name used when reporting errors (default "(buffer)")
            position: Initial position (copied); overrides line/column/offset
            line: Initial line number (default 1)
            column: Initial column number (default 0)
            offset: Initial character offset (default 0)
            config: ParseConfig, a plain mapping of options, or None for the
                config active in the current context
            accumulator: Receives produced tokens; defaults to a TokenList
            dump_stream: Destination for ``dump_tokens`` output (stderr)
        """
        self.input_string = input_string
        self.buffer = input_string
        self.filename = filename if filename is not None else DEFAULT_FILENAME
        if position is not None:
            self.position = position.copy()
        else:
            self.position = FilePosition(
                1 if line is None else line,
                0 if column is None else column,
                0 if offset is None else offset,
            )
        self.config = resolve_config(config)
        self.accumulator: Accumulator = accumulator if accumulator is not None else TokenList()
        self.dump_stream = dump_stream
        self.token_set: Sequence[TokenDefinition] | None = token_set
        self.prev_token: TokenInstance | None = None
        self._terminate_requested = False
        self._last_definition: TokenDefinition | None = None

    @property
    def empty(self) -> bool:
        """Whether the unprocessed-input buffer is empty."""
        return not self.buffer

    @property
    def terminated(self) -> bool:
        """Whether the consumer requested an early stop."""
        return self._terminate_requested

    def terminate_parse(self) -> None:
        """Request that the run stop before the next step.

        Checked between steps only; a step in progress is never interrupted.
        """
        self._terminate_requested = True

    def update_position(self, consumed: str) -> FilePosition:
        """Advance the live position past ``consumed``."""
        return self.position.advance(consumed)

    def remove_junk_from_top(self) -> None:
        """Drop leading whitespace from the buffer, advancing the position."""
        junk = self.INPUT_TRIM_REGEXP.match(self.buffer)
        if junk is not None:
            self.update_position(junk.group())
            self.buffer = self.buffer[junk.end() :]

    # =========================================================================
    # Accumulation hooks
    # =========================================================================

    def handle_token(self, token: TokenInstance) -> None:
        """Hand a produced token to the accumulator."""
        self.accumulator.add(token, self)

    def finish(self) -> Any:
        """Result of the run, as built by the accumulator."""
        return self.accumulator.result()

    # =========================================================================
    # Stepping
    # =========================================================================

    def next_token(self) -> TokenInstance | None:
        """Fetch the next token from the head of the buffer.

        Returns:
            The token, or None if the buffer is (or, after trimming,
            became) empty.

        Raises:
            GrammarError: No token definition matched.
        """
        if self.config.trim_input:
            self.remove_junk_from_top()

        buffer = self.buffer
        if not buffer:
            return None

        if self.token_set is None:
            raise APIUsageError(f"{self.__class__.__name__} has no token set")

        for definition in self.token_set:
            fetched = definition.fetch(buffer, self.position)
            if fetched is not None:
                token, self.buffer = fetched
                self._last_definition = definition
                if self.config.dump_tokens:
                    self._dump(token)
                return token

        limit = min(len(buffer), PREVIEW_LENGTH)
        ellipsis = "..." if limit < len(buffer) else ""
        logger.debug("no token definition matched at %s", self.position.location(self.filename))
        raise GrammarError(
            f'Parse error on "{buffer[:limit]}{ellipsis}"', self.filename, self.position
        )

    def _dump(self, token: TokenInstance) -> None:
        stream = self.dump_stream if self.dump_stream is not None else sys.stderr
        stream.write(f"{token!r}\n")
        stream.flush()

    def run(self) -> Any:
        """Tokenize the whole buffer and return the accumulated result.

        Raises:
            GrammarError: No token definition matched the buffer head.
            ZeroProgressError: A step succeeded without consuming input.
        """
        logger.debug(
            "tokenizing %s (%d chars, %d definitions)",
            self.filename,
            len(self.buffer),
            len(self.token_set or ()),
        )
        steps = 0
        while not self.empty and not self._terminate_requested:
            before = len(self.buffer)
            self._last_definition = None
            start = self.position.copy()
            token = self.next_token()
            if self._terminate_requested:
                break

            if len(self.buffer) == before:
                logger.debug("zero-length step at %s", start.location(self.filename))
                raise ZeroProgressError(self.buffer, start)
            steps += 1

            # A whitespace-only remainder may have been trimmed away entirely.
            if token is None:
                continue
            if self._last_definition is not None and self._last_definition.discard:
                continue
            self.handle_token(token)
            self.prev_token = token

        logger.debug("finished %s after %d steps", self.filename, steps)
        return self.finish()


__all__ = ["DEFAULT_FILENAME", "PREVIEW_LENGTH", "ParseState"]
