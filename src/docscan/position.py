"""Source position tracking for the tokenizing engine.

FilePosition records line, column and offset of the first unconsumed
character. It is advanced by feeding it the text that was consumed, so a
position is always the result of replaying every consumed span from the
origin.

Lines are 1-indexed; columns and offsets are 0-indexed.

Thread Safety:
FilePosition is mutable. ParseState owns exactly one live instance and
hands out copies (snapshots) whenever a position must outlive further
buffer mutation.

"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(slots=True)
class FilePosition:
    """Line, column and character offset within an input buffer.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (0-indexed)
        offset: Character offset from the start of the input (0-indexed)

    Examples:
        >>> pos = FilePosition()
        >>> pos.update("fn main() {\\n    x")
        FilePosition(line=2, column=5, offset=17)
        >>> pos
        FilePosition(line=1, column=0, offset=0)

    """

    line: int = 1
    column: int = 0
    offset: int = 0

    def update(self, consumed: str) -> FilePosition:
        """Return an advanced copy; this position is left untouched.

        Args:
            consumed: Text between this position and the desired new position

        Returns:
            New FilePosition
        """
        return self.copy().advance(consumed)

    def advance(self, consumed: str) -> FilePosition:
        """Advance in place past ``consumed`` and return self for chaining.

        Args:
            consumed: Text between this position and the desired new position

        Returns:
            This FilePosition
        """
        length = len(consumed)
        self.offset += length

        newlines = consumed.count("\n")
        if newlines:
            self.line += newlines
            self.column = length - consumed.rfind("\n") - 1
        else:
            self.column += length
        return self

    def copy(self) -> FilePosition:
        """Snapshot of this position."""
        return replace(self)

    def location(self, filename: str | None = None) -> str:
        """Format as ``file:line:column`` (or ``line:column`` without a file)."""
        if filename:
            return f"{filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"

    def __str__(self) -> str:
        return f"l. {self.line}/c. {self.column}"


__all__ = ["FilePosition"]
