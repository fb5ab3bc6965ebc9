"""TokenInstance, the unit of output produced by the tokenizing engine.

Thread Safety:
TokenInstance is frozen. Its position is a snapshot taken when the token
was fetched, never the engine's live FilePosition.

"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any

from docscan.position import FilePosition


@dataclass(frozen=True, slots=True)
class TokenInstance:
    """A token produced by a TokenDefinition.

    Attributes:
        type: Type tag of the definition that produced the token
        value: Extracted value (the consumed text unless a fetch/build step
            produced something richer)
        raw: Exact text removed from the buffer
        position: Position of the first character of ``raw``

    """

    type: Hashable
    value: Any
    raw: str
    position: FilePosition

    @property
    def line(self) -> int:
        """Line number (convenience accessor)."""
        return self.position.line

    @property
    def column(self) -> int:
        """Column number (convenience accessor)."""
        return self.position.column

    def __repr__(self) -> str:
        """Compact repr for debugging and token dumps."""
        name = getattr(self.type, "name", self.type)
        raw = self.raw
        if len(raw) > 20:
            raw = raw[:17] + "..."
        return f"TokenInstance({name}, {raw!r}, {self.position.line}:{self.position.column})"


__all__ = ["TokenInstance"]
