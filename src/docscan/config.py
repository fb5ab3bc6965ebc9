"""ContextVar-based tokenizer configuration for docscan.

ParseConfig holds the options recognized by ParseState. A config passed
explicitly to ParseState wins; otherwise the config active in the current
context is used.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Explicit
    state = ParseState(text, tokens, config=ParseConfig(trim_input=True))

    # Plain mapping (unknown keys are ignored)
    state = ParseState(text, tokens, config={"dump_tokens": True})

    # Context manager
    with parse_config_context(ParseConfig(trim_input=True)):
        tokens = RustTokenizer.parse_string(source)

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable tokenizer configuration.

    Attributes:
        trim_input: Strip a run of leading whitespace before each token attempt
        dump_tokens: Write each produced token to the diagnostic stream

    """

    trim_input: bool = False
    dump_tokens: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ParseConfig:
        """Create ParseConfig from a plain key/value mapping.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Mapping with config values.

        Returns:
            New ParseConfig instance.

        Example:
            >>> ParseConfig.from_dict({"trim_input": True, "verbose": 3}).trim_input
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "docscan_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Args:
        config: ParseConfig to use within the context.

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


def resolve_config(config: ParseConfig | Mapping[str, Any] | None) -> ParseConfig:
    """Normalize the ``config`` argument accepted by ParseState."""
    if config is None:
        return get_parse_config()
    if isinstance(config, ParseConfig):
        return config
    return ParseConfig.from_dict(config)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "resolve_config",
    "set_parse_config",
]
