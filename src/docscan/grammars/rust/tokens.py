"""Token sets built from the Rust grammar.

Two token sets are provided:

- rust_token_definitions(): items and simple statements, for tokenizing a
  code example from front to back.
- tagged_block_definitions(tag): tagged regions and comments, for pulling
  tagged examples out of commented source.

find_tagged_blocks() searches free-form text (Markdown, rustdoc) instead
of requiring every character to belong to a token.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from docscan.definition import TokenDefinition
from docscan.engine import DEFAULT_FILENAME, ParseState
from docscan.grammars.rust.patterns import TAG_ID_SOURCE, RustGrammar
from docscan.parser import Tokenizer
from docscan.patterns import Match, Pattern, Regex


class RustToken(Enum):
    """Token types produced by the Rust token sets."""

    USE = "use"
    COMMENT = "comment"
    EXTERN_CRATE = "extern_crate"
    MOD = "mod"
    ATTRIBUTE = "attribute"
    TRAIT = "trait"
    FN = "fn"
    FN_CALL = "fn_call"
    MACRO_STMT = "macro_stmt"
    MACRO_INVOCATION = "macro_invocation"
    TYPE = "type"
    TYPE_ALIAS = "type_alias"
    IMPL = "impl"
    LET = "let"
    SPACE = "space"
    TAGGED_BLOCK = "tagged_block"


@dataclass(frozen=True, slots=True)
class ExternCrate:
    """``extern crate <crate> [as <alias>];``."""

    crate: str
    alias: str | None = None

    @property
    def effective_name(self) -> str:
        """Name the crate is referred to by: the alias if present."""
        return self.crate if self.alias is None else self.alias


@dataclass(frozen=True, slots=True)
class TaggedBlock:
    """Contents of a tagged region, with surrounding whitespace trimmed."""

    tag: str
    contents: str


def extern_crate_value(match: Match) -> ExternCrate:
    return ExternCrate(match["crate"], match["alias"])  # type: ignore[arg-type]


def tagged_block_value(match: Match) -> TaggedBlock:
    """Build a TaggedBlock from a tagged_block() match."""
    contents = match["tcb_contents"]
    if contents is None:
        contents = match["tcb_block"][1:-1]  # type: ignore[index]
    return TaggedBlock(match["tag"] or "", contents.strip())


def rust_token_definitions(grammar: RustGrammar | None = None) -> tuple[TokenDefinition, ...]:
    """Ordered token set for Rust items and statements.

    Order decides between definitions that match at the same position:
    ``use`` before comments, ``fn`` definitions before calls, macro
    statements before bare invocations.
    """
    g = grammar if grammar is not None else RustGrammar()
    return (
        TokenDefinition(RustToken.USE, g.use_decl()),
        TokenDefinition(RustToken.COMMENT, g.comment()),
        TokenDefinition(RustToken.EXTERN_CRATE, g.extern_crate(), build=extern_crate_value),
        TokenDefinition(RustToken.MOD, g.mod()),
        TokenDefinition(RustToken.ATTRIBUTE, g.attribute()),
        TokenDefinition(RustToken.TRAIT, g.trait()),
        TokenDefinition(RustToken.FN, g.fn()),
        TokenDefinition(RustToken.FN_CALL, g.fn_call() + g.optional(g.ws, ";")),
        TokenDefinition(RustToken.MACRO_STMT, g.macro_call() + g.ws + ";"),
        TokenDefinition(RustToken.MACRO_INVOCATION, g.macro_call()),
        TokenDefinition(RustToken.TYPE, g.type_defn()),
        TokenDefinition(RustToken.TYPE_ALIAS, g.type_alias()),
        TokenDefinition(RustToken.IMPL, g.impl_()),
        TokenDefinition(RustToken.LET, g.let_decl() + g.ws + ";"),
        TokenDefinition(RustToken.SPACE, g.ws1, discard=True),
    )


def tagged_block_definitions(
    tag: Pattern | str, grammar: RustGrammar | None = None
) -> tuple[TokenDefinition, ...]:
    """Token set yielding TAGGED_BLOCK tokens (value: TaggedBlock) and comments."""
    g = grammar if grammar is not None else RustGrammar()
    return (
        TokenDefinition(RustToken.TAGGED_BLOCK, g.tagged_block(tag), build=tagged_block_value),
        TokenDefinition(RustToken.COMMENT, g.comment()),
        TokenDefinition(RustToken.SPACE, g.ws1, discard=True),
    )


class RustTokenizer(Tokenizer):
    """Tokenizer for Rust code examples."""

    tokens = rust_token_definitions()


class TaggedBlockTokenizer(Tokenizer):
    """Tokenizer collecting tagged blocks of any tag from commented source."""

    tokens = tagged_block_definitions(Regex(TAG_ID_SOURCE))


def extract_tagged_blocks(text: str, tag: Pattern | str, **options: Any) -> list[TaggedBlock]:
    """Tokenize commented source and return the tagged blocks it contains.

    Every character must belong to a tagged block, a comment or whitespace;
    anything else raises GrammarError.
    """
    options.setdefault("filename", DEFAULT_FILENAME)
    tokens = ParseState(text, tagged_block_definitions(tag), **options).run()
    return [t.value for t in tokens if t.type is RustToken.TAGGED_BLOCK]


def find_tagged_blocks(text: str, tag: Pattern | str) -> list[TaggedBlock]:
    """Search free-form text for tagged blocks."""
    pattern = RustGrammar().tagged_block(tag)
    return [tagged_block_value(m) for m in pattern.all_matches(text)]


__all__ = [
    "ExternCrate",
    "RustToken",
    "RustTokenizer",
    "TaggedBlock",
    "TaggedBlockTokenizer",
    "extern_crate_value",
    "extract_tagged_blocks",
    "find_tagged_blocks",
    "rust_token_definitions",
    "tagged_block_definitions",
    "tagged_block_value",
]
