"""Patterns describing a subset of Rust.

The grammar is precise enough to find items (functions, traits, impls,
modules, declarations), simple statements, comments and tagged regions in
documentation text. It does not validate the code it recognizes.

Every method builds a new pattern. Generic parameter lists and other
nested groups draw fresh capture names from the grammar's name generator,
so one RustGrammar should be used per grammar build.

Tagged regions come in two shapes:

    // tag: Example
    { ... }                       tagged code block

    // tag: Example {
    ...
    // tag: }                     tagged comment block

"""

from __future__ import annotations

from docscan.patterns import (
    Alternation,
    Balanced,
    Capture,
    Forward,
    GrammarBuilder,
    Pattern,
    Regex,
    Repeat,
    Sequence,
    as_pattern,
)

IDENT_SOURCE = r"[_a-zA-Z][_a-zA-Z0-9]*"
TAG_ID_SOURCE = r"[-a-zA-Z][-.a-zA-Z0-9]*"

# Characters allowed inside a non-nesting block comment body: anything
# but the closing "*/".
BLOCK_COMMENT_CONTENTS = r"(?:[^*/]|\*(?!/)|(?<!\*)/)"
LINE_COMMENT_CONTENTS = r"[^\n]"

DEFAULT_TAG_MARKER = "tag:"


class RustGrammar(GrammarBuilder):
    """Grammar builder for the Rust subset.

    Attributes:
        IDENT: Identifier primitive
        TAG_ID: Tag identifier primitive (``example-1.2``)
        tag_marker: Text introducing a tag inside a comment

    """

    def __init__(self, tag_marker: str = DEFAULT_TAG_MARKER) -> None:
        super().__init__()
        self.tag_marker = tag_marker
        self.IDENT = Regex(IDENT_SOURCE)
        self.TAG_ID = Regex(TAG_ID_SOURCE)
        # Horizontal whitespace; a line comment must still see its newline.
        self.hs = Regex(r"[ \t]*")
        self._pub = self.optional("pub", self.ws1)

    # =========================================================================
    # Paths, generics and bounds
    # =========================================================================

    def generics(self, name: str | None = None) -> Balanced:
        """``<...>`` generic parameter list (nesting)."""
        return self.balanced("<>", name)

    def block(self, name: str | None = "block") -> Balanced:
        """``{...}`` block (nesting)."""
        return self.balanced("{}", name)

    def _path_segment(self) -> Alternation:
        return self.alt(
            self.IDENT,
            self.generics(),
            self.seq(self.IDENT, self.ws, self.generics()),
        )

    def path(self) -> Sequence:
        """``std::collections::HashMap<K, V>``, ``::a::b``, ``!Send``."""
        return self.seq(
            self.optional(Regex(r"[!?]\s*")),
            self.optional("::"),
            self.separated("::", self._path_segment),
        )

    def ident_or_path(self) -> Alternation:
        """Lifetime (``'a``) or path."""
        return self.alt(self.seq("'", self.IDENT), self.path())

    def bounds_list(self) -> Sequence:
        """``Clone + 'a + Iterator<Item = T>``."""
        return self.separated("+", self.ident_or_path)

    def bounded(self, thing: Pattern | str | None = None) -> Sequence:
        """``T: Bound + Other``; ``thing`` defaults to any lifetime or path."""
        subject = self.ident_or_path() if thing is None else as_pattern(thing)
        return self.seq(subject, self.ws, ":", self.ws, self.bounds_list())

    def where_clause(self) -> Sequence:
        """``where T: Clone, U: Debug``."""
        return self.seq("where", self.ws1, self.separated(",", self.bounded))

    # =========================================================================
    # Items
    # =========================================================================

    def item_with_generics(self, keyword: str, name: Pattern | str | None = None) -> Sequence:
        """``[pub] <keyword> <name>[<generics>]``; captures ``<keyword>_name``."""
        item_name = self.IDENT if name is None else as_pattern(name)
        return self.seq(
            self._pub,
            keyword,
            self.ws1,
            Capture(f"{keyword}_name", item_name),
            self.optional(self.ws, self.generics()),
        )

    def fn(self, name: Pattern | str | None = None) -> Sequence:
        """Function definition with body; captures ``fn_name``, ``arguments``, ``block``."""
        return self.seq(
            self.item_with_generics("fn", name),
            self.ws,
            self.balanced("()", "arguments"),
            self.optional(self.ws, "->", self.ws, self.path()),
            self.optional(self.ws, self.where_clause()),
            self.ws,
            self.block(),
        )

    def trait(self, name: Pattern | str | None = None) -> Sequence:
        """Trait definition; captures ``trait_name`` and ``block``."""
        return self.seq(
            self.item_with_generics("trait", name),
            self.optional(self.ws, ":", self.ws, self.bounds_list()),
            self.optional(self.ws, self.where_clause()),
            self.ws,
            self.block(),
        )

    def impl_(self) -> Sequence:
        """``impl<T> Trait for Type where ... { ... }``."""
        return self.seq(
            "impl",
            self.optional(self.generics()),
            self.ws1,
            self.path(),
            self.optional(self.ws1, "for", self.ws1, self.path()),
            self.optional(self.ws1, self.where_clause()),
            self.ws,
            self.block(),
        )

    def extern_crate(self) -> Sequence:
        """``extern crate foo [as bar];``; captures ``crate`` and ``alias``."""
        return self.seq(
            "extern",
            self.ws1,
            "crate",
            self.ws1,
            Capture("crate", self.IDENT),
            self.optional(self.ws1, "as", self.ws1, Capture("alias", self.IDENT)),
            self.ws,
            ";",
        )

    def mod(self) -> Sequence:
        """``[pub] mod name;`` or ``mod name { ... }``; captures ``mod``."""
        return self.seq(
            self._pub,
            "mod",
            self.ws1,
            Capture("mod", self.IDENT),
            self.ws,
            self.alt(self.block(), ";"),
        )

    def ident_as_ident(self) -> Sequence:
        return self.seq(self.IDENT, self.optional(self.ws1, "as", self.ws1, self.IDENT))

    def use_decl(self) -> Sequence:
        """``use a::b;``, ``use a::*;``, ``use a::{b, c as d};``."""
        group = self.seq(
            "{",
            self.ws,
            self.separated(Regex(r"\s*,\s*"), self.ident_as_ident()),
            self.ws,
            "}",
        )
        return self.seq(
            self._pub,
            "use",
            self.ws1,
            self.path(),
            self.optional(self.ws, "::", self.ws, self.alt("*", self.ident_as_ident(), group)),
            self.ws,
            ";",
        )

    def attribute(self) -> Sequence:
        """``#[derive(Debug)]`` or ``#![allow(dead_code)]``."""
        return self.seq("#", self.optional("!"), self.balanced("[]"))

    def struct_or_enum(self) -> Sequence:
        return self.seq(
            self._pub,
            Regex(r"(?:struct|enum)"),
            self.ws1,
            self.IDENT,
            self.optional(self.ws, self.generics()),
            self.optional(self.ws, self.where_clause()),
            self.ws,
            self.block(),
        )

    def newtype(self) -> Sequence:
        """Tuple struct: ``struct Meters(f64);``."""
        return self.seq(
            self._pub,
            "struct",
            self.ws1,
            self.IDENT,
            self.optional(self.ws, self.generics()),
            self.ws,
            self.balanced("()"),
            self.optional(self.ws, self.where_clause()),
            self.ws,
            ";",
        )

    def type_defn(self) -> Alternation:
        return self.alt(self.struct_or_enum(), self.newtype())

    def type_alias(self) -> Sequence:
        """``type Result<T> = std::result::Result<T, Error>;``."""
        return self.seq(
            self._pub,
            "type",
            self.ws1,
            self.IDENT,
            self.optional(self.ws, self.generics()),
            self.ws,
            "=",
            self.ws,
            self.path(),
            self.ws,
            ";",
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def expr(self, name: str | None = None) -> Repeat:
        """Anything up to an unbalanced ``{``, ``}`` or ``;``; blocks nest."""
        return self.many(self.alt(self.block(name or self.fresh_name()), Regex(r"[^{};]")))

    def let_decl(self) -> Sequence:
        """``let [mut] x[: T] = expr`` (without the semicolon)."""
        return self.seq(
            "let",
            self.optional(self.ws1, "mut"),
            self.ws1,
            self.IDENT,
            self.optional(self.ws, ":", self.ws, self.path()),
            self.ws,
            "=",
            self.ws,
            self.expr(),
        )

    def member_access(self) -> Sequence:
        return self.seq(self.IDENT, self.ws, ".", self.ws, self.IDENT)

    def fn_call(self) -> Sequence:
        """``path(args)`` or ``value.method(args)``."""
        return self.seq(
            self.alt(self.path(), self.member_access()),
            self.ws,
            self.balanced("()"),
        )

    def macro_call(self) -> Sequence:
        """``name!(...)``, ``name![...]`` or ``name!{...}``."""
        return self.seq(
            self.IDENT,
            self.ws,
            "!",
            self.ws,
            self.alt(self.balanced("()"), self.balanced("[]"), self.balanced("{}")),
        )

    def loop(self) -> Alternation:
        """``['label:] loop { ... }`` or ``while cond { ... }``."""
        return self.alt(
            self.seq(
                self.optional("'", self.IDENT, self.ws, ":", self.ws),
                "loop",
                self.ws,
                self.block("loop_block"),
            ),
            self.seq("while", self.ws, self.expr(), self.ws, self.block("while_block")),
        )

    def if_chain(self) -> Forward:
        """``if a { } else if b { } else { }``; captures ``ifchain``."""
        chain = Forward("ifchain")
        chain.set(
            Capture(
                "ifchain",
                self.seq(
                    "if",
                    self.ws1,
                    self.expr(),
                    self.ws,
                    self.block(self.fresh_name()),
                    self.optional(
                        self.ws,
                        "else",
                        self.alt(
                            self.seq(self.ws1, chain),
                            self.seq(self.ws, self.block(self.fresh_name())),
                        ),
                    ),
                ),
            )
        )
        return chain

    def match_expr(self) -> Sequence:
        return self.seq("match", self.ws, self.expr(), self.ws, self.block(self.fresh_name()))

    def stmt(self) -> Alternation:
        return self.alt(self.let_decl(), self.expr(), self.loop(), self.if_chain(), self.match_expr())

    # =========================================================================
    # Comments
    # =========================================================================

    def block_comment(self, contents: Pattern | str | None = None) -> Pattern:
        """``/* ... */``; nests unless explicit ``contents`` are given."""
        if contents is None:
            return Balanced("/*", "*/", self.fresh_name())
        return self.seq("/*", as_pattern(contents), "*/")

    def line_comment(self, contents: Pattern | str | None = None) -> Sequence:
        """``// ...`` up to and including the newline (or end of input)."""
        body = Regex(f"{LINE_COMMENT_CONTENTS}*") if contents is None else as_pattern(contents)
        return self.seq("//", body, self.alt("\n", Regex(r"\Z")))

    def comment(self, contents: Pattern | str | None = None) -> Alternation:
        return self.alt(self.block_comment(contents), self.line_comment(contents))

    def inner_doc_comment(self) -> Alternation:
        """Inner doc comment: ``//! ...`` or ``/*! ... */``."""
        return self.alt(
            self.block_comment(Regex(f"!{BLOCK_COMMENT_CONTENTS}*")),
            self.line_comment(Regex(f"!{LINE_COMMENT_CONTENTS}*")),
        )

    def padded_comment(self, *parts: Pattern | str) -> Alternation:
        """Comment holding ``parts`` with optional whitespace around each.

        The whitespace may span lines inside a block comment but not inside
        a line comment, which must still end at its own newline.
        """

        def padded(space: Pattern) -> Sequence:
            items: list[Pattern | str] = [space]
            for part in parts:
                items += [part, space]
            return self.seq(*items)

        return self.alt(self.block_comment(padded(self.ws)), self.line_comment(padded(self.hs)))

    def ellipsis_comment(self) -> Alternation:
        """``// ...`` or ``/* ... */`` standing in for elided code."""
        return self.padded_comment("...")

    # =========================================================================
    # Tagged regions
    # =========================================================================

    def id_tag(self, ident: Pattern | str | None = None) -> Sequence:
        """``id = some-tag``."""
        value = self.TAG_ID if ident is None else as_pattern(ident)
        return self.seq("id", self.ws, "=", self.ws, value)

    def tag_comment(self, tag: Pattern | str) -> Alternation:
        """Comment whose whole content is ``<marker> <tag>``."""
        return self.padded_comment(self.tag_marker, tag)

    def tagged_code_block(self, tag: Pattern | str) -> Sequence:
        """Tag comment followed by a code block; captures ``tag`` and ``tcb_block``."""
        return self.seq(
            self.tag_comment(Capture("tag", as_pattern(tag))),
            self.ws,
            self.block("tcb_block"),
        )

    def tagged_comment_block(self, tag: Pattern | str) -> Sequence:
        """Region between ``<tag> {`` and ``}`` tag comments; captures ``tcb_contents``."""
        start = self.padded_comment(self.tag_marker, Capture("tag", as_pattern(tag)), "{")
        end = self.tag_comment("}")
        contents = self.many(self.alt(Regex(r"[^{}]"), self.block("tcb")))
        return self.seq(start, Capture("tcb_contents", contents), end)

    def tagged_block(self, tag: Pattern | str) -> Alternation:
        """Either kind of tagged region."""
        return self.alt(self.tagged_code_block(tag), self.tagged_comment_block(tag))


__all__ = [
    "BLOCK_COMMENT_CONTENTS",
    "DEFAULT_TAG_MARKER",
    "IDENT_SOURCE",
    "LINE_COMMENT_CONTENTS",
    "TAG_ID_SOURCE",
    "RustGrammar",
]
