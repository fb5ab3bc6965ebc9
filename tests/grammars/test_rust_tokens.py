"""End-to-end tokenizing of Rust code examples and tagged regions."""

import pytest

from docscan import GrammarError, ParseState
from docscan.grammars.rust import (
    ExternCrate,
    RustGrammar,
    RustToken,
    RustTokenizer,
    TaggedBlock,
    TaggedBlockTokenizer,
    extract_tagged_blocks,
    find_tagged_blocks,
    rust_token_definitions,
    tagged_block_definitions,
)
from docscan.grammars.rust.patterns import TAG_ID_SOURCE
from docscan.patterns import Regex

EXAMPLE = """\
extern crate cripes;
use cripes::symbol::Pool;

/// Take ownership of a value, consuming it.
fn consume<T>(v: T) {}

fn main() {
    let pool = Pool::new();
}
"""


def types(tokens: list) -> list[RustToken]:
    return [t.type for t in tokens]


class TestRustTokenizer:
    def test_items(self) -> None:
        tokens = RustTokenizer.parse_string(EXAMPLE)
        assert types(tokens) == [
            RustToken.EXTERN_CRATE,
            RustToken.USE,
            RustToken.COMMENT,
            RustToken.FN,
            RustToken.FN,
        ]

    def test_extern_crate_value(self) -> None:
        tokens = RustTokenizer.parse_string("extern crate foo as bar;")
        assert tokens[0].value == ExternCrate("foo", "bar")
        assert tokens[0].value.effective_name == "bar"
        assert ExternCrate("foo").effective_name == "foo"

    def test_statements(self) -> None:
        text = 'let x = 5;\nprintln!("{}", x);\nfoo(x);\nvec![1];'
        tokens = RustTokenizer.parse_string(text)
        assert types(tokens) == [
            RustToken.LET,
            RustToken.MACRO_STMT,
            RustToken.FN_CALL,
            RustToken.MACRO_STMT,
        ]
        assert [(t.line, t.column) for t in tokens] == [(1, 0), (2, 0), (3, 0), (4, 0)]

    def test_declarations(self) -> None:
        text = (
            "#[derive(Debug)]\n"
            "struct P { x: i32 }\n"
            "impl P { fn new() -> P { P { x: 0 } } }\n"
            "trait T {}\n"
            "mod m;\n"
            "type A = B;\n"
        )
        assert types(RustTokenizer.parse_string(text)) == [
            RustToken.ATTRIBUTE,
            RustToken.TYPE,
            RustToken.IMPL,
            RustToken.TRAIT,
            RustToken.MOD,
            RustToken.TYPE_ALIAS,
        ]

    def test_macro_invocation_without_semicolon(self) -> None:
        tokens = RustTokenizer.parse_string("assert!(ok)")
        assert types(tokens) == [RustToken.MACRO_INVOCATION]

    def test_whitespace_is_discarded(self) -> None:
        tokens = RustTokenizer.parse_string("  fn a() {}  \n")
        assert types(tokens) == [RustToken.FN]
        assert tokens[0].column == 2

    def test_unknown_input(self) -> None:
        with pytest.raises(GrammarError) as exc_info:
            RustTokenizer.parse_string("fn a() {}\n@@@")
        assert str(exc_info.value).startswith("(buffer):2:0: ")

    def test_builds_are_deterministic(self) -> None:
        first = rust_token_definitions(RustGrammar())
        second = rust_token_definitions(RustGrammar())
        assert [repr(d) for d in first] == [repr(d) for d in second]


class TestTaggedBlocks:
    def test_single_tagged_comment_block(self) -> None:
        text = "// tag: Example {\nfn demo() {}\n// tag: }\n"
        tokens = ParseState(text, tagged_block_definitions("Example")).run()
        assert len(tokens) == 1
        assert tokens[0].type is RustToken.TAGGED_BLOCK
        assert tokens[0].value.contents == "fn demo() {}"

    def test_extract_with_comments(self) -> None:
        text = (
            "// intro\n"
            "// tag: X {\n"
            "let a = 1;\n"
            "// tag: }\n"
            "/* trailing */\n"
            "// tag: X\n"
            "{ let b = 2; }\n"
        )
        assert extract_tagged_blocks(text, "X") == [
            TaggedBlock("X", "let a = 1;"),
            TaggedBlock("X", "let b = 2;"),
        ]

    def test_extract_rejects_stray_code(self) -> None:
        with pytest.raises(GrammarError):
            extract_tagged_blocks("// tag: X\n{ a }\nfn b() {}", "X")

    def test_find_in_free_text(self) -> None:
        text = (
            "Intro text\n"
            "```rust\n"
            "// tag: A {\n"
            "let a = 1;\n"
            "// tag: }\n"
            "```\n"
            "More // tag: B\n"
            "{ b }\n"
        )
        assert find_tagged_blocks(text, Regex(TAG_ID_SOURCE)) == [
            TaggedBlock("A", "let a = 1;"),
            TaggedBlock("B", "b"),
        ]
        assert find_tagged_blocks(text, "B") == [TaggedBlock("B", "b")]

    def test_find_nothing(self) -> None:
        assert find_tagged_blocks("no tags here", "A") == []

    def test_tagged_block_tokenizer_collects_every_tag(self) -> None:
        text = "// tag: one\n{ a }\n// tag: two-2 {\nb\n// tag: }\n"
        tokens = TaggedBlockTokenizer.parse_string(text)
        assert [t.value for t in tokens] == [TaggedBlock("one", "a"), TaggedBlock("two-2", "b")]
