"""Rust-subset grammar for locating items, comments and tagged regions.

Usage:
    >>> from docscan.grammars.rust import RustTokenizer
    >>> [t.type.name for t in RustTokenizer.parse_string("extern crate a as b; fn f() {}")]
    ['EXTERN_CRATE', 'FN']

"""

from docscan.grammars.rust.patterns import RustGrammar
from docscan.grammars.rust.tokens import (
    ExternCrate,
    RustToken,
    RustTokenizer,
    TaggedBlock,
    TaggedBlockTokenizer,
    extract_tagged_blocks,
    find_tagged_blocks,
    rust_token_definitions,
    tagged_block_definitions,
)

__all__ = [
    "ExternCrate",
    "RustGrammar",
    "RustToken",
    "RustTokenizer",
    "TaggedBlock",
    "TaggedBlockTokenizer",
    "extract_tagged_blocks",
    "find_tagged_blocks",
    "rust_token_definitions",
    "tagged_block_definitions",
]
