"""Grammars built on the docscan pattern library.

grammars/
├── __init__.py
└── rust/
    ├── patterns.py      # RustGrammar (pattern builder)
    └── tokens.py        # Token sets, RustTokenizer, tagged-block helpers

"""
