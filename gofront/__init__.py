"""
gofront

Lexer and recursive descent parser for a small, statically typed, C-like
source language. Produces an immutable AST and a list of diagnostics; type
checking and code generation are left to later stages.

Architecture:
    gofront/
    ├── lexer/           # Tokenization
    ├── parser/          # Lookahead buffer, grammar, AST
    ├── serialize.py     # AST -> JSON-ready dicts
    └── cli.py           # Command line entry point
"""

__version__ = "0.1.0"

from .lexer import Lexer
from .parser import Parser, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
]
