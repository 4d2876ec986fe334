#!/usr/bin/env python3
"""
Command line front end for gofront.

Usage:
    gofront FILE                 # Parse and print the module as JSON
    gofront FILE --tokens        # Print the token stream instead
    gofront FILE --verbose       # Trace tokens and parser decisions
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .lexer import Lexer, LexerError, TokenKind
from .parser import Parser, DEFAULT_LOOKAHEAD, MIN_LOOKAHEAD
from .serialize import to_json


logger = logging.getLogger(__name__)


def dump_tokens(lexer: Lexer) -> int:
    """Print one token per line; stops at the first lexer error."""
    while True:
        try:
            token = lexer.next_token()
        except LexerError as e:
            print(f"{e.location}: {e}", file=sys.stderr)
            return 1

        print(f"{token.location}\t{token}")
        if token.kind == TokenKind.EOF:
            return 0


def run(path: str, lookahead: int = DEFAULT_LOOKAHEAD, tokens: bool = False,
        indent: int = 2) -> int:
    """Process one source file; returns the process exit status."""
    try:
        with open(path, "rb") as f:
            source = f.read()
    except OSError as e:
        print(f"cannot open {path}: {e.strerror}", file=sys.stderr)
        return 2

    lexer = Lexer(source, path)
    if tokens:
        return dump_tokens(lexer)

    module, errors = Parser(lexer, lookahead).parse()

    if errors:
        print("Errors encountered during parsing:")
        for error in errors:
            print(error)
        return 1

    print("Parsing completed successfully")
    print(to_json(module, indent=indent))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gofront",
        description="Parse a source file and print its syntax tree as JSON",
    )
    parser.add_argument("file", help="source file to parse")
    parser.add_argument("--lookahead", type=int, default=DEFAULT_LOOKAHEAD,
                        help="parser lookahead depth (default: %(default)s)")
    parser.add_argument("--tokens", action="store_true",
                        help="print the token stream instead of parsing")
    parser.add_argument("--indent", type=int, default=2,
                        help="JSON indentation (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every token and parser decision")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    if args.lookahead < MIN_LOOKAHEAD:
        parser.error(f"--lookahead must be at least {MIN_LOOKAHEAD}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("parsing %s with lookahead %d", args.file, args.lookahead)

    return run(args.file, args.lookahead, args.tokens, args.indent)


if __name__ == "__main__":
    sys.exit(main())
