"""
Letter CLI Entrypoint.

Command-line driver around the tokenizer and parser. It takes Letter source
text, prints its token stream and/or its AST as JSON, and reports the first
lexical or syntax error.

Features:
    - Source is given inline, or read from standard input when omitted.
    - Dump every token, one per line (`--tokens`).
    - Print the AST as indented JSON (skip with `--no-ast`).
    - Debug logging of the lex/parse steps (`--verbose`).

Example usage:
    letter "let x = 1 + 2;"
    letter --tokens --no-ast "X + 5 > 10;"
    echo "p.calc();" | letter --indent 0

Functions:
    run_letter(source: str, tokens: bool = False, ast: bool = True, indent: int | None = 2) -> None:
        Lexes and/or parses `source` and prints the requested views.

    main(argv: list[str] | None = None) -> None:
        Parses CLI arguments, runs `run_letter` and maps errors to exit status 1.
"""

import argparse
import logging
import sys

from letter.letter_ast import to_json
from letter.letter_lexer import tokenize
from letter.letter_parser import parse

logger = logging.getLogger(__name__)


def run_letter(
    source: str,
    tokens: bool = False,
    ast: bool = True,
    indent: int | None = 2,
) -> None:
    """
    Run the Letter front end over `source` and print the results.

    Args:
        source (str): Letter source code.
        tokens (bool): If True, print each token on its own line first. Defaults to False.
        ast (bool): If True, print the parsed program as JSON. Defaults to True.
        indent (int | None): JSON indentation; None or 0 prints one line. Defaults to 2.

    Raises:
        SyntaxError: On the first lexical or syntax error (`LexicalError` included).
    """
    if tokens:
        for tok in tokenize(source):
            print(tok)

    if ast:
        program = parse(source)
        logger.debug("program has %d statements", len(program.body))
        print(to_json(program, indent=indent or None))


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the Letter CLI.

    Supported flags:
        - `source`: Letter code to process; read from stdin when omitted.
        - `-t`, `--tokens`: Print the token stream.
        - `--no-ast`: Do not print the AST.
        - `-i`, `--indent`: JSON indentation (default 2, 0 for a single line).
        - `-v`, `--verbose`: Enable debug logging.

    Exits with status 1 after printing the error when the source does not
    tokenize or parse.
    """
    parser = argparse.ArgumentParser(
        prog="letter", description="Tokenize and parse Letter source code."
    )
    parser.add_argument(
        "source", nargs="?", help="Letter source code (default: read stdin)"
    )
    parser.add_argument(
        "-t", "--tokens", action="store_true", help="Print the token stream"
    )
    parser.add_argument(
        "--no-ast", dest="ast", action="store_false", help="Do not print the AST"
    )
    parser.add_argument(
        "-i",
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2, 0 for one line)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = args.source if args.source is not None else sys.stdin.read()

    try:
        run_letter(source, tokens=args.tokens, ast=args.ast, indent=args.indent)
    except SyntaxError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
