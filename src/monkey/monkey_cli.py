"""
Monkey CLI Entrypoint.

This module provides the command-line interface for the Monkey front end.
It lexes and parses source code and prints the result; it does not evaluate.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the canonical rendering of the parsed program.
    - Dump the token stream or the AST as JSON.
    - Report every parser diagnostic and exit non-zero when there are any.
    - Launch an interactive REPL.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "add(1, 2)" --json
    monkey --repl --verbose

Functions:
    run_monkey(source: str, is_string: bool = False, tokens: bool = False,
               as_json: bool = False, strict: bool = False) -> int:
        Executes the full pipeline (lex → parse → output) and returns the exit status.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import ParseError, Parser, parse
from monkey.monkey_repl import print_parser_errors, print_tokens


def run_monkey(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
    strict: bool = False,
) -> int:
    """
    Run the Monkey front end over a file or a source string.

    Args:
        source (str): Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, prints the token stream before the parse result.
        as_json (bool): If True, prints the AST as JSON instead of its rendering.
        strict (bool): If True, diagnostics are raised as `ParseError` instead of printed.

    Returns:
        int: 0 if parsing produced no diagnostics, 1 otherwise.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
        ParseError: If `strict` is True and parsing produced diagnostics.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Optional token dump
    if tokens:
        print_tokens(source)

    # 3. Parsing
    if strict:
        program = parse(source, strict=True)
        errors: list[str] = []
    else:
        parser = Parser(Lexer.from_source(source))
        program = parser.parse_program()
        errors = parser.errors

    # 4. Output result
    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program)

    if errors:
        print_parser_errors(errors)
        return 1
    return 0


def main() -> None:
    """
    Entry point for the Monkey CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified,
    otherwise parses the given source and exits with the status of `run_monkey`.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-t`, `--tokens`: Print the token stream.
        - `-j`, `--json`: Print the AST as JSON.
        - `--strict`: Fail on the first parse with diagnostics.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Print tokens for every REPL line.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from monkey.monkey_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-t", "--tokens", action="store_true", help="Print the token stream"
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print AST as JSON"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Raise on parser diagnostics instead of listing them",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        status = run_monkey(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            as_json=args.as_json,
            strict=args.strict,
        )
    except ParseError as e:
        print_parser_errors(e.errors)
        status = 1
    except (OSError, ValueError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        status = 2
    sys.exit(status)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
