from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser
from monkey.monkey_token import TokenType

PROMPT = ">> "


def print_parser_errors(errors: list[str]) -> None:
    print("[error] >>> parser errors:")
    for msg in errors:
        print(f"\t{msg}")


def print_tokens(src: str) -> None:
    for tok in Lexer.from_source(src):
        if tok.type == TokenType.EOF:
            break
        print(f"[token] >>> {tok.type.name:<12} {tok.literal!r}")


def start_repl(verbose: bool = False) -> None:
    """Read a line, parse it, print the canonical rendering or the diagnostics."""
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            line = input(PROMPT)
            src = line.strip()
            if not src:
                continue
            if src in ("exit", "quit"):
                print("Exiting Monkey REPL.")
                return
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            if verbose:
                print_tokens(src)

            parser = Parser(Lexer.from_source(src))
            program = parser.parse_program()

            if parser.errors:
                print_parser_errors(parser.errors)
                continue

            print(program)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Monkey REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
