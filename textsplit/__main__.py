"""
Command dispatcher: python -m textsplit <command> [args]
"""

import sys

from textsplit.logging_config import get_logger, setup_logging


logger = get_logger(__name__)

COMMANDS = {
    "chunk": "Split input files into chunks",
    "languages": "List preset separator tables",
    "help": "Show this help message",
}

EXAMPLES = [
    "python -m textsplit chunk --input notes.md --size 1000 --overlap 200",
    "python -m textsplit chunk --input main.py --language python --output outputs/chunks/main.json",
    "python -m textsplit chunk --input corpus.jsonl --strategy token --size 256 --overlap 32",
    "python -m textsplit languages",
]


def main():
    """Run the command named by the first argument."""
    setup_logging(log_level="INFO")

    if len(sys.argv) < 2:
        print_help()
        return

    command = sys.argv[1]
    # Subcommands parse sys.argv themselves and must not see the command name
    sys.argv = [sys.argv[0]] + sys.argv[2:]

    if command == "chunk":
        from textsplit.cli.chunk import main as chunk_main

        chunk_main()
    elif command == "languages":
        print_languages()
    elif command in ("help", "-h", "--help"):
        print_help()
    else:
        logger.error(f"Unknown command: {command}")
        print_help()
        sys.exit(1)


def print_languages():
    """Print each preset separator table with its leading markers."""
    from textsplit.chunk import SEPARATORS_BY_LANGUAGE

    print("Preset separator tables:")
    for language, separators in SEPARATORS_BY_LANGUAGE.items():
        leading = ", ".join(repr(s) for s in separators[:3])
        print(f"  {language:<10} {len(separators):>2} separators ({leading}, ...)")


def print_help():
    print("textsplit - Size-bounded, overlapping text chunks with source positions")
    print()
    print("Usage:")
    print("  python -m textsplit <command> [options]")
    print()
    print("Available commands:")
    for command, description in COMMANDS.items():
        print(f"  {command:<11} {description}")
    print()
    print("Examples:")
    for example in EXAMPLES:
        print(f"  {example}")
    print()
    print("For command-specific help:")
    print("  python -m textsplit chunk --help")


if __name__ == "__main__":
    main()
