"""
Command-line interface for text chunking operations.

Usage:
    python -m textsplit chunk --input notes.md --strategy recursive --size 1000 --overlap 200
    python -m textsplit chunk --input main.py --strategy recursive --language python
    python -m textsplit chunk --input corpus.jsonl --strategy token --size 256 --overlap 32
"""

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Any

from tqdm import tqdm

from textsplit.chunk import (
    SUPPORTED_LANGUAGES,
    CharacterTextSplitter,
    ChunkHeaderOptions,
    RecursiveCharacterTextSplitter,
    TextSplitter,
    TokenTextSplitter,
    analyze_chunks,
    find_oversized_chunks,
    preview_chunks,
)
from textsplit.config import get_config
from textsplit.data import Document, DocumentLoader
from textsplit.exceptions import ChunkingError, ConfigurationError, DatasetError, ValidationError
from textsplit.logging_config import get_logger, setup_logging

from .common import print_summary_stats, save_json_output, setup_output_dir


logger = get_logger(__name__)

STRATEGIES = ["recursive", "character", "token"]


def build_splitter(
    strategy: str,
    chunk_size: int,
    chunk_overlap: int,
    language: str | None = None,
    separator: str = "\n\n",
    keep_separator: bool | None = None,
    encoding_name: str = "gpt2",
) -> TextSplitter:
    """
    Create the splitter for a strategy.

    Args:
        strategy: One of 'recursive', 'character', 'token'
        chunk_size: Target chunk size (characters, or tokens for 'token')
        chunk_overlap: Overlap carried between chunks (same unit)
        language: Preset separator table for the recursive strategy
        separator: Literal separator for the character strategy
        keep_separator: Override the strategy's default separator handling
        encoding_name: tiktoken encoding for the token strategy

    Returns:
        Configured splitter

    Raises:
        ConfigurationError: If parameters are invalid or the language is unknown
    """
    common = {"chunk_size": chunk_size, "chunk_overlap": chunk_overlap}
    if keep_separator is not None:
        common["keep_separator"] = keep_separator

    if strategy == "recursive":
        if language:
            return RecursiveCharacterTextSplitter.from_language(language, **common)
        return RecursiveCharacterTextSplitter(**common)
    elif strategy == "character":
        return CharacterTextSplitter(separator=separator, **common)
    elif strategy == "token":
        return TokenTextSplitter(encoding_name=encoding_name, **common)
    else:
        raise ConfigurationError(
            f"Unknown chunking strategy: {strategy}. Available strategies: {', '.join(STRATEGIES)}"
        )


def load_inputs(input_paths: list[str]) -> list[Document]:
    """Load every input path, with a progress bar when there are several."""
    loader = DocumentLoader()
    documents = []
    paths_progress = tqdm(
        input_paths,
        desc="Loading inputs",
        unit="file",
        disable=len(input_paths) < 2,
    )
    for path in paths_progress:
        documents.extend(loader.load_path(path))
    logger.info(f"Loaded {len(documents)} documents from {len(input_paths)} input(s)")
    return documents


def chunk_documents(
    documents: list[Document],
    splitter: TextSplitter,
    header_options: ChunkHeaderOptions | None = None,
) -> list[Document]:
    """Run the splitter over documents from synchronous code."""
    return asyncio.run(splitter.split_documents(documents, header_options))


def chunk_inputs(
    input_paths: list[str],
    splitter: TextSplitter,
    strategy: str,
    header_options: ChunkHeaderOptions | None = None,
    output_path: str | None = None,
    preview: bool = False,
) -> dict[str, Any]:
    """
    CLI wrapper for chunking input files with progress printing and file I/O.

    Args:
        input_paths: Files to chunk
        splitter: Configured splitter
        strategy: Strategy name, recorded in the output
        header_options: Chunk header prefixes
        output_path: Path to save chunked results (JSON)
        preview: Whether to show chunk previews

    Returns:
        Dictionary with chunks, statistics and parameters
    """
    # Record the command for reproducibility
    argv_copy = sys.argv.copy()
    if argv_copy and argv_copy[0].endswith("__main__.py"):
        argv_copy[0] = "python -m textsplit"
    command_run = " ".join(argv_copy)

    documents = load_inputs(input_paths)
    chunks = chunk_documents(documents, splitter, header_options)

    texts = [chunk.page_content for chunk in chunks]
    if header_options and (header_options.chunk_header or header_options.append_chunk_overlap_header):
        # Statistics and size checks describe chunk bodies, not their headers
        texts = [chunk.page_content for chunk in chunk_documents(documents, splitter)]
    stats = analyze_chunks(texts)
    stats["num_documents"] = len(documents)
    if strategy != "token":
        stats["oversized_chunks"] = len(find_oversized_chunks(texts, splitter.chunk_size))
    print_summary_stats(stats)

    if preview and texts:
        for prev in preview_chunks(texts[:3]):
            logger.info(f"Preview: {prev}")
        if len(texts) > 3:
            logger.info(f"... and {len(texts) - 3} more chunks")

    output_data = {
        "strategy": strategy,
        "parameters": {
            "chunk_size": splitter.chunk_size,
            "chunk_overlap": splitter.chunk_overlap,
            "keep_separator": splitter.keep_separator,
        },
        "inputs": list(input_paths),
        "stats": stats,
        "chunks": [chunk.to_dict() for chunk in chunks],
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        "command_run": command_run,
    }

    if output_path:
        save_json_output(output_data, output_path)

    return output_data


def default_output_path(input_paths: list[str], strategy: str, chunk_size: int) -> str:
    """Output file under outputs_dir/chunks, named after the first input; nothing is created."""
    output_dir = get_config().outputs_dir / "chunks"
    name = Path(input_paths[0]).stem
    if len(input_paths) > 1:
        name += f"_and_{len(input_paths) - 1}_more"
    return str(output_dir / f"{name}_{strategy}_{chunk_size}.json")


def _print_strategy_info(strategy: str, splitter: TextSplitter, language: str | None) -> None:
    """Log chunking strategy information."""
    unit = "tokens" if strategy == "token" else "characters"
    logger.info(f"Chunking strategy: {strategy}")
    logger.info(f"Chunk size: {splitter.chunk_size} {unit}, overlap: {splitter.chunk_overlap} {unit}")
    if language:
        logger.info(f"Separator table: {language}")
    elif isinstance(splitter, CharacterTextSplitter):
        logger.info(f"Separator: {repr(splitter.separator)}")


def main() -> None:
    """Main entry point for chunking CLI."""
    # Parse args early to get verbose flag for logging setup
    verbose = "--verbose" in sys.argv or "-v" in sys.argv
    setup_logging(log_level=get_config().log_level, verbose=verbose)

    if "--list-languages" in sys.argv:
        logger.info("Available languages:")
        for language in SUPPORTED_LANGUAGES:
            logger.info(f"  - {language}")
        return

    config = get_config()

    parser = argparse.ArgumentParser(
        description="Split documents into size-bounded, overlapping chunks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List preset separator tables
  python -m textsplit chunk --list-languages

  # Recursive chunking with default separators
  python -m textsplit chunk --input notes.md --size 1000 --overlap 200

  # Recursive chunking of source code
  python -m textsplit chunk --input main.py --language python --size 500 --overlap 50

  # Single separator, with headers on every chunk
  python -m textsplit chunk --input notes.txt --strategy character --separator "\\n" \\
    --chunk-header "SOURCE: notes\\n" --append-overlap-header

  # Token windows
  python -m textsplit chunk --input corpus.jsonl --strategy token --size 256 --overlap 32 \\
    --output outputs/chunks/corpus.json --preview
        """,
    )

    parser.add_argument(
        "--input",
        nargs="+",
        required=True,
        help="Input files (.txt/.md or any text, .json, .jsonl)",
    )

    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default="recursive",
        help="Splitting strategy (default: recursive)",
    )

    parser.add_argument(
        "--size",
        type=int,
        default=config.default_chunk_size,
        help=f"Target chunk size (default: {config.default_chunk_size})",
    )

    parser.add_argument(
        "--overlap",
        type=int,
        default=config.default_chunk_overlap,
        help=f"Chunk overlap (default: {config.default_chunk_overlap})",
    )

    parser.add_argument(
        "--language",
        choices=SUPPORTED_LANGUAGES,
        help="Preset separator table (recursive strategy only)",
    )

    parser.add_argument(
        "--separator",
        default="\n\n",
        help="Separator for the character strategy (escape sequences allowed, default: blank line)",
    )

    parser.add_argument(
        "--keep-separator",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep separators at the start of the following chunk",
    )

    parser.add_argument(
        "--encoding",
        default=config.default_encoding_name,
        help=f"tiktoken encoding for the token strategy (default: {config.default_encoding_name})",
    )

    parser.add_argument(
        "--chunk-header",
        default="",
        help="Text prepended to every chunk",
    )

    parser.add_argument(
        "--overlap-header",
        default="(cont'd) ",
        help="Text prepended to continuation chunks when --append-overlap-header is set",
    )

    parser.add_argument(
        "--append-overlap-header",
        action="store_true",
        help="Prepend the overlap header to every chunk after the first of a document",
    )

    parser.add_argument(
        "--output",
        help="Output file path (JSON format)",
    )

    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show chunk previews",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging with timestamps and module names",
    )

    parser.add_argument(
        "--log-file",
        help="Also write log records to this file",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be processed without actually doing it",
    )

    args = parser.parse_args()

    if args.language and args.strategy != "recursive":
        parser.error("--language only applies to the recursive strategy")

    if args.log_file:
        setup_logging(log_level=config.log_level, log_file=Path(args.log_file), verbose=args.verbose)

    separator = _unescape(args.separator)
    chunk_header = _unescape(args.chunk_header)
    overlap_header = _unescape(args.overlap_header)

    try:
        splitter = build_splitter(
            strategy=args.strategy,
            chunk_size=args.size,
            chunk_overlap=args.overlap,
            language=args.language,
            separator=separator,
            keep_separator=args.keep_separator,
            encoding_name=args.encoding,
        )
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        logger.info("Check --size, --overlap and --language")
        sys.exit(1)

    _print_strategy_info(args.strategy, splitter, args.language)

    if not args.output:
        args.output = default_output_path(args.input, args.strategy, args.size)

    if args.dry_run:
        logger.info("🔍 DRY RUN MODE - No actual processing will be performed")
        logger.info(f"📋 Would process {len(args.input)} input(s): {', '.join(args.input[:5])}"
                    f"{'...' if len(args.input) > 5 else ''}")
        if args.output:
            logger.info(f"💾 Would save results to: {args.output}")
        logger.info("✨ Dry run completed - no files were modified")
        return

    setup_output_dir(args.output)

    header_options = ChunkHeaderOptions(
        chunk_header=chunk_header,
        chunk_overlap_header=overlap_header,
        append_chunk_overlap_header=args.append_overlap_header,
    )

    try:
        results = chunk_inputs(
            input_paths=args.input,
            splitter=splitter,
            strategy=args.strategy,
            header_options=header_options,
            output_path=args.output,
            preview=args.preview,
        )
        logger.info(f"Chunking completed: {results['stats']['num_chunks']} chunks")

    except DatasetError as e:
        logger.error(f"Input error: {e}")
        logger.info("Check that the input files exist and are UTF-8 text, JSON or JSON Lines")
        sys.exit(1)
    except (ChunkingError, ValidationError) as e:
        logger.error(f"Chunking error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Chunking interrupted by user")
        sys.exit(1)


_ESCAPES = {"\\n": "\n", "\\t": "\t", "\\r": "\r"}


def _unescape(value: str) -> str:
    """Turn shell-typed \\n, \\t and \\r into real characters."""
    for escaped, char in _ESCAPES.items():
        value = value.replace(escaped, char)
    return value


if __name__ == "__main__":
    main()
