#!/usr/bin/env python3
"""
Tests for the chunk CLI.
"""

import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from textsplit.chunk import (
    CharacterTextSplitter,
    ChunkHeaderOptions,
    RecursiveCharacterTextSplitter,
    TokenTextSplitter,
    get_separators_for_language,
)
from textsplit.cli.chunk import _unescape, build_splitter, chunk_inputs, default_output_path, load_inputs, main
from textsplit.config import Config
from textsplit.exceptions import ConfigurationError


class TestBuildSplitter(unittest.TestCase):
    """Test cases for strategy selection."""

    def test_recursive(self):
        splitter = build_splitter("recursive", 100, 10)

        self.assertIsInstance(splitter, RecursiveCharacterTextSplitter)
        self.assertTrue(splitter.keep_separator)
        self.assertEqual((splitter.chunk_size, splitter.chunk_overlap), (100, 10))

    def test_recursive_with_language(self):
        splitter = build_splitter("recursive", 100, 10, language="go")

        self.assertEqual(splitter.separators, get_separators_for_language("go"))

    def test_character(self):
        splitter = build_splitter("character", 100, 10, separator="\n", keep_separator=True)

        self.assertIsInstance(splitter, CharacterTextSplitter)
        self.assertEqual(splitter.separator, "\n")
        self.assertTrue(splitter.keep_separator)

    def test_token(self):
        splitter = build_splitter("token", 100, 10, encoding_name="cl100k_base")

        self.assertIsInstance(splitter, TokenTextSplitter)
        self.assertEqual(splitter.encoding_name, "cl100k_base")

    def test_unknown_strategy(self):
        with self.assertRaises(ConfigurationError) as cm:
            build_splitter("semantic", 100, 10)

        self.assertIn("Unknown chunking strategy: semantic", str(cm.exception))

    def test_invalid_overlap(self):
        with self.assertRaises(ConfigurationError):
            build_splitter("recursive", 100, 100)

    def test_default_output_path(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config = Config(outputs_dir=Path(temp_dir))
            with patch("textsplit.cli.chunk.get_config", return_value=config):
                single = default_output_path(["data/notes.md"], "recursive", 500)
                several = default_output_path(["a.txt", "b.txt", "c.txt"], "token", 256)

            self.assertEqual(single, str(Path(temp_dir) / "chunks" / "notes_recursive_500.json"))
            self.assertEqual(several, str(Path(temp_dir) / "chunks" / "a_and_2_more_token_256.json"))
            self.assertFalse((Path(temp_dir) / "chunks").exists())

    def test_unescape(self):
        self.assertEqual(_unescape("SOURCE\\n---\\t"), "SOURCE\n---\t")
        self.assertEqual(_unescape("café"), "café")


class TestChunkInputs(unittest.TestCase):
    """Test cases for chunking files end to end."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.input_path = self.temp_path / "words.txt"
        self.input_path.write_text("foo bar\nbaz", encoding="utf-8")

    def tearDown(self):
        """Clean up test fixtures."""
        self.temp_dir.cleanup()

    @patch("builtins.print")
    def test_chunk_inputs(self, mock_print):
        """Test chunks, stats and parameters in the result."""
        splitter = CharacterTextSplitter(separator=" ", chunk_size=7, chunk_overlap=0)

        result = chunk_inputs([str(self.input_path)], splitter, "character")

        self.assertEqual([c["content"] for c in result["chunks"]], ["foo", "bar\nbaz"])
        self.assertEqual(
            [c["metadata"]["loc"]["lines"] for c in result["chunks"]],
            [{"from": 1, "to": 1}, {"from": 1, "to": 2}],
        )
        self.assertEqual(result["chunks"][0]["metadata"]["source"], str(self.input_path))
        self.assertEqual(result["stats"]["num_chunks"], 2)
        self.assertEqual(result["stats"]["num_documents"], 1)
        self.assertEqual(result["stats"]["oversized_chunks"], 0)
        self.assertEqual(
            result["parameters"], {"chunk_size": 7, "chunk_overlap": 0, "keep_separator": False}
        )
        self.assertEqual(result["strategy"], "character")
        self.assertIn("timestamp", result)
        self.assertIn("command_run", result)

    @patch("builtins.print")
    def test_chunk_inputs_with_headers_and_output(self, mock_print):
        """Test that headers are applied and results are written as JSON."""
        splitter = CharacterTextSplitter(separator=" ", chunk_size=7, chunk_overlap=0)
        options = ChunkHeaderOptions(chunk_header="[words] ", append_chunk_overlap_header=True)
        output_path = self.temp_path / "out" / "chunks.json"

        result = chunk_inputs([str(self.input_path)], splitter, "character", options, str(output_path))

        with open(output_path, encoding="utf-8") as f:
            saved = json.load(f)
        self.assertEqual(
            [c["content"] for c in saved["chunks"]],
            ["[words] foo", "[words] (cont'd) bar\nbaz"],
        )
        # Headers are not counted against chunk_size
        self.assertEqual(result["stats"]["oversized_chunks"], 0)
        self.assertEqual(result["stats"]["max_chunk_size"], 7)

    @patch("builtins.print")
    def test_token_strategy_skips_oversized_count(self, mock_print):
        """Test that character-based oversize counts are not reported for token windows."""

        class CharTokenizer:
            def encode(self, text, **kwargs):
                return [ord(c) for c in text]

            def decode(self, tokens):
                return "".join(chr(t) for t in tokens)

        splitter = TokenTextSplitter(chunk_size=4, chunk_overlap=0, tokenizer_factory=lambda name: CharTokenizer())

        result = chunk_inputs([str(self.input_path)], splitter, "token")

        self.assertNotIn("oversized_chunks", result["stats"])
        self.assertEqual([c["content"] for c in result["chunks"]], ["foo ", "bar\n", "baz"])


class TestProgressBars(unittest.TestCase):
    """Test cases for tqdm progress bars."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.paths = []
        for i in range(3):
            path = Path(self.temp_dir.name) / f"doc{i}.txt"
            path.write_text(f"document {i}", encoding="utf-8")
            self.paths.append(str(path))

    def tearDown(self):
        self.temp_dir.cleanup()

    @patch("textsplit.cli.chunk.tqdm")
    def test_progress_bar_enabled_for_multiple_inputs(self, mock_tqdm):
        mock_tqdm.side_effect = lambda iterable, **kwargs: iterable

        docs = load_inputs(self.paths)

        self.assertEqual(len(docs), 3)
        self.assertFalse(mock_tqdm.call_args.kwargs["disable"])

    @patch("textsplit.cli.chunk.tqdm")
    def test_progress_bar_disabled_for_single_input(self, mock_tqdm):
        mock_tqdm.side_effect = lambda iterable, **kwargs: iterable

        load_inputs(self.paths[:1])

        self.assertTrue(mock_tqdm.call_args.kwargs["disable"])


class TestCLIMain(unittest.TestCase):
    """Test cases for the chunk command's main()."""

    def setUp(self):
        """Set up test fixtures."""
        self.original_argv = sys.argv.copy()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.input_path = self.temp_path / "words.txt"
        self.input_path.write_text("foo bar baz 123", encoding="utf-8")
        self.config = Config(outputs_dir=self.temp_path / "outputs")
        for target in ("textsplit.cli.chunk.get_config", "textsplit.cli.common.get_config"):
            config_patcher = patch(target, return_value=self.config)
            config_patcher.start()
            self.addCleanup(config_patcher.stop)

    def tearDown(self):
        """Clean up test fixtures."""
        sys.argv = self.original_argv
        self.temp_dir.cleanup()
        logging.getLogger().handlers.clear()

    @patch("builtins.print")
    def test_main_successful_run(self, mock_print):
        output_path = self.temp_path / "chunks.json"
        sys.argv = [
            "test", "--input", str(self.input_path),
            "--strategy", "character", "--separator", " ",
            "--size", "7", "--overlap", "3",
            "--output", str(output_path),
        ]

        main()

        with open(output_path, encoding="utf-8") as f:
            saved = json.load(f)
        self.assertEqual([c["content"] for c in saved["chunks"]], ["foo bar", "bar baz", "baz 123"])
        self.assertEqual(saved["parameters"]["chunk_overlap"], 3)

    @patch("builtins.print")
    def test_main_default_output_path(self, mock_print):
        """Test that results go to outputs_dir/chunks when --output is omitted."""
        sys.argv = [
            "test", "--input", str(self.input_path),
            "--strategy", "character", "--separator", " ", "--size", "7", "--overlap", "0",
        ]

        main()

        expected = self.temp_path / "outputs" / "chunks" / "words_character_7.json"
        with open(expected, encoding="utf-8") as f:
            saved = json.load(f)
        self.assertEqual([c["content"] for c in saved["chunks"]], ["foo bar", "baz 123"])

    @patch("builtins.print")
    def test_main_log_file(self, mock_print):
        """Test that --log-file also writes records to a file."""
        log_file = self.temp_path / "logs" / "chunk.log"
        sys.argv = [
            "test", "--input", str(self.input_path), "--size", "10", "--overlap", "0",
            "--output", str(self.temp_path / "out.json"), "--log-file", str(log_file),
        ]

        main()
        for handler in logging.getLogger().handlers:
            handler.flush()

        with open(log_file, encoding="utf-8") as f:
            self.assertIn("Chunking completed", f.read())
        for handler in logging.getLogger().handlers:
            handler.close()

    def test_main_missing_required_args(self):
        sys.argv = ["test"]

        with patch("sys.stderr"):
            with self.assertRaises(SystemExit) as cm:
                main()

        self.assertEqual(cm.exception.code, 2)

    def test_main_language_requires_recursive(self):
        sys.argv = ["test", "--input", str(self.input_path), "--strategy", "token", "--language", "python"]

        with patch("sys.stderr"):
            with self.assertRaises(SystemExit) as cm:
                main()

        self.assertEqual(cm.exception.code, 2)

    @patch("textsplit.cli.chunk.logger")
    def test_main_invalid_overlap(self, mock_logger):
        sys.argv = ["test", "--input", str(self.input_path), "--size", "10", "--overlap", "10"]

        with self.assertRaises(SystemExit) as cm:
            main()

        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Configuration error", mock_logger.error.call_args[0][0])

    @patch("textsplit.cli.chunk.logger")
    def test_main_missing_input(self, mock_logger):
        sys.argv = ["test", "--input", str(self.temp_path / "missing.txt"), "--size", "10", "--overlap", "0"]

        with self.assertRaises(SystemExit) as cm:
            main()

        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Input error", mock_logger.error.call_args[0][0])

    @patch("textsplit.cli.chunk.logger")
    def test_dry_run_does_not_process(self, mock_logger):
        sys.argv = [
            "test", "--input", str(self.input_path), "--size", "10", "--overlap", "0",
            "--output", "never.json", "--dry-run",
        ]

        with patch("textsplit.cli.chunk.chunk_inputs") as mock_chunk:
            main()

        mock_chunk.assert_not_called()
        mock_logger.info.assert_any_call("💾 Would save results to: never.json")
        mock_logger.info.assert_any_call("✨ Dry run completed - no files were modified")

    @patch("textsplit.cli.chunk.logger")
    def test_dry_run_creates_no_directories(self, mock_logger):
        """Test that a dry run with the default output path leaves the disk untouched."""
        sys.argv = ["test", "--input", str(self.input_path), "--size", "10", "--overlap", "0", "--dry-run"]

        main()

        expected = self.temp_path / "outputs" / "chunks" / "words_recursive_10.json"
        mock_logger.info.assert_any_call(f"💾 Would save results to: {expected}")
        self.assertFalse((self.temp_path / "outputs").exists())

    @patch("textsplit.cli.chunk.setup_logging")
    def test_verbose_flag_enables_verbose_logging(self, mock_setup_logging):
        sys.argv = ["test", "--verbose", "--list-languages"]

        with patch("textsplit.cli.chunk.logger"):
            main()

        mock_setup_logging.assert_called_with(log_level="INFO", verbose=True)

    @patch("textsplit.cli.chunk.setup_logging")
    def test_no_verbose_flag_uses_normal_logging(self, mock_setup_logging):
        sys.argv = ["test", "--list-languages"]

        with patch("textsplit.cli.chunk.logger") as mock_logger:
            main()

        mock_setup_logging.assert_called_with(log_level="INFO", verbose=False)
        mock_logger.info.assert_any_call("  - python")


if __name__ == "__main__":
    unittest.main()
