"""
Output helpers shared by CLI commands.
"""

import json
import sys
from pathlib import Path
from typing import Any

from textsplit.config import get_config


def setup_output_dir(output_path: str | None = None) -> Path:
    """
    Create the directory chunk results are written to.

    Args:
        output_path: Explicit output file; its parent is created

    Returns:
        The created directory (outputs_dir/chunks when no path is given)
    """
    if not output_path:
        config = get_config()
        config.ensure_directories()
        return config.outputs_dir / "chunks"

    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def save_json_output(data: dict[str, Any], output_path: str, pretty: bool = True) -> None:
    """
    Write chunk results as UTF-8 JSON, exiting with status 1 on failure.

    Args:
        data: JSON-serializable results
        output_path: Destination file; missing parents are created
        pretty: Indent the output
    """
    output_file = Path(output_path)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2 if pretty else None, ensure_ascii=False)
        print(f"✅ Output saved to: {output_file}")
    except (OSError, TypeError) as e:
        print(f"❌ Error saving output to {output_path}: {e}", file=sys.stderr)
        sys.exit(1)


def print_summary_stats(stats: dict[str, Any], title: str = "Chunk Statistics") -> None:
    """Print statistics one per line, floats to one decimal place."""
    print(f"\n📊 {title}:")
    width = max((len(key) for key in stats), default=0) + 1
    for key, value in stats.items():
        shown = f"{value:.1f}" if isinstance(value, float) else value
        print(f"  {key + ':':<{width}} {shown}")
