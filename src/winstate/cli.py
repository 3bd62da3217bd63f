# src/winstate/cli.py
"""CLI for inspecting and resetting persisted window state."""

from __future__ import annotations

import json
import logging
import os
import sys
from argparse import ArgumentParser
from pathlib import Path

from winstate import storage
from winstate.config import DEFAULT_FILE, StoreConfig, resolve_state_path
from winstate.geometry import unstructure_record


def _setup_logging() -> None:
    """Configure logging based on WINSTATE_DEBUG environment variable."""
    level_str = os.environ.get("WINSTATE_DEBUG", "").upper()
    if level_str in ("1", "TRUE", "INFO"):
        level = logging.INFO
    elif level_str == "DEBUG":
        level = logging.DEBUG
    else:
        return  # No logging setup if not enabled

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _show(path: Path) -> int:
    record = storage.load_state(path)
    if record is None:
        print(f"Error: no usable window state at {path}", file=sys.stderr)
        return 1
    print(json.dumps(unstructure_record(record), indent=2))
    return 0


def _reset(path: Path, *, dry_run: bool) -> int:
    if not path.exists():
        print(f"No window state at {path}")
        return 0
    if dry_run:
        print(f"(dry run) would delete: {path}")
        return 0
    print(f"deleting: {path}")
    try:
        path.unlink()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main(args: list[str] | None = None) -> int:
    parser = ArgumentParser(description="Inspect or reset persisted window state.")
    parser.add_argument(
        "--path",
        "-d",
        type=Path,
        default=None,
        help="Directory holding the state file (default: user data directory)",
    )
    parser.add_argument(
        "--file",
        "-f",
        type=str,
        default=DEFAULT_FILE,
        help=f"Name of the state file (default: {DEFAULT_FILE})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("show", help="Print the stored window state")
    reset = subparsers.add_parser("reset", help="Delete the stored window state")
    reset.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be deleted without actually deleting",
    )

    parsed = parser.parse_args(args)
    path = resolve_state_path(StoreConfig(file=parsed.file, path=parsed.path))

    if parsed.command == "show":
        return _show(path)
    return _reset(path, dry_run=parsed.dry_run)


def cli_main() -> None:
    _setup_logging()
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
