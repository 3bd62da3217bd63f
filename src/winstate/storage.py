"""Persistent storage for window state."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path

from winstate.geometry import (
    InvalidStateError,
    WindowStateRecord,
    structure_record,
    unstructure_record,
)

logger = logging.getLogger(__name__)


def load_state(path: Path) -> WindowStateRecord | None:
    """Load the record stored at path, or None if it is missing or unreadable."""
    try:
        with open(path) as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.debug("No window state at %s", path)
        return None
    except (OSError, ValueError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logger.warning("Could not read window state from %s: %s", path, e)
        return None
    except RecursionError as e:
        logger.warning("Window state in %s is nested too deeply: %s", path, e)
        return None

    try:
        return structure_record(raw)
    except InvalidStateError as e:
        logger.warning("Ignoring window state in %s: %s", path, e)
        return None


def save_state(path: Path, record: WindowStateRecord) -> bool:
    """Atomically save record to path.

    Failures are logged and reported through the return value, never raised.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create directory for window state %s: %s", path, e)
        return False

    # Write to temp file, then atomic rename
    try:
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".json.tmp")
    except OSError as e:
        logger.warning("Could not create temp file for window state %s: %s", path, e)
        return False

    try:
        with os.fdopen(fd, "w") as f:
            json.dump(unstructure_record(record), f, indent=2)
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as e:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        logger.warning("Could not save window state to %s: %s", path, e)
        return False

    logger.debug("Saved window state to %s", path)
    return True
