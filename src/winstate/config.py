"""Configuration and paths for window state persistence."""

from __future__ import annotations

import os
from pathlib import Path

from attrs import define

from winstate.host import App

DEFAULT_FILE = "window-state.json"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


@define(kw_only=True)
class StoreConfig:
    """Options for a WindowStateStore."""

    file: str = DEFAULT_FILE
    path: Path | str | None = None
    maximize: bool = True
    full_screen: bool = True
    default_width: int = DEFAULT_WIDTH
    default_height: int = DEFAULT_HEIGHT


def default_data_dir() -> Path:
    """Return the per-user data directory used when the host provides none."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "winstate"
    return Path.home() / ".local" / "share" / "winstate"


def resolve_state_path(config: StoreConfig, app: App | None = None) -> Path:
    """Return path to the state JSON for config."""
    if config.path is not None:
        directory = Path(config.path)
    elif app is not None:
        directory = Path(app.user_data_dir())
    else:
        directory = default_data_dir()
    return directory / config.file
