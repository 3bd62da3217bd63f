"""Track a window's geometry and restore it across restarts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from winstate import storage
from winstate.config import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    StoreConfig,
    resolve_state_path,
)
from winstate.geometry import WindowStateRecord
from winstate.host import App, Scheduler, Screen, TimerHandle, Window

logger = logging.getLogger(__name__)

# Seconds to wait after the last resize/move before refreshing state
EVENT_HANDLING_DELAY = 0.1


def is_normal(window: Window) -> bool:
    """Return True if window is neither maximized, minimized nor fullscreen."""
    return (
        not window.is_maximized()
        and not window.is_minimized()
        and not window.is_full_screen()
    )


class WindowStateStore:
    """Persisted geometry for a single window.

    The previous state is loaded and validated once on construction. Call
    ``manage`` with a live window to restore its maximized/fullscreen flags
    and keep the state current; the state is saved when the window closes.
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        *,
        screen: Screen,
        app: App | None = None,
        scheduler: Scheduler,
    ) -> None:
        self._config = config if config is not None else StoreConfig()
        self._screen = screen
        self._scheduler = scheduler
        self._path = resolve_state_path(self._config, app)
        self._window: Window | None = None
        self._timer: TimerHandle | None = None
        # Bumped whenever the pending timer is replaced or cancelled
        self._timer_generation = 0

        record = storage.load_state(self._path)
        if record is not None and not self.validate_state(record):
            logger.info("Discarding stale window state from %s", self._path)
            record = None
        if record is None:
            record = WindowStateRecord()
        if record.width is None:
            record.width = self._config.default_width or DEFAULT_WIDTH
        if record.height is None:
            record.height = self._config.default_height or DEFAULT_HEIGHT
        self._state = record

    def validate_state(self, record: WindowStateRecord | None) -> bool:
        """Check that record has full bounds on a display that still exists."""
        if record is None or not record.has_bounds():
            return False
        if record.display_bounds is not None:
            display = self._screen.get_display_matching(record.bounds())
            return record.display_bounds == display.bounds
        return True

    @property
    def path(self) -> Path:
        return self._path

    @property
    def managed_window(self) -> Window | None:
        return self._window

    @property
    def x(self) -> int | None:
        return self._state.x

    @property
    def y(self) -> int | None:
        return self._state.y

    @property
    def width(self) -> int | None:
        return self._state.width

    @property
    def height(self) -> int | None:
        return self._state.height

    @property
    def is_maximized(self) -> bool | None:
        return self._state.is_maximized

    @property
    def is_full_screen(self) -> bool | None:
        return self._state.is_full_screen

    def update_state(self, window: Window | None = None) -> None:
        """Refresh the in-memory state from window, or the managed window."""
        window = window if window is not None else self._window
        if window is None:
            return

        bounds = window.get_bounds()
        # Only normal bounds are worth restoring to
        if is_normal(window):
            self._state.x = bounds.x
            self._state.y = bounds.y
            self._state.width = bounds.width
            self._state.height = bounds.height
        self._state.is_maximized = window.is_maximized()
        self._state.is_full_screen = window.is_full_screen()
        self._state.display_bounds = self._screen.get_display_matching(bounds).bounds

    def save_state(self, window: Window | None = None) -> bool:
        """Write the state to disk, refreshing it from window first if given.

        Returns False if the state could not be written.
        """
        if window is not None:
            self.update_state(window)
        return storage.save_state(self._path, self._state)

    def manage(self, window: Window) -> None:
        """Restore window's flags and track it until it is closed."""
        self.unmanage()
        if self._config.maximize and self._state.is_maximized:
            window.maximize()
        if self._config.full_screen and self._state.is_full_screen:
            window.set_full_screen(True)
        window.on("resize", self._on_state_change)
        window.on("move", self._on_state_change)
        window.on("close", self._on_close)
        window.on("closed", self._on_closed)
        self._window = window

    def unmanage(self) -> None:
        """Stop tracking the managed window, if any."""
        if self._window is None:
            return
        self._window.remove_listener("resize", self._on_state_change)
        self._window.remove_listener("move", self._on_state_change)
        self._cancel_timer()
        self._window.remove_listener("close", self._on_close)
        self._window.remove_listener("closed", self._on_closed)
        self._window = None

    def _cancel_timer(self) -> None:
        self._timer_generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_state_change(self, *_args: Any) -> None:  # noqa: ANN401
        # Handles both resize and move
        self._cancel_timer()
        generation = self._timer_generation
        self._timer = self._scheduler.call_later(
            EVENT_HANDLING_DELAY, lambda: self._on_timer(generation)
        )

    def _on_timer(self, generation: int) -> None:
        # A timer that was replaced or cancelled after it started firing
        if generation != self._timer_generation:
            return
        self._timer = None
        self.update_state()

    def _on_close(self, *_args: Any) -> None:  # noqa: ANN401
        # Bounds may be unreliable once the window starts closing
        self.update_state()

    def _on_closed(self, *_args: Any) -> None:  # noqa: ANN401
        self.unmanage()
        self.save_state()
