"""Capabilities consumed from the host windowing toolkit."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from winstate.geometry import Rect

Handler = Callable[..., Any]


class Window(Protocol):
    """A live top-level window."""

    def get_bounds(self) -> Rect: ...

    def is_maximized(self) -> bool: ...

    def is_minimized(self) -> bool: ...

    def is_full_screen(self) -> bool: ...

    def maximize(self) -> None: ...

    def set_full_screen(self, flag: bool) -> None: ...

    def on(self, event: str, handler: Handler) -> None: ...

    def remove_listener(self, event: str, handler: Handler) -> None: ...


class Display(Protocol):
    """A monitor attached to the system."""

    @property
    def bounds(self) -> Rect: ...


class Screen(Protocol):
    """Display lookup service."""

    def get_display_matching(self, rect: Rect) -> Display:
        """Return the display that most closely intersects rect."""
        ...


class App(Protocol):
    """The host application."""

    def user_data_dir(self) -> Path | str: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules single-shot delayed callbacks.

    An asyncio event loop satisfies this protocol.
    """

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...

