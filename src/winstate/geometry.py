"""Window geometry records and their JSON representation."""

from __future__ import annotations

from typing import Any

import cattrs
from attrs import Factory, define, frozen
from cattrs.errors import ForbiddenExtraKeysError
from cattrs.gen import make_dict_structure_fn, make_dict_unstructure_fn, override


class InvalidStateError(ValueError):
    """Persisted window state does not have the expected shape."""


@frozen
class Rect:
    """A rectangle in screen coordinates."""

    x: int
    y: int
    width: int
    height: int


@define
class WindowStateRecord:
    """Last known geometry of a window.

    Fields set to None are absent and are left out of the persisted JSON.
    Keys found on disk that are not known fields are kept in ``extra`` and
    written back untouched.
    """

    x: int | None = None
    y: int | None = None
    width: int | None = None
    height: int | None = None
    is_maximized: bool | None = None
    is_full_screen: bool | None = None
    display_bounds: Rect | None = None
    extra: dict[str, Any] = Factory(dict)

    def has_bounds(self) -> bool:
        """Return True if all four bounds fields are present."""
        return (
            self.x is not None
            and self.y is not None
            and self.width is not None
            and self.height is not None
        )

    def bounds(self) -> Rect:
        """Return the record's own bounds."""
        if not self.has_bounds():
            raise InvalidStateError("record has partial bounds")
        return Rect(self.x, self.y, self.width, self.height)  # type: ignore[arg-type]


def _structure_int(value: Any, _type: type) -> int:  # noqa: ANN401
    # bool is a subclass of int, but true is not a coordinate
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidStateError(f"expected integer, got {value!r}")
    return value


def _structure_bool(value: Any, _type: type) -> bool:  # noqa: ANN401
    if not isinstance(value, bool):
        raise InvalidStateError(f"expected boolean, got {value!r}")
    return value


_converter = cattrs.Converter()
_converter.register_structure_hook(int, _structure_int)
_converter.register_structure_hook(bool, _structure_bool)
# Display bounds are compared strictly, so unexpected keys make them stale
_structure_rect_fields = make_dict_structure_fn(
    Rect, _converter, _cattrs_forbid_extra_keys=True
)


def _structure_rect(value: Any, _type: type) -> Rect:  # noqa: ANN401
    if not isinstance(value, dict):
        raise InvalidStateError(f"expected rectangle, got {value!r}")
    return _structure_rect_fields(value, _type)


_converter.register_structure_hook(Rect, _structure_rect)

_RENAMES = {
    "is_maximized": override(rename="isMaximized"),
    "is_full_screen": override(rename="isFullScreen"),
    "display_bounds": override(rename="displayBounds"),
    "extra": override(omit=True),
}

_converter.register_structure_hook(
    WindowStateRecord,
    make_dict_structure_fn(WindowStateRecord, _converter, **_RENAMES),
)
_converter.register_unstructure_hook(
    WindowStateRecord,
    make_dict_unstructure_fn(
        WindowStateRecord,
        _converter,
        _cattrs_omit_if_default=True,
        **_RENAMES,
    ),
)

KNOWN_KEYS = frozenset(
    {"x", "y", "width", "height", "isMaximized", "isFullScreen", "displayBounds"}
)


def structure_record(raw: Any) -> WindowStateRecord:  # noqa: ANN401
    """Convert decoded JSON into a record, raising InvalidStateError if malformed."""
    if not isinstance(raw, dict):
        raise InvalidStateError(f"expected JSON object, got {type(raw).__name__}")
    try:
        record = _converter.structure(raw, WindowStateRecord)
    except (
        cattrs.BaseValidationError,
        ForbiddenExtraKeysError,
        InvalidStateError,
        KeyError,
        TypeError,
    ) as e:
        raise InvalidStateError(f"malformed window state: {e}") from e
    record.extra = {k: v for k, v in raw.items() if k not in KNOWN_KEYS}
    return record


def unstructure_record(record: WindowStateRecord) -> dict[str, Any]:
    """Return the JSON object for a record, without absent fields."""
    data: dict[str, Any] = dict(record.extra)
    data.update(_converter.unstructure(record))
    return data
