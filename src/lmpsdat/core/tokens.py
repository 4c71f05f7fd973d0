"""Line-level helpers shared by the Keys and the atom styles."""

from __future__ import annotations

from typing import Any

from lmpsdat.core.errors import MalformedLineError


def strip_comment(line: str) -> str:
    """Drop everything from the first `#` on."""
    if "#" in line:
        return line.split("#", 1)[0]
    return line


def data_fields(line: str) -> list[str]:
    """Whitespace-split a data row after removing its trailing comment."""
    return strip_comment(line).split()


def parse_int(token: str, *, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedLineError(f"{what}: expected integer, got {token!r}") from None


def parse_float(token: str, *, what: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise MalformedLineError(f"{what}: expected number, got {token!r}") from None


def fmt_float(x: Any) -> str:
    """Shortest text that reads back to the same float."""
    return repr(float(x))


def fmt_int(x: Any) -> str:
    return "%d" % int(x)
