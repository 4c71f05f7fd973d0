"""Scalar Keys: the title line and the header fields.

- `TitleKey`: first line of the file, consumed unconditionally.
- `CounterKey`: `<int> <keyword...>` (eg `2 atom types`).
- `BoxKey`: `<float> <float> <lo> <hi>` (eg `0.0 1.0 xlo xhi`).

Counter and Box match a header line by its token boundaries; the numeric
tokens found while matching are kept and converted by the following
`decode()` call. Trailing tokens after the keyword are ignored.
"""

from __future__ import annotations

from typing import Any, Sequence

from lmpsdat.core.errors import BindingTypeError, MalformedLineError, RangeViolationError
from lmpsdat.core.names import TITLE, Name
from lmpsdat.core.tokens import fmt_float, fmt_int, parse_float, parse_int
from lmpsdat.keys.base import Key, LineSource, is_int, is_real


class TitleKey(Key):
    name = TITLE

    def __init__(self) -> None:
        self._title = ""

    def decode(self, line: str, source: LineSource) -> None:
        self._title = line

    def encode(self) -> list[str]:
        return [self._title]

    def assign(self, value: Any) -> None:
        if not isinstance(value, str):
            raise BindingTypeError(f"expected str, got {type(value).__name__}", name=self.name)
        self._title = value

    def value(self) -> str:
        return self._title

    def validate(self) -> None:
        return None


class _HeaderKey(Key):
    """Header field matched as `<n_numbers numeric tokens> <keyword words>`."""

    is_header = True
    n_numbers: int

    def __init__(self, name: Name) -> None:
        self.name = name
        self._words = name.split()
        self._pending: list[str] | None = None

    def matches_header(self, line: str) -> bool:
        toks = line.split()
        n = self.n_numbers
        if len(toks) < n + len(self._words):
            return False
        if toks[n : n + len(self._words)] != self._words:
            return False
        self._pending = toks[:n]
        return True

    def _take_pending(self) -> list[str]:
        if self._pending is None:
            raise MalformedLineError("decode called before a header line matched", name=self.name)
        toks, self._pending = self._pending, None
        return toks


class CounterKey(_HeaderKey):
    """Non-negative integer tied to one keyword phrase."""

    n_numbers = 1

    def __init__(self, name: Name) -> None:
        super().__init__(name)
        self._count = 0

    def decode(self, line: str, source: LineSource) -> None:
        (tok,) = self._take_pending()
        self._count = parse_int(tok, what=self.name)

    def encode(self) -> list[str]:
        return [f"{fmt_int(self._count)} {self.name}"]

    def assign(self, value: Any) -> None:
        if not is_int(value):
            raise BindingTypeError(f"expected int, got {type(value).__name__}", name=self.name)
        self._count = value

    def value(self) -> int:
        return self._count

    def validate(self) -> None:
        if self._count < 0:
            raise RangeViolationError(f"integer = {self._count} is lower than zero", name=self.name)


class BoxKey(_HeaderKey):
    """Box bounds `(lo, hi)` along one axis."""

    n_numbers = 2

    def __init__(self, name: Name) -> None:
        super().__init__(name)
        self._lo = 0.0
        self._hi = 0.0

    def decode(self, line: str, source: LineSource) -> None:
        lo_tok, hi_tok = self._take_pending()
        self._lo = parse_float(lo_tok, what="lo")
        self._hi = parse_float(hi_tok, what="hi")

    def encode(self) -> list[str]:
        return [f"{fmt_float(self._lo)} {fmt_float(self._hi)} {self.name}"]

    def assign(self, value: Any) -> None:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise BindingTypeError(f"expected (lo, hi) pair, got {type(value).__name__}", name=self.name)
        if len(value) != 2 or not all(is_real(v) for v in value):
            raise BindingTypeError(f"expected (lo, hi) pair of numbers, got {value!r}", name=self.name)
        self._lo, self._hi = float(value[0]), float(value[1])

    def value(self) -> tuple[float, float]:
        return (self._lo, self._hi)

    def validate(self) -> None:
        if self._lo > self._hi:
            raise RangeViolationError(f"lo = {self._lo!r} is greater than hi = {self._hi!r}", name=self.name)
