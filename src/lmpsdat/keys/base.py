"""Key contract shared by every section codec.

A Key owns the value of exactly one Name and knows how to:

- recognise its header line (`matches_header`)
- accept the Counter Keys it depends on (`declare_dependencies`)
- push a derived row count into its Counter (`propagate_derived_value`)
- read its body from a `LineSource` (`decode`) and write it back (`encode`)
- check its cross-Key invariants (`validate`)

Keys never validate while decoding: a row that cannot be parsed fails
immediately with `MalformedLineError`, everything else is left to the single
`validate()` pass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Mapping

from lmpsdat.core.errors import (
    BindingTypeError,
    CountMismatchError,
    DependencyArityError,
    MalformedLineError,
    MissingDependencyError,
    RangeViolationError,
    UnsupportedError,
)
from lmpsdat.core.names import Name
from lmpsdat.core.tokens import data_fields, strip_comment


class LineSource:
    """Pull-based line reader with a running line number.

    Lines are handed out without their trailing newline. There is no pushback:
    a Key that reads a line owns it.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._it: Iterator[str] = iter(lines)
        self.line_no = 0

    def next_line(self) -> str | None:
        """Return the next line, or None at end of stream."""
        try:
            line = next(self._it)
        except StopIteration:
            return None
        self.line_no += 1
        return line.rstrip("\r\n")

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line


class Key(ABC):
    """Polymorphic codec unit for one Name."""

    name: Name
    is_header: bool = False

    def matches_header(self, line: str) -> bool:
        return False

    def declare_dependencies(self, *keys: "Key") -> None:
        if keys:
            raise DependencyArityError(f"accepts no dependency Keys, got {len(keys)}", name=self.name)

    def propagate_derived_value(self) -> None:
        raise UnsupportedError("no derived value to propagate", name=self.name)

    @abstractmethod
    def decode(self, line: str, source: LineSource) -> None:
        """Decode the matched `line` and, for tables, the body that follows it."""

    @abstractmethod
    def encode(self) -> list[str]:
        """Return the output lines of this section (no trailing blank line)."""

    @abstractmethod
    def assign(self, value: Any) -> None:
        """Replace the value; raises BindingTypeError on a wrong shape."""

    @abstractmethod
    def value(self) -> Any:
        ...

    @abstractmethod
    def validate(self) -> None:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


# ----------------------------
# Shared checks
# ----------------------------


def require_dependency(key: Key, dep: Any, what: str) -> Any:
    if dep is None:
        raise MissingDependencyError(f"dependency {what!r} is not wired", name=key.name)
    return dep


def check_count(key: Key, actual: int, expected: int, *, what: str) -> None:
    if actual != expected:
        raise CountMismatchError(
            f"number of {what} = {actual} is not equal to the declared count = {expected}",
            name=key.name,
        )


def check_range(key: Key, value: int, upper: int, *, what: str, limit: str) -> None:
    if value < 1 or value > upper:
        raise RangeViolationError(
            f"{what} = {value} is invalid: it must be in [1, {upper}] ({limit} = {upper})",
            name=key.name,
        )


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_int_mapping(key: Key, value: Any, *, expected: str) -> Mapping[Any, Any]:
    if not isinstance(value, Mapping):
        raise BindingTypeError(f"expected {expected}, got {type(value).__name__}", name=key.name)
    bad = [k for k in value if not is_int(k)]
    if bad:
        raise BindingTypeError(f"expected {expected}, got non-integer ids: {bad[:5]!r}", name=key.name)
    return value


# ----------------------------
# Tables
# ----------------------------


class TableKey(Key):
    """A named block: header line, one separator line, then N data rows.

    N is the current value of the row-count Counter. Rows are stored in a dict
    keyed by their integer id and written back in ascending id order.
    """

    def __init__(self, name: Name) -> None:
        self.name = name
        self._rows: dict[int, Any] = {}

    def matches_header(self, line: str) -> bool:
        return strip_comment(line).strip() == self.name

    @abstractmethod
    def _row_count_key(self) -> Any:
        """Counter holding the number of rows (raises MissingDependencyError)."""

    @abstractmethod
    def _decode_row(self, fields: list[str]) -> tuple[int, Any]:
        ...

    @abstractmethod
    def _encode_row(self, row_id: int, row: Any) -> list[str]:
        ...

    def decode(self, line: str, source: LineSource) -> None:
        n = self._row_count_key().value()
        self._rows = {}

        # Blank separator between the table header and its rows.
        if source.next_line() is None:
            return

        for _ in range(n):
            raw = source.next_line()
            if raw is None:
                break
            try:
                row_id, row = self._decode_row(data_fields(raw))
            except MalformedLineError as e:
                if e.line_no is None:
                    e.line_no = source.line_no
                raise e.attach(self.name)
            self._rows[row_id] = row

    def encode(self) -> list[str]:
        if not self._rows:
            return []
        lines = [self.name, ""]
        for row_id in sorted(self._rows):
            lines.append(" ".join(self._encode_row(row_id, self._rows[row_id])))
        return lines

    def propagate_derived_value(self) -> None:
        self._row_count_key().assign(len(self._rows))

    def value(self) -> dict[int, Any]:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)
