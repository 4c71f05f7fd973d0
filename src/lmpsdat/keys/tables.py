"""Per-type tables: Masses and the Coeffs family.

Both are indexed by a type id in `[1, <type count>]` and hold exactly one row
per type. Coeffs rows carry a variable number of floats (their meaning depends
on the force-field style, which this codec does not interpret).
"""

from __future__ import annotations

from typing import Any, Sequence

from lmpsdat.core.errors import BindingTypeError, DependencyArityError, MalformedLineError, RangeViolationError
from lmpsdat.core.names import ATOM_TYPES, COEFF_TYPE_COUNT, MASSES, Name
from lmpsdat.core.tokens import fmt_float, fmt_int, parse_float, parse_int
from lmpsdat.keys.base import (
    Key,
    TableKey,
    check_count,
    check_range,
    is_real,
    require_dependency,
    require_int_mapping,
)
from lmpsdat.keys.header import CounterKey


def _single_counter(key: Key, keys: Sequence[Key], expected: Name) -> CounterKey:
    if len(keys) != 1:
        raise DependencyArityError(f"expects exactly one Key ({expected!r}), got {len(keys)}", name=key.name)
    dep = keys[0]
    if not isinstance(dep, CounterKey):
        raise DependencyArityError(f"expects a Counter Key, got {type(dep).__name__}", name=key.name)
    if dep.name != expected:
        raise DependencyArityError(f"expects Counter {expected!r}, got {dep.name!r}", name=key.name)
    return dep


class MassesKey(TableKey):
    """`Masses`: atom type -> mass."""

    def __init__(self) -> None:
        super().__init__(MASSES)
        self.types: CounterKey | None = None

    def declare_dependencies(self, *keys: Key) -> None:
        self.types = _single_counter(self, keys, ATOM_TYPES)

    def _row_count_key(self) -> CounterKey:
        return require_dependency(self, self.types, ATOM_TYPES)

    def _decode_row(self, fields: list[str]) -> tuple[int, float]:
        if len(fields) < 2:
            raise MalformedLineError(f"not enough fields = {len(fields)}, want >= 2")
        return parse_int(fields[0], what="atom type"), parse_float(fields[1], what="mass")

    def _encode_row(self, row_id: int, row: float) -> list[str]:
        return [fmt_int(row_id), fmt_float(row)]

    def assign(self, value: Any) -> None:
        m = require_int_mapping(self, value, expected="mapping of atom type -> mass")
        bad = {k: v for k, v in m.items() if not is_real(v)}
        if bad:
            raise BindingTypeError(f"masses must be numbers, got {bad!r}", name=self.name)
        self._rows = {k: float(v) for k, v in m.items()}

    def validate(self) -> None:
        types = self._row_count_key().value()
        check_count(self, len(self._rows), types, what="masses")
        for typ in sorted(self._rows):
            mass = self._rows[typ]
            if mass < 0.0:
                raise RangeViolationError(f"mass of type = {typ} is lower than zero = {mass!r}", name=self.name)
            check_range(self, typ, types, what="type", limit=ATOM_TYPES)


class CoeffsKey(TableKey):
    """`Pair/Bond/Angle/Dihedral/Improper Coeffs`: type id -> coefficients."""

    def __init__(self, name: Name) -> None:
        if name not in COEFF_TYPE_COUNT:
            raise ValueError(f"CoeffsKey: unsupported name {name!r}")
        super().__init__(name)
        self.types_name = COEFF_TYPE_COUNT[name]
        self.types: CounterKey | None = None

    def declare_dependencies(self, *keys: Key) -> None:
        self.types = _single_counter(self, keys, self.types_name)

    def _row_count_key(self) -> CounterKey:
        return require_dependency(self, self.types, self.types_name)

    def _decode_row(self, fields: list[str]) -> tuple[int, tuple[float, ...]]:
        if len(fields) < 2:
            raise MalformedLineError(f"not enough fields = {len(fields)}, want >= 2")
        typ = parse_int(fields[0], what="type")
        coeffs = tuple(parse_float(tok, what="coefficient") for tok in fields[1:])
        return typ, coeffs

    def _encode_row(self, row_id: int, row: tuple[float, ...]) -> list[str]:
        return [fmt_int(row_id)] + [fmt_float(c) for c in row]

    def assign(self, value: Any) -> None:
        m = require_int_mapping(self, value, expected="mapping of type -> coefficients")
        rows: dict[int, tuple[float, ...]] = {}
        for typ, coeffs in m.items():
            if isinstance(coeffs, (str, bytes)) or not isinstance(coeffs, Sequence):
                raise BindingTypeError(
                    f"coefficients of type = {typ}: expected a sequence of numbers, got {type(coeffs).__name__}",
                    name=self.name,
                )
            if not all(is_real(c) for c in coeffs):
                raise BindingTypeError(f"coefficients of type = {typ}: expected numbers, got {coeffs!r}", name=self.name)
            rows[typ] = tuple(float(c) for c in coeffs)
        self._rows = rows

    def validate(self) -> None:
        types = self._row_count_key().value()
        check_count(self, len(self._rows), types, what="sets of coefficients")
        for typ in sorted(self._rows):
            check_range(self, typ, types, what="type", limit=self.types_name)
