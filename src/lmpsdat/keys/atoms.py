"""`Atoms` table: atom id -> AtomRecord, row layout delegated to an AtomStyle."""

from __future__ import annotations

from typing import Any

from lmpsdat.core.atom_style import DEFAULT_ATOM_STYLE, AtomStyle
from lmpsdat.core.errors import BindingTypeError, DependencyArityError, InconsistentOptionalFieldError
from lmpsdat.core.names import ATOM_TYPES, ATOMS, ATOMS_NBR
from lmpsdat.core.records import AtomRecord
from lmpsdat.keys.base import (
    Key,
    TableKey,
    check_count,
    check_range,
    is_int,
    is_real,
    require_dependency,
    require_int_mapping,
)
from lmpsdat.keys.header import CounterKey


class AtomsKey(TableKey):
    def __init__(self, atom_style: AtomStyle = DEFAULT_ATOM_STYLE) -> None:
        super().__init__(ATOMS)
        self.atom_style = atom_style
        self.atoms_nbr: CounterKey | None = None
        self.atom_types: CounterKey | None = None

    def declare_dependencies(self, *keys: Key) -> None:
        if len(keys) != 2:
            raise DependencyArityError(
                f"expects exactly two Keys ({ATOMS_NBR!r}, {ATOM_TYPES!r}), got {len(keys)}", name=self.name
            )
        wired: dict[str, CounterKey] = {}
        for dep in keys:
            if not isinstance(dep, CounterKey):
                raise DependencyArityError(f"expects Counter Keys, got {type(dep).__name__}", name=self.name)
            if dep.name not in (ATOMS_NBR, ATOM_TYPES) or dep.name in wired:
                raise DependencyArityError(
                    f"expects Counters {ATOMS_NBR!r} and {ATOM_TYPES!r}, got {dep.name!r}", name=self.name
                )
            wired[dep.name] = dep
        self.atoms_nbr = wired[ATOMS_NBR]
        self.atom_types = wired[ATOM_TYPES]

    def _row_count_key(self) -> CounterKey:
        return require_dependency(self, self.atoms_nbr, ATOMS_NBR)

    def _decode_row(self, fields: list[str]) -> tuple[int, AtomRecord]:
        return self.atom_style.decode(fields)

    def _encode_row(self, row_id: int, row: AtomRecord) -> list[str]:
        return self.atom_style.encode(row_id, row)

    def assign(self, value: Any) -> None:
        m = require_int_mapping(self, value, expected="mapping of atom id -> AtomRecord")
        bad = [k for k, v in m.items() if not isinstance(v, AtomRecord)]
        if bad:
            raise BindingTypeError(f"values must be AtomRecord (bad ids: {bad[:5]!r})", name=self.name)
        for atom_id, atom in m.items():
            self._check_record(atom_id, atom)
        self._rows = dict(m)

    def _check_record(self, atom_id: int, atom: AtomRecord) -> None:
        for field in ("atom_type", "mol_tag"):
            value = getattr(atom, field)
            if not is_int(value):
                raise BindingTypeError(
                    f"atom {atom_id}: {field}: expected int, got {type(value).__name__}", name=self.name
                )
        for field in ("charge", "x", "y", "z"):
            value = getattr(atom, field)
            if not is_real(value):
                raise BindingTypeError(
                    f"atom {atom_id}: {field}: expected number, got {type(value).__name__}", name=self.name
                )
        if atom.image is not None and not all(is_int(v) for v in atom.image):
            raise BindingTypeError(f"atom {atom_id}: image: expected ints, got {atom.image!r}", name=self.name)

    def validate(self) -> None:
        atoms_nbr = self._row_count_key().value()
        atom_types = require_dependency(self, self.atom_types, ATOM_TYPES).value()

        check_count(self, len(self._rows), atoms_nbr, what="atoms")
        if not self._rows:
            return

        ids = sorted(self._rows)
        # The lowest id sets the reference for image flags.
        has_image = self._rows[ids[0]].has_image
        for atom_id in ids:
            atom = self._rows[atom_id]
            check_range(self, atom_id, atoms_nbr, what="identifier", limit=ATOMS_NBR)
            check_range(self, atom.atom_type, atom_types, what="type", limit=ATOM_TYPES)
            if atom.has_image != has_image:
                raise InconsistentOptionalFieldError(
                    f"image flags defined to {has_image} but atom {atom_id} has image flags set to {atom.has_image}",
                    name=self.name,
                )
