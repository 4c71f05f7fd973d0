"""Topology tables: Bonds, Angles, Dihedrals and Impropers.

Row layout: `<id> <type> <atom1> ... <atomK>` with K = 2, 3, 4, 4. Extra
trailing tokens are ignored.
"""

from __future__ import annotations

from typing import Any

from lmpsdat.core.errors import BindingTypeError, DependencyArityError, MalformedLineError
from lmpsdat.core.names import ATOMS_NBR, LINK_LAYOUT, Name
from lmpsdat.core.records import LinkRecord
from lmpsdat.core.tokens import fmt_int, parse_int
from lmpsdat.keys.base import (
    Key,
    TableKey,
    check_count,
    check_range,
    is_int,
    require_dependency,
    require_int_mapping,
)
from lmpsdat.keys.header import CounterKey


class LinksKey(TableKey):
    def __init__(self, name: Name) -> None:
        if name not in LINK_LAYOUT:
            raise ValueError(f"LinksKey: unsupported name {name!r}")
        super().__init__(name)
        self.count_name, self.types_name, self.arity = LINK_LAYOUT[name]
        self.atoms_nbr: CounterKey | None = None
        self.count: CounterKey | None = None
        self.types: CounterKey | None = None

    @property
    def n_fields(self) -> int:
        return 2 + self.arity

    def declare_dependencies(self, *keys: Key) -> None:
        expected = (ATOMS_NBR, self.count_name, self.types_name)
        if len(keys) != len(expected):
            raise DependencyArityError(
                f"expects exactly {len(expected)} Keys {list(expected)!r}, got {len(keys)}", name=self.name
            )
        wired: dict[str, CounterKey] = {}
        for dep in keys:
            if not isinstance(dep, CounterKey):
                raise DependencyArityError(f"expects Counter Keys, got {type(dep).__name__}", name=self.name)
            if dep.name not in expected or dep.name in wired:
                raise DependencyArityError(f"expects Counters {list(expected)!r}, got {dep.name!r}", name=self.name)
            wired[dep.name] = dep
        self.atoms_nbr = wired[ATOMS_NBR]
        self.count = wired[self.count_name]
        self.types = wired[self.types_name]

    def _row_count_key(self) -> CounterKey:
        return require_dependency(self, self.count, self.count_name)

    def _decode_row(self, fields: list[str]) -> tuple[int, LinkRecord]:
        if len(fields) < self.n_fields:
            raise MalformedLineError(f"not enough fields = {len(fields)}, want >= {self.n_fields}")
        link_id = parse_int(fields[0], what="id")
        link_type = parse_int(fields[1], what="type")
        atoms = tuple(parse_int(tok, what="atom id") for tok in fields[2 : self.n_fields])
        return link_id, LinkRecord(link_type=link_type, atoms=atoms)

    def _encode_row(self, row_id: int, row: LinkRecord) -> list[str]:
        return [fmt_int(row_id), fmt_int(row.link_type)] + [fmt_int(a) for a in row.atoms]

    def assign(self, value: Any) -> None:
        m = require_int_mapping(self, value, expected="mapping of id -> LinkRecord")
        for link_id, link in m.items():
            if not isinstance(link, LinkRecord):
                raise BindingTypeError(
                    f"id = {link_id}: expected LinkRecord, got {type(link).__name__}", name=self.name
                )
            if len(link.atoms) != self.arity:
                raise BindingTypeError(
                    f"id = {link_id}: expected {self.arity} atoms, got {len(link.atoms)}", name=self.name
                )
            if not is_int(link.link_type):
                raise BindingTypeError(
                    f"id = {link_id}: type: expected int, got {type(link.link_type).__name__}", name=self.name
                )
            if not all(is_int(a) for a in link.atoms):
                raise BindingTypeError(f"id = {link_id}: atoms: expected ints, got {link.atoms!r}", name=self.name)
        self._rows = dict(m)

    def validate(self) -> None:
        count = self._row_count_key().value()
        types = require_dependency(self, self.types, self.types_name).value()
        atoms_nbr = require_dependency(self, self.atoms_nbr, ATOMS_NBR).value()

        check_count(self, len(self._rows), count, what="ids")
        for link_id in sorted(self._rows):
            link = self._rows[link_id]
            check_range(self, link_id, count, what="id", limit=self.count_name)
            check_range(self, link.link_type, types, what="type", limit=self.types_name)
            for atom in link.atoms:
                check_range(self, atom, atoms_nbr, what="atom", limit=ATOMS_NBR)
