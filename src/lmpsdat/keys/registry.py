"""Registry: the wired set of Keys for one document.

`Registry.build(names, atom_style)` instantiates a Key for every requested
Name and, recursively, for every Counter those Keys depend on. Keys are
memoized by Name, so a dependency shared by several tables (eg `atom types`
for Masses, Pair Coeffs and Atoms) is a single instance.

Insertion order is deterministic: each dependency is inserted just before the
first Key that needs it, otherwise Names keep their requested order. Decoding
tries header candidates in this order.

Unknown Names and atom styles are not fatal: they are logged, recorded in
`Registry.diagnostics`, and dropped (unknown styles fall back to `full`).
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping

from lmpsdat.core.atom_style import DEFAULT_ATOM_STYLE, AtomStyle, get_atom_style
from lmpsdat.core.errors import DataFileError, Diagnostic, UnsupportedError
from lmpsdat.core.names import (
    ATOM_TYPES,
    ATOMS,
    ATOMS_NBR,
    BOX_NAMES,
    COEFF_TYPE_COUNT,
    COUNT_NAMES,
    LINK_LAYOUT,
    MASSES,
    TITLE,
    TYPE_COUNT_NAMES,
    Name,
    is_name,
)
from lmpsdat.keys.atoms import AtomsKey
from lmpsdat.keys.base import Key, TableKey
from lmpsdat.keys.header import BoxKey, CounterKey, TitleKey
from lmpsdat.keys.links import LinksKey
from lmpsdat.keys.tables import CoeffsKey, MassesKey

logger = logging.getLogger(__name__)


def dependency_names(name: Name) -> tuple[Name, ...]:
    """Names a Key must be wired with, in `declare_dependencies` order."""
    if name == MASSES:
        return (ATOM_TYPES,)
    if name in COEFF_TYPE_COUNT:
        return (COEFF_TYPE_COUNT[name],)
    if name == ATOMS:
        return (ATOM_TYPES, ATOMS_NBR)
    if name in LINK_LAYOUT:
        count_name, types_name, _ = LINK_LAYOUT[name]
        return (ATOMS_NBR, count_name, types_name)
    return ()


def make_key(name: Name, atom_style: AtomStyle = DEFAULT_ATOM_STYLE) -> Key:
    """Instantiate the (unwired) Key variant for `name`."""
    if name == TITLE:
        return TitleKey()
    if name in COUNT_NAMES or name in TYPE_COUNT_NAMES:
        return CounterKey(name)
    if name in BOX_NAMES:
        return BoxKey(name)
    if name == MASSES:
        return MassesKey()
    if name in COEFF_TYPE_COUNT:
        return CoeffsKey(name)
    if name == ATOMS:
        return AtomsKey(atom_style)
    if name in LINK_LAYOUT:
        return LinksKey(name)
    raise ValueError(f"make_key: unsupported name {name!r}")


class Registry:
    """Owns every Key of one decode or encode operation."""

    def __init__(self, atom_style: AtomStyle = DEFAULT_ATOM_STYLE) -> None:
        self.atom_style = atom_style
        self.requested: list[Name] = []
        self.diagnostics: list[Diagnostic] = []
        self._keys: dict[Name, Key] = {}

    @classmethod
    def build(cls, names: Iterable[str], atom_style: str | AtomStyle | None = None) -> "Registry":
        diagnostics: list[Diagnostic] = []
        style = _resolve_atom_style(atom_style, diagnostics)

        reg = cls(style)
        reg.diagnostics.extend(diagnostics)
        for n in names:
            if not is_name(n):
                reg._warn("unknown_name", str(n), f"name = {n!r} is not supported")
                continue
            if n in reg.requested:
                continue
            reg.requested.append(n)
            reg._resolve(n)
        return reg

    def _resolve(self, name: Name) -> Key:
        existing = self._keys.get(name)
        if existing is not None:
            return existing
        deps = [self._resolve(d) for d in dependency_names(name)]
        key = make_key(name, self.atom_style)
        if deps:
            key.declare_dependencies(*deps)
        self._keys[name] = key
        return key

    def _warn(self, kind: str, value: str, message: str) -> None:
        logger.warning(message)
        self.diagnostics.append(Diagnostic(kind, value, message))

    # ----------------------------
    # Mapping-style access
    # ----------------------------

    def __getitem__(self, name: Name) -> Key:
        return self._keys[name]

    def __contains__(self, name: object) -> bool:
        return name in self._keys

    def __iter__(self) -> Iterator[Name]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def get(self, name: Name) -> Key | None:
        return self._keys.get(name)

    def keys(self) -> list[Key]:
        return list(self._keys.values())

    def header_keys(self) -> list[Key]:
        return [k for k in self._keys.values() if k.is_header]

    def table_keys(self) -> list[TableKey]:
        return [k for k in self._keys.values() if isinstance(k, TableKey)]

    # ----------------------------
    # Values
    # ----------------------------

    def values(self) -> dict[Name, Any]:
        """Current value of every requested Name."""
        return {n: self._keys[n].value() for n in self.requested}

    def assign(self, name: Name, value: Any) -> None:
        key = self._keys.get(name)
        if key is None:
            raise KeyError(f"name {name!r} is not part of this registry")
        try:
            key.assign(value)
        except DataFileError as e:
            raise e.attach(name)

    def assign_all(self, values: Mapping[Name, Any]) -> None:
        for name, value in values.items():
            self.assign(name, value)

    def propagate(self) -> None:
        """Push table row counts into their Counters."""
        for key in self._keys.values():
            try:
                key.propagate_derived_value()
            except UnsupportedError:
                continue
            except DataFileError as e:
                raise e.attach(key.name)

    def validate(self) -> None:
        """Validate every Key; the first failure aborts."""
        for key in self._keys.values():
            try:
                key.validate()
            except DataFileError as e:
                raise e.attach(key.name)

    def __repr__(self) -> str:
        return f"Registry({list(self._keys)!r}, atom_style={self.atom_style.name!r})"


def _resolve_atom_style(atom_style: str | AtomStyle | None, diagnostics: list[Diagnostic]) -> AtomStyle:
    if atom_style is None:
        return DEFAULT_ATOM_STYLE
    if isinstance(atom_style, AtomStyle):
        return atom_style
    style = get_atom_style(str(atom_style).strip())
    if style is None:
        msg = f"atom style = {atom_style!r} is not supported, using {DEFAULT_ATOM_STYLE.name!r}"
        logger.warning(msg)
        diagnostics.append(Diagnostic("unknown_atom_style", str(atom_style), msg))
        return DEFAULT_ATOM_STYLE
    return style
