"""Explicit binding between a host object and the Names of a data file.

A `Schema` is a list of `FieldBinding`s, each tying one Name to a getter (used
when encoding), a setter (used when decoding) and the shape of the exchanged
value. Shapes are checked against the Name once, when the Schema is built;
values are type-checked by the Keys when they are assigned.

Shapes:

| shape        | Names                         | value                            |
|--------------|-------------------------------|----------------------------------|
| `str`        | Title                         | str                              |
| `int`        | counts, type counts           | int                              |
| `float_pair` | xlo xhi, ylo yhi, zlo zhi     | (lo, hi)                         |
| `float_map`  | Masses                        | {type: mass}                     |
| `coeff_map`  | * Coeffs                      | {type: (c1, c2, ...)}            |
| `atom_map`   | Atoms                         | {id: AtomRecord}                 |
| `link_map`   | Bonds, Angles, ...            | {id: LinkRecord}                 |
| `frame`      | any table                     | pandas.DataFrame (canonical)     |

Example:

    schema = Schema.from_attributes(
        {"title": "Title", "box_x": "xlo xhi", "atoms": "Atoms"},
        atom_style="atomic",
        frames=["Atoms"],
    )
    schema.decode(text, system)      # system.atoms is a DataFrame
    text = schema.encode(system)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from lmpsdat.codecs import lammps_data
from lmpsdat.core.atom_style import AtomStyle
from lmpsdat.core.errors import BindingTypeError
from lmpsdat.core.frames import table_from_frame, table_to_frame
from lmpsdat.core.names import (
    ATOMS,
    BOX_NAMES,
    COEFF_TYPE_COUNT,
    COUNT_NAMES,
    LINK_LAYOUT,
    MASSES,
    TITLE,
    TYPE_COUNT_NAMES,
    Name,
    is_name,
    is_table_name,
)
from lmpsdat.keys.registry import Registry

SHAPE_FRAME = "frame"

SHAPES: tuple[str, ...] = ("str", "int", "float_pair", "float_map", "coeff_map", "atom_map", "link_map", SHAPE_FRAME)


def native_shape(name: Name) -> str:
    """Shape of the value a Key holds for `name`."""
    if name == TITLE:
        return "str"
    if name in COUNT_NAMES or name in TYPE_COUNT_NAMES:
        return "int"
    if name in BOX_NAMES:
        return "float_pair"
    if name == MASSES:
        return "float_map"
    if name in COEFF_TYPE_COUNT:
        return "coeff_map"
    if name == ATOMS:
        return "atom_map"
    if name in LINK_LAYOUT:
        return "link_map"
    raise ValueError(f"native_shape: unsupported name {name!r}")


@dataclass(frozen=True)
class FieldBinding:
    name: str
    getter: Callable[[Any], Any] | None = None
    setter: Callable[[Any, Any], None] | None = None
    shape: str | None = None

    def resolved_shape(self) -> str:
        return self.shape if self.shape is not None else native_shape(self.name)


def _check_shape(binding: FieldBinding) -> None:
    if binding.shape is None:
        return
    if binding.shape not in SHAPES:
        raise BindingTypeError(f"unknown shape {binding.shape!r}, expected one of {list(SHAPES)}", name=binding.name)
    if binding.shape == SHAPE_FRAME:
        if not is_table_name(binding.name):
            raise BindingTypeError("shape 'frame' is only valid for tables", name=binding.name)
        return
    expected = native_shape(binding.name)
    if binding.shape != expected:
        raise BindingTypeError(f"shape {binding.shape!r} does not match, expected {expected!r}", name=binding.name)


class Schema:
    """Maps a host record to requested Names, validated at construction."""

    def __init__(self, bindings: Iterable[FieldBinding], *, atom_style: str | AtomStyle | None = "full") -> None:
        self.atom_style = atom_style
        self.bindings: list[FieldBinding] = []
        seen: set[str] = set()
        for b in bindings:
            if b.name in seen:
                raise ValueError(f"Schema: name {b.name!r} is bound more than once")
            seen.add(b.name)
            # Unknown Names are reported by Registry.build and then ignored.
            if is_name(b.name):
                _check_shape(b)
            self.bindings.append(b)

    @classmethod
    def from_attributes(
        cls,
        fields: Mapping[str, str],
        *,
        atom_style: str | AtomStyle | None = "full",
        frames: Iterable[str] = (),
    ) -> "Schema":
        """Bind object attributes: `{attribute: Name}`.

        Tables listed in `frames` are exchanged as pandas DataFrames.
        """
        frame_names = set(frames)
        bindings = []
        for attr, name in fields.items():
            bindings.append(
                FieldBinding(
                    name=name,
                    getter=_attr_getter(attr),
                    setter=_attr_setter(attr),
                    shape=SHAPE_FRAME if name in frame_names else None,
                )
            )
        return cls(bindings, atom_style=atom_style)

    @property
    def names(self) -> list[str]:
        return [b.name for b in self.bindings]

    def registry(self) -> Registry:
        return Registry.build(self.names, self.atom_style)

    def decode(self, data: str | Iterable[str], target: Any, *, validate: bool = True) -> Registry:
        """Decode `data` and push every bound value into `target`."""
        lines = data.splitlines() if isinstance(data, str) else data
        registry = lammps_data.decode(self.names, self.atom_style, lines, validate=validate)
        for b in self.bindings:
            if b.setter is None or b.name not in registry:
                continue
            value = registry[b.name].value()
            if b.shape == SHAPE_FRAME:
                value = table_to_frame(b.name, value)
            b.setter(target, value)
        return registry

    def encode(self, source: Any) -> str:
        """Pull every bound value from `source` and encode it."""
        registry = self.registry()
        for b in self.bindings:
            if b.getter is None or b.name not in registry:
                continue
            value = b.getter(source)
            if b.shape == SHAPE_FRAME:
                try:
                    value = table_from_frame(b.name, value)
                except (TypeError, ValueError) as e:
                    raise BindingTypeError(str(e), name=b.name) from e
            registry.assign(b.name, value)
        return lammps_data.encode(registry)


def _attr_getter(attr: str) -> Callable[[Any], Any]:
    def get(obj: Any) -> Any:
        try:
            return getattr(obj, attr)
        except AttributeError:
            raise BindingTypeError(f"{type(obj).__name__} has no attribute {attr!r}") from None

    return get


def _attr_setter(attr: str) -> Callable[[Any, Any], None]:
    def set_(obj: Any, value: Any) -> None:
        try:
            setattr(obj, attr, value)
        except AttributeError as e:
            raise BindingTypeError(f"cannot set {type(obj).__name__}.{attr}: {e}") from None

    return set_
