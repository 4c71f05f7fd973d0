"""Atom styles: per-row column layout of the Atoms table.

An atom style turns the whitespace-split tokens of one Atoms row into
`(atom_id, AtomRecord)` and back. Every style accepts an optional trailing
periodic image triple `nx ny nz`, detected from the token count alone:

- `min_tokens` = 1 (atom id) + number of style columns
- `max_tokens` = `min_tokens` + 3

Fewer than `min_tokens` tokens is a MalformedLine. Image flags are read only
when the row has exactly `max_tokens` tokens; any other extra tokens are
ignored, as in the topology tables.

Built-in styles are column-table driven (`ColumnAtomStyle`). A custom style
subclasses `AtomStyle` and implements `decode`/`encode`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from lmpsdat.core.errors import MalformedLineError
from lmpsdat.core.records import AtomRecord
from lmpsdat.core.tokens import fmt_float, fmt_int, parse_float, parse_int

IMAGE_WIDTH = 3

# Column name -> (converter kind). Column names are AtomRecord field names.
_COLUMN_KINDS: dict[str, str] = {
    "mol_tag": "int",
    "atom_type": "int",
    "charge": "float",
    "x": "float",
    "y": "float",
    "z": "float",
}


class AtomStyle(ABC):
    """Strategy describing one Atoms row."""

    name: str

    @property
    @abstractmethod
    def min_tokens(self) -> int:
        """Token count of a row without image flags (id included)."""

    @property
    def max_tokens(self) -> int:
        return self.min_tokens + IMAGE_WIDTH

    @abstractmethod
    def decode(self, fields: Sequence[str]) -> tuple[int, AtomRecord]:
        """Build `(atom_id, record)` from the tokens of one row."""

    @abstractmethod
    def encode(self, atom_id: int, record: AtomRecord) -> list[str]:
        """Return the tokens of one row, image flags included when present."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ColumnAtomStyle(AtomStyle):
    """Atom style defined by an ordered list of AtomRecord columns."""

    def __init__(self, name: str, columns: Sequence[str]) -> None:
        unknown = [c for c in columns if c not in _COLUMN_KINDS]
        if unknown:
            raise ValueError(f"atom style {name!r}: unknown columns: {unknown}")
        for required in ("atom_type", "x", "y", "z"):
            if required not in columns:
                raise ValueError(f"atom style {name!r}: missing required column {required!r}")
        self.name = name
        self.columns: tuple[str, ...] = tuple(columns)

    @property
    def min_tokens(self) -> int:
        return 1 + len(self.columns)

    def decode(self, fields: Sequence[str]) -> tuple[int, AtomRecord]:
        n = len(fields)
        if n < self.min_tokens:
            raise MalformedLineError(f"not enough fields = {n}, want >= {self.min_tokens}")
        atom_id = parse_int(fields[0], what="atom id")
        values: dict[str, int | float] = {}
        for col, tok in zip(self.columns, fields[1 : self.min_tokens]):
            if _COLUMN_KINDS[col] == "int":
                values[col] = parse_int(tok, what=col)
            else:
                values[col] = parse_float(tok, what=col)

        image = None
        if n == self.max_tokens:
            nx, ny, nz = (parse_int(tok, what="image flag") for tok in fields[self.min_tokens :])
            image = (nx, ny, nz)

        return atom_id, AtomRecord(image=image, **values)  # type: ignore[arg-type]

    def encode(self, atom_id: int, record: AtomRecord) -> list[str]:
        parts = [fmt_int(atom_id)]
        for col in self.columns:
            value = getattr(record, col)
            parts.append(fmt_int(value) if _COLUMN_KINDS[col] == "int" else fmt_float(value))
        if record.image is not None:
            parts.extend(fmt_int(v) for v in record.image)
        return parts


FULL = ColumnAtomStyle("full", ["mol_tag", "atom_type", "charge", "x", "y", "z"])
ATOMIC = ColumnAtomStyle("atomic", ["atom_type", "x", "y", "z"])
CHARGE = ColumnAtomStyle("charge", ["atom_type", "charge", "x", "y", "z"])
MOLECULAR = ColumnAtomStyle("molecular", ["mol_tag", "atom_type", "x", "y", "z"])
BOND = ColumnAtomStyle("bond", ["mol_tag", "atom_type", "x", "y", "z"])
ANGLE = ColumnAtomStyle("angle", ["mol_tag", "atom_type", "x", "y", "z"])

ATOM_STYLES: dict[str, AtomStyle] = {s.name: s for s in (FULL, ATOMIC, CHARGE, MOLECULAR, BOND, ANGLE)}

DEFAULT_ATOM_STYLE = FULL


def is_atom_style(name: str) -> bool:
    return name in ATOM_STYLES


def get_atom_style(name: str) -> AtomStyle | None:
    """Return the built-in style called `name`, or None if it does not exist."""
    return ATOM_STYLES.get(name)
