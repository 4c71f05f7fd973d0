"""Canonical pandas DataFrames for the table Keys.

Each table variant has a canonical frame layout so decoded data can flow into
pandas (and back) without per-caller glue:

- `masses`: `type`, `mass`
- `coeffs`: `type`, `c1` .. `cn` (n = widest row, short rows padded with <NA>)
- `atoms`:  `id`, `mol_tag`, `atom_type`, `charge`, `x`, `y`, `z`, `nx`, `ny`, `nz`
- `links`:  `id`, `type`, `a1` .. `ak`

Guarantees of the `*_to_frame` functions:
- nullable extension dtypes (`Int64`, `Float64`) so missing image flags and
  short coefficient rows stay <NA>
- rows sorted by id, index reset to RangeIndex

The `*_from_frame` functions are strict: required columns must be present,
ids must be unique and non-null. The atoms image columns `nx`, `ny`, `nz` may
be left out together, which reads as "no image flags". They raise `ValueError`
on bad content and `TypeError` on non-DataFrame input.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Mapping

from lmpsdat.core.names import ATOMS, COEFF_TYPE_COUNT, LINK_LAYOUT, MASSES, Name
from lmpsdat.core.records import AtomRecord, LinkRecord

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


# ----------------------------
# Canonical schema descriptors
# ----------------------------

# Fixed-width tables only; coeffs/links add numbered columns at runtime.
TABLE_SCHEMAS: dict[str, dict[str, str]] = {
    "masses": {
        "type": "Int64",
        "mass": "Float64",
    },
    "coeffs": {
        "type": "Int64",
    },
    "atoms": {
        "id": "Int64",
        "mol_tag": "Int64",
        "atom_type": "Int64",
        "charge": "Float64",
        "x": "Float64",
        "y": "Float64",
        "z": "Float64",
        "nx": "Int64",
        "ny": "Int64",
        "nz": "Int64",
    },
    "links": {
        "id": "Int64",
        "type": "Int64",
    },
}

_COEFF_COL_RE = re.compile(r"^c(\d+)$")
_LINK_COL_RE = re.compile(r"^a(\d+)$")
_IMAGE_COLUMNS = ("nx", "ny", "nz")


# ----------------------------
# Internal helpers
# ----------------------------


def _require_dataframe(df: object, *, table: str) -> "pd.DataFrame":
    import pandas as pd

    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"{table}: expected pandas.DataFrame, got {type(df).__name__}")
    return df


def _require_columns(df: "pd.DataFrame", *, required: list[str], table: str) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{table}: missing required columns: {missing}")


def _numbered_columns(df: "pd.DataFrame", pattern: re.Pattern[str]) -> list[str]:
    found: list[tuple[int, str]] = []
    for c in df.columns:
        m = pattern.match(str(c))
        if m:
            found.append((int(m.group(1)), c))
    return [c for _, c in sorted(found)]


def _build_frame(data: dict[str, list[Any]], *, schema: dict[str, str], key: str) -> "pd.DataFrame":
    import pandas as pd

    df = pd.DataFrame(data, columns=list(schema.keys()))
    df = df.astype(schema)
    # stable sort ensures deterministic ordering if keys tie
    return df.sort_values(key, kind="mergesort").reset_index(drop=True)


def _ids(df: "pd.DataFrame", *, table: str, col: str) -> list[int]:
    import pandas as pd

    values = df[col].tolist()
    if any(pd.isna(v) for v in values):
        raise ValueError(f"{table}: {col}: contains nulls")
    ids = [int(v) for v in values]
    if len(ids) != len(set(ids)):
        raise ValueError(f"{table}: duplicate key rows for [{col!r}]")
    return ids


def _column(df: "pd.DataFrame", col: str, *, table: str, cast: type) -> list[Any]:
    import pandas as pd

    values = df[col].tolist()
    if any(pd.isna(v) for v in values):
        raise ValueError(f"{table}: {col}: contains nulls")
    return [cast(v) for v in values]


# ----------------------------
# Masses
# ----------------------------


def masses_to_frame(masses: Mapping[int, float]) -> "pd.DataFrame":
    data = {
        "type": list(masses.keys()),
        "mass": [float(m) for m in masses.values()],
    }
    return _build_frame(data, schema=TABLE_SCHEMAS["masses"], key="type")


def masses_from_frame(df: "pd.DataFrame") -> dict[int, float]:
    table = "masses"
    df = _require_dataframe(df, table=table)
    _require_columns(df, required=list(TABLE_SCHEMAS[table]), table=table)

    types = _ids(df, table=table, col="type")
    masses = _column(df, "mass", table=table, cast=float)
    return dict(zip(types, masses))


# ----------------------------
# Coeffs
# ----------------------------


def coeffs_to_frame(coeffs: Mapping[int, Any]) -> "pd.DataFrame":
    width = max((len(c) for c in coeffs.values()), default=0)
    schema = dict(TABLE_SCHEMAS["coeffs"])
    for i in range(1, width + 1):
        schema[f"c{i}"] = "Float64"

    data: dict[str, list[Any]] = {"type": list(coeffs.keys())}
    for i in range(width):
        data[f"c{i + 1}"] = [float(c[i]) if i < len(c) else None for c in coeffs.values()]
    return _build_frame(data, schema=schema, key="type")


def coeffs_from_frame(df: "pd.DataFrame") -> dict[int, tuple[float, ...]]:
    import pandas as pd

    table = "coeffs"
    df = _require_dataframe(df, table=table)
    _require_columns(df, required=["type"], table=table)

    types = _ids(df, table=table, col="type")
    cols = _numbered_columns(df, _COEFF_COL_RE)
    if cols:
        rows = list(df.loc[:, cols].itertuples(index=False, name=None))
    else:
        rows = [()] * len(types)

    out: dict[int, tuple[float, ...]] = {}
    for typ, row in zip(types, rows):
        values = list(row)
        # Trailing <NA> is padding from a shorter row.
        while values and pd.isna(values[-1]):
            values.pop()
        if any(pd.isna(v) for v in values):
            raise ValueError(f"{table}: type = {typ}: null coefficient before the last value")
        out[typ] = tuple(float(v) for v in values)
    return out


# ----------------------------
# Atoms
# ----------------------------


def atoms_to_frame(atoms: Mapping[int, AtomRecord]) -> "pd.DataFrame":
    records = list(atoms.values())
    data = {
        "id": list(atoms.keys()),
        "mol_tag": [a.mol_tag for a in records],
        "atom_type": [a.atom_type for a in records],
        "charge": [a.charge for a in records],
        "x": [a.x for a in records],
        "y": [a.y for a in records],
        "z": [a.z for a in records],
        "nx": [a.image[0] if a.image is not None else None for a in records],
        "ny": [a.image[1] if a.image is not None else None for a in records],
        "nz": [a.image[2] if a.image is not None else None for a in records],
    }
    return _build_frame(data, schema=TABLE_SCHEMAS["atoms"], key="id")


def atoms_from_frame(df: "pd.DataFrame") -> dict[int, AtomRecord]:
    import pandas as pd

    table = "atoms"
    df = _require_dataframe(df, table=table)
    _require_columns(df, required=[c for c in TABLE_SCHEMAS[table] if c not in _IMAGE_COLUMNS], table=table)

    ids = _ids(df, table=table, col="id")
    mol_tags = _column(df, "mol_tag", table=table, cast=int)
    types = _column(df, "atom_type", table=table, cast=int)
    charges = _column(df, "charge", table=table, cast=float)
    xs = _column(df, "x", table=table, cast=float)
    ys = _column(df, "y", table=table, cast=float)
    zs = _column(df, "z", table=table, cast=float)
    if any(c in df.columns for c in _IMAGE_COLUMNS):
        _require_columns(df, required=list(_IMAGE_COLUMNS), table=table)
        images = list(zip(*(df[c].tolist() for c in _IMAGE_COLUMNS)))
    else:
        images = [(None, None, None)] * len(ids)

    out: dict[int, AtomRecord] = {}
    for atom_id, mol, typ, q, x, y, z, img in zip(ids, mol_tags, types, charges, xs, ys, zs, images):
        missing = [pd.isna(v) for v in img]
        if all(missing):
            image = None
        elif any(missing):
            raise ValueError(f"{table}: id = {atom_id}: image flags must be all set or all null")
        else:
            image = (int(img[0]), int(img[1]), int(img[2]))
        out[atom_id] = AtomRecord(atom_type=typ, x=x, y=y, z=z, mol_tag=mol, charge=q, image=image)
    return out


# ----------------------------
# Links
# ----------------------------


def links_to_frame(links: Mapping[int, LinkRecord], *, arity: int | None = None) -> "pd.DataFrame":
    if arity is None:
        arity = max((len(link.atoms) for link in links.values()), default=0)
    schema = dict(TABLE_SCHEMAS["links"])
    for i in range(1, arity + 1):
        schema[f"a{i}"] = "Int64"

    records = list(links.values())
    data: dict[str, list[Any]] = {
        "id": list(links.keys()),
        "type": [link.link_type for link in records],
    }
    for i in range(arity):
        data[f"a{i + 1}"] = [link.atoms[i] if i < len(link.atoms) else None for link in records]
    return _build_frame(data, schema=schema, key="id")


def links_from_frame(df: "pd.DataFrame") -> dict[int, LinkRecord]:
    table = "links"
    df = _require_dataframe(df, table=table)
    _require_columns(df, required=list(TABLE_SCHEMAS[table]), table=table)

    ids = _ids(df, table=table, col="id")
    types = _column(df, "type", table=table, cast=int)
    atom_cols = [_column(df, c, table=table, cast=int) for c in _numbered_columns(df, _LINK_COL_RE)]

    out: dict[int, LinkRecord] = {}
    for i, (link_id, typ) in enumerate(zip(ids, types)):
        out[link_id] = LinkRecord(link_type=typ, atoms=tuple(col[i] for col in atom_cols))
    return out


# ----------------------------
# Dispatch by Name
# ----------------------------


def table_to_frame(name: Name, value: Mapping[int, Any]) -> "pd.DataFrame":
    """Convert the value of table `name` into its canonical DataFrame."""
    if name == MASSES:
        return masses_to_frame(value)
    if name in COEFF_TYPE_COUNT:
        return coeffs_to_frame(value)
    if name == ATOMS:
        return atoms_to_frame(value)
    if name in LINK_LAYOUT:
        return links_to_frame(value, arity=LINK_LAYOUT[name][2])
    raise ValueError(f"table_to_frame: {name!r} is not a table")


def table_from_frame(name: Name, df: "pd.DataFrame") -> dict[int, Any]:
    """Inverse of `table_to_frame`."""
    if name == MASSES:
        return masses_from_frame(df)
    if name in COEFF_TYPE_COUNT:
        return coeffs_from_frame(df)
    if name == ATOMS:
        return atoms_from_frame(df)
    if name in LINK_LAYOUT:
        return links_from_frame(df)
    raise ValueError(f"table_from_frame: {name!r} is not a table")
