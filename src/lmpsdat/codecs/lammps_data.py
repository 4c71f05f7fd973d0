"""LAMMPS data file codec (import + export).

Decode:
- the caller names the sections/fields it wants (`names`) and the atom style
- a Registry is built for those Names plus every Counter they depend on
- the text is read once, start to finish (see `_decoder`)
- `validate()` runs once on every Key after the whole document is read

Encode:
- values are assigned into a Registry
- table row counts are pushed into their Counters (`propagate`)
- every Key is validated
- sections are written in the canonical order (see `_encoder`)

Parse errors (`MalformedLineError`) abort immediately; range and count
problems are only reported by the validation pass.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from lmpsdat.codecs import _decoder, _encoder
from lmpsdat.core.atom_style import AtomStyle
from lmpsdat.keys.base import LineSource
from lmpsdat.keys.registry import Registry

logger = logging.getLogger(__name__)


# ----------------------------
# Decode
# ----------------------------


def decode(
    names: Iterable[str],
    atom_style: str | AtomStyle | None,
    lines: Iterable[str],
    *,
    validate: bool = True,
) -> Registry:
    """Decode a line stream into a Registry holding `names`.

    Args:
        names: requested Names (unknown Names are dropped with a warning).
        atom_style: atom style name or instance used for the Atoms table.
        lines: the document, one line per item (trailing newlines allowed).
        validate: run the validation pass after reading (default True).

    Returns:
        The filled Registry. `registry.values()` gives the requested values.
    """
    registry = Registry.build(names, atom_style)
    _decoder.run(registry, LineSource(lines))
    if validate:
        registry.validate()
    return registry


def parse_data_text(
    text: str,
    names: Iterable[str],
    *,
    atom_style: str | AtomStyle | None = "full",
    validate: bool = True,
) -> Registry:
    """Parse LAMMPS data file text."""
    if not isinstance(text, str):
        raise TypeError(f"parse_data_text: expected str, got {type(text).__name__}")
    return decode(names, atom_style, text.splitlines(), validate=validate)


def read_data(
    path: str | Path,
    names: Iterable[str],
    *,
    atom_style: str | AtomStyle | None = "full",
    validate: bool = True,
) -> Registry:
    """Read a LAMMPS data file from disk and parse."""
    p = Path(path)
    logger.debug("reading %s", p)
    with p.open("r", encoding="utf-8") as f:
        return decode(names, atom_style, f, validate=validate)


# ----------------------------
# Encode
# ----------------------------


def encode(registry: Registry) -> str:
    """Propagate derived counts, validate, and return the document text."""
    registry.propagate()
    registry.validate()
    return "\n".join(_encoder.format_registry(registry)) + "\n"


def build_registry(values: Mapping[str, Any], *, atom_style: str | AtomStyle | None = "full") -> Registry:
    """Build a Registry for the keys of `values` and assign them."""
    registry = Registry.build(values.keys(), atom_style)
    registry.assign_all({n: v for n, v in values.items() if n in registry})
    return registry


def format_data_text(values: Mapping[str, Any], *, atom_style: str | AtomStyle | None = "full") -> str:
    """Encode a `{Name: value}` mapping into LAMMPS data file text."""
    return encode(build_registry(values, atom_style=atom_style))


def write_data(
    path: str | Path,
    data: Registry | Mapping[str, Any],
    *,
    atom_style: str | AtomStyle | None = "full",
) -> None:
    """Write a LAMMPS data file.

    `data` is either a filled Registry or a `{Name: value}` mapping. The file is
    UTF-8 with `\\n` newlines; parent directories are created.
    """
    registry = data if isinstance(data, Registry) else build_registry(data, atom_style=atom_style)
    out_text = encode(registry)

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(out_text)
    logger.debug("wrote %s", out_path)
