"""Internal writer helpers for LAMMPS data files.

Private module; public API is in `lammps_data.py`.

Output layout (fixed order):

    <title>
    <blank>
    counts group        (atoms, bonds, angles, dihedrals, impropers)
    <blank>
    type counts group   (atom types, bond types, ...)
    <blank>
    box group           (xlo xhi, ylo yhi, zlo zhi)
    <blank>
    each non-empty table in TABLE_ORDER, followed by a blank line

A header group is written only if at least one of its Names is in the Registry;
Counters are written even when their value is zero. Empty tables write nothing.
"""

from __future__ import annotations

import logging

from lmpsdat.core.errors import DataFileError
from lmpsdat.core.names import HEADER_GROUPS, TABLE_ORDER, TITLE
from lmpsdat.keys.base import Key
from lmpsdat.keys.registry import Registry

logger = logging.getLogger(__name__)


def _encode_key(key: Key) -> list[str]:
    try:
        return key.encode()
    except DataFileError as e:
        raise e.attach(key.name)


def format_title(registry: Registry) -> list[str]:
    title = registry.get(TITLE)
    text = title.value() if title is not None else ""
    return [text, ""]


def format_header_groups(registry: Registry) -> list[str]:
    lines: list[str] = []
    for group in HEADER_GROUPS:
        group_lines: list[str] = []
        for name in group:
            key = registry.get(name)
            if key is not None:
                group_lines.extend(_encode_key(key))
        if group_lines:
            lines.extend(group_lines)
            lines.append("")
    return lines


def format_tables(registry: Registry) -> list[str]:
    lines: list[str] = []
    for name in TABLE_ORDER:
        key = registry.get(name)
        if key is None:
            continue
        table_lines = _encode_key(key)
        if not table_lines:
            logger.debug("skipping empty table %r", name)
            continue
        logger.debug("writing %r (%d rows)", name, len(table_lines) - 2)
        lines.extend(table_lines)
        lines.append("")
    return lines


def format_registry(registry: Registry) -> list[str]:
    """All output lines of an already propagated and validated Registry."""
    return format_title(registry) + format_header_groups(registry) + format_tables(registry)
