"""Codecs for reading/writing LAMMPS data files.

The decode state machine and the writer live in private modules; the public
API is in `lmpsdat.codecs.lammps_data`.
"""

from __future__ import annotations

from .lammps_data import (
    build_registry,
    decode,
    encode,
    format_data_text,
    parse_data_text,
    read_data,
    write_data,
)

__all__ = [
    "decode",
    "encode",
    "parse_data_text",
    "read_data",
    "build_registry",
    "format_data_text",
    "write_data",
]
