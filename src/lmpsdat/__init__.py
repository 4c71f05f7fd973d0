"""lmpsdat: codec for LAMMPS data files.

Reads and writes the title, header fields (counts, box bounds) and tables
(Masses, Coeffs, Atoms, Bonds, Angles, Dihedrals, Impropers) of a data file,
enforcing the cross-references between them.
"""

from __future__ import annotations

from lmpsdat.codecs import decode, encode, format_data_text, parse_data_text, read_data, write_data
from lmpsdat.core import AtomRecord, DataFileError, LinkRecord
from lmpsdat.keys import Registry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AtomRecord",
    "LinkRecord",
    "DataFileError",
    "Registry",
    "decode",
    "encode",
    "parse_data_text",
    "read_data",
    "format_data_text",
    "write_data",
]
