"""lmpsdat core: Names, errors, records and atom styles.

This package is standalone and must not import keys/codecs/binding to avoid
circular dependencies.
"""

from __future__ import annotations

from .atom_style import ATOM_STYLES, DEFAULT_ATOM_STYLE, AtomStyle, ColumnAtomStyle, get_atom_style, is_atom_style
from .errors import (
    BindingTypeError,
    CountMismatchError,
    DataFileError,
    DependencyArityError,
    Diagnostic,
    InconsistentOptionalFieldError,
    MalformedLineError,
    MissingDependencyError,
    RangeViolationError,
    UnsupportedError,
    ValidationError,
)
from .frames import TABLE_SCHEMAS, table_from_frame, table_to_frame
from .names import ALL_NAMES, Name, is_name
from .records import AtomRecord, LinkRecord

__all__ = [
    "ALL_NAMES",
    "Name",
    "is_name",
    "AtomRecord",
    "LinkRecord",
    "AtomStyle",
    "ColumnAtomStyle",
    "ATOM_STYLES",
    "DEFAULT_ATOM_STYLE",
    "get_atom_style",
    "is_atom_style",
    "DataFileError",
    "MalformedLineError",
    "MissingDependencyError",
    "DependencyArityError",
    "UnsupportedError",
    "BindingTypeError",
    "ValidationError",
    "CountMismatchError",
    "RangeViolationError",
    "InconsistentOptionalFieldError",
    "Diagnostic",
    "TABLE_SCHEMAS",
    "table_to_frame",
    "table_from_frame",
]
