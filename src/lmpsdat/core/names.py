"""Closed vocabulary of section/field Names for LAMMPS data files.

A Name identifies exactly one Key. Names are case-sensitive: `atoms` is the
header count, `Atoms` is the table.
"""

from __future__ import annotations

# Keep as a plain assignment (no typing.TypeAlias) for Python 3.9.
Name = str

# ----------------------------
# Header counts
# ----------------------------

ATOMS_NBR: Name = "atoms"
BONDS_NBR: Name = "bonds"
ANGLES_NBR: Name = "angles"
DIHEDRALS_NBR: Name = "dihedrals"
IMPROPERS_NBR: Name = "impropers"

ATOM_TYPES: Name = "atom types"
BOND_TYPES: Name = "bond types"
ANGLE_TYPES: Name = "angle types"
DIHEDRAL_TYPES: Name = "dihedral types"
IMPROPER_TYPES: Name = "improper types"

# ----------------------------
# Box
# ----------------------------

BOX_X: Name = "xlo xhi"
BOX_Y: Name = "ylo yhi"
BOX_Z: Name = "zlo zhi"

# ----------------------------
# Tables
# ----------------------------

MASSES: Name = "Masses"

PAIR_COEFFS: Name = "Pair Coeffs"
BOND_COEFFS: Name = "Bond Coeffs"
ANGLE_COEFFS: Name = "Angle Coeffs"
DIHEDRAL_COEFFS: Name = "Dihedral Coeffs"
IMPROPER_COEFFS: Name = "Improper Coeffs"

ATOMS: Name = "Atoms"
BONDS: Name = "Bonds"
ANGLES: Name = "Angles"
DIHEDRALS: Name = "Dihedrals"
IMPROPERS: Name = "Impropers"

TITLE: Name = "Title"


# Canonical write groups (fixed order). A blank line follows each non-empty group.
COUNT_NAMES: tuple[Name, ...] = (ATOMS_NBR, BONDS_NBR, ANGLES_NBR, DIHEDRALS_NBR, IMPROPERS_NBR)
TYPE_COUNT_NAMES: tuple[Name, ...] = (ATOM_TYPES, BOND_TYPES, ANGLE_TYPES, DIHEDRAL_TYPES, IMPROPER_TYPES)
BOX_NAMES: tuple[Name, ...] = (BOX_X, BOX_Y, BOX_Z)
HEADER_GROUPS: tuple[tuple[Name, ...], ...] = (COUNT_NAMES, TYPE_COUNT_NAMES, BOX_NAMES)

COEFF_NAMES: tuple[Name, ...] = (PAIR_COEFFS, BOND_COEFFS, ANGLE_COEFFS, DIHEDRAL_COEFFS, IMPROPER_COEFFS)
LINK_NAMES: tuple[Name, ...] = (BONDS, ANGLES, DIHEDRALS, IMPROPERS)

TABLE_ORDER: tuple[Name, ...] = (
    MASSES,
    PAIR_COEFFS,
    BOND_COEFFS,
    ANGLE_COEFFS,
    DIHEDRAL_COEFFS,
    IMPROPER_COEFFS,
    ATOMS,
    BONDS,
    ANGLES,
    DIHEDRALS,
    IMPROPERS,
)

ALL_NAMES: tuple[Name, ...] = (TITLE,) + COUNT_NAMES + TYPE_COUNT_NAMES + BOX_NAMES + TABLE_ORDER

# Coeffs table -> type-count Counter it is indexed by.
COEFF_TYPE_COUNT: dict[Name, Name] = {
    PAIR_COEFFS: ATOM_TYPES,
    BOND_COEFFS: BOND_TYPES,
    ANGLE_COEFFS: ANGLE_TYPES,
    DIHEDRAL_COEFFS: DIHEDRAL_TYPES,
    IMPROPER_COEFFS: IMPROPER_TYPES,
}

# Links table -> (row-count Counter, type-count Counter, atoms per row).
LINK_LAYOUT: dict[Name, tuple[Name, Name, int]] = {
    BONDS: (BONDS_NBR, BOND_TYPES, 2),
    ANGLES: (ANGLES_NBR, ANGLE_TYPES, 3),
    DIHEDRALS: (DIHEDRALS_NBR, DIHEDRAL_TYPES, 4),
    IMPROPERS: (IMPROPERS_NBR, IMPROPER_TYPES, 4),
}


def is_name(value: object) -> bool:
    """Return True if `value` is a supported Name."""
    return isinstance(value, str) and value in ALL_NAMES


def is_table_name(name: Name) -> bool:
    return name in TABLE_ORDER
