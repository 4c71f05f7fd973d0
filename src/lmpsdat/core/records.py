"""Row records stored by the Atoms and Links tables.

Records are frozen dataclasses; the row identifier is the mapping key in the
owning table and is not part of the record.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AtomRecord:
    """One row of the Atoms table.

    `mol_tag` and `charge` are only written by atom styles that carry them.
    `image` is either None or the periodic image triple (nx, ny, nz); within one
    table every record must agree on whether it is present.
    """

    atom_type: int
    x: float
    y: float
    z: float
    mol_tag: int = 0
    charge: float = 0.0
    image: tuple[int, int, int] | None = None

    def __post_init__(self) -> None:
        if self.image is not None:
            image = tuple(self.image)
            if len(image) != 3:
                raise ValueError(f"AtomRecord.image: expected 3 items, got {len(image)}")
            object.__setattr__(self, "image", image)

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class LinkRecord:
    """One row of a Bonds/Angles/Dihedrals/Impropers table."""

    link_type: int
    atoms: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "atoms", tuple(self.atoms))
