"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import lmpsdat` to fail.

To keep the test run robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers
# =============================================================================


SCENARIO_A_TEXT = "\n".join(
    [
        "My title",
        "",
        "2 atoms",
        "1 atom types",
        "",
        "0.0 1.0 xlo xhi",
        "0.0 1.0 ylo yhi",
        "0.0 1.0 zlo zhi",
        "",
        "Masses",
        "",
        "1 1.0",
        "",
        "Atoms",
        "",
        "1 1 1 0.0 0.5 0.5 0.5",
        "2 1 1 0.0 0.5 0.5 0.6",
    ]
) + "\n"

SCENARIO_A_NAMES = ["Title", "atoms", "atom types", "xlo xhi", "ylo yhi", "zlo zhi", "Masses", "Atoms"]


def make_atom(atom_type: int = 1, x: float = 0.0, y: float = 0.0, z: float = 0.0, **kwargs: Any) -> Any:
    """Create an AtomRecord with zeroed defaults."""
    from lmpsdat.core.records import AtomRecord

    return AtomRecord(atom_type=atom_type, x=x, y=y, z=z, **kwargs)


def make_bond(link_type: int, a1: int, a2: int) -> Any:
    from lmpsdat.core.records import LinkRecord

    return LinkRecord(link_type=link_type, atoms=(a1, a2))
