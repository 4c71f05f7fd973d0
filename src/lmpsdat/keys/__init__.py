"""Section codecs (Keys) and the Registry that wires them.

One Key per Name: Title, Counter, Box, Masses, Coeffs, Atoms and Links.
"""

from __future__ import annotations

from .atoms import AtomsKey
from .base import Key, LineSource, TableKey
from .header import BoxKey, CounterKey, TitleKey
from .links import LinksKey
from .registry import Registry, dependency_names, make_key
from .tables import CoeffsKey, MassesKey

__all__ = [
    "Key",
    "TableKey",
    "LineSource",
    "TitleKey",
    "CounterKey",
    "BoxKey",
    "MassesKey",
    "CoeffsKey",
    "AtomsKey",
    "LinksKey",
    "Registry",
    "dependency_names",
    "make_key",
]
