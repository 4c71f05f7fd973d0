"""Explicit host binding for the codec (see `schema.py`)."""

from __future__ import annotations

from .schema import SHAPES, FieldBinding, Schema, native_shape

__all__ = [
    "SHAPES",
    "FieldBinding",
    "Schema",
    "native_shape",
]
