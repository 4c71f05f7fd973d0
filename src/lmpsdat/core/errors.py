"""Error hierarchy for the LAMMPS data codec.

All codec failures derive from `DataFileError` (a `ValueError`). Errors carry
the offending Key's Name once it is known so messages are stable and suitable
for test assertions, eg `"Atoms: line 14: not enough fields = 3, want >= 7"`.

Only `validate()` raises the `ValidationError` family. `UnsupportedError` is a
sentinel for capabilities a Key variant does not have; callers ignore it.
"""

from __future__ import annotations

from dataclasses import dataclass


class DataFileError(ValueError):
    """Base class for every codec error."""

    def __init__(self, message: str, *, name: str | None = None, line_no: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.name = name
        self.line_no = line_no

    def attach(self, name: str) -> "DataFileError":
        """Attach the offending Key's Name unless one is already set."""
        if self.name is None:
            self.name = name
        return self

    def __str__(self) -> str:
        parts: list[str] = []
        if self.name is not None:
            parts.append(self.name)
        if self.line_no is not None:
            parts.append(f"line {self.line_no}")
        parts.append(self.message)
        return ": ".join(parts)


class MalformedLineError(DataFileError):
    """Too few tokens on a line, or a token that is not a valid number."""


class MissingDependencyError(DataFileError):
    """A Key was used before its dependency Keys were wired."""


class DependencyArityError(DataFileError):
    """Wrong number or wrong variant of dependency Keys."""


class UnsupportedError(DataFileError):
    """Capability not implemented by a Key variant (non-fatal)."""


class BindingTypeError(DataFileError, TypeError):
    """A value exchanged with the host has the wrong shape for its Name."""


class ValidationError(DataFileError):
    """Base class for failures raised by `validate()` only."""


class CountMismatchError(ValidationError):
    """Table row count differs from its declared Counter."""


class RangeViolationError(ValidationError):
    """An id, type or foreign reference falls outside its declared range."""


class InconsistentOptionalFieldError(ValidationError):
    """Image flags are present on some Atoms rows but not on others."""


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal report (unknown Name, unknown atom style)."""

    kind: str
    value: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"
