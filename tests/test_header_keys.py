from __future__ import annotations

import pytest

from lmpsdat.core.errors import (
    BindingTypeError,
    DependencyArityError,
    MalformedLineError,
    RangeViolationError,
    UnsupportedError,
)
from lmpsdat.keys.base import LineSource
from lmpsdat.keys.header import BoxKey, CounterKey, TitleKey


def _decode_header(key: CounterKey | BoxKey, line: str) -> None:
    assert key.matches_header(line)
    key.decode(line, LineSource([]))


def test_counter_matches_and_decodes_its_keyword() -> None:
    key = CounterKey("atom types")
    _decode_header(key, "  3 atom types")

    assert key.value() == 3


def test_counter_ignores_trailing_tokens() -> None:
    key = CounterKey("atoms")
    _decode_header(key, "12 atoms  # from write_data")

    assert key.value() == 12


@pytest.mark.parametrize(
    "name,line",
    [
        ("atoms", "1 atom types"),
        ("atom types", "2 atoms"),
        ("bonds", "4 bond types"),
        ("angles", "0.0 1.0 xlo xhi"),
        ("atoms", "Atoms"),
        ("atoms", ""),
    ],
)
def test_counter_does_not_match_other_lines(name: str, line: str) -> None:
    assert not CounterKey(name).matches_header(line)


def test_counter_decode_fails_on_non_integer() -> None:
    key = CounterKey("atoms")
    assert key.matches_header("2.5 atoms")

    with pytest.raises(MalformedLineError, match=r"atoms: expected integer, got '2.5'"):
        key.decode("2.5 atoms", LineSource([]))


def test_counter_encodes_zero() -> None:
    key = CounterKey("dihedrals")

    assert key.encode() == ["0 dihedrals"]


def test_counter_validate_rejects_negative() -> None:
    key = CounterKey("atoms")
    key.assign(-1)

    with pytest.raises(RangeViolationError, match=r"integer = -1 is lower than zero"):
        key.validate()


def test_counter_assign_type_checks() -> None:
    key = CounterKey("atoms")
    with pytest.raises(BindingTypeError, match=r"atoms: expected int, got str"):
        key.assign("2")
    with pytest.raises(BindingTypeError):
        key.assign(True)


def test_scalar_keys_take_no_dependencies_and_propagate_nothing() -> None:
    for key in (TitleKey(), CounterKey("atoms"), BoxKey("xlo xhi")):
        with pytest.raises(DependencyArityError, match=r"accepts no dependency Keys"):
            key.declare_dependencies(CounterKey("atom types"))
        with pytest.raises(UnsupportedError):
            key.propagate_derived_value()
        key.declare_dependencies()


def test_box_matches_and_decodes_bounds() -> None:
    key = BoxKey("ylo yhi")
    _decode_header(key, "-1.5 2.25 ylo yhi")

    assert key.value() == (-1.5, 2.25)
    assert not key.matches_header("-1.5 2.25 xlo xhi")
    assert not key.matches_header("2.25 ylo yhi")


def test_box_decode_fails_on_bad_float() -> None:
    key = BoxKey("zlo zhi")
    assert key.matches_header("0.0 abc zlo zhi")

    with pytest.raises(MalformedLineError, match=r"hi: expected number"):
        key.decode("0.0 abc zlo zhi", LineSource([]))


def test_box_validate_requires_lo_not_greater_than_hi() -> None:
    key = BoxKey("xlo xhi")
    key.assign((1.0, 0.0))

    with pytest.raises(RangeViolationError, match=r"lo = 1.0 is greater than hi = 0.0"):
        key.validate()

    key.assign([0.0, 0.0])
    key.validate()


def test_box_encode_and_assign() -> None:
    key = BoxKey("xlo xhi")
    key.assign((0, 1))

    assert key.value() == (0.0, 1.0)
    assert key.encode() == ["0.0 1.0 xlo xhi"]

    with pytest.raises(BindingTypeError, match=r"expected \(lo, hi\) pair"):
        key.assign((0.0, 1.0, 2.0))
    with pytest.raises(BindingTypeError):
        key.assign("0 1")


def test_title_roundtrip_and_type_check() -> None:
    key = TitleKey()
    key.decode("LAMMPS data file via write_data", LineSource([]))

    assert key.value() == "LAMMPS data file via write_data"
    assert key.encode() == ["LAMMPS data file via write_data"]
    key.validate()

    with pytest.raises(BindingTypeError, match=r"Title: expected str, got int"):
        key.assign(5)
