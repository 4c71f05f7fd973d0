from __future__ import annotations

from pathlib import Path

import pytest

from conftest import SCENARIO_A_NAMES, SCENARIO_A_TEXT, make_atom, make_bond
from lmpsdat.codecs._decoder import State, run
from lmpsdat.codecs.lammps_data import (
    build_registry,
    decode,
    encode,
    format_data_text,
    parse_data_text,
    read_data,
    write_data,
)
from lmpsdat.core.errors import MalformedLineError, RangeViolationError
from lmpsdat.keys.base import LineSource
from lmpsdat.keys.registry import Registry

WATER_TEXT = "\n".join(
    [
        "water",
        "",
        "3 atoms",
        "2 bonds",
        "",
        "2 atom types",
        "1 bond types",
        "",
        "0.0 10.0 xlo xhi",
        "0.0 10.0 ylo yhi",
        "-5.0 5.0 zlo zhi",
        "",
        "Masses",
        "",
        "1 15.9994",
        "2 1.008",
        "",
        "Pair Coeffs",
        "",
        "1 0.1553 3.166",
        "2 0.0 0.0",
        "",
        "Bond Coeffs",
        "",
        "1 1000.0 1.0",
        "",
        "Atoms",
        "",
        "1 1 1 -0.8476 0.0 0.0 0.0 0 0 0",
        "2 1 2 0.4238 0.8164 0.5773 0.0 0 0 0",
        "3 1 2 0.4238 -0.8164 0.5773 0.0 1 0 -1",
        "",
        "Bonds",
        "",
        "1 1 1 2",
        "2 1 1 3",
        "",
    ]
) + "\n"

WATER_NAMES = [
    "Title",
    "atoms",
    "bonds",
    "atom types",
    "bond types",
    "xlo xhi",
    "ylo yhi",
    "zlo zhi",
    "Masses",
    "Pair Coeffs",
    "Bond Coeffs",
    "Atoms",
    "Bonds",
]


def test_decode_minimal_document() -> None:
    reg = parse_data_text(SCENARIO_A_TEXT, SCENARIO_A_NAMES, atom_style="full")

    values = reg.values()
    assert values["Title"] == "My title"
    assert values["atoms"] == 2
    assert values["atom types"] == 1
    assert values["xlo xhi"] == (0.0, 1.0)
    assert values["ylo yhi"] == (0.0, 1.0)
    assert values["zlo zhi"] == (0.0, 1.0)
    assert values["Masses"] == {1: 1.0}
    assert values["Atoms"] == {
        1: make_atom(1, 0.5, 0.5, 0.5, mol_tag=1, charge=0.0),
        2: make_atom(1, 0.5, 0.5, 0.6, mol_tag=1, charge=0.0),
    }
    assert reg.diagnostics == []


def test_decode_reports_type_out_of_range() -> None:
    text = SCENARIO_A_TEXT.replace("2 1 1 0.0 0.5 0.5 0.6", "2 1 2 0.0 0.5 0.5 0.6")

    with pytest.raises(RangeViolationError) as exc:
        parse_data_text(text, SCENARIO_A_NAMES)

    assert exc.value.name == "Atoms"
    assert "type = 2 is invalid: it must be in [1, 1] (atom types = 1)" in str(exc.value)


def test_decode_without_validation_keeps_bad_values() -> None:
    text = SCENARIO_A_TEXT.replace("2 1 1 0.0 0.5 0.5 0.6", "2 1 2 0.0 0.5 0.5 0.6")

    reg = parse_data_text(text, SCENARIO_A_NAMES, validate=False)

    assert reg["Atoms"].value()[2].atom_type == 2
    with pytest.raises(RangeViolationError):
        reg.validate()


def test_decode_malformed_row_reports_absolute_line_number() -> None:
    text = SCENARIO_A_TEXT.replace("2 1 1 0.0 0.5 0.5 0.6", "2 1 1 0.0 0.5")

    with pytest.raises(MalformedLineError) as exc:
        parse_data_text(text, SCENARIO_A_NAMES)

    assert exc.value.line_no == 17
    assert str(exc.value) == "Atoms: line 17: not enough fields = 5, want >= 7"


def test_decode_malformed_header_reports_name_and_line() -> None:
    text = SCENARIO_A_TEXT.replace("1 atom types", "1.5 atom types")

    with pytest.raises(MalformedLineError) as exc:
        parse_data_text(text, SCENARIO_A_NAMES)

    assert str(exc.value) == "atom types: line 4: atom types: expected integer, got '1.5'"


def test_decode_skips_comments_and_unrequested_sections() -> None:
    text = "\n".join(
        [
            "LAMMPS data file via write_data",
            "",
            "2 atoms",
            "1 atom types",
            "",
            "0 2 xlo xhi",
            "",
            "Masses",
            "",
            "1 4.0  # He",
            "",
            "Velocities",
            "",
            "1 0.0 0.0 0.0",
            "2 0.0 0.0 0.0",
            "",
            "Atoms  # atomic",
            "",
            "2 1 1.0 1.0 1.0",
            "1 1 0.0 0.0 0.0",
        ]
    )

    reg = parse_data_text(text, ["xlo xhi", "Atoms"], atom_style="atomic")

    assert reg.values() == {
        "xlo xhi": (0.0, 2.0),
        "Atoms": {1: make_atom(1, 0.0, 0.0, 0.0), 2: make_atom(1, 1.0, 1.0, 1.0)},
    }


def test_decode_first_line_is_always_the_title() -> None:
    reg = parse_data_text("2 atoms\n3 atoms\n", ["atoms"])

    assert reg["atoms"].value() == 3


def test_decode_empty_text_validates_zero_counts() -> None:
    reg = parse_data_text("", SCENARIO_A_NAMES)

    assert reg.values()["Title"] == ""
    assert reg.values()["atoms"] == 0
    assert reg.values()["Atoms"] == {}


def test_decode_accepts_crlf_lines() -> None:
    lines = SCENARIO_A_TEXT.replace("\n", "\r\n").splitlines(keepends=True)

    reg = decode(SCENARIO_A_NAMES, "full", lines)

    assert reg["Title"].value() == "My title"
    assert len(reg["Atoms"]) == 2


def test_decode_unknown_atom_style_uses_full() -> None:
    reg = parse_data_text(SCENARIO_A_TEXT, ["Atoms", "Velocities"], atom_style="sphere")

    assert [d.kind for d in reg.diagnostics] == ["unknown_atom_style", "unknown_name"]
    assert reg["Atoms"].value()[1].mol_tag == 1


def test_decoder_states() -> None:
    assert run(Registry.build(["atoms"]), LineSource([])) is State.EXPECT_TITLE
    assert run(Registry.build(["atoms"]), LineSource(["t", "1 atoms"])) is State.IN_HEADER
    assert run(Registry.build(["Masses"]), LineSource(["t", "Masses", ""])) is State.IN_BODY


def test_header_lines_after_body_are_not_decoded() -> None:
    text = "t\n\nMasses\n\n\n2 atom types\n"

    reg = parse_data_text(text, ["Masses"], validate=False)

    assert reg["atom types"].value() == 0


def test_parse_data_text_rejects_non_str() -> None:
    with pytest.raises(TypeError, match=r"expected str, got bytes"):
        parse_data_text(b"title\n", ["Title"])  # type: ignore[arg-type]


def test_encode_minimal_document() -> None:
    text = format_data_text(
        {
            "Title": "x",
            "xlo xhi": (0.0, 1.0),
            "ylo yhi": (0.0, 1.0),
            "zlo zhi": (0.0, 1.0),
            "Masses": {1: 1.0},
            "Atoms": {1: make_atom(1, 0.5, 0.5, 0.5)},
        },
        atom_style="atomic",
    )

    assert text == (
        "x\n"
        "\n"
        "1 atoms\n"
        "\n"
        "1 atom types\n"
        "\n"
        "0.0 1.0 xlo xhi\n"
        "0.0 1.0 ylo yhi\n"
        "0.0 1.0 zlo zhi\n"
        "\n"
        "Masses\n"
        "\n"
        "1 1.0\n"
        "\n"
        "Atoms\n"
        "\n"
        "1 1 0.5 0.5 0.5\n"
        "\n"
    )
    assert "Pair Coeffs" not in text
    assert "Bonds" not in text


def test_encode_derives_counts_from_tables() -> None:
    text = format_data_text({"Masses": {1: 1.0, 2: 2.0}})

    assert text == "\n\n2 atom types\n\nMasses\n\n1 1.0\n2 2.0\n\n"


def test_encode_writes_zero_counters_but_not_empty_tables() -> None:
    text = format_data_text({"Title": "t", "bonds": 0, "Bonds": {}})

    assert text == "t\n\n0 atoms\n0 bonds\n\n0 bond types\n\n"


def test_encode_validates_before_writing() -> None:
    with pytest.raises(RangeViolationError) as exc:
        format_data_text({"Masses": {1: 1.0}, "Atoms": {1: make_atom(2)}})

    assert exc.value.name == "Atoms"


def test_round_trip_is_byte_identical() -> None:
    reg = parse_data_text(WATER_TEXT, WATER_NAMES)

    assert reg["Atoms"].value()[3].image == (1, 0, -1)
    assert reg["Pair Coeffs"].value() == {1: (0.1553, 3.166), 2: (0.0, 0.0)}
    assert reg["Bonds"].value() == {1: make_bond(1, 1, 2), 2: make_bond(1, 1, 3)}
    assert encode(reg) == WATER_TEXT
    assert format_data_text(reg.values()) == WATER_TEXT


def test_build_registry_ignores_unknown_names() -> None:
    reg = build_registry({"Title": "t", "Velocities": {}})

    assert list(reg) == ["Title"]
    assert [d.kind for d in reg.diagnostics] == ["unknown_name"]


def test_write_then_read_file(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "water.data"

    write_data(out, parse_data_text(WATER_TEXT, WATER_NAMES))

    assert out.read_bytes() == WATER_TEXT.encode("utf-8")
    reg = read_data(out, ["Bonds", "Atoms"])
    assert len(reg["Bonds"]) == 2
    assert len(reg["Atoms"]) == 3


def test_write_from_mapping_is_deterministic(tmp_path: Path) -> None:
    values = {
        "Title": "pair",
        "atom types": 1,
        "bond types": 1,
        "Atoms": {2: make_atom(1, 1.0, 0.0, 0.0), 1: make_atom(1)},
        "Bonds": {1: make_bond(1, 1, 2)},
    }
    a = tmp_path / "a.data"
    b = tmp_path / "b.data"

    write_data(a, values, atom_style="atomic")
    write_data(b, dict(reversed(list(values.items()))), atom_style="atomic")

    assert a.read_bytes() == b.read_bytes()
    assert b"\r\n" not in a.read_bytes()


def test_read_missing_file_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_data(tmp_path / "missing.data", ["Atoms"])
