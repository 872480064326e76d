#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the canonical POSCAR writer

Covers the exact output layout, number formatting, the velocity header
convention, file output, and structural round trips through the reader.
"""

from __future__ import annotations

import io

import numpy as np
import pytest

from pyposcar.exceptions import WriteError
from pyposcar.models.records import Coords, Poscar, ScaleLine
from pyposcar.readers.poscar import parse, parse_file
from pyposcar.writers.poscar import to_string, write, write_file


def _simple(**overrides) -> Poscar:
    fields = dict(
        comment="x",
        scale=ScaleLine.factor(1.0),
        lattice_vectors=np.eye(3),
        group_counts=(1,),
        positions=Coords.frac([[0.0, 0.0, 0.0]]),
    )
    fields.update(overrides)
    return Poscar(**fields)


# -----------------------------------------------------------------------
# Layout
# -----------------------------------------------------------------------

class TestLayout:
    """Tests for the exact canonical text"""

    def test_full_document(self, sample_poscar: Poscar) -> None:
        assert to_string(sample_poscar) == (
            "SiO test cell\n"
            "  -27.0\n"
            "    3.0 0.0 0.0\n"
            "    0.0 3.0 0.0\n"
            "    0.0 0.0 3.0\n"
            "  Si  O\n"
            "   1  1\n"
            "Selective Dynamics\n"
            "Direct\n"
            "  0.0 0.0 0.0 T T F\n"
            "  0.5 0.5 0.5 F F T\n"
            "Cartesian\n"
            "  0.1 0.2 0.3\n"
            "  0.0 0.0 0.0\n"
        )

    def test_minimal(self) -> None:
        assert to_string(_simple()) == (
            "x\n"
            "  1.0\n"
            "    1.0 0.0 0.0\n"
            "    0.0 1.0 0.0\n"
            "    0.0 0.0 1.0\n"
            "   1\n"
            "Direct\n"
            "  0.0 0.0 0.0\n"
        )

    def test_cartesian_positions(self) -> None:
        text = to_string(_simple(positions=Coords.cart([[1.5, 0, 0]])))
        assert "\nCartesian\n  1.5 0.0 0.0\n" in text

    def test_direct_velocities_get_blank_header(self) -> None:
        p = _simple(velocities=Coords.frac([[1e-05, 0, 0]]))
        assert to_string(p).endswith("  0.0 0.0 0.0\n\n  1e-05 0.0 0.0\n")

    def test_wide_symbols_and_counts(self) -> None:
        p = _simple(
            group_symbols=("H", "Fe_pv"),
            group_counts=(100, 2),
            positions=Coords.frac(np.zeros((102, 3))),
        )
        lines = to_string(p).splitlines()
        assert lines[5] == "   H Fe_pv"
        assert lines[6] == "  100  2"

    def test_shortest_round_trip_reals(self) -> None:
        p = _simple(lattice_vectors=[[0.1, 1 / 3, 1e20], [0, 1, 0], [0, 0, 1]])
        assert to_string(p).splitlines()[2] == "    0.1 0.3333333333333333 1e+20"

    def test_write_to_sink(self, sample_poscar: Poscar) -> None:
        buf = io.StringIO()
        write(buf, sample_poscar)
        assert buf.getvalue() == to_string(sample_poscar)


# -----------------------------------------------------------------------
# Round trips
# -----------------------------------------------------------------------

ROUND_TRIP_INPUTS = [
    "x\n1.0\n1 0 0\n0 1 0\n0 0 1\n1\nDirect\n0.0 0.0 0.0\n",
    "vol\n-100.5\n1 2 3\n4 5 6\n7 8 10\nFe\n2\nCart\n0 0 0\n1 1 1\n",
    "sd\n1\n1 0 0\n0 1 0\n0 0 1\n1\nsel\nd\n.1 .2 .3 .T. .F. t\n",
    "v\n1\n1 0 0\n0 1 0\n0 0 1\n1\nDirect\n0 0 0\n\n0.5 -0.5 1e-7\n",
    "v\n1\n1 0 0\n0 1 0\n0 0 1\nH He\n1 0\nDirect\n0 0 0\nCartesian\n1 2 3\n",
    "  indented comment \n2.0\n1 0 0\n0 1 0\n0 0 1\n1\nDirect\nnan inf -inf\n",
]


class TestRoundTrip:
    """parse(write(p)) must reproduce p exactly"""

    @pytest.mark.parametrize("text", ROUND_TRIP_INPUTS)
    def test_round_trip(self, text: str) -> None:
        original = parse(text)
        assert parse(to_string(original)) == original

    def test_fixture_round_trip(self, sample_poscar: Poscar) -> None:
        assert parse(to_string(sample_poscar)) == sample_poscar

    def test_canonical_text_is_stable(self, contcar_text: str) -> None:
        once = to_string(parse(contcar_text))
        assert to_string(parse(once)) == once


# -----------------------------------------------------------------------
# write_file
# -----------------------------------------------------------------------

class TestWriteFile:
    def test_creates_file(self, tmp_path, sample_poscar: Poscar) -> None:
        out = tmp_path / "sub" / "POSCAR"
        write_file(out, sample_poscar)
        assert out.read_text() == to_string(sample_poscar)
        assert parse_file(out) == sample_poscar

    def test_refuses_to_overwrite(self, tmp_path, sample_poscar: Poscar) -> None:
        out = tmp_path / "POSCAR"
        out.write_text("keep me")
        with pytest.raises(WriteError, match="already exists"):
            write_file(out, sample_poscar)
        assert out.read_text() == "keep me"

    def test_overwrite(self, tmp_path, sample_poscar: Poscar) -> None:
        out = tmp_path / "POSCAR"
        out.write_text("old")
        write_file(out, sample_poscar, overwrite=True)
        assert parse_file(out) == sample_poscar

    def test_os_error_wrapped(self, tmp_path, sample_poscar: Poscar) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(WriteError, match="Failed to write"):
            write_file(blocker / "POSCAR", sample_poscar)
