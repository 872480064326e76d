#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the ``pyposcar`` command-line interface
"""

from __future__ import annotations

from pathlib import Path

import pytest

from pyposcar.cli import build_parser, main
from pyposcar.readers.poscar import parse, parse_file
from pyposcar.writers.poscar import to_string


@pytest.fixture
def good_file(tmp_path: Path, contcar_text: str) -> Path:
    path = tmp_path / "CONTCAR"
    path.write_text(contcar_text)
    return path


@pytest.fixture
def bad_file(tmp_path: Path, minimal_text: str) -> Path:
    path = tmp_path / "POSCAR.bad"
    path.write_text(minimal_text.replace("\n1\nDirect", "\n0\nDirect"))
    return path


class TestParser:
    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 0
        assert "usage: pyposcar" in capsys.readouterr().out

    def test_verbose_flag(self) -> None:
        args = build_parser().parse_args(["-v", "check", "POSCAR"])
        assert args.verbose
        assert args.files == ["POSCAR"]


class TestCheck:
    def test_ok(self, good_file: Path, capsys) -> None:
        assert main(["check", str(good_file)]) == 0
        out = capsys.readouterr().out
        assert out == f"OK:   {good_file} (2 atoms +velocities)\n"

    def test_quiet(self, good_file: Path, capsys) -> None:
        assert main(["check", "-q", str(good_file)]) == 0
        assert capsys.readouterr().out == ""

    def test_failure_reports_location(self, good_file: Path, bad_file: Path, capsys) -> None:
        assert main(["check", str(good_file), str(bad_file)]) == 1
        out = capsys.readouterr().out.splitlines()
        assert out[0].startswith("OK:")
        assert out[1] == f"FAIL: {bad_file}:6:1: there must be at least one atom"

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        assert main(["check", str(tmp_path / "nope")]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_undecodable_file_does_not_stop_batch(self, tmp_path: Path, good_file: Path, capsys) -> None:
        binary = tmp_path / "POSCAR.bin"
        binary.write_bytes(b"\xff\xfe\n")
        assert main(["check", str(binary), str(good_file)]) == 1
        out = capsys.readouterr().out.splitlines()
        assert out[0].startswith(f"FAIL: {binary}: ")
        assert "utf-8" in out[0]
        assert out[1].startswith("OK:")


class TestFormat:
    def test_stdout(self, good_file: Path, contcar_text: str, capsys) -> None:
        assert main(["format", str(good_file)]) == 0
        assert capsys.readouterr().out == to_string(parse(contcar_text))

    def test_output_file(self, good_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "POSCAR.next"
        assert main(["format", str(good_file), "-o", str(out)]) == 0
        assert parse_file(out) == parse_file(good_file)

    def test_refuses_existing_output(self, good_file: Path, tmp_path: Path, capsys) -> None:
        out = tmp_path / "POSCAR.next"
        out.write_text("keep")
        assert main(["format", str(good_file), "-o", str(out)]) == 1
        assert "already exists" in capsys.readouterr().err
        assert out.read_text() == "keep"

    def test_overwrite(self, good_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "POSCAR.next"
        out.write_text("old")
        assert main(["format", str(good_file), "-o", str(out), "--overwrite"]) == 0
        assert out.read_text() != "old"

    def test_undecodable_file(self, tmp_path: Path, capsys) -> None:
        binary = tmp_path / "POSCAR.bin"
        binary.write_bytes(b"\xff\xfe\n")
        assert main(["format", str(binary)]) == 1
        assert capsys.readouterr().err.startswith(f"ERROR: {binary}: ")

    def test_parse_error(self, bad_file: Path, capsys) -> None:
        assert main(["format", str(bad_file)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("ERROR: ")
