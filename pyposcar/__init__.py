#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyPOSCAR - Python library for reading and writing VASP POSCAR files

Parse POSCAR and CONTCAR structure files into immutable, NumPy-backed
models and write them back out in a canonical form.  The reader accepts
the many variants produced in the wild (VASP 4 files without symbols,
odd coordinate-system headers, trailing blank lines, CONTCAR velocity
blocks) while reporting genuinely malformed input with its exact
``path:line:column``.

Modules
-------
readers
    Span-tracking line reader and the POSCAR document parser.
models
    Typed, frozen dataclass records returned by the readers.
writers
    Canonical POSCAR writer.
utils
    Primitive token grammars, the coordinate-line classifier, and
    invariant checks.

Examples
--------
>>> import pyposcar
>>> structure = pyposcar.parse_file("POSCAR")
>>> structure.group_counts
(2,)
>>> pyposcar.write_file("POSCAR.out", structure)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Melek Derman"

from pyposcar.models.records import (
    CoordSystem,
    Coords,
    Poscar,
    ScaleKind,
    ScaleLine,
)
from pyposcar.readers.poscar import PoscarReader, parse, parse_file
from pyposcar.writers.poscar import to_string, write, write_file
from pyposcar.exceptions import (
    PyPoscarError,
    ErrorKind,
    ParseError,
    ValidationError,
    FileFormatError,
    WriteError,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "CoordSystem",
    "Coords",
    "Poscar",
    "ScaleKind",
    "ScaleLine",
    # Reader
    "PoscarReader",
    "parse",
    "parse_file",
    # Writer
    "to_string",
    "write",
    "write_file",
    # Exceptions
    "PyPoscarError",
    "ErrorKind",
    "ParseError",
    "ValidationError",
    "FileFormatError",
    "WriteError",
]
