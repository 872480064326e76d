#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Readers for VASP structure files

* :class:`~pyposcar.readers.poscar.PoscarReader` - POSCAR / CONTCAR
* :func:`~pyposcar.readers.poscar.parse` - parse text or a line source
* :func:`~pyposcar.readers.poscar.parse_file` - parse a file on disk

Readers share the :class:`~pyposcar.readers.base.BaseReader` interface and
the span-tracking helpers in :mod:`pyposcar.readers.lines`.
"""

from __future__ import annotations

from pyposcar.readers.poscar import PoscarReader, parse, parse_file

__all__ = ["PoscarReader", "parse", "parse_file"]
