#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Writers for VASP structure files

Provides three output APIs:

* :func:`~pyposcar.writers.poscar.write`
    Write canonical POSCAR text to any text sink.
* :func:`~pyposcar.writers.poscar.to_string`
    Return the canonical text as a string.
* :func:`~pyposcar.writers.poscar.write_file`
    Write to a path, refusing to overwrite unless asked.
"""

from __future__ import annotations

from pyposcar.writers.poscar import to_string, write, write_file

__all__ = ["to_string", "write", "write_file"]
