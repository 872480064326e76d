#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for parsed POSCAR data

All models are frozen ``dataclasses`` carrying read-only NumPy arrays and
scalar metadata.  They are the sole output format of the reader layer and
the sole input format accepted by the writer layer.
"""

from __future__ import annotations

from pyposcar.models.records import (
    CoordSystem,
    Coords,
    Poscar,
    ScaleKind,
    ScaleLine,
)

__all__ = [
    "CoordSystem",
    "Coords",
    "Poscar",
    "ScaleKind",
    "ScaleLine",
]
