#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared pytest fixtures for PyPOSCAR tests

Provides small literal POSCAR documents and equivalent in-memory models
so that reader, writer and model tests do not need data files.
"""

from __future__ import annotations

import numpy as np
import pytest

from pyposcar.models.records import Coords, Poscar, ScaleLine

MINIMAL_TEXT = """\
x
1.0
1.0 0.0 0.0
0.0 1.0 0.0
0.0 0.0 1.0
1
Direct
0.0 0.0 0.0
"""

CONTCAR_TEXT = """\
SiO test cell
-27.0
3 0 0
0 3 0
0 0 3
Si O
1 1
Selective dynamics
Direct
0 0 0 T T F
0.5 0.5 0.5 F F T
Cartesian
0.1 0.2 0.3
0 0 0
"""


@pytest.fixture
def minimal_text() -> str:
    """Smallest valid POSCAR: one atom, unit cell, no optional blocks"""
    return MINIMAL_TEXT


@pytest.fixture
def contcar_text() -> str:
    """Two-atom CONTCAR with symbols, selective dynamics and velocities"""
    return CONTCAR_TEXT


@pytest.fixture
def sample_poscar() -> Poscar:
    """Model equivalent of :data:`CONTCAR_TEXT`"""
    return Poscar(
        comment="SiO test cell",
        scale=ScaleLine.volume(27.0),
        lattice_vectors=3.0 * np.eye(3),
        group_counts=(1, 1),
        positions=Coords.frac([[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]]),
        group_symbols=("Si", "O"),
        dynamics=[[True, True, False], [False, False, True]],
        velocities=Coords.cart([[0.1, 0.2, 0.3], [0.0, 0.0, 0.0]]),
    )
