#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for parsed POSCAR structures

Every model is a frozen ``dataclass`` carrying scalar metadata and
read-only NumPy arrays.  Models are the sole output of the reader layer
and the sole input accepted by the writer layer.

Hierarchy
---------
::

    ScaleLine   - multiplicative factor or target cell volume
    Coords      - (n, 3) array tagged Cartesian or Direct
    Poscar      - the whole document

Units
-----
* Lattice vectors and Cartesian coordinates are in **Å** before scaling.
* Direct coordinates are fractions of the lattice vectors.
* Velocities follow whatever convention the producing code used
  (Å/fs for VASP CONTCAR files).

Equality
--------
Models compare **structurally**: two ``Poscar`` objects are equal when all
of their fields hold the same values, with ``nan`` equal to ``nan``.  This
is what the writer guarantees on a round trip; the exact text is not
preserved.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import numpy as np

from pyposcar.exceptions import ValidationError
from pyposcar.utils.validation import validate_poscar_fields


def _readonly(values: Any, dtype: str, label: str) -> np.ndarray:
    """Copy *values* into a fresh array that cannot be written to"""
    try:
        arr = np.array(values, dtype=dtype)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Array '{label}' is not rectangular: {exc}") from exc
    arr.setflags(write=False)
    return arr


def _same_floats(a: np.ndarray, b: np.ndarray) -> bool:
    return a.shape == b.shape and bool(np.array_equal(a, b, equal_nan=True))


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

class ScaleKind(enum.Enum):
    """How the number on the scale line is interpreted"""

    FACTOR = "factor"
    VOLUME = "volume"


@dataclass(frozen=True)
class ScaleLine:
    """The second line of a POSCAR

    Parameters
    ----------
    kind : ScaleKind
        ``FACTOR`` multiplies every lattice vector; ``VOLUME`` asks for the
        lattice to be rescaled to this cell volume instead.
    value : float
        Positive magnitude.  A volume is written to file negated.
    """

    kind: ScaleKind
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def factor(cls, value: float) -> ScaleLine:
        return cls(ScaleKind.FACTOR, value)

    @classmethod
    def volume(cls, value: float) -> ScaleLine:
        return cls(ScaleKind.VOLUME, value)

    @property
    def file_value(self) -> float:
        """The number exactly as it appears on the scale line"""
        return -self.value if self.kind is ScaleKind.VOLUME else self.value


class CoordSystem(enum.Enum):
    """Coordinate system of a position or velocity block"""

    CARTESIAN = "Cartesian"
    DIRECT = "Direct"


@dataclass(frozen=True, eq=False)
class Coords:
    """A block of per-atom 3-vectors tagged with its coordinate system

    Parameters
    ----------
    system : CoordSystem
        ``CARTESIAN`` for absolute coordinates, ``DIRECT`` for fractional
        coordinates relative to the lattice vectors.
    data : numpy.ndarray
        Float64 array of shape ``(n, 3)``.  Stored read-only.
    """

    system: CoordSystem
    data: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _readonly(self.data, "f8", "coords"))

    @classmethod
    def cart(cls, data: Any) -> Coords:
        return cls(CoordSystem.CARTESIAN, data)

    @classmethod
    def frac(cls, data: Any) -> Coords:
        return cls(CoordSystem.DIRECT, data)

    @property
    def is_cartesian(self) -> bool:
        return self.system is CoordSystem.CARTESIAN

    @property
    def is_direct(self) -> bool:
        return self.system is CoordSystem.DIRECT

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coords):
            return NotImplemented
        return self.system is other.system and _same_floats(self.data, other.data)

    __hash__ = None  # type: ignore[assignment]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Poscar:
    """A complete POSCAR / CONTCAR document

    Construction validates every structural invariant, so any ``Poscar``
    instance can be handed to :func:`pyposcar.writers.poscar.write`
    without further checks.

    Parameters
    ----------
    comment : str
        Free-form first line.  Must not contain a line break.
    scale : ScaleLine
        Universal scaling factor or target volume.
    lattice_vectors : numpy.ndarray
        Float64 array of shape ``(3, 3)``; row *i* is lattice vector *i*.
    group_counts : tuple[int, ...]
        Number of atoms of each species, in file order.  Must sum to at
        least one.
    positions : Coords
        One row per atom, ``sum(group_counts)`` rows in total.
    group_symbols : tuple[str, ...] | None
        Species symbols parallel to *group_counts* (VASP 5 format), or
        ``None`` for VASP 4 style files.
    dynamics : numpy.ndarray | None
        Bool array of shape ``(n, 3)``; ``True`` means the atom may move
        along that axis.  ``None`` when selective dynamics is off.
    velocities : Coords | None
        One row per atom, or ``None``.

    Raises
    ------
    ValidationError
        If any invariant is violated.

    Examples
    --------
    >>> p = Poscar(
    ...     comment="x",
    ...     scale=ScaleLine.factor(1.0),
    ...     lattice_vectors=np.eye(3),
    ...     group_counts=(1,),
    ...     positions=Coords.frac([[0.0, 0.0, 0.0]]),
    ... )
    >>> p.num_atoms
    1
    """

    comment: str
    scale: ScaleLine
    lattice_vectors: np.ndarray
    group_counts: tuple[int, ...]
    positions: Coords
    group_symbols: tuple[str, ...] | None = None
    dynamics: np.ndarray | None = None
    velocities: Coords | None = None

    def __post_init__(self) -> None:
        set_ = object.__setattr__
        set_(self, "lattice_vectors", _readonly(self.lattice_vectors, "f8", "lattice_vectors"))
        set_(self, "group_counts", tuple(int(c) for c in self.group_counts))
        if self.group_symbols is not None:
            set_(self, "group_symbols", tuple(str(s) for s in self.group_symbols))
        if self.dynamics is not None:
            set_(self, "dynamics", _readonly(self.dynamics, "bool", "dynamics"))

        validate_poscar_fields(
            self.comment,
            self.scale.value,
            self.lattice_vectors,
            self.group_symbols,
            self.group_counts,
            self.positions.data,
            self.dynamics,
            None if self.velocities is None else self.velocities.data,
        )

    @property
    def num_atoms(self) -> int:
        return sum(self.group_counts)

    @property
    def has_selective_dynamics(self) -> bool:
        return self.dynamics is not None

    @property
    def has_velocities(self) -> bool:
        return self.velocities is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Poscar):
            return NotImplemented
        if (self.dynamics is None) != (other.dynamics is None):
            return False
        if self.dynamics is not None and not np.array_equal(self.dynamics, other.dynamics):
            return False
        return (
            self.comment == other.comment
            and self.scale == other.scale
            and _same_floats(self.lattice_vectors, other.lattice_vectors)
            and self.group_symbols == other.group_symbols
            and self.group_counts == other.group_counts
            and self.positions == other.positions
            and self.velocities == other.velocities
        )

    __hash__ = None  # type: ignore[assignment]
