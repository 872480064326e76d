#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Invariant checks for POSCAR structures

Every validation function raises :class:`~pyposcar.exceptions.ValidationError`
when a constraint is violated.  :class:`~pyposcar.models.records.Poscar`
runs :func:`validate_poscar_fields` on construction, so a ``Poscar`` that
exists is always writable.

Checked Constraints
-------------------
* The comment is a single line.
* The scale value is positive (and therefore not NaN).
* The lattice is a 3 × 3 matrix.
* Counts are non-empty, non-negative and sum to at least one atom.
* Species symbols, when present, match the counts in number and are each
  valid for the symbol line.
* Positions, selective-dynamics flags and velocities have one row of
  three values per atom.

Design Note
-----------
Validation functions accept raw values and NumPy arrays, **not** model
instances, so that the ``models`` layer depends on ``utils`` and never the
other way round::

    utils ← models ← readers ← writers
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from pyposcar.exceptions import ValidationError
from pyposcar.utils.parsing import is_valid_symbol

logger = logging.getLogger(__name__)


def validate_comment(comment: str) -> None:
    """Verify that *comment* fits on a single line

    Raises
    ------
    ValidationError
        If the comment contains ``\\n`` or ``\\r``.

    Examples
    --------
    >>> validate_comment("bcc Fe")
    >>> validate_comment("two\\nlines")  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyposcar.exceptions.ValidationError: ...
    """
    if "\n" in comment or "\r" in comment:
        raise ValidationError(f"Comment {comment!r} contains a line break.")


def validate_scale_value(value: float) -> None:
    """Verify that a stored scale value is strictly positive

    Both scale kinds store a positive magnitude; the sign of a volume is
    only restored when writing.

    Raises
    ------
    ValidationError
        If *value* is zero, negative, or NaN.
    """
    if not value > 0.0:
        raise ValidationError(f"Scale value must be positive, got {value!r}.")


def validate_lattice(lattice: np.ndarray) -> None:
    """Verify that the lattice is a ``(3, 3)`` matrix

    Raises
    ------
    ValidationError
        On any other shape.
    """
    arr = np.asarray(lattice)
    if arr.shape != (3, 3):
        raise ValidationError(
            f"Lattice vectors must have shape (3, 3), got {arr.shape}."
        )


def validate_group_counts(counts: Sequence[int]) -> int:
    """Verify the per-species atom counts and return their sum

    Parameters
    ----------
    counts : Sequence[int]
        Number of atoms of each species, in file order.

    Returns
    -------
    int
        Total number of atoms *n*.

    Raises
    ------
    ValidationError
        If *counts* is empty, contains a negative value, or sums to zero.

    Examples
    --------
    >>> validate_group_counts([2, 0, 1])
    3
    """
    if len(counts) == 0:
        raise ValidationError("Counts must contain at least one group.")
    for i, c in enumerate(counts):
        if c < 0:
            raise ValidationError(f"Count at index {i} is negative: {c}.")
    n = int(sum(counts))
    if n == 0:
        raise ValidationError("There must be at least one atom.")
    return n


def validate_group_symbols(
    symbols: Sequence[str] | None,
    counts: Sequence[int],
) -> None:
    """Verify the optional species-symbol list against the counts

    Raises
    ------
    ValidationError
        If the lengths differ or a symbol is empty, contains whitespace,
        or begins with a digit.
    """
    if symbols is None:
        return
    if len(symbols) != len(counts):
        raise ValidationError(
            f"Got {len(symbols)} symbol(s) but {len(counts)} count(s)."
        )
    for i, s in enumerate(symbols):
        if not is_valid_symbol(s):
            raise ValidationError(f"Symbol at index {i} is invalid: {s!r}.")


def validate_per_atom(values: np.ndarray, n: int, label: str) -> None:
    """Verify that *values* holds one row of three entries per atom

    Parameters
    ----------
    values : numpy.ndarray
        Positions, velocities, or selective-dynamics flags.
    n : int
        Total number of atoms.
    label : str
        Field name for error messages.

    Raises
    ------
    ValidationError
        If the shape is not ``(n, 3)``.
    """
    arr = np.asarray(values)
    if arr.shape != (n, 3):
        raise ValidationError(
            f"Array '{label}' must have shape ({n}, 3), got {arr.shape}."
        )


def validate_poscar_fields(
    comment: str,
    scale_value: float,
    lattice: np.ndarray,
    symbols: Sequence[str] | None,
    counts: Sequence[int],
    positions: np.ndarray,
    dynamics: np.ndarray | None,
    velocities: np.ndarray | None,
) -> None:
    """Run every structural check on the fields of a POSCAR

    Raises
    ------
    ValidationError
        On the first violated constraint.
    """
    validate_comment(comment)
    validate_scale_value(scale_value)
    validate_lattice(lattice)
    n = validate_group_counts(counts)
    validate_group_symbols(symbols, counts)
    validate_per_atom(positions, n, "positions")
    if dynamics is not None:
        validate_per_atom(dynamics, n, "dynamics")
    if velocities is not None:
        validate_per_atom(velocities, n, "velocities")
    logger.debug("POSCAR fields for %d atom(s) passed validation.", n)
