#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Canonical POSCAR writer

Turns a :class:`~pyposcar.models.records.Poscar` back into text.  The
output is canonical rather than a copy of the input: spacing, number
formatting and header spelling are always the same, and re-reading the
output yields a structure equal to the one written.

Output Layout
-------------
::

    <comment>
      <scale>                       # volume written as a negative number
        ax ay az                    # three lattice lines
        bx by bz
        cx cy cz
      Si  O                         # only if symbols are present
       1  2
    Selective Dynamics              # only if dynamics are present
    Direct                          # or Cartesian
      x y z [T T F]                 # one line per atom
    <blank or Cartesian>            # velocity block, only if present
      vx vy vz

Reals are written with Python's shortest round-trip ``repr``.  A Direct
velocity block gets an empty header line, which is how VASP writes
CONTCAR files and what pymatgen expects.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol

import numpy as np

from pyposcar.exceptions import WriteError
from pyposcar.models.records import Coords, Poscar, ScaleKind

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    def write(self, s: str, /) -> object: ...


def _real(x: float) -> str:
    return repr(float(x))


def _flag(b: bool) -> str:
    return "T" if b else "F"


def _by3(row: Iterable, fmt) -> str:
    return " ".join(fmt(x) for x in row)


def _padded(items: Iterable) -> str:
    return " ".join(f"{item!s:>2}" for item in items)


def _coords_header(coords: Coords) -> str:
    return "Cartesian" if coords.is_cartesian else "Direct"


def iter_lines(poscar: Poscar) -> Iterator[str]:
    """Yield the output lines of *poscar*, without terminators"""
    yield poscar.comment

    if poscar.scale.kind is ScaleKind.VOLUME:
        yield f"  -{_real(poscar.scale.value)}"
    else:
        yield f"  {_real(poscar.scale.value)}"

    for row in poscar.lattice_vectors:
        yield "    " + _by3(row, _real)

    if poscar.group_symbols is not None:
        yield "  " + _padded(poscar.group_symbols)
    yield "  " + _padded(poscar.group_counts)

    if poscar.dynamics is not None:
        yield "Selective Dynamics"

    yield _coords_header(poscar.positions)
    for i, row in enumerate(poscar.positions.data):
        line = "  " + _by3(row, _real)
        if poscar.dynamics is not None:
            line += " " + _by3(poscar.dynamics[i], _flag)
        yield line

    if poscar.velocities is not None:
        yield "Cartesian" if poscar.velocities.is_cartesian else ""
        for row in poscar.velocities.data:
            yield "  " + _by3(row, _real)


def write(sink: TextSink, poscar: Poscar) -> None:
    """Write *poscar* to a text sink

    Parameters
    ----------
    sink : TextSink
        Anything with a ``write(str)`` method, such as a file opened in
        text mode or :class:`io.StringIO`.
    poscar : Poscar
        The structure to write.  Its invariants were checked on
        construction, so formatting cannot fail.

    Raises
    ------
    OSError
        Only if the sink itself fails.
    """
    for line in iter_lines(poscar):
        sink.write(line)
        sink.write("\n")


def to_string(poscar: Poscar) -> str:
    """Return the canonical text of *poscar*

    Examples
    --------
    >>> from pyposcar.models.records import Coords, ScaleLine
    >>> p = Poscar("x", ScaleLine.factor(1.0), np.eye(3), (1,), Coords.frac([[0, 0, 0]]))
    >>> print(to_string(p), end="")
    x
      1.0
        1.0 0.0 0.0
        0.0 1.0 0.0
        0.0 0.0 1.0
       1
    Direct
      0.0 0.0 0.0
    """
    buf = io.StringIO()
    write(buf, poscar)
    return buf.getvalue()


def write_file(
    path: Path | str,
    poscar: Poscar,
    *,
    overwrite: bool = False,
) -> None:
    """Write *poscar* to a file on disk

    Parameters
    ----------
    path : Path | str
        Output path.  Parent directories are created as needed.
    poscar : Poscar
        The structure to write.
    overwrite : bool, optional
        Replace an existing file.  Default ``False``.

    Raises
    ------
    WriteError
        If the file exists and *overwrite* is ``False``, or if opening or
        writing the file fails.
    """
    out = Path(path)
    if out.exists() and not overwrite:
        raise WriteError(f"Output file {out} already exists and overwrite=False.")

    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        mode = "w" if overwrite else "x"
        with out.open(mode, encoding="utf-8", newline="\n") as fh:
            write(fh, poscar)
    except OSError as exc:
        raise WriteError(f"Failed to write POSCAR {out}: {exc}") from exc

    logger.info("Wrote POSCAR with %d atoms: %s", poscar.num_atoms, out)
