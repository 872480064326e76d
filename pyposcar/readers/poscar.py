#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
POSCAR / CONTCAR reader

Parses the VASP structure format and returns a strongly-typed
:class:`~pyposcar.models.records.Poscar` instance.

Supported Sections
------------------
In file order:

1. Comment line (free text).
2. Scale line - a factor, or a negated target volume.
3. Three lattice-vector lines.
4. Optional species-symbol line (VASP 5), then the counts line.
5. Optional ``Selective dynamics`` line.
6. Coordinate-system line (``Cartesian`` / ``Direct``).
7. One position line per atom, with three ``T``/``F`` flags when
   selective dynamics is on.
8. Optional velocity block: a coordinate-system line and one velocity
   line per atom.

Anything after the velocities (e.g. predictor-corrector data) is
rejected.  Text after the required tokens on a line is a free-form
comment and is ignored.

File Format Assumptions
-----------------------
* Producers disagree on the coordinate-system lines, so every first
  character is accepted; unusual ones are logged at ``WARNING`` level.
* A blank line after the positions is ambiguous: it may be trailing
  padding, or the (blank, hence Direct) header of a velocity block.  The
  reader settles it with exactly one line of lookahead, see
  :func:`decide_velocity_block`.
* Writing ``1.0 2.0 3.0`` on the scale line is almost always a missing
  scale line, so two or more reals there are an error even though VASP
  has an undocumented per-axis scaling feature.

References
----------
.. [1] VASP Wiki, POSCAR - https://www.vasp.at/wiki/index.php/POSCAR
.. [2] VASP Wiki, CONTCAR - https://www.vasp.at/wiki/index.php/CONTCAR
"""

from __future__ import annotations

import enum
import io
import logging
from collections.abc import Iterable
from pathlib import Path

import numpy as np

from pyposcar.exceptions import ParseError, ValidationError
from pyposcar.models.records import Coords, CoordSystem, Poscar, ScaleLine
from pyposcar.readers.base import BaseReader
from pyposcar.readers.lines import Lines, Spanned
from pyposcar.utils.parsing import (
    WHITE_SPACE,
    CoordLineType,
    classify_coord_line,
    is_valid_symbol,
    parse_float,
    parse_logical,
    parse_unsigned,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Velocity-block decision procedure
# ---------------------------------------------------------------------------

class VelocityPresence(enum.Enum):
    """What the line after the positions says about the velocity block"""

    NOT_YET_DETERMINED = "not-yet-determined"
    REQUIRED = "required"
    POSSIBLE = "possible"

    @classmethod
    def from_control_line(cls, kind: CoordLineType) -> VelocityPresence:
        """A blank control line only makes velocities *possible*"""
        if kind is CoordLineType.EMPTY_OR_WHITESPACE:
            return cls.POSSIBLE
        return cls.REQUIRED


class VelocityDecision(enum.Enum):
    """Outcome of :func:`decide_velocity_block`"""

    ABSENT = "absent"
    """Input ended after a single blank line: no velocities."""

    TRAILING_BLANK = "trailing-blank"
    """Two blank lines: no velocities, and the rest must be blank too."""

    PRESENT = "present"
    """The lookahead line is the first velocity line."""

    TRUNCATED = "truncated"
    """A non-blank control line was followed by end of file."""


def decide_velocity_block(
    presence: VelocityPresence,
    lookahead: str | None,
) -> VelocityDecision:
    """Decide whether a velocity block follows the positions

    Called once the control line after the positions has been classified
    into *presence*, with the text of the line after it.

    Parameters
    ----------
    presence : VelocityPresence
        ``REQUIRED`` if the control line had content, ``POSSIBLE`` if it
        was blank.
    lookahead : str | None
        The next line, or ``None`` at end of file.

    Returns
    -------
    VelocityDecision

    Raises
    ------
    ValueError
        If *presence* is still ``NOT_YET_DETERMINED``.

    Examples
    --------
    >>> decide_velocity_block(VelocityPresence.POSSIBLE, None)
    <VelocityDecision.ABSENT: 'absent'>
    >>> decide_velocity_block(VelocityPresence.POSSIBLE, "  0.1 0.2 0.3")
    <VelocityDecision.PRESENT: 'present'>
    """
    if presence is VelocityPresence.NOT_YET_DETERMINED:
        raise ValueError("velocity presence must be determined from the control line first")

    if lookahead is None:
        if presence is VelocityPresence.REQUIRED:
            return VelocityDecision.TRUNCATED
        return VelocityDecision.ABSENT

    if presence is VelocityPresence.POSSIBLE and not lookahead.strip(WHITE_SPACE):
        return VelocityDecision.TRAILING_BLANK
    return VelocityDecision.PRESENT


# ---------------------------------------------------------------------------
# Section readers
# ---------------------------------------------------------------------------

def _is_float(token: Spanned) -> bool:
    try:
        parse_float(token.text)
    except ParseError:
        return False
    return True


def _starts_with_digit(s: str) -> bool:
    return bool(s) and "0" <= s[0] <= "9"


def _coord_system(line: Spanned, what: str) -> CoordSystem:
    """Map a coordinate-system line onto Cartesian or Direct"""
    kind = classify_coord_line(line.text)
    if kind.is_fishy:
        logger.warning(
            "%s:%d: unusual %s coordinate line %r (%s); assuming Direct",
            line.path if line.path is not None else "<input>",
            line.line + 1,
            what,
            line.text,
            kind.value,
        )
    return CoordSystem.CARTESIAN if kind.implies_cartesian else CoordSystem.DIRECT


def _read_vector(line: Spanned, message: str) -> list[float]:
    words = line.words()
    # rest of the line is freeform comment
    return [words.next_or_err(message).parse(parse_float) for _ in range(3)]


def _read_scale(lines: Lines) -> ScaleLine:
    line = lines.next()
    words = line.words()

    word = words.next_or_err("expected scale")
    value = word.parse(parse_float)

    if np.isnan(value):
        raise word.error("scale cannot be nan")
    if value == 0.0:
        raise word.error("scale cannot be zero")

    # Three floats here usually means the scale line was forgotten and the
    # first lattice vector moved up; VASP's per-axis scaling is not supported.
    extra = next(words, None)
    if extra is not None and _is_float(extra):
        raise extra.error("too many floats on scale line (expected just one)")

    if value < 0.0:
        return ScaleLine.volume(-value)
    return ScaleLine.factor(value)


def _read_groups(lines: Lines) -> tuple[tuple[str, ...] | None, tuple[int, ...], int]:
    line = lines.next()
    line.words().next_or_err("expected at least one element or count")

    # VASP 5 files may put a line of symbols before the counts
    symbols: tuple[str, ...] | None = None
    counts_line = line
    if not _starts_with_digit(line.text.strip(WHITE_SPACE)):
        kinds = []
        for word in line.words():
            if not is_valid_symbol(word.text):
                raise word.error("invalid symbol")
            kinds.append(word.text)
        symbols = tuple(kinds)
        counts_line = lines.next()

    # counts end at the first token that isn't one; the rest is comment
    counts: list[int] = []
    for word in counts_line.words():
        try:
            counts.append(parse_unsigned(word.text))
        except ParseError:
            break

    if symbols is not None and len(symbols) != len(counts):
        raise counts_line.error("inconsistent number of counts")

    n = sum(counts)
    if n == 0:
        raise counts_line.error("there must be at least one atom")

    logger.debug("Species %s with counts %s (%d atoms)", symbols, counts, n)
    return symbols, tuple(counts), n


def _read_positions(
    lines: Lines,
    n: int,
) -> tuple[Coords, np.ndarray | None]:
    line = lines.next()
    selective = line.control_char() in ("s", "S")
    if selective:
        line = lines.next()
    system = _coord_system(line, "position")

    # rows are collected as read; n comes straight from the file
    rows: list[list[float]] = []
    flags: list[list[bool]] = []
    for _ in range(n):
        line = lines.next()
        words = line.words()
        rows.append([
            words.next_or_err("expected 3 coordinates").parse(parse_float)
            for _ in range(3)
        ])
        if selective:
            flags.append([
                words.next_or_err("expected 3 boolean flags").parse(parse_logical)
                for _ in range(3)
            ])

    logger.debug(
        "Read %d %s positions (selective dynamics: %s)", n, system.value, selective,
    )
    dynamics = np.array(flags, dtype=bool) if selective else None
    return Coords(system, rows), dynamics


def _read_velocities(lines: Lines, n: int) -> Coords | None:
    control = lines.try_next()
    if control is None:
        return None

    presence = VelocityPresence.from_control_line(classify_coord_line(control.text))
    system = CoordSystem.DIRECT
    if presence is VelocityPresence.REQUIRED:
        system = _coord_system(control, "velocity")

    first = lines.try_next()
    decision = decide_velocity_block(presence, None if first is None else first.text)

    if decision is VelocityDecision.TRUNCATED:
        raise lines.eof_error()
    if decision is VelocityDecision.ABSENT:
        return None
    if decision is VelocityDecision.TRAILING_BLANK:
        # predictor-corrector data cannot appear without velocities
        lines.expect_blank_until_eof()
        return None

    velocities = [_read_vector(first, "expected 3 coordinates")]
    for _ in range(1, n):
        velocities.append(_read_vector(lines.next(), "expected 3 coordinates"))

    logger.debug("Read %d %s velocities", n, system.value)
    return Coords(system, velocities)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _line_source(source: str | bytes | Iterable[str]) -> Iterable[str]:
    if isinstance(source, (bytes, bytearray)):
        source = bytes(source).decode("utf-8")
    if isinstance(source, str):
        return io.StringIO(source, newline="\n")
    return source


def parse(
    source: str | bytes | Iterable[str],
    *,
    path: Path | str | None = None,
) -> Poscar:
    """Parse a POSCAR document

    A successful parse always consumes the source to end of file.

    Parameters
    ----------
    source : str | bytes | Iterable[str]
        The whole document as text or UTF-8 bytes, or an iterable of lines
        such as an open text file.
    path : Path | str | None, optional
        Path to report in error messages.

    Returns
    -------
    Poscar
        The parsed structure.

    Raises
    ------
    ParseError
        On the first malformed, missing, or unexpected content.

    Examples
    --------
    >>> text = "x\\n1.0\\n1 0 0\\n0 1 0\\n0 0 1\\n1\\nDirect\\n0 0 0\\n"
    >>> parse(text).num_atoms
    1
    """
    lines = Lines(_line_source(source), path)

    comment_line = lines.next()
    if "\r" in comment_line.text:
        raise comment_line.slice(comment_line.text.index("\r")).error(
            "comment cannot contain a carriage return"
        )
    comment = comment_line.text
    scale = _read_scale(lines)
    lattice = [
        _read_vector(lines.next(), "expected three components for lattice vector")
        for _ in range(3)
    ]
    symbols, counts, n = _read_groups(lines)
    positions, dynamics = _read_positions(lines, n)
    velocities = _read_velocities(lines, n)

    lines.expect_blank_until_eof()

    try:
        poscar = Poscar(
            comment=comment,
            scale=scale,
            lattice_vectors=lattice,
            group_counts=counts,
            positions=positions,
            group_symbols=symbols,
            dynamics=dynamics,
            velocities=velocities,
        )
    except ValidationError as exc:
        raise RuntimeError(
            "an invariant was not checked during parsing (this is a bug!)"
        ) from exc

    logger.debug("POSCAR parse complete: %d atoms over %d lines", n, lines.line_number)
    return poscar


class PoscarReader(BaseReader):
    """Reader for VASP POSCAR and CONTCAR files

    Examples
    --------
    >>> reader = PoscarReader()
    >>> structure = reader.read("POSCAR")
    >>> structure.group_symbols
    ('Si',)
    """

    def parse(
        self,
        source: str | bytes | Iterable[str],
        *,
        path: Path | str | None = None,
    ) -> Poscar:
        return parse(source, path=path)


def parse_file(path: Path | str) -> Poscar:
    """Read a POSCAR file from disk

    Parameters
    ----------
    path : Path | str
        File to read (UTF-8).

    Returns
    -------
    Poscar

    Raises
    ------
    FileFormatError
        If *path* is not an existing file.
    ParseError
        If the content is malformed.  The message starts with *path*.
    """
    return PoscarReader().read(path)
