#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Primitive POSCAR grammars shared by the reader and the validators

All token-level parsing lives here so that the document parser in
:mod:`pyposcar.readers.poscar` only deals with structure.  The functions in
this module know nothing about file positions: they raise an *unlocated*
:class:`~pyposcar.exceptions.ParseError`, and
:meth:`pyposcar.readers.lines.Spanned.parse` re-raises it tagged with the
line and column of the offending token.

Grammars
--------
* **Real numbers** - optional sign, decimal digits with optional fraction
  and exponent, or ``inf`` / ``infinity`` / ``nan`` (case-insensitive).
  Fortran ``D`` exponents, underscores and embedded whitespace are
  rejected.
* **Logicals** - the Fortran list-directed ``LOGICAL`` grammar: an
  optional ``.``, then ``T`` or ``F`` in either case; the rest of the
  token is ignored, so ``.TRUE.`` and ``T`` are equivalent.
* **Unsigned integers** - ASCII digits only.  A leading ``+`` is rejected
  even though ``int()`` would accept it.
* **Species symbols** - non-empty, no whitespace, no leading digit.

References
----------
.. [1] Oracle Fortran 77 Language Reference, "List-Directed Input"
   (LOGICAL values).
.. [2] VASP Wiki, POSCAR - https://www.vasp.at/wiki/index.php/POSCAR
"""

from __future__ import annotations

import enum
import re

from pyposcar.exceptions import ErrorKind, ParseError

# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------

ASCII_WHITESPACE: frozenset[str] = frozenset(" \t\r\n")
"""Characters that separate tokens on a POSCAR line."""

WHITE_SPACE: str = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
"""Unicode ``White_Space`` characters, trimmed from the ends of a line.

Narrower than ``str.strip()``, which also removes ``\\x1c``-``\\x1f``.
"""

UNSIGNED_MAX: int = 2**64 - 1
"""Largest value accepted by :func:`parse_unsigned`."""

FLOAT_PATTERN: re.Pattern[str] = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
"""Full-match pattern for the real-number grammar."""

UNSIGNED_PATTERN: re.Pattern[str] = re.compile(r"[0-9]+")
"""Full-match pattern for the unsigned-integer grammar."""


def is_ascii_whitespace(c: str) -> bool:
    """Return ``True`` if *c* is a space, tab, carriage return or newline"""
    return c in ASCII_WHITESPACE


# ---------------------------------------------------------------------------
# Literal grammars
# ---------------------------------------------------------------------------

def parse_float(s: str) -> float:
    """Convert a single token to a Python float

    Parameters
    ----------
    s : str
        A whitespace-free token.

    Returns
    -------
    float
        The converted value.  ``nan`` and ``inf`` are returned as-is;
        callers decide whether they are acceptable.

    Raises
    ------
    ParseError
        With kind ``ErrorKind.FLOAT`` if *s* is not a real-number literal.

    Examples
    --------
    >>> parse_float("-27.0")
    -27.0
    >>> parse_float("1e-3")
    0.001
    >>> parse_float("1.0d0")  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyposcar.exceptions.ParseError: ...
    """
    if not s:
        raise ParseError("cannot parse float from empty string", ErrorKind.FLOAT)
    if FLOAT_PATTERN.fullmatch(s) is None:
        raise ParseError(f"invalid float literal: {s!r}", ErrorKind.FLOAT)
    return float(s)


def parse_logical(s: str) -> bool:
    """Convert a Fortran ``LOGICAL`` token to a Python bool

    Parameters
    ----------
    s : str
        A token such as ``"T"``, ``".F."`` or ``".TRUE."``.

    Returns
    -------
    bool
        ``True`` for a leading ``t``/``T``, ``False`` for ``f``/``F``.

    Raises
    ------
    ParseError
        With kind ``ErrorKind.LOGICAL`` if the first significant character
        is anything else (including an empty remainder after the dot).

    Examples
    --------
    >>> parse_logical(".TRUE.")
    True
    >>> parse_logical("f")
    False
    """
    rest = s[1:] if s.startswith(".") else s
    first = rest[:1]
    if first in ("t", "T"):
        return True
    if first in ("f", "F"):
        return False
    raise ParseError(f"invalid Fortran logical value: {s!r}", ErrorKind.LOGICAL)


def parse_unsigned(s: str) -> int:
    """Convert a token to a non-negative integer, rejecting a leading ``+``

    Parameters
    ----------
    s : str
        A whitespace-free token.

    Returns
    -------
    int
        The converted value, at most :data:`UNSIGNED_MAX`.

    Raises
    ------
    ParseError
        With kind ``ErrorKind.UNSIGNED`` for an empty token, a leading
        ``+``, any non-digit character, or a value that does not fit in
        64 bits.

    Examples
    --------
    >>> parse_unsigned("5")
    5
    >>> parse_unsigned("+5")  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyposcar.exceptions.ParseError: ...
    """
    if not s:
        raise ParseError("cannot parse integer from empty string", ErrorKind.UNSIGNED)
    if s.startswith("+"):
        raise ParseError("invalid digit for integer (leading '+')", ErrorKind.UNSIGNED)
    if UNSIGNED_PATTERN.fullmatch(s) is None:
        raise ParseError(f"invalid digit found in {s!r}", ErrorKind.UNSIGNED)
    value = int(s)
    if value > UNSIGNED_MAX:
        raise ParseError("number too large to fit in target type", ErrorKind.UNSIGNED)
    return value


def is_valid_symbol(s: str) -> bool:
    """Check whether *s* may appear on the species-symbol line

    Also used by :mod:`pyposcar.utils.validation`, so it covers cases the
    tokenizer can never produce (empty strings, embedded whitespace).

    Examples
    --------
    >>> is_valid_symbol("Si")
    True
    >>> is_valid_symbol("1Si")
    False
    """
    if not s:
        return False
    if any(is_ascii_whitespace(c) for c in s):
        return False
    return not ("0" <= s[0] <= "9")


# ---------------------------------------------------------------------------
# Coordinate-system line classifier
# ---------------------------------------------------------------------------

class CoordLineType(enum.Enum):
    """Five-way classification of a coordinate-system header line

    Only the first character matters.  ``INDENTED_TEXT`` and
    ``SUSPICIOUSLY_DIRECT`` both mean Direct but are not sanctioned by the
    format documentation; :attr:`is_fishy` lets callers warn about them.
    """

    CARTESIAN = "cartesian"
    DIRECT = "direct"
    EMPTY_OR_WHITESPACE = "empty-or-whitespace"
    INDENTED_TEXT = "indented-text"
    SUSPICIOUSLY_DIRECT = "suspiciously-direct"

    @property
    def implies_cartesian(self) -> bool:
        return self is CoordLineType.CARTESIAN

    @property
    def is_fishy(self) -> bool:
        return self in (
            CoordLineType.INDENTED_TEXT,
            CoordLineType.SUSPICIOUSLY_DIRECT,
        )


def classify_coord_line(line: str) -> CoordLineType:
    """Classify a coordinate-system line by its first character

    Never fails: every input maps to one of the :class:`CoordLineType`
    members.

    Parameters
    ----------
    line : str
        The full line, without its terminator.

    Returns
    -------
    CoordLineType
        ``CARTESIAN`` for ``c``/``C``/``k``/``K``, ``DIRECT`` for
        ``d``/``D``, ``EMPTY_OR_WHITESPACE`` for a blank line,
        ``INDENTED_TEXT`` when leading whitespace precedes content, and
        ``SUSPICIOUSLY_DIRECT`` otherwise.

    Examples
    --------
    >>> classify_coord_line("Cartesian")
    <CoordLineType.CARTESIAN: 'cartesian'>
    >>> classify_coord_line("   ")
    <CoordLineType.EMPTY_OR_WHITESPACE: 'empty-or-whitespace'>
    """
    line = line.rstrip(WHITE_SPACE)
    if not line:
        return CoordLineType.EMPTY_OR_WHITESPACE

    first = line[0]
    if first in "cCkK":
        return CoordLineType.CARTESIAN
    if first in "dD":
        return CoordLineType.DIRECT
    if is_ascii_whitespace(first):
        return CoordLineType.INDENTED_TEXT
    return CoordLineType.SUSPICIOUSLY_DIRECT
