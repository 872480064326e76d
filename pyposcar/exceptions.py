#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the PyPOSCAR package

All exceptions raised by PyPOSCAR inherit from :class:`PyPoscarError`, making
it possible to catch every library-specific error with a single ``except``
clause while still allowing fine-grained handling when needed.

Exception Hierarchy
-------------------
::

    PyPoscarError
    ├── ParseError          # Malformed file content (located)
    ├── ValidationError     # Data violating the Poscar invariants
    ├── FileFormatError     # Missing or unreadable source file
    └── WriteError          # Output file could not be written

I/O failures raised by the underlying line source (``OSError``,
``UnicodeDecodeError``) are deliberately *not* wrapped and propagate
unchanged.
"""

from __future__ import annotations

import enum
from pathlib import Path


class PyPoscarError(Exception):
    """Base exception for all PyPOSCAR errors

    Every exception raised by PyPOSCAR is a subclass of this type.
    """


class ErrorKind(enum.Enum):
    """Classification of a :class:`ParseError`

    The three literal kinds correspond to the primitive grammars of
    :mod:`pyposcar.utils.parsing`; everything else is ``GENERIC``.
    """

    FLOAT = "float"
    LOGICAL = "logical"
    UNSIGNED = "unsigned"
    GENERIC = "generic"


class ParseError(PyPoscarError):
    """Raised when POSCAR content is malformed

    A ``ParseError`` carries the location of the problem alongside the
    message.  Line and column numbers are stored **zero-based** and
    rendered one-based by :meth:`__str__`, giving compiler-style messages
    such as ``POSCAR:2:7: too many floats on scale line``.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    kind : ErrorKind, optional
        Which grammar failed.  Default ``ErrorKind.GENERIC``.
    path : pathlib.Path | None, optional
        Source file, or ``None`` for in-memory input.
    line : int | None, optional
        Zero-based line number.
    col : int | None, optional
        Zero-based column.  ``None`` when the error concerns the whole
        line rather than a single token.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.GENERIC,
        *,
        path: Path | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.path = path
        self.line = line
        self.col = col

    def located(
        self,
        path: Path | None,
        line: int | None,
        col: int | None = None,
    ) -> ParseError:
        """Return a copy of this error tagged with a source position"""
        return ParseError(self.message, self.kind, path=path, line=line, col=col)

    def __str__(self) -> str:
        where = str(self.path) if self.path is not None else "<input>"
        if self.line is not None:
            where += f":{self.line + 1}"
            if self.col is not None:
                where += f":{self.col + 1}"
        return f"{where}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"ParseError({self.message!r}, {self.kind}, path={self.path!r}, "
            f"line={self.line!r}, col={self.col!r})"
        )


class ValidationError(PyPoscarError):
    """Raised when data handed to :class:`~pyposcar.models.records.Poscar`
    violates one of its invariants

    The parser establishes every invariant while reading, so a
    ``ValidationError`` normally means the caller built a structure by
    hand with inconsistent lengths, an invalid species symbol, or a
    comment containing a line break.

    Parameters
    ----------
    message : str
        Description of the failed check, including the field name and the
        offending value.
    """


class FileFormatError(PyPoscarError):
    """Raised when a POSCAR source file cannot be located

    This is raised *before* parsing begins, e.g. when the path does not
    exist or names a directory.
    """


class WriteError(PyPoscarError):
    """Raised when a POSCAR cannot be written to disk

    Covers refusing to overwrite an existing file and any ``OSError``
    raised while opening or writing the target path.
    """
