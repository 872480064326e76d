#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Line and token spans with source positions

POSCAR is read strictly line by line, and every error message must point
at the exact line and column that caused it.  This module provides the
three small types the document parser is built on:

* :class:`Spanned` - an immutable piece of text plus the path, zero-based
  line and zero-based column it came from.
* :class:`Words` - a lazy iterator over the whitespace-separated tokens of
  a :class:`Spanned` line, each a :class:`Spanned` with its true column.
* :class:`Lines` - a cursor over a line source that numbers the lines,
  raises ``"unexpected end of file"`` when content is missing, and stays
  exhausted once the source runs out.

Every span produced by one :class:`Lines` instance refers to the same
``Path`` object; the path is never copied per token.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from pyposcar.exceptions import ErrorKind, ParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORD_PATTERN: re.Pattern[str] = re.compile(r"[^ \t\r\n]+")
"""A maximal run of non-whitespace characters (ASCII whitespace only)."""


def strip_terminator(raw: str) -> str:
    """Remove a trailing ``\\n`` or ``\\r\\n`` from *raw*

    A lone ``\\r`` without a following ``\\n`` is kept, so it becomes
    part of the line content.
    """
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


@dataclass(frozen=True)
class Spanned:
    """A string together with the position it was read from

    Parameters
    ----------
    text : str
        The content of the span.
    line : int
        Zero-based line number.
    col : int, optional
        Zero-based column of the first character.  Default ``0``.
    path : pathlib.Path | None, optional
        Source file, shared between every span of one parse.
    """

    text: str
    line: int
    col: int = 0
    path: Path | None = None

    @classmethod
    def wrap_arbitrary(cls, text: str) -> Spanned:
        """Wrap *text* at line 0, column 0 with no path

        Lets code outside the parser test a string with exactly the same
        rules the parser applies to file content.
        """
        return cls(text, 0, 0, None)

    def __str__(self) -> str:
        return self.text

    def slice(self, start: int, stop: int | None = None) -> Spanned:
        """Return the sub-span ``text[start:stop]`` with its column adjusted"""
        stop = len(self.text) if stop is None else stop
        return Spanned(self.text[start:stop], self.line, self.col + start, self.path)

    def words(self) -> Words:
        """Tokenize on ASCII whitespace, keeping each token's column

        Equivalent to ``text.split()`` restricted to space, tab, CR and
        LF, except that the result is a lazy :class:`Words` iterator of
        :class:`Spanned` tokens.
        """
        return Words(self)

    def control_char(self) -> str | None:
        """Return the first character of the line, or ``None`` if empty

        Flag lines are decided by their first character, even when it is
        whitespace, so this is intentionally not the first *token*.
        """
        return self.text[:1] or None

    def parse(self, func: Callable[[str], T]) -> T:
        """Apply a primitive parser to the text of this span

        Parameters
        ----------
        func : callable
            One of the grammars in :mod:`pyposcar.utils.parsing`.

        Raises
        ------
        ParseError
            The parser's error, re-raised at this span's line and column.
        """
        try:
            return func(self.text)
        except ParseError as exc:
            raise exc.located(self.path, self.line, self.col) from exc

    def error(self, message: str, kind: ErrorKind = ErrorKind.GENERIC) -> ParseError:
        """Build (but do not raise) a :class:`ParseError` pointing at this span"""
        return ParseError(message, kind, path=self.path, line=self.line, col=self.col)


class Words(Iterator[Spanned]):
    """Lazy, single-use iterator over the tokens of one line

    Created by :meth:`Spanned.words`.  Calling :meth:`Spanned.words`
    again starts a fresh iteration; an exhausted ``Words`` stays
    exhausted.
    """

    def __init__(self, span: Spanned) -> None:
        self._span = span
        self._matches = WORD_PATTERN.finditer(span.text)

    def __iter__(self) -> Words:
        return self

    def __next__(self) -> Spanned:
        m = next(self._matches)
        return self._span.slice(m.start(), m.end())

    def next_or_err(self, message: str) -> Spanned:
        """Return the next token, or raise a line-level error if none is left

        Raises
        ------
        ParseError
            With *message*, the line number, and no column.
        """
        try:
            return next(self)
        except StopIteration:
            raise ParseError(
                message, path=self._span.path, line=self._span.line,
            ) from None


class Lines:
    """Numbered cursor over a sequence of raw lines

    Parameters
    ----------
    source : Iterable[str]
        Lines with or without their terminators (``\\n`` and ``\\r\\n``
        are stripped).  Exceptions raised while iterating, such as
        ``OSError`` or ``UnicodeDecodeError``, propagate unchanged.
    path : pathlib.Path | str | None, optional
        Path reported in error messages.

    Notes
    -----
    Once the source is exhausted the cursor never yields another line,
    even if the underlying iterator would, so probing for end of file is
    idempotent.
    """

    def __init__(self, source: Iterable[str], path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._lines = iter(source)
        self._cur = 0
        self._exhausted = False

    @property
    def line_number(self) -> int:
        """Zero-based number of the line the next call will return"""
        return self._cur

    def try_next(self) -> Spanned | None:
        """Return the next line, or ``None`` at end of file"""
        if self._exhausted:
            return None
        try:
            raw = next(self._lines)
        except StopIteration:
            self._exhausted = True
            return None

        span = Spanned(strip_terminator(raw), self._cur, 0, self.path)
        self._cur += 1
        return span

    def next(self) -> Spanned:
        """Return the next line

        Raises
        ------
        ParseError
            ``"unexpected end of file"`` at the line that was expected.
        """
        span = self.try_next()
        if span is None:
            raise self.eof_error()
        return span

    def eof_error(self) -> ParseError:
        """Build the ``"unexpected end of file"`` error for the current line"""
        return ParseError("unexpected end of file", path=self.path, line=self._cur)

    def expect_blank_until_eof(self) -> None:
        """Consume the rest of the input, requiring it to be blank

        Raises
        ------
        ParseError
            ``"expected end of file"`` at the first non-whitespace token.
        """
        while True:
            span = self.try_next()
            if span is None:
                return
            word = next(span.words(), None)
            if word is not None:
                raise word.error("expected end of file")
