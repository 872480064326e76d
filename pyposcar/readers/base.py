#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Abstract base class for structure-file readers

A concrete reader implements :meth:`BaseReader.parse`, which turns a line
source into a typed model from :mod:`pyposcar.models`.  The base class
owns everything to do with the filesystem: checking the path, opening it
with the right encoding and newline handling, and making sure the path
appears in error messages.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from pyposcar.exceptions import FileFormatError
from pyposcar.models.records import Poscar

logger = logging.getLogger(__name__)


class BaseReader(ABC):
    """Abstract base for line-oriented structure readers

    Notes
    -----
    Readers must never write files; that is the responsibility of the
    writer layer.  The dependency direction is::

        utils ← models ← readers ← writers
    """

    encoding: str = "utf-8"
    """Text encoding used by :meth:`read`."""

    def read(self, path: Path | str) -> Poscar:
        """Open *path* and parse it

        Parameters
        ----------
        path : Path | str
            Filesystem path to the source file.

        Returns
        -------
        Poscar
            The parsed structure.

        Raises
        ------
        FileFormatError
            If *path* does not name an existing regular file.
        ParseError
            If the content is malformed; the error carries *path*.
        OSError
            If reading fails part-way.  Decoding failures surface as
            ``UnicodeDecodeError``.
        """
        filepath = Path(path)
        logger.debug("Opening %s file: %s", type(self).__name__, filepath)

        if not filepath.is_file():
            raise FileFormatError(f"File not found: {filepath}")

        # newline="\n": split on LF only and leave CR for the line cursor
        with filepath.open("r", encoding=self.encoding, newline="\n") as fh:
            return self.parse(fh, path=filepath)

    @abstractmethod
    def parse(
        self,
        source: str | bytes | Iterable[str],
        *,
        path: Path | str | None = None,
    ) -> Poscar:
        """Parse an in-memory document or an iterable of lines

        Parameters
        ----------
        source : str | bytes | Iterable[str]
            Whole document text, UTF-8 bytes, or lines (for instance an
            open text file).
        path : Path | str | None, optional
            Path reported in error messages.

        Returns
        -------
        Poscar
            The parsed structure.

        Raises
        ------
        ParseError
            On the first malformed or missing piece of content.
        """
        ...
