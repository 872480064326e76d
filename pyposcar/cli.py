#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyPOSCAR command-line interface

Provides two commands:

1. **check**  - Parse one or more files and report the first error in each
2. **format** - Rewrite a file in canonical form

Usage
-----
::

    # Validate every POSCAR under a run directory
    python -m pyposcar.cli check runs/*/POSCAR

    # Normalise a CONTCAR to stdout
    python -m pyposcar.cli format CONTCAR

    # Normalise into a new file, replacing it if it exists
    python -m pyposcar.cli format CONTCAR -o POSCAR.next --overwrite
"""

from __future__ import annotations

import argparse
import logging
import sys

from pyposcar.exceptions import PyPoscarError

logger = logging.getLogger("pyposcar.cli")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_check(args):
    """Parse each file and report OK or the first error."""
    from pyposcar.readers.poscar import parse_file

    total_ok = 0
    total_fail = 0

    for name in args.files:
        try:
            structure = parse_file(name)
        except PyPoscarError as exc:
            print(f"FAIL: {exc}")
            total_fail += 1
            continue
        except (OSError, UnicodeDecodeError) as exc:
            print(f"FAIL: {name}: {exc}")
            total_fail += 1
            continue

        total_ok += 1
        if not args.quiet:
            velocities = " +velocities" if structure.has_velocities else ""
            print(f"OK:   {name} ({structure.num_atoms} atoms{velocities})")

    logger.debug("check: %d OK, %d failed", total_ok, total_fail)
    return 0 if total_fail == 0 else 1


def cmd_format(args):
    """Rewrite a file in canonical form."""
    from pyposcar.readers.poscar import parse_file
    from pyposcar.writers.poscar import write, write_file

    try:
        structure = parse_file(args.file)
        if args.output is None:
            write(sys.stdout, structure)
        else:
            write_file(args.output, structure, overwrite=args.overwrite)
    except PyPoscarError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: {args.file}: {exc}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="pyposcar",
        description="Read, check and normalise VASP POSCAR files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
    python -m pyposcar.cli check POSCAR CONTCAR        # report errors
    python -m pyposcar.cli check -q runs/*/POSCAR      # only print failures
    python -m pyposcar.cli format CONTCAR              # canonical text to stdout
    python -m pyposcar.cli format CONTCAR -o POSCAR2   # canonical text to a file
""",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", help="Command to run")

    check = sub.add_parser("check", help="Parse files and report errors")
    check.add_argument("files", nargs="+", help="POSCAR files to check")
    check.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print files that fail to parse",
    )

    fmt = sub.add_parser("format", help="Rewrite a file in canonical form")
    fmt.add_argument("file", help="POSCAR file to read")
    fmt.add_argument(
        "--output", "-o",
        default=None,
        help="Output path (default: standard output)",
    )
    fmt.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite the output file if it exists",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "check": cmd_check,
        "format": cmd_format,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
