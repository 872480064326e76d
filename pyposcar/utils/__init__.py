#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared utilities for parsing and validation

This sub-package centralises the primitive token grammars, the
coordinate-line classifier, and the structural invariant checks so that
the reader, the models, and the writer all agree on them.
"""

from __future__ import annotations
