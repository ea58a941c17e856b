#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test package for gridpath.

This file ensures the 'tests' directory is recognized as a package and that
the repository root is importable when gridpath is not installed
(e.g., `pytest tests/` from a fresh checkout).
"""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)
