# -*- coding: utf-8 -*-
"""
Command-line entry points (run with `python -m gridpath.cli.<name>`):

- find_path : single A* query, prints the path as JSON
- benchmark : A* vs BFS sweep over generated grids, CSV output
"""
__all__ = [
    "find_path",
    "benchmark",
]
