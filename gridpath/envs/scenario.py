# -*- coding: utf-8 -*-
"""
Scenario: one path query (grid size, obstacles, start, target, movement model)
with JSON load/save, used by the CLIs and test fixtures.

JSON layout:
    {"width": 5, "height": 5, "obstacles": [[2, 0], [2, 1]],
     "start": [0, 0], "target": [4, 4], "allow_diagonals": true}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..errors import InvalidScenario
from .grid import Cell, OccupancyGrid, _check_dimension, as_cell

REQUIRED_KEYS = ("width", "height", "start", "target")


@dataclass
class Scenario:
    width: int
    height: int
    start: Cell
    target: Cell
    obstacles: List[Cell] = field(default_factory=list)
    allow_diagonals: bool = True

    def grid(self) -> OccupancyGrid:
        return OccupancyGrid.from_obstacles(self.width, self.height, self.obstacles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "obstacles": [list(c) for c in self.obstacles],
            "start": list(self.start),
            "target": list(self.target),
            "allow_diagonals": self.allow_diagonals,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Scenario":
        if not isinstance(d, dict):
            raise InvalidScenario(f"Scenario must be a JSON object, got {type(d).__name__}")
        missing = [k for k in REQUIRED_KEYS if k not in d]
        if missing:
            raise InvalidScenario(f"Scenario missing keys: {missing}")
        obstacles = d.get("obstacles", [])
        if not isinstance(obstacles, list):
            raise InvalidScenario(f"obstacles must be a list of [x, y] pairs, got {obstacles!r}")
        allow_diagonals = d.get("allow_diagonals", True)
        if not isinstance(allow_diagonals, bool):
            raise InvalidScenario(f"allow_diagonals must be true or false, got {allow_diagonals!r}")
        try:
            return cls(
                width=_check_dimension("width", d["width"]),
                height=_check_dimension("height", d["height"]),
                start=as_cell(d["start"]),
                target=as_cell(d["target"]),
                obstacles=[as_cell(c) for c in obstacles],
                allow_diagonals=allow_diagonals,
            )
        except ValueError as e:
            raise InvalidScenario(f"Malformed scenario: {e}") from e

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "Scenario":
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidScenario(f"{path}: not valid JSON ({e})") from e
        return cls.from_dict(data)
