#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
benchmark.py
------------
A* vs BFS sweep over generated grids:
- Generates random environments across (sizes x densities x seeds)
- Runs both planners with the same movement model
- Records success, hops, expansions and wall time
- Flags any case where A* and BFS disagree on the shortest hop count
- Writes all rows to CSV and prints a per-(size, density) summary

Example:
    python -m gridpath.cli.benchmark \
        --sizes 20x20,40x40 --densities 0.10,0.25 \
        --num-envs 50 --connectivity 8 --seed 0 --out results/bench.csv

Exit status 1 if any disagreement was found.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
import time
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from gridpath.envs.generator import generate_environment
from gridpath.metrics import path_metrics
from gridpath.planners import PLANNERS

logger = logging.getLogger("gridpath.cli.benchmark")


def _parse_sizes(s: str) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for token in s.split(","):
        token = token.strip().lower()
        if "x" not in token:
            raise ValueError(f"Bad size '{token}', expected like 30x30")
        w, h = token.split("x")
        sizes.append((int(w), int(h)))
    return sizes


def _parse_densities(s: str) -> List[float]:
    vals = []
    for token in s.split(","):
        token = token.strip()
        if token.endswith("%"):
            vals.append(float(token[:-1]) / 100.0)
        else:
            vals.append(float(token))
    return vals


def _ensure_dir(path: str) -> None:
    if path:
        os.makedirs(path, exist_ok=True)


def run_case(env, connectivity: int) -> List[Dict]:
    """Run every registered planner on one environment; one row per planner."""
    rows = []
    grid = env.grid
    for name, cls in PLANNERS.items():
        planner = cls(connectivity=connectivity)
        t0 = time.perf_counter()
        out = planner.plan(grid, env.start, env.target)
        t1 = time.perf_counter()
        success = bool(out["success"])
        moves = out["path"][1:] if success else []
        m = path_metrics(env.start, moves)
        rows.append({
            "planner": name,
            "connectivity": connectivity,
            "seed": env.settings["seed"],
            "W": env.scenario.width,
            "H": env.scenario.height,
            "density": env.settings["density"],
            "success": int(success),
            "time_s": t1 - t0,
            "expanded": out["expanded"],
            "path_hops": m["hops"] if success else -1,
            "diag_steps": m["diag_steps"],
        })
    return rows


def find_disagreements(df: pd.DataFrame) -> pd.DataFrame:
    """Cases where planners differ in success or hop count."""
    keys = ["connectivity", "seed", "W", "H", "density"]
    per_case = df.groupby(keys)["path_hops"].nunique()
    bad = per_case[per_case > 1].reset_index()[keys]
    return df.merge(bad, on=keys)


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark A* against BFS on random grids.")
    ap.add_argument("--sizes", type=str, default="20x20,40x40",
                    help="Comma-separated grid sizes like 20x20,40x40 (WIDTHxHEIGHT)")
    ap.add_argument("--densities", type=str, default="0.10,0.20,0.30",
                    help="Comma-separated densities (0-1 or %%, e.g., 10%%)")
    ap.add_argument("--num-envs", type=int, default=20, help="Environments per (size, density)")
    ap.add_argument("--connectivity", type=int, default=8, choices=[4, 8], help="Movement model")
    ap.add_argument("--seed", type=int, default=0, help="Base RNG seed")
    ap.add_argument("--out", type=str, default="results/benchmark.csv", help="CSV output path")
    ap.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    ap.add_argument("--log-level", type=str, default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s - %(name)s - %(levelname)s: %(message)s")

    sizes = _parse_sizes(args.sizes)
    densities = _parse_densities(args.densities)
    rng = np.random.default_rng(args.seed)
    allow_diagonals = args.connectivity == 8

    cases = [(w, h, d) for (w, h) in sizes for d in densities for _ in range(args.num_envs)]
    rows: List[Dict] = []
    for w, h, d in tqdm(cases, desc="benchmark", disable=args.no_progress):
        env = generate_environment(width=w, height=h, density=d,
                                   allow_diagonals=allow_diagonals, rng=rng)
        rows.extend(run_case(env, args.connectivity))

    df = pd.DataFrame(rows)
    _ensure_dir(os.path.dirname(args.out))
    df.to_csv(args.out, index=False)
    print(f"Saved: {args.out}")

    summary = (df.groupby(["planner", "W", "H", "density"])
                 .agg(success_rate=("success", "mean"),
                      mean_expanded=("expanded", "mean"),
                      mean_time_s=("time_s", "mean"))
                 .reset_index())
    print(summary.to_string(index=False))

    bad = find_disagreements(df)
    if len(bad):
        logger.error("%d planner rows disagree on shortest hop count", len(bad))
        print(bad.to_string(index=False))
        return 1
    logger.info("A* matched BFS on all %d environments", len(cases))
    return 0


if __name__ == "__main__":
    sys.exit(main())
