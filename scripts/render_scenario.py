#!/usr/bin/env python3
"""Build a random barrier/label scenario and write its debug overlay.

Outputs go to /tmp/topolabel_scenarios/.

Usage:
    python scripts/render_scenario.py --seed 3 --labels 40
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from topolabel.geometry import Vector  # noqa: E402
from topolabel.labels import (  # noqa: E402
    BarrierSet,
    ConflictGraph,
    Label,
    Point,
    Polyline,
)
from topolabel.render import render_debug  # noqa: E402

OUTPUT_DIR = Path("/tmp/topolabel_scenarios")


def _random_walk(rng: random.Random, size: float, steps: int) -> list[Vector]:
    point = Vector(rng.uniform(0, size), rng.uniform(0, size))
    points = [point]
    for _ in range(steps):
        point = point + Vector(rng.uniform(-4, 4), rng.uniform(-4, 4))
        points.append(point)
    return points


def build_scenario(
    seed: int,
    n_barriers: int,
    n_labels: int,
    size: float = 100.0,
    font_size: float = 1.8,
) -> tuple[BarrierSet, list[Label], ConflictGraph]:
    """Scatter point and line barriers, then curved candidate labels."""
    rng = random.Random(seed)
    barriers = BarrierSet()
    for index in range(n_barriers):
        if rng.random() < 0.5:
            geometry = Point(Vector(rng.uniform(0, size), rng.uniform(0, size)))
        else:
            geometry = Polyline(_random_walk(rng, size, rng.randint(1, 5)))
        barriers.add(f"barrier-{index}", geometry, buffer=rng.uniform(0.0, 1.0))

    query = barriers.query()
    labels = [
        Label.from_baseline(
            _random_walk(rng, size, rng.randint(1, 4)),
            font_size,
            priority=index,
            barrier_query=query,
            text=f"label-{index}",
        )
        for index in range(n_labels)
    ]

    graph = ConflictGraph(labels)
    graph.add_pairs(Label.overlaps(labels, labels, lambda label: 0.5))
    return barriers, labels, graph


def main():
    parser = argparse.ArgumentParser(description="Render a random collision scenario")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--barriers", type=int, default=30, help="Number of barriers")
    parser.add_argument("--labels", type=int, default=30, help="Number of labels")
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    barriers, labels, graph = build_scenario(args.seed, args.barriers, args.labels)
    svg_path = OUTPUT_DIR / f"scenario_{args.seed}.svg"
    svg_path.write_text(render_debug(barriers, labels))

    blocked = sum(1 for label in labels if label.has_barriers)
    groups = sum(1 for _ in graph.components())
    print(f"  {len(labels)} labels, {blocked} touching barriers, {groups} groups")
    print(f"\nOutput: {svg_path}")


if __name__ == "__main__":
    main()
