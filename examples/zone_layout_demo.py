#!/usr/bin/env python3
"""
Demo script showing nodes being held inside their grid zones.
"""

import numpy as np
from py_forcemap.core import ForceMap, ForceNode
from py_forcemap.utils.log_config import configure_logging


def main():
    """Scatter nodes, assign them to zones and run a short simulation."""
    configure_logging(fmt="console")

    print("Py-ForceMap Zone Layout Demo")
    print("=" * 40)

    width, height = 800, 600
    force_map = ForceMap(width, height, cols=2, rows=2)
    grid = force_map.zones

    # Nodes start anywhere in the container but each one is assigned to a
    # zone chosen independently of where it starts
    rng = np.random.default_rng(42)
    nodes_by_zone = {}
    for i in range(40):
        node = ForceNode(x=float(rng.uniform(0, width)),
                         y=float(rng.uniform(0, height)),
                         index=i,
                         data={"size": float(rng.uniform(2, 8))})
        target = (int(rng.integers(grid.rows)), int(rng.integers(grid.cols)))
        nodes_by_zone.setdefault(target, []).append(node)

    forces = force_map.boundary_forces(nodes_by_zone, strength=0.2,
                                       radius=lambda n: n.data["size"])

    # Minimal tick loop standing in for the simulation engine
    alpha, alpha_min, alpha_decay, velocity_decay = 1.0, 0.001, 0.0228, 0.4
    ticks = 0
    while alpha > alpha_min * 2:
        for force in forces.values():
            force.step(alpha)
        for nodes in nodes_by_zone.values():
            for node in nodes:
                node.vx *= 1 - velocity_decay
                node.vy *= 1 - velocity_decay
                node.x += node.vx
                node.y += node.vy
        alpha += (alpha_min - alpha) * alpha_decay
        ticks += 1

    print(f"\nRan {ticks} ticks")
    for (row, col), nodes in sorted(nodes_by_zone.items()):
        zone = grid[row][col]
        inside = sum(zone.contains(n.x, n.y) for n in nodes)
        print(f"Zone ({row}, {col}) [{zone.left:.0f}-{zone.right:.0f} x "
              f"{zone.top:.0f}-{zone.bottom:.0f}]: {inside}/{len(nodes)} nodes inside")


if __name__ == "__main__":
    main()
