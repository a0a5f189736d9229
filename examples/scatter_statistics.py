#!/usr/bin/env python3
"""Print scattering statistics for each material variant.

Scatters one incoming ray off a horizontal surface many times for a
Lambertian, a few Metal fuzz values and a Dielectric, and reports the
absorption rate and the mean outgoing direction of each.

Usage:
    python examples/scatter_statistics.py [options]

Options:
    --samples SAMPLES   Scatter calls per material (default: 100000)
    --seed SEED         Seed for the RNG streams (default: 0)
    --arch {cpu,gpu}    Taichi backend (default: cpu)

Example:
    python examples/scatter_statistics.py --samples 20000 --seed 3
"""

from __future__ import annotations

import argparse
import math
import sys

import numpy as np


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Print scattering statistics for each material variant.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100000,
        help="Scatter calls per material (default: 100000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the RNG streams (default: 0)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from riaw.config import init_taichi

    backend = init_taichi(args.arch)
    print(f"Using {backend.upper()} backend")

    # Lazy imports so that Taichi fields are created after initialization
    from riaw.materials import (
        add_dielectric_material,
        add_lambertian_material,
        add_metal_material,
        sample_scatter,
    )

    # 30 degrees below the horizon, hitting a floor with normal +Y
    angle = math.radians(30.0)
    direction = (math.cos(angle), -math.sin(angle), 0.0)
    normal = (0.0, 1.0, 0.0)

    materials = [
        ("lambertian", add_lambertian_material((0.5, 0.5, 0.5))),
        ("metal fuzz=0.0", add_metal_material((0.8, 0.8, 0.8), fuzz=0.0)),
        ("metal fuzz=0.3", add_metal_material((0.8, 0.8, 0.8), fuzz=0.3)),
        ("metal fuzz=1.0", add_metal_material((0.8, 0.8, 0.8), fuzz=1.0)),
        ("dielectric 1.5", add_dielectric_material(1.5)),
    ]

    print(f"{'material':<16} {'absorbed':>9}  mean direction")
    for name, material_id in materials:
        samples = sample_scatter(
            material_id,
            direction,
            normal,
            num_samples=args.samples,
            seed=args.seed,
        )
        kept = samples.scattered_directions()
        mean = kept.mean(axis=0) if len(kept) else np.zeros(3)
        print(
            f"{name:<16} {samples.absorption_rate():>8.2%}  "
            f"({mean[0]:+.3f}, {mean[1]:+.3f}, {mean[2]:+.3f})"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
