"""
Example: grid map threshold filtering.

Demonstrates how to use the gridmod threshold filter for:
- Lower-bound clamping from a parameter mapping
- Upper-bound clamping with ThresholdValues
- Clipping a layer to a band with a Pipeline
- Handling unknown layer names
"""

import logging

import numpy as np

from gridmod import GridMap, Pipeline, ThresholdFilter, ThresholdValues
from gridmod.verification import GridMapVerifier

# Configure logging to see filter diagnostics
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def generate_sample_grid(rows: int = 200, cols: int = 200) -> GridMap:
    """Generate a terrain-like grid map with missing cells."""
    rng = np.random.default_rng(42)

    x, y = np.meshgrid(np.linspace(-3, 3, cols), np.linspace(-3, 3, rows))
    elevation = (np.sin(x) * np.cos(y) + rng.normal(0, 0.2, (rows, cols))).astype(np.float32)
    variance = rng.random((rows, cols)).astype(np.float32) * 0.05

    # Unobserved cells
    elevation[rng.random((rows, cols)) < 0.05] = np.nan

    grid = GridMap((rows, cols), resolution=0.05, frame_id="odom")
    grid.add("elevation", elevation)
    grid.add("variance", variance)
    return grid


def example_1_lower_threshold():
    """Example 1: Lower threshold configured from parameters."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Lower Threshold from Parameters")
    print("=" * 70)

    grid = generate_sample_grid()

    f = ThresholdFilter(name="floor")
    ok = f.configure({
        "lower_threshold": -0.5,
        "set_to": -0.5,
        "threshold_types": ["elevation"],
    })
    print(f"Configured: {ok}")

    result, ok = f.update(grid)
    print(f"Map: {GridMapVerifier.summary(grid)}")
    print(f"Min elevation before: {np.nanmin(grid['elevation']):.3f}")
    print(f"Min elevation after:  {np.nanmin(result['elevation']):.3f}")


def example_2_upper_threshold():
    """Example 2: Upper threshold with ThresholdValues."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Upper Threshold with ThresholdValues")
    print("=" * 70)

    grid = generate_sample_grid()
    values = ThresholdValues.upper(0.02, set_to=0.02, layers=["variance"])

    result = ThresholdFilter(values)(grid)
    n_changed = int(np.count_nonzero(result["variance"] != grid["variance"]))
    print(f"Replaced {n_changed}/{grid.n_cells} variance cells")


def example_3_pipeline():
    """Example 3: Clip elevation to a band."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Pipeline (clip to [-0.5, 0.5])")
    print("=" * 70)

    grid = generate_sample_grid()
    pipe = (
        Pipeline()
        .threshold(["elevation"], lower=-0.5, set_to=-0.5)
        .threshold(["elevation"], upper=0.5, set_to=0.5)
    )
    result = pipe(grid)
    low, high = np.nanmin(result["elevation"]), np.nanmax(result["elevation"])
    print(f"Range after: [{low:.3f}, {high:.3f}]")
    print(f"Map: {GridMapVerifier.summary(result)}")


def example_4_unknown_layer():
    """Example 4: Misspelled layer names are reported, not fatal."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Unknown Layer")
    print("=" * 70)

    grid = generate_sample_grid()
    f = ThresholdFilter(ThresholdValues.lower(0.0, 0.0, ["elevaton", "elevation"]))
    _, ok = f.update(grid)
    print(f"Success: {ok}")
    for error in f.diagnostics:
        print(f"Diagnostic: {error}")


if __name__ == "__main__":
    example_1_lower_threshold()
    example_2_upper_threshold()
    example_3_pipeline()
    example_4_unknown_layer()
