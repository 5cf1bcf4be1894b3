"""Benchmark threshold filtering on CPU."""

import logging
import time

import numpy as np

from gridmod import GridMap, ThresholdValues, apply_threshold_values
from gridmod.threshold import warmup_threshold_kernels

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def create_test_grid(side: int) -> GridMap:
    """Create a square test grid with 5% missing cells."""
    rng = np.random.default_rng(42)

    elevation = rng.normal(size=(side, side)).astype(np.float32)
    elevation[rng.random((side, side)) < 0.05] = np.nan

    grid = GridMap((side, side), resolution=0.05)
    grid.add("elevation", elevation)
    return grid


def benchmark(func, warmup=3, iterations=20):
    """Benchmark a function."""
    for _ in range(warmup):
        func()

    start = time.perf_counter()
    for _ in range(iterations):
        func()
    elapsed = time.perf_counter() - start

    return (elapsed / iterations) * 1000


def run_benchmarks():
    """Run CPU benchmarks."""
    logger.info("=" * 70)
    logger.info("THRESHOLD CPU BENCHMARKS")
    logger.info("=" * 70)

    warmup_threshold_kernels()
    values = ThresholdValues.lower(0.0, 0.0, ["elevation"])

    for side in [256, 1024, 4096]:
        n = side * side
        grid = create_test_grid(side)
        logger.info(f"\nGrid size: {side}x{side} ({n:,} cells)")
        logger.info("-" * 70)

        def copy_only():
            grid.copy()

        def threshold_op():
            apply_threshold_values(grid.copy(), values, inplace=True)

        def numpy_reference():
            layer = grid["elevation"].copy()
            layer[~np.isnan(layer) & (layer < 0.0)] = 0.0

        copy_ms = benchmark(copy_only)
        total_ms = benchmark(threshold_op)
        numpy_ms = benchmark(numpy_reference)

        kernel_ms = max(total_ms - copy_ms, 1e-6)
        throughput = (n / kernel_ms) * 1000 / 1e6
        logger.info(f"Copy:      {copy_ms:.2f} ms")
        logger.info(f"Threshold: {kernel_ms:.2f} ms ({throughput:.1f}M cells/sec)")
        logger.info(f"NumPy ref: {numpy_ms:.2f} ms")


if __name__ == "__main__":
    run_benchmarks()
