"""
Benchmark 2D affine point mapping (composed builder matrix + Numba kernel).
"""

import time

import numpy as np

from imxform import AffineTransformBuilder, Rectangle

N = 1_000_000
NUM_ITERATIONS = 100

print("=" * 80)
print("2D AFFINE TRANSFORM BENCHMARK")
print(f"Testing with {N:,} points, {NUM_ITERATIONS} iterations")
print("=" * 80)

# Setup
rectangle = Rectangle(16, 32, 1920, 1080)
points_np = np.random.rand(N, 2) * np.array([1920.0, 1080.0])
out_np = np.empty_like(points_np)

# Compose rotation, scale and translation into a single matrix
builder = (
    AffineTransformBuilder(rectangle)
    .append_rotation_degrees(30)
    .append_scale((0.5, 0.75))
    .append_translation([100.0, -50.0])
)

# Warmup (includes JIT compilation)
print("\nWarming up...")
for _ in range(20):
    builder.transform_points(points_np, out=out_np)

# Benchmark
print(f"Benchmarking {NUM_ITERATIONS} iterations...")
times = []
for _ in range(NUM_ITERATIONS):
    start = time.perf_counter()
    builder.transform_points(points_np, out=out_np)
    times.append((time.perf_counter() - start) * 1000)

mean_time = np.mean(times)
std_time = np.std(times)

print("\nResults (1M points):")
print(f"  Time:       {mean_time:.3f} ms +/- {std_time:.3f} ms")
print(f"  Throughput: {N / mean_time * 1000 / 1e6:.1f}M points/sec")

# Reference: plain NumPy homogeneous product
matrix = builder.build_matrix()
start = time.perf_counter()
reference = points_np @ matrix[:2, :2].T + matrix[:2, 2]
numpy_time = (time.perf_counter() - start) * 1000

print(f"  NumPy:      {numpy_time:.3f} ms (single run)")
print(f"  Max error:  {np.max(np.abs(reference - out_np)):.2e}")
