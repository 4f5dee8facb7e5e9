#!/usr/bin/env python3
"""
Tick rate benchmark
Measures gait + IK + pose cost per tick for each built-in layout
"""

import sys
import os
import time
import numpy as np

# Add repo root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from limbwalk.creature import LAYOUTS, Simulation
from limbwalk.utils.config import Config

TICKS = 1200
TARGET = (0.0, 0.0, 40.0)

print("=" * 70)
print("limbwalk tick rate benchmark")
print("=" * 70)
print(f"Python version: {sys.version}")
print(f"Ticks per layout: {TICKS}")
print("=" * 70)

results = {}

for index, layout in enumerate(sorted(LAYOUTS), start=1):
    print(f"\n[{index}/{len(LAYOUTS)}] {layout}")
    print("-" * 70)

    config = Config()
    config.set("creature.layout", layout)
    if layout == "quad_rotor":
        config.set("creature.variant", "rotor")
    simulation = Simulation.from_config(config)

    tick_times = []
    start_time = time.time()
    for _ in range(TICKS):
        tick_start = time.time()
        simulation.step(TARGET)
        tick_times.append((time.time() - tick_start) * 1000)
    elapsed = time.time() - start_time

    summary = simulation.summary()
    results[layout] = {
        "ticks_per_second": TICKS / elapsed,
        "mean_ms": float(np.mean(tick_times)),
        "p95_ms": float(np.percentile(tick_times, 95)),
        "max_ms": float(np.max(tick_times)),
        "steps": summary.get("gait", {}).get("total_steps", 0),
    }

    r = results[layout]
    print(f"  Ticks/s:   {r['ticks_per_second']:.1f}")
    print(f"  Mean:      {r['mean_ms']:.3f} ms")
    print(f"  P95:       {r['p95_ms']:.3f} ms")
    print(f"  Max:       {r['max_ms']:.3f} ms")
    print(f"  Steps:     {r['steps']}")
    print(f"  Skips:     {summary['skips']}")

print("\n" + "=" * 70)
print("Summary")
print("=" * 70)
for layout, r in results.items():
    budget = "OK" if r["p95_ms"] < 1000.0 / 60.0 else "SLOW"
    print(f"  {layout:<12} {r['ticks_per_second']:>9.1f} ticks/s   p95 {r['p95_ms']:.3f} ms   [{budget}]")
print("=" * 70)
