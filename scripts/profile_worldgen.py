import os
import sys
import time
from statistics import mean, pstdev

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from island.worldgen import World, WorldConfig  # noqa: E402 import after path fix

SEEDS = [11, 222, 3333, 4444, 55555, 67890, 72223, 88888, 99999, 123456]
WIDTH, HEIGHT = 150, 75


def run():
    runtimes = []
    phase_totals = {}
    for s in SEEDS:
        t0 = time.perf_counter()
        w = World(WorldConfig(seed=s, width=WIDTH, height=HEIGHT))
        t1 = time.perf_counter()
        rt = (t1 - t0) * 1000
        for phase, ms in w.metrics["phase_ms"].items():
            phase_totals[phase] = phase_totals.get(phase, 0) + ms
        print(
            f"seed={s} ms={rt:.1f} shape={w.settings.shape} spread={w.settings.spread} "
            f"rooms={len(w.rooms)}/{w.metrics['rooms_placed']} passes={w.metrics['prune_passes']}"
        )
        runtimes.append(rt)
    print("\nSummary:")
    print(
        f"count={len(runtimes)} avg_ms={mean(runtimes):.1f} sd_ms={pstdev(runtimes):.1f} min_ms={min(runtimes):.1f} max_ms={max(runtimes):.1f}"
    )
    print("phases: " + " ".join(f"{k}={v}" for k, v in sorted(phase_totals.items(), key=lambda kv: -kv[1])))


if __name__ == "__main__":
    run()
