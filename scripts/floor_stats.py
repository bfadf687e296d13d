"""Chart floor generation and autopilot exploration statistics.

Usage:
    uv run python scripts/floor_stats.py [--floors N] [--sessions N]
"""

from __future__ import annotations

import argparse
import time
from collections import Counter

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from depthcrawl.balance.metrics import compute_seal_metrics, compute_trap_metrics
from depthcrawl.core.rng import GameRNG
from depthcrawl.generation.floor_gen import FloorGenerator
from depthcrawl.play_agents.random_explorer import RandomExplorer
from depthcrawl.play_agents.thorough_explorer import ThoroughExplorer
from depthcrawl.runner import BatchRunner

_LEVELS = [1, 5, 10, 15, 25, 40, 60, 80, 99]


def collect_floor_stats(n_floors: int) -> dict[int, dict[str, list[int]]]:
    generator = FloorGenerator()
    stats: dict[int, dict[str, list[int]]] = {}
    for level in _LEVELS:
        rooms, boss_depth, monsters = [], [], []
        for seed in range(n_floors):
            floor = generator.generate(level, GameRNG(seed))
            dist = floor.distances_from(floor.entrance_room_id)
            rooms.append(floor.total_rooms)
            boss_depth.append(dist[floor.boss_room_id])
            monsters.append(sum(1 for r in floor.rooms.values() if r.has_monsters))
        stats[level] = {"rooms": rooms, "boss_depth": boss_depth, "monsters": monsters}
        print(
            f"  floor {level:3d}: rooms={np.mean(rooms):.1f}"
            f"  boss_depth={np.mean(boss_depth):.1f}"
            f"  monster_rooms={np.mean(monsters):.1f}"
        )
    return stats


def collect_agent_stats(n_sessions: int) -> dict[str, dict]:
    results = {}
    for label, agent_class in [("RandomExplorer", RandomExplorer), ("ThoroughExplorer", ThoroughExplorer)]:
        print(f"\nRunning {n_sessions} sessions with {label}...")
        t0 = time.time()
        sessions = BatchRunner(agent_class=agent_class).run_batch(n_sessions, base_seed=0)
        elapsed = time.time() - t0
        deepest = [s.deepest_level for s in sessions]
        results[label] = {
            "deepest": deepest,
            "seals": compute_seal_metrics(sessions),
            "traps": compute_trap_metrics(sessions),
            "progress": [
                f.rooms_explored / f.total_rooms for s in sessions for f in s.floors
            ],
        }
        print(f"  Time: {elapsed:.1f}s ({elapsed/n_sessions*1000:.0f}ms/session)")
        print(f"  Avg deepest: {np.mean(deepest):.1f} (max {max(deepest)})")
    return results


def generate_charts(floor_stats: dict, agent_stats: dict) -> None:
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle("Floor Generation and Exploration", fontsize=16, fontweight="bold")
    colors = {"RandomExplorer": "#e74c3c", "ThoroughExplorer": "#2ecc71"}

    # --- Chart 1: Rooms and boss distance by depth ---
    ax = axes[0, 0]
    levels = list(floor_stats)
    ax.plot(levels, [np.mean(floor_stats[l]["rooms"]) for l in levels], marker="o", label="rooms")
    ax.plot(levels, [np.mean(floor_stats[l]["boss_depth"]) for l in levels], marker="s", label="boss distance")
    ax.plot(levels, [np.mean(floor_stats[l]["monsters"]) for l in levels], marker="^", label="monster rooms")
    ax.set_xlabel("Floor")
    ax.set_title("Floor Shape by Depth")
    ax.legend()

    # --- Chart 2: Deepest level reached ---
    ax = axes[0, 1]
    max_depth = max(max(r["deepest"]) for r in agent_stats.values())
    bins = np.arange(0.5, max_depth + 1.5, 1)
    for label, r in agent_stats.items():
        ax.hist(r["deepest"], bins=bins, alpha=0.6, color=colors[label],
                label=f'{label} (avg={np.mean(r["deepest"]):.1f})', edgecolor="black", linewidth=0.3)
    ax.set_xlabel("Deepest Floor")
    ax.set_ylabel("Count")
    ax.set_title("Deepest Floor Reached")
    ax.legend()

    # --- Chart 3: Exploration progress per floor ---
    ax = axes[1, 0]
    for label, r in agent_stats.items():
        ax.hist(r["progress"], bins=np.linspace(0, 1, 21), alpha=0.6, color=colors[label],
                label=f'{label} (seal rate={r["seals"].discovery_rate:.0%})', edgecolor="black", linewidth=0.3)
    ax.set_xlabel("Fraction of Rooms Explored")
    ax.set_title("Exploration Progress per Floor")
    ax.legend()

    # --- Chart 4: Trap outcomes ---
    ax = axes[1, 1]
    outcomes = sorted(Counter(o for r in agent_stats.values() for o in r["traps"].counts))
    width = 0.4
    x = np.arange(len(outcomes))
    for i, (label, r) in enumerate(agent_stats.items()):
        shares = [r["traps"].distribution.get(o, 0.0) for o in outcomes]
        ax.bar(x + i * width, shares, width, color=colors[label], label=label, edgecolor="black", linewidth=0.5)
    ax.set_xticks(x + width / 2)
    ax.set_xticklabels(outcomes, rotation=30, ha="right")
    ax.set_ylabel("Share")
    ax.set_title("Trap Outcomes")
    ax.legend()

    plt.tight_layout()
    out_path = "floor_stats.png"
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--floors", type=int, default=200, help="Floors generated per depth")
    parser.add_argument("--sessions", type=int, default=200, help="Sessions per agent")
    args = parser.parse_args()
    print("Generating floors...")
    floor_stats = collect_floor_stats(args.floors)
    generate_charts(floor_stats, collect_agent_stats(args.sessions))
