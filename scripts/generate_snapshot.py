"""Generate a balance snapshot from autopilot sessions.

Usage:
    uv run python scripts/generate_snapshot.py [--sessions 1000] [--output data/balance/]
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path

from depthcrawl.balance.report import generate_text_report
from depthcrawl.balance.snapshot import generate_snapshot, save_snapshot
from depthcrawl.config import EngineConfig, load_config
from depthcrawl.play_agents import RandomExplorer, ThoroughExplorer

_AGENTS = {"random": RandomExplorer, "thorough": ThoroughExplorer}


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a balance snapshot")
    parser.add_argument("--sessions", type=int, default=1000, help="Number of sessions")
    parser.add_argument("--agent", choices=sorted(_AGENTS), default="thorough")
    parser.add_argument("--config", type=str, default=None, help="Engine config JSON")
    parser.add_argument("--output", type=str, default="data/balance/", help="Output directory")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--parallel", action="store_true")
    args = parser.parse_args()

    config = load_config(Path(args.config)) if args.config else EngineConfig()

    print(f"Running {args.sessions:,} sessions ({args.agent})...")
    t0 = time.perf_counter()
    snapshot = generate_snapshot(
        num_sessions=args.sessions,
        base_seed=args.seed,
        agent_class=_AGENTS[args.agent],
        config=config,
        parallel=args.parallel,
    )
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")

    json_path = Path(args.output) / f"{args.agent}_{args.sessions}.json"
    save_snapshot(snapshot, json_path)
    print(f"Saved snapshot to {json_path}")

    print()
    print(generate_text_report(snapshot))


if __name__ == "__main__":
    main()
