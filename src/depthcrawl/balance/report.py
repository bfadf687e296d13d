"""Human-readable balance report."""

from __future__ import annotations

from depthcrawl.balance.models import BalanceSnapshot


def generate_text_report(snapshot: BalanceSnapshot) -> str:
    """Generate a human-readable summary of the snapshot."""
    g = snapshot.global_metrics
    s = snapshot.seal_metrics
    t = snapshot.trap_metrics
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Exploration Balance Report - {snapshot.agent}")
    lines.append(f"Sessions: {snapshot.num_sessions:,} | Generated: {snapshot.generated_at}")
    lines.append("=" * 60)

    lines.append("")
    lines.append("## Global Stats")
    lines.append(f"  Defeat rate:     {g.defeat_rate:.1%} ({g.defeats}/{g.total_sessions})")
    lines.append(f"  Avg deepest:     {g.avg_deepest_level:.1f}")
    lines.append(f"  Avg floors:      {g.avg_floors_loaded:.1f}")
    lines.append(f"  Avg gold earned: {g.avg_gold_earned:.0f}")
    lines.append(f"  Ambush rate:     {g.ambush_rate:.1%}")

    lines.append("")
    lines.append("## Seals")
    lines.append(f"  Discovery rate:  {s.discovery_rate:.1%} ({s.discovered}/{s.floors_with_seal})")
    if s.mean_progress_at_discovery is not None:
        lines.append(f"  Mean progress:   {s.mean_progress_at_discovery:.2f}")
    for reason, count in s.reasons.items():
        lines.append(f"    {reason:20s} {count}")

    lines.append("")
    lines.append(f"## Traps ({t.total} triggered)")
    for outcome, share in t.distribution.items():
        lines.append(f"  {outcome:20s} {share:6.1%}  n={t.counts[outcome]}")

    if snapshot.depth_metrics:
        lines.append("")
        lines.append("## By Depth")
        for d in snapshot.depth_metrics:
            lines.append(
                f"  floor {d.level:3d}  loads={d.floors:4d}"
                f"  rooms={d.avg_rooms:5.1f}"
                f"  explored={d.avg_explored_fraction:.2f}"
                f"  ambush={d.ambush_rate:.2f}"
                f"  lost={d.combats_lost}"
            )

    lines.append("")
    return "\n".join(lines)
