"""Balance analysis: batch snapshots, metrics, and reports."""

from depthcrawl.balance.metrics import (
    compute_depth_metrics,
    compute_global_metrics,
    compute_seal_metrics,
    compute_trap_metrics,
)
from depthcrawl.balance.models import (
    BalanceSnapshot,
    DepthMetrics,
    GlobalMetrics,
    SealMetrics,
    TrapMetrics,
)
from depthcrawl.balance.report import generate_text_report
from depthcrawl.balance.snapshot import (
    build_snapshot,
    generate_snapshot,
    load_snapshot,
    save_snapshot,
)

__all__ = [
    "BalanceSnapshot",
    "DepthMetrics",
    "GlobalMetrics",
    "SealMetrics",
    "TrapMetrics",
    "build_snapshot",
    "compute_depth_metrics",
    "compute_global_metrics",
    "compute_seal_metrics",
    "compute_trap_metrics",
    "generate_snapshot",
    "generate_text_report",
    "load_snapshot",
    "save_snapshot",
]
