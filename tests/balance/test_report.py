"""Tests for the text balance report."""

from __future__ import annotations

from depthcrawl.balance.models import (
    BalanceSnapshot,
    DepthMetrics,
    GlobalMetrics,
    SealMetrics,
    TrapMetrics,
)
from depthcrawl.balance.report import generate_text_report


def _snapshot(**overrides) -> BalanceSnapshot:
    data = dict(
        agent="RandomExplorer",
        num_sessions=1200,
        generated_at="2024-01-01T00:00:00+00:00",
        global_metrics=GlobalMetrics(
            total_sessions=1200, defeats=300, defeat_rate=0.25,
            avg_deepest_level=3.5, avg_floors_loaded=3.0,
            avg_gold_earned=812.4, ambush_rate=0.3,
        ),
        seal_metrics=SealMetrics(
            floors_with_seal=10, discovered=9, discovery_rate=0.9,
            mean_progress_at_discovery=0.55, reasons={"guaranteed": 4, "eligible_room": 5},
        ),
        trap_metrics=TrapMetrics(
            total=4, counts={"fire": 1, "pit": 3}, distribution={"fire": 0.25, "pit": 0.75},
        ),
        depth_metrics=[DepthMetrics(
            level=1, floors=1200, avg_rooms=10.0, avg_explored_fraction=0.4,
            ambush_rate=0.3, combats_lost=12,
        )],
    )
    data.update(overrides)
    return BalanceSnapshot(**data)


class TestTextReport:
    def test_header(self):
        report = generate_text_report(_snapshot())
        assert "Exploration Balance Report - RandomExplorer" in report
        assert "Sessions: 1,200" in report

    def test_sections(self):
        report = generate_text_report(_snapshot())
        assert "## Global Stats" in report
        assert "## Seals" in report
        assert "## Traps (4 triggered)" in report
        assert "## By Depth" in report

    def test_values(self):
        report = generate_text_report(_snapshot())
        assert "25.0% (300/1200)" in report
        assert "90.0% (9/10)" in report
        assert "Mean progress:   0.55" in report
        assert "75.0%  n=3" in report
        assert "lost=12" in report

    def test_without_seal_progress_or_depths(self):
        report = generate_text_report(_snapshot(
            seal_metrics=SealMetrics(floors_with_seal=0, discovered=0, discovery_rate=0.0),
            depth_metrics=[],
        ))
        assert "Mean progress" not in report
        assert "## By Depth" not in report
