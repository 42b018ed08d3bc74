from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

from goal_tracker.services.goal_statistics_service import (
    aggregate_goal_statistics,
    serialize_statistics,
)


def _goal(
    *,
    target: str,
    current: str,
    status: str = "active",
    category: str = "necessity",
    timeframe: str = "short",
) -> SimpleNamespace:
    return SimpleNamespace(
        target_amount=Decimal(target),
        current_amount=Decimal(current),
        status=status,
        category=category,
        timeframe=timeframe,
    )


def test_empty_collection_yields_zeroed_buckets() -> None:
    statistics = aggregate_goal_statistics([])

    assert statistics.total_goals == 0
    assert statistics.overall_progress == 0
    assert set(statistics.by_timeframe) == {"short", "long"}
    assert set(statistics.by_category) == {"survival", "necessity", "lifestyle"}
    for bucket in [*statistics.by_timeframe.values(), *statistics.by_category.values()]:
        assert bucket.count == 0
        assert bucket.progress == 0
        assert bucket.target_amount == Decimal("0")


def test_aggregates_counts_amounts_and_buckets() -> None:
    goals = [
        _goal(target="1000", current="250", category="survival"),
        _goal(target="3000", current="3000", status="completed", timeframe="long"),
        _goal(target="1000", current="0", status="paused", category="lifestyle"),
    ]

    statistics = aggregate_goal_statistics(goals)

    assert statistics.total_goals == 3
    assert statistics.active_goals == 1
    assert statistics.completed_goals == 1
    assert statistics.paused_goals == 1
    assert statistics.total_target_amount == Decimal("5000")
    assert statistics.total_current_amount == Decimal("3250")
    assert statistics.overall_progress == 65

    assert statistics.by_timeframe["short"].count == 2
    assert statistics.by_timeframe["short"].progress == 13
    assert statistics.by_timeframe["long"].progress == 100
    assert statistics.by_category["survival"].current_amount == Decimal("250")
    assert statistics.by_category["necessity"].count == 1
    assert statistics.by_category["lifestyle"].progress == 0


def test_serialized_statistics_use_money_strings() -> None:
    payload = serialize_statistics(
        aggregate_goal_statistics([_goal(target="1000.5", current="10")])
    )

    assert payload["total_target_amount"] == "1000.50"
    assert payload["total_current_amount"] == "10.00"
    assert payload["by_category"]["survival"] == {
        "count": 0,
        "target_amount": "0.00",
        "current_amount": "0.00",
        "progress": 0,
    }
