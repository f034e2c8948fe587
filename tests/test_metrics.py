"""Tests for metric functions (pure, total, deterministic)."""

import math
import pytest

from salespulse.engine.metrics import (
    compute_roi,
    compute_priority_weight,
    compute_total_revenue,
    compute_total_time_taken,
    compute_time_efficiency,
    compute_revenue_per_hour,
    compute_average_roi,
    compute_performance_grade,
    compute_metrics,
)
from salespulse.models.task import TaskStatus, TaskPriority


class TestComputeROI:
    """Test compute_roi() safe division and rounding."""

    def test_simple_ratio(self):
        assert compute_roi(1000, 4) == 250.0

    def test_rounds_to_two_decimals(self):
        assert compute_roi(10, 3) == 3.33
        assert compute_roi(20, 3) == 6.67

    def test_rounds_half_up(self):
        assert compute_roi(1.005, 1) == math.floor(1.005 * 100 + 0.5) / 100
        assert compute_roi(0.125, 1) == 0.13

    @pytest.mark.parametrize("time_taken", [0, -1, -0.5])
    def test_non_positive_time_is_null(self, time_taken):
        assert compute_roi(100, time_taken) is None

    @pytest.mark.parametrize(
        "revenue,time_taken",
        [
            (math.inf, 1),
            (math.nan, 1),
            (100, math.inf),
            (100, math.nan),
            (None, 1),
            ("100", 1),
            (100, "2"),
            (True, 1),
        ],
    )
    def test_non_finite_or_non_numeric_is_null(self, revenue, time_taken):
        assert compute_roi(revenue, time_taken) is None

    def test_overflowing_quotient_is_null(self):
        assert compute_roi(1e308, 1e-10) is None

    def test_negative_revenue_allowed(self):
        assert compute_roi(-50, 2) == -25.0


class TestPriorityWeight:
    """Test compute_priority_weight() mapping."""

    def test_known_priorities(self):
        assert compute_priority_weight("High") == 3
        assert compute_priority_weight("Medium") == 2
        assert compute_priority_weight("Low") == 1

    def test_enum_members(self):
        assert compute_priority_weight(TaskPriority.HIGH) == 3
        assert compute_priority_weight(TaskPriority.MEDIUM) == 2

    @pytest.mark.parametrize("priority", ["Urgent", "", None, 5, ["High"]])
    def test_unknown_defaults_to_one(self, priority):
        assert compute_priority_weight(priority) == 1


class TestTotals:
    """Test revenue/time totals and efficiency."""

    def test_total_revenue_counts_done_only(self, make_task):
        tasks = [
            make_task(revenue=100, status=TaskStatus.DONE),
            make_task(revenue=200, status=TaskStatus.IN_PROGRESS),
            make_task(revenue=300, status=TaskStatus.DONE),
        ]
        assert compute_total_revenue(tasks) == 400

    def test_total_time_counts_all(self, make_task):
        tasks = [make_task(time_taken=2), make_task(time_taken=3, status=TaskStatus.DONE)]
        assert compute_total_time_taken(tasks) == 5

    def test_time_efficiency(self, make_task):
        tasks = [
            make_task(status=TaskStatus.DONE),
            make_task(status=TaskStatus.TODO),
            make_task(status=TaskStatus.TODO),
            make_task(status=TaskStatus.IN_PROGRESS),
        ]
        assert compute_time_efficiency(tasks) == 25.0

    def test_revenue_per_hour(self, make_task):
        tasks = [
            make_task(revenue=100, time_taken=2, status=TaskStatus.DONE),
            make_task(revenue=900, time_taken=3, status=TaskStatus.TODO),
        ]
        assert compute_revenue_per_hour(tasks) == 20.0

    def test_average_roi_skips_invalid(self, make_task):
        tasks = [
            make_task(revenue=100, time_taken=2),
            make_task(revenue=300, time_taken=3),
            make_task(revenue=500, time_taken=0),
        ]
        assert compute_average_roi(tasks) == 75.0


class TestEmptyCollections:
    """Empty input never raises and yields zeros."""

    def test_empty_results(self):
        assert compute_time_efficiency([]) == 0
        assert compute_revenue_per_hour([]) == 0
        assert compute_average_roi([]) == 0
        assert compute_total_revenue([]) == 0
        assert compute_total_time_taken([]) == 0

    def test_empty_metrics(self):
        metrics = compute_metrics([])
        assert metrics.total_revenue == 0
        assert metrics.average_roi == 0
        assert metrics.performance_grade == "Needs Improvement"


class TestPerformanceGrade:
    """Boundary exactness of the grade thresholds."""

    def test_boundaries(self):
        assert compute_performance_grade(500) == "Good"
        assert compute_performance_grade(501) == "Excellent"
        assert compute_performance_grade(500.01) == "Excellent"
        assert compute_performance_grade(200) == "Good"
        assert compute_performance_grade(199.99) == "Needs Improvement"
        assert compute_performance_grade(0) == "Needs Improvement"
        assert compute_performance_grade(-10) == "Needs Improvement"


def test_compute_metrics_bundle(make_task):
    tasks = [
        make_task(revenue=1200, time_taken=2, status=TaskStatus.DONE),
        make_task(revenue=400, time_taken=2, status=TaskStatus.TODO),
    ]
    metrics = compute_metrics(tasks)

    assert metrics.total_revenue == 1200
    assert metrics.total_time_taken == 4
    assert metrics.time_efficiency_pct == 50.0
    assert metrics.revenue_per_hour == 300.0
    assert metrics.average_roi == 400.0
    assert metrics.performance_grade == "Good"
