import pytest

from Model.application_state import ApplicationState
from Model.Data_processor.transport_analytics import TransportAnalytics


@pytest.fixture
def analytics(seeded_manager, hospital):
    return TransportAnalytics(seeded_manager.state, hospital)


def test_summary_counts(analytics):
    summary = analytics.summary()

    assert summary["requests"]["total"] == 2
    assert summary["requests"]["by_status"] == {"pending": 2}
    assert summary["requests"]["by_priority"] == {"emergency": 1, "urgent": 1, "routine": 0}
    assert summary["requests"]["completion_rate"] == 0.0

    assert summary["staff"]["total"] == 3
    assert summary["staff"]["available"] == 1
    assert summary["staff"]["busy"] == 1
    assert summary["staff"]["average_workload"] == 0.7
    assert summary["staff"]["completed_today"] == 5

    assert summary["equipment"]["total"] == 3
    assert summary["equipment"]["available"] == 2
    assert summary["equipment"]["maintenance"] == 1
    assert summary["equipment"]["utilization_rate"] == 0.0


def test_summary_after_assignment(seeded_manager, hospital):
    seeded_manager.assign("R1", "S1", "EQ1")
    summary = TransportAnalytics(seeded_manager.state, hospital).summary()

    assert summary["equipment"]["in_use"] == 1
    assert summary["equipment"]["utilization_rate"] == pytest.approx(33.3)
    assert summary["equipment"]["utilization_by_type"] == {"stretcher": 50.0, "wheelchair": 0.0}


def test_summary_of_empty_state(hospital):
    summary = TransportAnalytics(ApplicationState(), hospital).summary()

    assert summary["requests"]["total"] == 0
    assert summary["staff"]["average_workload"] == 0.0
    assert summary["equipment"]["utilization_by_type"] == {}


def test_request_queue_orders_by_priority_then_age(analytics):
    assert [r["id"] for r in analytics.request_queue()] == ["R2", "R1"]


def test_request_queue_filters_by_status(seeded_manager, hospital):
    seeded_manager.cancel_request("R2")
    queue = TransportAnalytics(seeded_manager.state, hospital).request_queue("pending")
    assert [r["id"] for r in queue] == ["R1"]


def test_staff_workload_puts_available_first(analytics):
    workload = analytics.staff_workload()

    assert [s["id"] for s in workload] == ["S1", "S3", "S2"]
    assert workload[-1]["workload_progress"] == 40.0


def test_zone_statistics_for_floor(analytics):
    stats = {row["zone"]: row for row in analytics.zone_statistics(1)}

    assert len(stats) == 8
    assert stats["Emergency"]["equipment"] == 1
    assert stats["Emergency"]["available_equipment"] == 1
    assert stats["Emergency"]["staff"] == 1
    assert stats["Emergency"]["assigned_staff"] == ["S2"]
    assert stats["ICU"]["available_equipment"] == 0
    assert stats["ICU"]["available_staff"] == 0
    assert stats["Surgery"]["equipment"] == 0


def test_zone_statistics_unknown_floor(analytics):
    assert analytics.zone_statistics(7) == []
