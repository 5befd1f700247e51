import pytest

from checkout_system.core import StatisticsTracker


def test_empty_tracker_averages_are_zero():
    tracker = StatisticsTracker()
    assert tracker.average_wait_time() == 0.0
    assert tracker.average_time_in_store() == 0.0
    assert tracker.average_queue_length(0) == 0.0
    assert tracker.utilization(0, 5) == 0.0
    assert StatisticsTracker.hourly_rate(10, 0) == 0.0


def test_records_service_and_departure():
    tracker = StatisticsTracker()
    tracker.record_service(0)
    tracker.record_service(10)
    tracker.record_departure(30)

    assert tracker.customers_moved_to_checkout == 2
    assert tracker.average_wait_time() == 5.0
    assert tracker.customers_departed == 1
    assert tracker.average_time_in_store() == 30.0


def test_max_queue_never_decreases():
    tracker = StatisticsTracker()
    for length in (1, 5, 2, 0, 4):
        tracker.sample_queue_length(length)
    assert tracker.max_queue_length == 5
    assert tracker.average_queue_length(5) == pytest.approx(12 / 5)


def test_max_population_never_decreases():
    tracker = StatisticsTracker()
    tracker.update_max_population(3)
    tracker.update_max_population(1)
    assert tracker.max_customers_in_store == 3


def test_rates_and_utilization():
    tracker = StatisticsTracker()
    for _ in range(10):
        tracker.record_arrival()
    tracker.sample_busy_stations(2)
    tracker.sample_busy_stations(1)

    assert StatisticsTracker.hourly_rate(tracker.customers_arrived, 3600) == 10.0
    assert tracker.utilization(3, 2) == pytest.approx(0.5)


def test_report_fields():
    tracker = StatisticsTracker()
    tracker.record_arrival()
    tracker.record_service(4)
    tracker.sample_busy_stations(1)
    tracker.sample_population(1)

    report = tracker.report("single", 2, 1)
    assert report.policy == "single"
    assert report.customers_arrived == 1
    assert report.arrival_rate_per_hour == 1800.0
    assert report.average_wait_time == 4.0
    assert report.checkout_busy_percentage == 50.0
    assert report.average_customers_in_store == 0.5
    assert report.as_dict()["max_customers_in_store"] == 1
