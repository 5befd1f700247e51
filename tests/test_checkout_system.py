import logging

import pytest

from checkout_system import (
    CheckoutSystem,
    ConfigurationError,
    SimulationConfig,
    SimulationStateError,
)
from checkout_system.core import POLICY_NAMES


def single_customer_config(run_duration=20):
    """One station, one arrival at tick 0, service exactly 10 seconds."""
    return SimulationConfig(
        run_duration=run_duration,
        num_stations=1,
        inter_arrival_time=1000,
        arrival_model='fixed',
        item_range=(1, 2),
        payment_range=(6, 7),
        scan_range=(4, 5),
        seed=0,
    )


def busy_store_config(policy, seed=7):
    return SimulationConfig(run_duration=2000, num_stations=3, inter_arrival_time=20,
                            policy=policy, seed=seed)


def test_single_customer_departs_after_service():
    system = CheckoutSystem(single_customer_config())
    system.simulate()

    customer = system.customers[1]
    assert customer.service_duration == 10
    assert customer.wait_time() == 0
    assert customer.departure_time == 10
    assert customer.time_in_store() == 10

    report = system.get_report()
    assert report.customers_arrived == 1
    assert report.customers_moved_to_checkout == 1
    assert report.customers_departed == 1
    assert report.average_time_in_store == 10.0
    assert report.arrival_rate_per_hour == 180.0
    assert report.checkout_busy_percentage == 50.0
    assert report.average_customers_in_store == 0.5
    assert report.max_queue_length == 0


def test_customers_in_service_at_end_are_not_counted():
    system = CheckoutSystem(single_customer_config(run_duration=10))
    system.simulate()

    report = system.get_report()
    assert report.customers_departed == 0
    assert report.average_time_in_store == 0.0
    assert system.get_metrics_summary()['customers_in_service'] == 1


def test_zero_duration_run_is_empty():
    system = CheckoutSystem(SimulationConfig(seed=1))
    system.simulate(0)

    report = system.get_report()
    assert report.run_duration == 0
    assert report.customers_arrived == 0
    assert report.customers_departed == 0
    assert report.average_wait_time == 0.0
    assert report.average_time_in_store == 0.0
    assert report.average_customers_in_queue == 0.0
    assert report.arrival_rate_per_hour == 0.0
    assert report.checkout_busy_percentage == 0.0
    assert report.max_queue_length == 0


def test_negative_duration_rejected():
    system = CheckoutSystem(SimulationConfig())
    with pytest.raises(ConfigurationError):
        system.simulate(-1)


@pytest.mark.parametrize("policy", POLICY_NAMES)
def test_customers_are_conserved_every_tick(policy):
    system = CheckoutSystem(busy_store_config(policy))
    stats = system.statistics
    for _ in range(system.config.run_duration):
        system.step()
        in_store = system.waiting_count() + system.busy_count()
        assert in_store == stats.customers_arrived - stats.customers_departed
        assert stats.max_queue_length >= system.waiting_count()
        assert stats.max_customers_in_store >= in_store


@pytest.mark.parametrize("policy", POLICY_NAMES)
def test_wait_and_store_times_are_consistent(policy):
    system = CheckoutSystem(busy_store_config(policy))
    system.simulate()

    departed = [c for c in system.customers.values() if c.departure_time is not None]
    assert departed
    for customer in system.customers.values():
        if customer.service_start_time is not None:
            assert customer.wait_time() >= 0
    for customer in departed:
        assert customer.time_in_store() >= customer.wait_time() + 1
        assert customer.time_in_store() == customer.wait_time() + customer.service_duration


@pytest.mark.parametrize("policy", POLICY_NAMES)
def test_each_line_is_served_first_in_first_out(policy):
    system = CheckoutSystem(busy_store_config(policy))
    system.simulate()

    served = sorted((c for c in system.customers.values() if c.service_start_time is not None),
                    key=lambda c: c.customer_id)
    if policy == 'single':
        lines = {0: served}
    else:
        lines = {}
        for customer in served:
            lines.setdefault(customer.station_id, []).append(customer)

    for customers in lines.values():
        starts = [c.service_start_time for c in customers]
        assert starts == sorted(starts)


def test_single_line_feeds_lowest_free_station_first():
    config = SimulationConfig(run_duration=1, num_stations=3, inter_arrival_time=1,
                              arrival_model='fixed', seed=0)
    system = CheckoutSystem(config)
    system.step()
    assert system.customers[1].station_id == 0
    assert [station.is_available() for station in system.stations] == [False, True, True]


def test_max_queue_length_holds_after_queue_builds():
    config = SimulationConfig(run_duration=50, num_stations=1, inter_arrival_time=1,
                              arrival_model='fixed', item_range=(10, 11),
                              payment_range=(10, 11), scan_range=(9, 10), seed=0)
    system = CheckoutSystem(config)
    for _ in range(6):
        system.step()
    assert system.waiting_count() == 5
    assert system.statistics.max_queue_length >= 5

    previous = system.statistics.max_queue_length
    while system.current_time < config.run_duration:
        system.step()
        assert system.statistics.max_queue_length >= previous
        previous = system.statistics.max_queue_length


def test_same_seed_reproduces_run():
    config = busy_store_config('random', seed=21)
    first = CheckoutSystem(config)
    first.simulate()
    second = CheckoutSystem(config)
    second.simulate()
    assert first.get_report() == second.get_report()


def test_reset_restarts_the_run():
    system = CheckoutSystem(busy_store_config('shortest'))
    system.simulate()
    report = system.get_report()

    system.reset()
    assert system.current_time == 0
    assert system.customers == {}
    system.simulate()
    assert system.get_report() == report


def test_bad_queue_index_is_fatal():
    config = SimulationConfig(run_duration=5, inter_arrival_time=1, arrival_model='fixed')
    system = CheckoutSystem(config)
    system.policy.route_arrival = lambda customer, queues, stations: 99
    with pytest.raises(SimulationStateError):
        system.step()


def test_debug_log_records_events(caplog):
    system = CheckoutSystem(single_customer_config())
    with caplog.at_level(logging.DEBUG, logger='checkout_system.system.checkout_system'):
        system.simulate()

    assert "[Arrive Event] 0: customer 1 arrived at queue 0" in caplog.text
    assert "[Move Event] 0: customer 1 is moving to checkout 0, waiting time 0" in caplog.text
    assert "[Leave Event] 10: customer 1 is leaving checkout 0, total store time 10" in caplog.text


def test_policies_see_the_same_arrivals_for_a_seed():
    runs = {}
    for policy in POLICY_NAMES:
        system = CheckoutSystem(busy_store_config(policy, seed=5))
        system.simulate()
        runs[policy] = [(c.arrival_time, c.service_duration) for c in system.customers.values()]

    assert runs['single']
    assert runs['single'] == runs['shortest'] == runs['random']


def test_departed_customer_is_kept_but_not_counted_again():
    system = CheckoutSystem(single_customer_config(run_duration=40))
    system.simulate(11)
    assert system.statistics.customers_departed == 1

    system.simulate()
    customer = system.customers[1]
    assert customer.departure_time == 10
    assert system.statistics.customers_departed == 1
    assert system.waiting_count() == 0
    assert system.busy_count() == 0
    assert system.get_report().average_time_in_store == 10.0
