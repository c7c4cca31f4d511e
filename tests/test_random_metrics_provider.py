import math

from ionikmetrics.random_metrics_provider import (
    MetricLimits,
    NetworkMetricLimits,
    RandomDefaultProvider,
    RandomNetworkProvider,
    random_double,
    random_int64,
)


def _collect(provider):
    seen = {}

    def f(key, value):
        seen[key] = value
        return False

    provider.query(f)
    return seen


def test_random_int64_equal_bounds():
    assert random_int64(5, 5) == 5


def test_random_int64_within_bounds():
    values = [random_int64(-3, 7) for _ in range(500)]
    assert all(-3 <= v <= 7 for v in values)


def test_random_double_equal_bounds():
    assert random_double(3, 3, 2) == 3.0


def test_random_double_within_bounds():
    for _ in range(500):
        v = random_double(0, 10, 6)
        assert v == math.inf or 0 < v <= 11


def test_random_double_precision_is_capped():
    for _ in range(200):
        v = random_double(0, 1, 20)
        assert v == math.inf or 0 < v <= 2


def test_default_provider_keys_in_order():
    seen = _collect(RandomDefaultProvider())
    assert list(seen) == [
        "cpu_usage_total",
        "cpu_usage",
        "ram_total",
        "ram_free",
        "swap_total",
        "swap_free",
        "mem_usage",
    ]


def test_default_provider_fixed_limits():
    limits = MetricLimits(
        cpu_usage_total_range=(7, 7),
        cpu_usage_range=(3, 3),
        ram_total=1000,
        ram_free_range=(50, 50),
        swap_total=400,
        swap_free_range=(100, 100),
        mem_usage=(0, 0),
    )
    seen = _collect(RandomDefaultProvider(limits))
    assert seen["cpu_usage_total"] == 7.0
    assert seen["cpu_usage"] == 3.0
    assert seen["ram_total"] == 1000
    assert seen["ram_free"] == 500
    assert seen["swap_free"] == 400
    assert seen["mem_usage"] == 0


def test_default_provider_free_not_above_total():
    seen = _collect(RandomDefaultProvider())
    assert 0 <= seen["ram_free"] <= seen["ram_total"]
    assert 0 <= seen["swap_free"] <= seen["swap_total"]


def test_default_provider_stops_when_callback_returns_true():
    calls = []
    RandomDefaultProvider().query(lambda k, v: calls.append(k) or True)
    assert calls == ["cpu_usage_total"]


def test_network_provider_totals_grow():
    provider = RandomNetworkProvider(NetworkMetricLimits(rx_bytes_inc=(10, 10), tx_bytes_inc=(4, 4)))
    _collect(provider)
    seen = _collect(provider)
    assert seen["rx_bytes"] == 20
    assert seen["tx_bytes"] == 8


def test_network_provider_speed_max_invariant():
    provider = RandomNetworkProvider()
    for _ in range(5):
        seen = _collect(provider)
        assert seen["rx_speed_max"] >= seen["rx_speed"] >= 0
        assert seen["tx_speed_max"] >= seen["tx_speed"] >= 0


def test_network_provider_stops_when_callback_returns_true():
    calls = []
    RandomNetworkProvider().query(lambda k, v: calls.append(k) or True)
    assert calls == ["rx_bytes"]