import time

import pytest

from ionikmetrics.counter import MetricsError
from ionikmetrics.sys_class_net_provider import (
    NetCounterData,
    SysClassNetProvider,
    read_integer,
)


def _make_iface(net_dir, name, rx, tx):
    stats = net_dir / name / "statistics"
    stats.mkdir(parents=True)
    (stats / "rx_bytes").write_text(f"{rx}\n")
    (stats / "tx_bytes").write_text(f"{tx}\n")
    return stats


@pytest.fixture
def net_dir(tmp_path):
    base = tmp_path / "net"
    base.mkdir()
    return base


def test_read_integer_strips_newlines(tmp_path):
    path = tmp_path / "value"
    path.write_text("42\n\n")
    assert read_integer(path) == 42


def test_read_integer_empty(tmp_path):
    path = tmp_path / "value"
    path.write_text("\n")
    with pytest.raises(MetricsError):
        read_integer(path)


def test_read_integer_garbage(tmp_path):
    path = tmp_path / "value"
    path.write_text("abc\n")
    with pytest.raises(MetricsError):
        read_integer(path)


def test_read_integer_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_integer(tmp_path / "absent")


def test_initial_read(net_dir):
    _make_iface(net_dir, "eth0", 100, 200)
    provider = SysClassNetProvider("eth0", net_dir=net_dir)
    assert provider.read() == (100, 200)
    assert provider.iface_name == "eth0"
    assert provider.readable_name == "eth0"


def test_readable_name_kept(net_dir):
    _make_iface(net_dir, "eth0", 1, 2)
    provider = SysClassNetProvider("eth0", "Wired", net_dir)
    assert provider.readable_name == "Wired"


def test_missing_interface(net_dir):
    with pytest.raises(FileNotFoundError):
        SysClassNetProvider("wlan9", net_dir=net_dir)


def test_missing_counter_file(net_dir):
    stats = _make_iface(net_dir, "eth0", 1, 2)
    (stats / "tx_bytes").unlink()
    with pytest.raises(FileNotFoundError):
        SysClassNetProvider("eth0", net_dir=net_dir)


def test_query_counters_after_traffic(net_dir):
    stats = _make_iface(net_dir, "eth0", 100, 200)
    provider = SysClassNetProvider("eth0", net_dir=net_dir)
    time.sleep(0.01)
    (stats / "rx_bytes").write_text("1100\n")
    (stats / "tx_bytes").write_text("200\n")
    data = provider.query_counters()
    assert data.rx_bytes == 1100
    assert data.tx_bytes == 200
    assert data.rx_speed > 0
    assert data.tx_speed == 0
    assert data.rx_speed_max == data.rx_speed


def test_speed_max_keeps_peak(net_dir):
    stats = _make_iface(net_dir, "eth0", 0, 0)
    provider = SysClassNetProvider("eth0", net_dir=net_dir)
    time.sleep(0.01)
    (stats / "rx_bytes").write_text("5000\n")
    first = provider.query_counters()
    time.sleep(0.01)
    second = provider.query_counters()
    assert second.rx_speed == 0
    assert second.rx_speed_max == first.rx_speed


def test_query_callback_order_and_stop(net_dir):
    _make_iface(net_dir, "eth0", 1, 2)
    provider = SysClassNetProvider("eth0", net_dir=net_dir)
    time.sleep(0.01)
    keys = []
    assert provider.query(lambda k, v: keys.append(k) or False) is True
    assert keys == ["rx_bytes", "tx_bytes", "rx_speed", "tx_speed", "rx_speed_max", "tx_speed_max"]

    time.sleep(0.01)
    seen = []
    provider.query(lambda k, v: seen.append(k) or k == "tx_bytes")
    assert seen == ["rx_bytes", "tx_bytes"]


def test_query_without_callback(net_dir):
    _make_iface(net_dir, "eth0", 1, 2)
    provider = SysClassNetProvider("eth0", net_dir=net_dir)
    assert provider.query(None) is True


def test_counter_data_defaults():
    data = NetCounterData()
    assert (data.rx_bytes, data.tx_bytes, data.rx_speed_max) == (0, 0, 0.0)


def test_interfaces_sorted(net_dir):
    _make_iface(net_dir, "lo", 0, 0)
    _make_iface(net_dir, "eth0", 0, 0)
    assert SysClassNetProvider.interfaces(net_dir) == ["eth0", "lo"]


def test_interfaces_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        SysClassNetProvider.interfaces(tmp_path / "absent")


def test_interfaces_not_a_directory(tmp_path):
    path = tmp_path / "file"
    path.write_text("")
    with pytest.raises(NotADirectoryError):
        SysClassNetProvider.interfaces(path)