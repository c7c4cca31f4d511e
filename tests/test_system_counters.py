import psutil
import pytest

from ionikmetrics.counter import to_int64_counter
from ionikmetrics.system_counters import SystemCounterGroup, SystemCounters

CPUINFO = "processor\t: 0\nvendor_id\t: TestVendor\n\nprocessor\t: 1\nvendor_id\t: TestVendor\n\n"
STAT_1 = "cpu  100 0 100 800 0 0 0\ncpu0 100 0 100 800 0 0 0\nintr 1 2\n"
STAT_2 = "cpu  200 0 100 900 0 0 0\ncpu0 200 0 100 900 0 0 0\nintr 1 2\n"
STATUS = "Name:\ttest\nVmPeak:\t    2000 kB\nVmSize:\t    1000 kB\nVmSwap:\t       3 kB\n"


@pytest.fixture
def proc_dir(tmp_path):
    (tmp_path / "cpuinfo").write_text(CPUINFO)
    (tmp_path / "stat").write_text(STAT_1)
    (tmp_path / "self").mkdir()
    (tmp_path / "self" / "status").write_text(STATUS)
    return tmp_path


def test_memory_usage_from_status(proc_dir):
    group = SystemCounters(proc_dir).query()
    assert group.mem_usage == to_int64_counter("1000", "kB")
    assert group.mem_peak_usage == to_int64_counter("2000", "kB")
    assert group.swap_usage == to_int64_counter("3", "kB")


def test_first_sample_skips_cpu_total(proc_dir):
    group = SystemCounters(proc_dir).query()
    assert group.cpu_usage_total is None


def test_cpu_total_after_change(proc_dir):
    counters = SystemCounters(proc_dir)
    (proc_dir / "stat").write_text(STAT_2)
    group = counters.query()
    assert group.cpu_usage_total == pytest.approx(50.0)


def test_ram_totals_and_usage(proc_dir):
    group = SystemCounters(proc_dir).query()
    assert group.ram_total == psutil.virtual_memory().total
    assert 0.0 <= group.ram_usage_total <= 100.0
    assert group.ram_free <= group.ram_total


def test_process_cpu_usage_is_percentage_or_skipped(proc_dir):
    group = SystemCounters(proc_dir).query()
    assert group.cpu_usage is None or group.cpu_usage >= 0.0


def test_missing_stat_raises(proc_dir):
    (proc_dir / "stat").unlink()
    with pytest.raises(FileNotFoundError):
        SystemCounters(proc_dir)


def test_missing_status_raises_on_query(proc_dir):
    counters = SystemCounters(proc_dir)
    (proc_dir / "self" / "status").unlink()
    with pytest.raises(FileNotFoundError):
        counters.query()


def test_fill_usage_totals_needs_both_values():
    group = SystemCounterGroup(ram_total=1000, swap_total=10, swap_free=10)
    group.fill_usage_totals()
    assert group.ram_usage_total is None
    assert group.swap_usage_total == 0.0