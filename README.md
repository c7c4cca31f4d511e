# ionikmetrics

Metrics about the running system, the current process and network
interfaces, read mostly from Linux `/proc` and `/sys`. Also included are a
file system monitor that reports changes through callbacks and a small
layer over OS file descriptors.

## What it provides

- **Scanning helpers** in `ionikmetrics.parser`. The `advance_*` functions
  take the text and a position. They return the new position, or a
  `(value, position)` pair, and `None` when nothing matched.
- **Parsers for kernel text files**: `/proc/meminfo`, `/proc/self/status`,
  `/proc/stat`, `/proc/cpuinfo` and `os-release`. Each module has a
  `parse_record(text, pos)` function. The `/proc/cpuinfo` parser is
  `parse_cpuinfo` in `times_provider`. The `os-release` parsers are
  `parse_os_release_record` and `parse_os_release` in `linuxinfo_provider`.
- **Counter helpers** in `ionikmetrics.counter`:
  - `to_int64_counter(value, units)` parses a decimal value and scales `kB`
    or `KB` to bytes.
  - `units_to_bytes`, `to_integer` and `to_double` are also there.
- **Providers** that read one source each and hand every counter to a
  callback as a key and a value:
  - `ProcMeminfoProvider`: `MemTotal`, `MemFree`, `Cached`, `SwapCached`,
    `SwapTotal` and `SwapFree`, in bytes.
  - `ProcSelfStatusProvider`: `VmSize`, `VmPeak`, `VmRSS` and `VmSwap` of
    this process, in bytes.
  - `ProcStatProvider`: total (`cpu`) and per-core (`cpuN`) CPU usage as a
    percentage, measured since the previous reading.
  - `SysinfoProvider`: uptime, plus RAM and swap sizes from `psutil`.
  - `GetrusageProvider`: `maxrss`, `ixrss`, `idrss` and `isrss` of this
    process.
  - `TimesProvider`: the CPU usage of this process across all cores.
  - `SysClassNetProvider`: received and sent bytes of one interface, and
    the speeds between readings and their maxima.
- **Aggregates** that collect the providers' values into one result:
  - `SystemCounters`, whose `query()` returns a `SystemCounterGroup`.
    Values that were not measured are left as `None`.
  - `NetworkCounters`, whose `query()` returns a `NetworkCounterGroup`.
    The group is all zeros when no interface is set or no time has passed.
- **Random values** for demos and tests:
  - `random_int64` and `random_double`.
  - `RandomDefaultProvider` and `RandomNetworkProvider`.
  - `RandomSystemCounters` and `RandomNetworkCounters`, which report a fake
    `eth0`.

  Values stay within the ranges given by `MetricLimits` and
  `NetworkMetricLimits`.
- **System description**: `LinuxinfoProvider().os_info()` returns an
  `OsInfo`. It holds the OS name, pretty name, version, codename and id,
  the host name, installed RAM in MiB, the CPU vendor and brand, and the
  kernel name, release and machine.
- **File system monitor**: `Monitor` watches directories and single files
  and calls the handlers set on a `MonitorCallbacks`.
- **File descriptors**: `LocalFileProvider` opens, reads, writes, seeks and
  closes files through integer descriptors. With `Truncate.ON`,
  `open_write_only` cuts the file to the given size.

Parsing problems raise `MetricsError` from `ionikmetrics.counter`. Files
that are missing or cannot be read raise the standard `OSError` family.

Most providers take the path of the file or directory they read, such as
`ProcStatProvider("/proc/stat")` or `SystemCounters(proc_dir="/proc")`. They
can therefore be pointed at copies of those files.

## Usage

### Callback providers

A provider's `query(f)` calls `f(key, value)` once for each counter it
reports. To stop early, return a true value from `f`.

```python
from ionikmetrics.proc_meminfo_provider import ProcMeminfoProvider

memory = {}

def collect(key, value):
    memory[key] = value
    return False  # keep going

ProcMeminfoProvider().query(collect)
print(memory["MemTotal"], memory["MemFree"])
```

### Aggregated counters

```python
import time

from ionikmetrics.system_counters import SystemCounters
from ionikmetrics.network_counters import NetworkCounters

system = SystemCounters()
network = NetworkCounters("eth0")

time.sleep(1.0)

group = system.query()
print(group.cpu_usage_total, group.ram_usage_total)

net = network.query()
print(net.iface, net.rx_speed, net.tx_speed)

print(NetworkCounters.interfaces())
```

CPU usage and transfer speeds are differences from the previous reading.
Each object takes its first reading when it is created, so let some time
pass before the first query.

### Values without a real system

```python
from ionikmetrics.random_counters import RandomSystemCounters

print(RandomSystemCounters().query())
```

### System description

```python
from ionikmetrics.linuxinfo_provider import LinuxinfoProvider

info = LinuxinfoProvider().os_info()
print(info.pretty_name, info.kernel_release, info.cpu_brand)
```

### Watching for changes

```python
from ionikmetrics.fs_monitor import Monitor, MonitorCallbacks

callbacks = MonitorCallbacks(
    created=lambda path: print("created", path),
    modified=lambda path: print("modified", path),
    deleted=lambda path: print("deleted", path),
)

with Monitor() as monitor:
    monitor.add("/tmp")
    while True:
        monitor.poll(1.0, callbacks)
```

`poll(timeout, callbacks)` waits up to `timeout` seconds and returns the
number of events it took.

The monitor delivers these kinds of change:

- `created`, `deleted` and `modified`.
- `moved`, called for both the old and the new path.
- `opened` and `closed`, where the platform reports them.

The `accessed` and `metadata_changed` handlers are never called;
attribute changes arrive as modifications.

## What it does not do

- There is no command-line program. Everything is used as a library.
- The procfs and sysfs readers, `SystemCounters`, `NetworkCounters` and
  `LinuxinfoProvider` need Linux. There are no readers for other systems'
  performance interfaces.
- Audio, video and device discovery are not covered.

## Requirements

Python 3.10 or later, with `psutil` and `watchdog`. The random providers
and the parsers work on any system.