"""Operating system, host and processor description of a Linux machine."""

from __future__ import annotations

import dataclasses
import errno
import os
import socket
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import psutil

from ionikmetrics.counter import MetricsError
from ionikmetrics.parser import (
    advance_assign,
    advance_key,
    advance_nl_or_end,
    advance_unparsed_value,
    advance_ws0n,
    skip_ws,
)
from ionikmetrics.proc_reader import read_content

DEFAULT_OS_RELEASE_PATHS = ("/etc/os-release", "/usr/lib/os-release")
DEFAULT_CPUINFO_PATH = "/proc/cpuinfo"


@dataclass
class OsReleaseInfo:
    """Fields of an ``os-release`` file that are of interest."""

    pretty_name: str = ""
    name: str = ""
    version: str = ""
    version_id: str = ""
    version_codename: str = ""
    id: str = ""
    id_like: str = ""


@dataclass
class OsInfo:
    """Description of the running system; ``ram_installed`` is in MiB."""

    name: str = ""
    pretty_name: str = ""
    version: str = ""
    version_id: str = ""
    codename: str = ""
    id: str = ""
    id_like: str = ""
    device_name: str = ""
    ram_installed: float = 0.0
    cpu_vendor: str = ""
    cpu_brand: str = ""
    sysname: str = ""
    kernel_release: str = ""
    machine: str = ""


_FIELDS = {
    "PRETTY_NAME": "pretty_name",
    "NAME": "name",
    "VERSION_ID": "version_id",
    "VERSION": "version",
    "VERSION_CODENAME": "version_codename",
    "ID": "id",
    "ID_LIKE": "id_like",
}


def parse_os_release_record(text: str, pos: int) -> tuple[tuple[str, str], int] | None:
    """Parse a ``KEY=value`` record at ``pos``.

    Returns ``((key, value), position_after)`` with one pair of surrounding
    double quotes removed from the value, or ``None`` when no text is left.
    Raises ``MetricsError`` if the record is malformed.
    """
    if pos >= len(text):
        return None
    p = skip_ws(text, pos)
    if p >= len(text):
        return None

    end = None
    key_part = advance_key(text, p)
    if key_part is not None:
        key, p = key_part
        p = advance_assign(text, p)
        if p is not None:
            p = advance_ws0n(text, p)
        value_part = advance_unparsed_value(text, p) if p is not None else None
        if value_part is not None:
            value, p = value_part
            end = advance_nl_or_end(text, p)

    if end is None:
        raise MetricsError("unexpected 'os_release' record format")

    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]

    return (key, value), end


def _records(text: str) -> Iterator[tuple[str, str]]:
    pos = 0
    while (parsed := parse_os_release_record(text, pos)) is not None:
        rec, pos = parsed
        yield rec


def parse_os_release(text: str) -> OsReleaseInfo:
    """Parse ``os-release`` text, filling in the documented defaults."""
    info = OsReleaseInfo()
    for key, value in _records(text):
        field = _FIELDS.get(key)
        if field is None:
            continue
        if key == "PRETTY_NAME":
            value = value.replace("_", " ")
        setattr(info, field, value)

    if not info.pretty_name:
        info.pretty_name = "Linux"
    if not info.id:
        info.id = "linux"
    if not info.id_like:
        info.id_like = info.id
    return info


def find_os_release(
    paths: Iterable[str | os.PathLike[str]] = DEFAULT_OS_RELEASE_PATHS,
) -> Path:
    """Return the first of ``paths`` that exists."""
    for candidate in paths:
        path = Path(candidate)
        if path.exists():
            return path
    raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), "'os-release'")


def cpu_info_from_cpuinfo(text: str) -> tuple[str, str]:
    """Return the vendor and brand of the first processor in ``/proc/cpuinfo`` text."""
    vendor = ""
    brand = ""
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key == "vendor_id" and not vendor:
            vendor = value.strip()
        elif key == "model name" and not brand:
            brand = value.strip()
        if vendor and brand:
            break
    return vendor, brand.lstrip(" ")


class LinuxinfoProvider:
    """Collects the operating system, host, memory and processor description."""

    def __init__(
        self,
        os_release_paths: Iterable[str | os.PathLike[str]] = DEFAULT_OS_RELEASE_PATHS,
        cpuinfo_path: str | os.PathLike[str] = DEFAULT_CPUINFO_PATH,
    ) -> None:
        osi = parse_os_release(read_content(find_os_release(os_release_paths)))

        info = OsInfo(
            name=osi.name,
            pretty_name=osi.pretty_name,
            version=osi.version,
            version_id=osi.version_id,
            codename=osi.version_codename,
            id=osi.id,
            id_like=osi.id_like,
        )

        info.device_name = socket.gethostname()
        info.ram_installed = psutil.virtual_memory().total / 1024 / 1024

        try:
            info.cpu_vendor, info.cpu_brand = cpu_info_from_cpuinfo(read_content(cpuinfo_path))
        except OSError:
            pass

        un = os.uname()
        info.sysname = un.sysname
        info.kernel_release = un.release
        info.machine = un.machine

        self._os_info = info

    def os_info(self) -> OsInfo:
        """Return a copy of the collected description."""
        return dataclasses.replace(self._os_info)