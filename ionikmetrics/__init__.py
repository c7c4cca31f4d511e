"""System, process and network metrics from procfs and sysfs, with file system change monitoring."""

__version__ = "0.1.0"