[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ionikmetrics"
version = "0.1.0"
description = "System, process and network metrics from procfs and sysfs, with file system change monitoring"
requires-python = ">=3.10"
keywords = [
    "metrics",
    "monitoring",
    "procfs",
    "sysfs",
    "cpu",
    "memory",
    "network",
    "filesystem",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "psutil",
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ionikmetrics"]

[tool.hatch.build.targets.sdist]
include = [
    "ionikmetrics",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
