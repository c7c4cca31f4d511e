"""Reading the whole content of procfs and sysfs files."""

from __future__ import annotations

import os
from pathlib import Path


def read_content(path: str | os.PathLike[str]) -> str:
    """Return the whole text of the file at ``path``.

    Raises ``OSError`` (``FileNotFoundError`` and so on) if it cannot be read.
    """
    # procfs files report a size of zero, so read until EOF instead of by size.
    with Path(path).open("r", encoding="utf-8", errors="replace", newline="") as fh:
        return fh.read()