"""Low-level access to local files through OS file descriptors."""

from __future__ import annotations

import enum
import errno
import os
import stat

_INVALID_HANDLE = -1
_BINARY = getattr(os, "O_BINARY", 0)


class Truncate(enum.Enum):
    """Whether opening for writing truncates the file."""

    OFF = 0
    ON = 1


class LocalFileProvider:
    """File operations on integer descriptors; failures raise ``OSError``."""

    @staticmethod
    def invalid() -> int:
        """Return the value that stands for no open file."""
        return _INVALID_HANDLE

    @staticmethod
    def is_invalid(handle: int) -> bool:
        """Return True if ``handle`` does not refer to an open file."""
        return handle < 0

    @staticmethod
    def size(path: str | os.PathLike[str]) -> int:
        """Return the size of the file at ``path`` in bytes."""
        if not os.path.exists(path):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path))
        return os.path.getsize(path)

    @staticmethod
    def close(handle: int) -> None:
        """Close the descriptor."""
        os.close(handle)

    @staticmethod
    def open_read_only(path: str | os.PathLike[str]) -> int:
        """Open an existing regular file for reading and return its descriptor."""
        path = os.fspath(path)
        if not os.path.exists(path):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)

        if not os.path.isfile(path):
            if not os.path.islink(path):
                raise OSError(errno.EINVAL, f"expected regular file: {path}", path)
            target = path
            try:
                while os.path.islink(target):
                    link = os.readlink(target)
                    target = os.path.join(os.path.dirname(target), link)
            except OSError as exc:
                raise OSError(exc.errno, f"open read only failure: {path}", path) from exc

        return os.open(path, os.O_RDONLY | _BINARY)

    @staticmethod
    def open_write_only(
        path: str | os.PathLike[str],
        truncate: Truncate = Truncate.OFF,
        initial_size: int = 0,
    ) -> int:
        """Open (creating if needed) a file for writing and return its descriptor.

        With ``Truncate.ON`` the file is cut to ``initial_size`` bytes.
        """
        path = os.fspath(path)
        flags = os.O_WRONLY | os.O_CREAT | _BINARY
        if truncate is Truncate.ON and initial_size == 0:
            flags |= os.O_TRUNC

        handle = os.open(path, flags, stat.S_IRUSR | stat.S_IWUSR)

        if truncate is Truncate.ON and initial_size > 0:
            try:
                os.ftruncate(handle, initial_size)
            except (OSError, OverflowError) as exc:
                os.close(handle)
                code = getattr(exc, "errno", None) or errno.EFBIG
                raise OSError(
                    code, f"resize file failure while open write only file: {path}", path
                ) from exc

        return handle

    @staticmethod
    def offset(handle: int) -> int:
        """Return the current position of the descriptor."""
        return os.lseek(handle, 0, os.SEEK_CUR)

    @staticmethod
    def set_pos(handle: int, pos: int) -> None:
        """Move the descriptor to absolute position ``pos``; may go past the end."""
        if pos < 0:
            raise OverflowError(f"negative file position: {pos}")
        os.lseek(handle, pos, os.SEEK_SET)

    @staticmethod
    def read(handle: int, length: int) -> bytes:
        """Read up to ``length`` bytes; an empty result means end of file."""
        return os.read(handle, length)

    @staticmethod
    def write(handle: int, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        return os.write(handle, data)