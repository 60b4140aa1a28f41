"""Robust buffered and unbuffered descriptor I/O, plus signal-safe output."""

from __future__ import annotations

import os
import string
from typing import Iterator, Union

RIO_BUFSIZE = 8192
MAXLINE = 8192
MAXBUF = 8192

_DIGITS = string.digits + string.ascii_lowercase


def readn(fd: int, n: int) -> bytes:
    """Read up to ``n`` bytes from ``fd`` without buffering, stopping only at EOF."""
    chunks = []
    remaining = n
    while remaining > 0:
        chunk = os.read(fd, remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def writen(fd: int, data: Union[bytes, bytearray, memoryview]) -> int:
    """Write all of ``data`` to ``fd``, retrying short writes; return its length."""
    view = memoryview(data).cast("B")
    total = len(view)
    while view:
        written = os.write(fd, view)
        if written <= 0:
            raise OSError("write made no progress")
        view = view[written:]
    return total


class RioReader:
    """Buffered reader over a file descriptor with an internal 8 KiB buffer."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._buffer = b""
        self._pos = 0

    def _available(self) -> int:
        return len(self._buffer) - self._pos

    def _fill(self) -> bool:
        """Refill the buffer when it is empty; return False at EOF."""
        if self._available() > 0:
            return True
        chunk = os.read(self.fd, RIO_BUFSIZE)
        if not chunk:
            return False
        self._buffer = chunk
        self._pos = 0
        return True

    def _take(self, count: int) -> bytes:
        data = self._buffer[self._pos:self._pos + count]
        self._pos += len(data)
        return data

    def read(self, n: int) -> bytes:
        """Return at most ``n`` bytes, reading the descriptor only if the buffer is empty."""
        if not self._fill():
            return b""
        return self._take(min(n, self._available()))

    def readnb(self, n: int) -> bytes:
        """Read up to ``n`` bytes through the buffer, stopping only at EOF."""
        chunks = []
        remaining = n
        while remaining > 0:
            chunk = self.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def readline(self, maxlen: int = MAXLINE) -> bytes:
        """Read one line of at most ``maxlen - 1`` bytes, newline included.

        Returns an empty bytes object at EOF when nothing was read.
        """
        limit = maxlen - 1
        out = bytearray()
        while len(out) < limit:
            if not self._fill():
                break
            window = self._buffer[self._pos:self._pos + (limit - len(out))]
            newline = window.find(b"\n")
            if newline >= 0:
                out += self._take(newline + 1)
                break
            out += self._take(len(window))
        return bytes(out)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            line = self.readline(MAXLINE)
            if not line:
                return
            yield line


def ltoa(value: int, base: int = 10) -> str:
    """Format an integer in ``base`` (2 to 36) with lower-case digits."""
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"base must be between 2 and {len(_DIGITS)}, got {base}")
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while True:
        value, digit = divmod(value, base)
        digits.append(_DIGITS[digit])
        if value == 0:
            break
    return sign + "".join(reversed(digits))


def sio_puts(text: Union[str, bytes]) -> int:
    """Write ``text`` straight to standard output's descriptor; return bytes written."""
    data = text.encode() if isinstance(text, str) else bytes(text)
    return os.write(1, data)


def sio_putl(value: int) -> int:
    """Write ``value`` in decimal to standard output's descriptor."""
    return sio_puts(ltoa(value, 10))