"""Numbered command history kept in memory and persisted to a text file."""

from __future__ import annotations

import os
from typing import Iterable, Iterator, List, Union

PathLike = Union[str, "os.PathLike[str]"]


class History:
    """Commands entered so far, numbered from 1 in the order they were added."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: List[str] = list(entries)

    @classmethod
    def load(cls, path: PathLike) -> "History":
        """Read one entry per line from ``path``, creating an empty file if missing."""
        if not os.path.exists(path):
            with open(path, "w", encoding="utf-8"):
                pass
        with open(path, "r", encoding="utf-8", newline="") as handle:
            return cls(handle.readlines())

    def save(self, path: PathLike) -> None:
        """Write every entry but the most recent one to ``path``.

        The most recent entry is the command that ended the session, so it
        is left out of the saved file.
        """
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.writelines(self._entries[:-1])

    def add(self, command: str) -> int:
        """Append ``command`` and return its number."""
        self._entries.append(command)
        return len(self._entries)

    def last(self) -> str:
        """Return the most recent command."""
        if not self._entries:
            raise LookupError("history is empty")
        return self._entries[-1]

    def get(self, number: int) -> str:
        """Return the command with the given 1-based ``number``."""
        if not 1 <= number <= len(self._entries):
            raise IndexError(f"no history entry {number}")
        return self._entries[number - 1]

    def format(self) -> str:
        """Render the history as the ``history`` command prints it."""
        return "".join(
            f"{number}  {command}"
            for number, command in enumerate(self._entries, start=1)
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)