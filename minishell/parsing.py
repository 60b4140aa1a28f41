"""Splitting command lines into arguments, pipeline stages and history marks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

NO_MARK = 0
REPEAT_LAST = -1

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class ParsedLine:
    """Arguments of one command and whether it runs in the background."""

    argv: Tuple[str, ...]
    background: bool

    @property
    def is_empty(self) -> bool:
        """True when there is no command to run."""
        return not self.argv


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def parse_line(line: str) -> ParsedLine:
    """Split ``line`` on spaces into an argument list.

    A trailing newline is dropped and runs of spaces separate arguments.
    When the last argument begins with ``&`` it is removed and the command
    is marked to run in the background. A blank line gives no arguments and
    counts as a background line.
    """
    words = [word for word in _strip_newline(line).split(" ") if word]
    if not words:
        return ParsedLine(argv=(), background=True)
    background = words[-1].startswith("&")
    if background:
        words.pop()
    return ParsedLine(argv=tuple(words), background=background)


def split_pipeline(line: str) -> List[str]:
    """Split ``line`` at every ``|`` that stands outside quotes.

    Single and double quote characters that open or close a quoted span are
    removed from the result; a quote of the other kind inside a span is kept.
    A trailing newline on the line is dropped. A line without a pipe gives a
    single segment.
    """
    segments: List[str] = []
    current: List[str] = []
    in_single = False
    in_double = False
    for char in _strip_newline(line):
        if char == '"' and not in_single:
            in_double = not in_double
        elif char == "'" and not in_double:
            in_single = not in_single
        elif char == "|" and not in_single and not in_double:
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    return segments


def check_mark(line: str) -> int:
    """Classify a history reference at the start of ``line``.

    Returns ``REPEAT_LAST`` (-1) for ``!!`` (but not ``!!!``), the entry
    number for ``!`` followed only by digits, and ``NO_MARK`` (0) otherwise.
    """
    if line.startswith("!!"):
        return NO_MARK if line[2:3] == "!" else REPEAT_LAST
    if line.startswith("!"):
        digits = _strip_newline(line)[1:]
        if not digits or not set(digits) <= _DIGITS:
            return NO_MARK
        return int(digits)
    return NO_MARK