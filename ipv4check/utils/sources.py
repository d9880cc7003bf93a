"""Reads candidate addresses from files and standard input.

Lines are handed to the validator exactly as written, apart from the line
terminator. Leading and trailing whitespace is kept, so an indented address
is reported as invalid rather than silently repaired.
"""
import io
import sys
from pathlib import Path
from typing import Iterator, Union

STDIN_PATH = "-"
COMMENT_PREFIX = "#"


def strip_line_terminator(line: str) -> str:
    """Removes a single trailing "\\n", "\\r\\n" or "\\r" from a line.

    Args:
        line (str): A line as returned by iterating over a text stream.

    Returns:
        str: The line without its terminator. Other whitespace is untouched.
    """
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def _iter_lines(stream) -> Iterator[str]:
    for line in stream:
        candidate = strip_line_terminator(line)
        if not candidate or candidate.startswith(COMMENT_PREFIX):
            continue
        yield candidate


def read_addresses(path: Union[str, Path]) -> Iterator[str]:
    """Yields candidate addresses from a text file, one per line.

    Empty lines and lines starting with "#" are skipped. Bytes that are not
    valid UTF-8 are replaced with U+FFFD, for files and standard input alike.

    Args:
        path (Union[str, Path]): The file to read, or "-" for standard input.

    Yields:
        str: Each candidate with its line terminator removed.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    if str(path) == STDIN_PATH:
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            yield from _iter_lines(sys.stdin)
            return
        stream = io.TextIOWrapper(buffer, encoding="utf-8", errors="replace", newline="")
        try:
            yield from _iter_lines(stream)
        finally:
            # detach() keeps sys.stdin.buffer open.
            stream.detach()
        return

    # newline="" keeps "\r" so that strip_line_terminator sees the raw ending.
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        yield from _iter_lines(f)
