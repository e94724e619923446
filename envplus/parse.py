from __future__ import annotations

from typing import Iterator

from envplus.errors import MalformedLineError


def split_lines(text: str) -> list[str]:
    """Split on "\\n", tolerating "\\r\\n" endings.

    Unlike str.splitlines(), form feeds and other Unicode separators stay
    inside the line so reported line numbers match the file.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _split_once(text: str, sep: str) -> list[str]:
    # str.split rejects an empty separator; an empty one matches at offset 0.
    if not sep:
        return ["", text]
    return text.split(sep, 1)


def parse_line(line: str, *, comment: str, delimiter: str, index: int) -> tuple[str, str] | None:
    """Parse one line into a (key, value) pair.

    Returns None for blank and full-line comments. ``index`` is the 0-based
    position of the line in its file and is only used for error messages.
    Keys and values are returned verbatim, surrounding whitespace included.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(comment):
        return None

    # An empty comment marker is caught above: every line starts with "".
    body = line.split(comment, 1)[0]

    parts = _split_once(body, delimiter)
    if len(parts) < 2:
        raise MalformedLineError(index + 1, line)

    key, value = parts
    return key, value


def iter_entries(text: str, *, comment: str, delimiter: str) -> Iterator[tuple[str, str]]:
    """Yield (key, value) pairs in file order; stop at the first malformed line."""
    for index, line in enumerate(split_lines(text)):
        entry = parse_line(line, comment=comment, delimiter=delimiter, index=index)
        if entry is None:
            continue
        yield entry
