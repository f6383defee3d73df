"""Parsers for the free-text payloads passed to GitHub tools."""

import re
from typing import NamedTuple

from ..errors import InputFormatError

OLD_START = "OLD <<<<"
OLD_END = ">>>> OLD"
NEW_START = "NEW <<<<"
NEW_END = ">>>> NEW"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class UpdateRequest(NamedTuple):
    """Parsed ``update_file`` payload."""

    path: str
    old_content: str
    new_content: str


def normalize_path(path: str) -> str:
    """Return a repository-relative path (no surrounding space, no leading slash)."""
    return path.strip().lstrip("/")


def parse_integer(text: str) -> int | None:
    """Parse a strict decimal integer, returning None if it is not one.

    Example:
        >>> parse_integer("42")
        42
        >>> parse_integer("42abc") is None
        True
    """
    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)
    return None


def parse_number(query: str, label: str) -> int:
    """Parse an issue or PR number.

    Args:
        query: Raw payload
        label: Human name used in the error, e.g. "issue number"

    Raises:
        InputFormatError: If the payload is not a decimal integer
    """
    number = parse_integer(query)
    if number is None:
        raise InputFormatError(f"invalid {label}: {query}")
    return number


def split_comment_query(query: str) -> tuple[int, str]:
    """Split ``"<issue number>\\n\\n<comment>"`` into its parts.

    Example:
        >>> split_comment_query("42\\n\\nLooks good")
        (42, 'Looks good')
    """
    number_text, separator, comment = query.partition("\n\n")
    if not separator:
        raise InputFormatError("Invalid comment format")

    number = parse_integer(number_text)
    if number is None:
        raise InputFormatError(f"Invalid issue number: {number_text}")
    return number, comment


def split_pull_request_query(query: str) -> tuple[str, str]:
    """Split a PR payload into title (first line) and body (third line on).

    The second line is the blank separator line and is dropped.

    Example:
        >>> split_pull_request_query("README updates\\n\\nadded names, closes #3")
        ('README updates', 'added names, closes #3')
    """
    lines = query.split("\n")
    title = lines[0]
    body = "\n".join(lines[2:]) if len(lines) > 2 else ""
    return title, body


def split_file_query(query: str) -> tuple[str, str]:
    """Split a create-file payload into path and contents.

    The path is the first line. One blank separator line after it is
    dropped so both ``path\\ncontents`` and ``path\\n\\ncontents`` work.
    """
    path, separator, contents = query.partition("\n")
    if not separator:
        raise InputFormatError("Invalid file format")
    if contents.startswith("\n"):
        contents = contents[1:]
    return normalize_path(path), contents


def _block(content: str, start_marker: str, end_marker: str) -> str | None:
    start = content.find(start_marker)
    end = content.find(end_marker)
    if start == -1 or end == -1 or end < start + len(start_marker):
        return None
    return content[start + len(start_marker) : end].strip()


def parse_update_query(query: str) -> UpdateRequest:
    """Parse an ``update_file`` payload.

    The first line is the file path. The rest must contain the old text
    between ``OLD <<<<`` and ``>>>> OLD`` and the replacement between
    ``NEW <<<<`` and ``>>>> NEW``. Both blocks are stripped of surrounding
    whitespace.

    Example:
        >>> parse_update_query(
        ...     "a.txt\\nOLD <<<<\\nold\\n>>>> OLD\\nNEW <<<<\\nnew\\n>>>> NEW"
        ... )
        UpdateRequest(path='a.txt', old_content='old', new_content='new')

    Raises:
        InputFormatError: If the path is empty or a marker is missing
    """
    first_line, _, content = query.partition("\n")
    path = normalize_path(first_line)
    if not path:
        raise InputFormatError("Invalid file format: file path cannot be empty")

    old_content = _block(content, OLD_START, OLD_END)
    new_content = _block(content, NEW_START, NEW_END)
    if old_content is None or new_content is None:
        raise InputFormatError(
            f"Invalid update format: missing {OLD_START} ... {OLD_END} "
            f"or {NEW_START} ... {NEW_END} markers"
        )
    return UpdateRequest(path, old_content, new_content)


def apply_update(current: str, old_content: str, new_content: str) -> str | None:
    """Replace every occurrence of ``old_content`` with ``new_content``.

    Returns None when the old block is empty or absent. When the new block
    equals the old one the result is ``current`` unchanged.
    """
    if not old_content or old_content not in current:
        return None
    return current.replace(old_content, new_content)
