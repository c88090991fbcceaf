"""Membership search and ordered insertion over a combined module-path string.

A combined path is a ``;``-joined list of directories, the shape of the
module-path environment variable. Entries are compared one segment at a
time, so ``C:\\Temp`` is never mistaken for ``C:\\Temp\\Sub``.
"""

from __future__ import annotations

__all__ = ["PATH_SEPARATOR", "END", "split_path", "path_key", "locate", "insert_unique"]

PATH_SEPARATOR = ";"

# Insert position meaning "append to the end of the combined path".
END = -1

_DIRECTORY_SEPARATORS = ("\\", "/")


def split_path(combined: str) -> list[str]:
    """Split a combined path into its non-empty segments."""
    return [segment for segment in combined.split(PATH_SEPARATOR) if segment]


def path_key(segment: str) -> str:
    """Comparison key for a path segment.

    Surrounding whitespace and a single trailing directory separator are
    removed and the result is case-folded.
    """
    key = segment.strip()
    if key.endswith(_DIRECTORY_SEPARATORS):
        key = key[:-1]
    return key.casefold()


def locate(combined: str, needle: str) -> int:
    """Return the character offset of ``needle`` inside ``combined``.

    Empty segments of ``combined`` take part in the offset arithmetic.
    Returns -1 if no segment compares equal to ``needle``.
    """
    target = path_key(needle)
    pos = 0
    for segment in combined.split(PATH_SEPARATOR):
        if path_key(segment) == target:
            return pos
        pos += len(segment) + 1
    return -1


def insert_unique(base: str, to_add: str | None, position: int = END) -> str:
    """Add each entry of ``to_add`` to ``base`` unless it is already present.

    Args:
        base: The combined path to extend.
        to_add: A single path or a combined path. Empty entries are ignored.
        position: ``END`` to append, otherwise the character offset at which
            to insert each new entry followed by a separator.

    Returns:
        The extended combined path.
    """
    result = base
    if not to_add:
        return result

    for entry in split_path(to_add):
        # Checked against the running result so duplicates inside to_add collapse.
        if locate(result, entry) != -1:
            continue
        if position == END:
            if result.endswith(PATH_SEPARATOR):
                result += entry
            else:
                result += PATH_SEPARATOR + entry
        else:
            result = result[:position] + entry + PATH_SEPARATOR + result[position:]
    return result
