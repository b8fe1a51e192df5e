"""Handy utility functions"""

import json
import logging
import os.path
from typing import Any, Optional

logger = logging.getLogger(__package__)


def load_dict_from_json(filename: str) -> Optional[dict[str, Any]]:
    """If file exists, attempt to load into dict.

    Args:
        filename: Name of JSON file to load.

    Returns:
        Dictionary if loaded successfully, or None.
    """
    if os.path.isfile(filename):
        with open(filename, "r", encoding="utf-8") as fp:
            try:
                return json.load(fp)
            except json.decoder.JSONDecodeError as exc:
                logger.error(
                    f"Unable to load {filename} -- not valid JSON format\n" + str(exc)
                )
    return None


class TextRange:
    """Half-open range of document offsets.

    Attributes:
        start: Offset of first character in range.
        end: Offset just beyond the last character in range.
    """

    def __init__(self, start: int, end: int) -> None:
        assert start <= end
        self.start = start
        self.end = end

    def overlaps(self, start: int, end: int) -> bool:
        """Return True if range intersects ``[start, end)``.

        Empty ranges count as intersecting if they sit inside the other range,
        so zero-width annotations at a table's edge are still found.
        """
        if self.start == self.end:
            return start <= self.start <= end
        return self.start < end and start < self.end

    def __eq__(self, other: object) -> bool:
        """Override equality test to check start and end of range."""
        if not isinstance(other, TextRange):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __repr__(self) -> str:
        return f"TextRange({self.start}, {self.end})"


def sing_plur(count: int, singular: str, plural: str = "") -> str:
    """Return singular/plural phrase depending on count.

    Args:
        count: Number of items.
        singular: Singular version of item name.
        plural: Plural version of item name (default - add `s` to singular).

    Examples:
        sing_plur(1, "table") -> "1 table"
        sing_plur(2, "error") -> "2 errors"
        sing_plur(3, "match", "matches") -> "3 matches"
    """
    if count == 1:
        word = singular
    elif plural == "":
        word = singular + "s"
    else:
        word = plural
    return f"{count} {word}"
