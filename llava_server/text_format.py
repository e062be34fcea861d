"""
Text helpers used by the command line parser and help renderer.
"""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "on", "yes"}
_FALSE_STRINGS = {"false", "off", "no"}

# Optional sign followed by decimal digits; surrounding whitespace is allowed
INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")


class TabExpander:
    """Replaces tabs with spaces, advancing to the next tab stop"""

    def __init__(self, tab_stop: int):
        self.tab_stop = tab_stop

    def expand(self, text: str) -> str:
        expanded = []
        column = 0
        for c in text:
            if c == "\t":
                next_tab = (column + self.tab_stop) - ((column + self.tab_stop) % self.tab_stop)
                expanded.append(" " * (next_tab - column))
                column = next_tab
            else:
                expanded.append(c)
                column += 1
                if c == "\n":
                    column = 0
        return "".join(expanded)


class WordWrapper:
    """
    Greedy word wrapper.

    Lines are packed up to one column short of the width (room for the
    implicit newline) and broken at the last whitespace seen. A word that
    does not fit on a line by itself is hard-broken at the limit.

    Note: does not perform tab expansion.
    """

    def __init__(self, columns: int):
        if columns < 2:
            logger.warning(f"WordWrapper requires at least 2 columns, got {columns}")
            columns = 2
        self.columns = columns

    def wrap_words(self, text: str) -> List[str]:
        out: List[str] = []
        for line in split(text, "\n"):
            self._wrap_line(out, line)
        return out

    def _wrap_line(self, out: List[str], s: str):
        max_column = self.columns - 1
        line_start = 0
        column = 0
        last_space = None
        i = 0
        while i < len(s):
            if s[i].isspace():
                last_space = i

            if column == max_column:
                # Final allowed column reached. Trim at last space or, if
                # none, hard stop here.
                if last_space is None:
                    line_end = i
                else:
                    line_end = self._gobble_trailing_whitespace(s, last_space)
                out.append(s[line_start:line_end])

                line_start = self._gobble_leading_whitespace(s, line_end)
                i = line_start
                column = 0
                last_space = None
            else:
                column += 1
                i += 1
        out.append(s[line_start:])

    @staticmethod
    def _gobble_trailing_whitespace(s: str, end_idx: int) -> int:
        while end_idx > 0 and s[end_idx - 1].isspace():
            end_idx -= 1
        return end_idx

    @staticmethod
    def _gobble_leading_whitespace(s: str, start_idx: int) -> int:
        while start_idx < len(s) and s[start_idx].isspace():
            start_idx += 1
        return start_idx


def split(text: str, separator: str) -> List[str]:
    """
    Split on a single-character separator, keeping empty fields.

    split("a,,b", ",") -> ["a", "", "b"]; split("", ",") -> [""]
    """
    return text.split(separator)


def to_lower(text: str) -> str:
    return text.lower()


def trim_whitespace(text: str) -> str:
    return text.strip()


def parse_bool(text: str) -> bool:
    """
    Interpret a string as a boolean.

    Accepts true/on/yes and false/off/no in any case. Anything else is read
    as an integer (non-zero is True); unparsable text is False.
    """
    s = text.strip().lower()
    if s in _TRUE_STRINGS:
        return True
    if s in _FALSE_STRINGS:
        return False
    if INTEGER_PATTERN.match(s):
        return int(s) != 0
    return False
