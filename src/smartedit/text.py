from __future__ import annotations

from enum import Enum
from typing import Iterable, List
import re


class LineEnding(str, Enum):
    CRLF = "\r\n"
    LF = "\n"


INDENT_RE = re.compile(r"^\s*")


def detect_line_ending(text: str) -> LineEnding:
    return LineEnding.CRLF if "\r\n" in text else LineEnding.LF


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n")


def restore_line_endings(text: str, style: LineEnding) -> str:
    if style == LineEnding.CRLF:
        return text.replace("\n", "\r\n")
    return text


def indent_of(line: str) -> str:
    m = INDENT_RE.match(line)
    return m.group(0) if m else ""


def reindent(lines: Iterable[str], indent: str) -> List[str]:
    """
    Re-indent replacement lines to the indentation of the matched location.
    Caller-supplied indentation is discarded: every non-blank line becomes
    indent + stripped text, blank lines stay empty. Nested indentation inside
    the replacement is flattened to the same level.
    """
    out: List[str] = []
    for line in lines:
        stripped = line.strip()
        out.append(indent + stripped if stripped else "")
    return out


def line_number_at(content: str, offset: int) -> int:
    # 1-indexed line containing the character at offset
    return content.count("\n", 0, offset) + 1


def count_lines(text: str) -> int:
    return text.count("\n") + 1
