from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple
import re

from .models import LineRange, MatchingStrategy, MatchOutcome
from .text import indent_of, line_number_at, reindent

# A matcher takes (content, old_text, new_text), all "\n"-normalized, and
# returns an outcome or None when the text was not located.
Matcher = Callable[[str, str, str], Optional[MatchOutcome]]

FUZZY_DELIMITERS: Tuple[str, ...] = (
    "(", ")", "{", "}", "[", "]", ";", ",", ":", "=", "<", ">",
)
FUZZY_REVIEW_WARNING = (
    "Fuzzy matching was used. Please review changes carefully to ensure accuracy."
)


def try_exact_match(content: str, old_text: str, new_text: str) -> Optional[MatchOutcome]:
    if not old_text:
        return None
    pattern = re.compile(re.escape(old_text))
    starts = [m.start() for m in pattern.finditer(content)]
    occurrences = len(starts)
    if occurrences == 0:
        return None

    # Replacement is a callable so backslashes in new_text are never expanded
    modified = pattern.sub(lambda _m: new_text, content)

    first_line = line_number_at(content, starts[0])
    locations: Tuple[int, ...] = ()
    if occurrences > 1:
        locations = tuple(line_number_at(content, s) for s in starts)

    return MatchOutcome(
        strategy=MatchingStrategy.exact,
        occurrences=occurrences,
        modified_content=modified,
        message=f"Exact match found at line {first_line}",
        line_range=LineRange(
            start=first_line, end=first_line + old_text.count("\n")
        ),
        ambiguity_locations=locations,
    )


def _find_flexible_windows(content_lines: List[str], search_lines: List[str]) -> List[int]:
    needle = [s.strip() for s in search_lines]
    n, m = len(content_lines), len(needle)
    starts: List[int] = []
    i = 0
    while i <= n - m:
        if all(content_lines[i + j].strip() == needle[j] for j in range(m)):
            starts.append(i)
            # Non-overlapping: resume after the matched window
            i += m
        else:
            i += 1
    return starts


def try_flexible_match(content: str, old_text: str, new_text: str) -> Optional[MatchOutcome]:
    """
    Line-oriented match that ignores leading/trailing whitespace on each line.
    Internal whitespace must still match exactly. Every matched window is
    replaced by new_text re-indented to the window's first line.
    """
    if not old_text:
        return None
    search_lines = old_text.split("\n")
    content_lines = content.split("\n")
    starts = _find_flexible_windows(content_lines, search_lines)
    if not starts:
        return None

    window = len(search_lines)
    replace_lines = new_text.split("\n")

    # Rebuild from fragments: untouched lines between spans plus replacements
    out: List[str] = []
    prev_end = 0
    for start in starts:
        out.extend(content_lines[prev_end:start])
        out.extend(reindent(replace_lines, indent_of(content_lines[start])))
        prev_end = start + window
    out.extend(content_lines[prev_end:])

    line_numbers = tuple(s + 1 for s in starts)
    first_line = line_numbers[0]
    occurrences = len(starts)
    warning: Optional[str] = None
    locations: Tuple[int, ...] = ()
    if occurrences > 1:
        locations = line_numbers
        warning = (
            f"Found {occurrences} matches at lines: "
            + ", ".join(str(n) for n in line_numbers)
        )

    return MatchOutcome(
        strategy=MatchingStrategy.flexible,
        occurrences=occurrences,
        modified_content="\n".join(out),
        message=f"Flexible match found at line {first_line}",
        line_range=LineRange(start=first_line, end=first_line + window - 1),
        ambiguity_locations=locations,
        warning=warning,
    )


def tokenize(text: str) -> List[str]:
    padded = text.strip()
    for delim in FUZZY_DELIMITERS:
        padded = padded.replace(delim, f" {delim} ")
    return padded.split()


def build_fuzzy_pattern(tokens: List[str]) -> "re.Pattern[str]":
    # Group 1 captures the line's leading horizontal whitespace
    body = r"\s*".join(re.escape(t) for t in tokens)
    return re.compile(r"^([^\S\n]*)" + body, re.MULTILINE)


def try_fuzzy_match(content: str, old_text: str, new_text: str) -> Optional[MatchOutcome]:
    tokens = tokenize(old_text)
    if not tokens:
        return None

    m = build_fuzzy_pattern(tokens).search(content)
    if m is None:
        return None

    indentation = m.group(1)
    replacement = "\n".join(reindent(new_text.split("\n"), indentation))
    modified = content[: m.start()] + replacement + content[m.end() :]

    first_line = line_number_at(content, m.start())
    return MatchOutcome(
        strategy=MatchingStrategy.fuzzy,
        # Only the first location is ever replaced
        occurrences=1,
        modified_content=modified,
        message=f"Fuzzy match found near line {first_line}",
        line_range=LineRange(start=first_line, end=first_line + m.group(0).count("\n")),
        warning=FUZZY_REVIEW_WARNING,
    )


MATCHERS: Dict[MatchingStrategy, Matcher] = {
    MatchingStrategy.exact: try_exact_match,
    MatchingStrategy.flexible: try_flexible_match,
    MatchingStrategy.fuzzy: try_fuzzy_match,
}
