from __future__ import annotations

from typing import Tuple

from .models import (  # noqa: F401
    EditOperation,
    EditRequest,
    EditResult,
    LineRange,
    MatchingStrategy,
    MatchOutcome,
)
from .errors import (  # noqa: F401
    AmbiguousMatch,
    EditError,
    FileAccessError,
    NoMatchFound,
    OccurrenceMismatch,
)
from .matchers import MATCHERS
from .cascade import apply_edit_with_strategy  # noqa: F401
from .sequencer import apply_edits
from .fileops import EditFileOps, FileSystemEditFileOps, edit_file  # noqa: F401


def get_supported_strategies() -> Tuple[str, ...]:
    return tuple(s.value for s in MATCHERS) + (MatchingStrategy.auto.value,)


def parse_strategy(name: str) -> MatchingStrategy:
    key = (name or "").lower().strip()
    try:
        return MatchingStrategy(key)
    except ValueError:
        raise ValueError(f"Unsupported matching strategy: {name}") from None


def apply(content: str, request: EditRequest) -> EditResult:
    """
    Apply every edit in request to content and return the result.
    Raises an EditError subclass on the first edit that cannot be applied.
    """
    return apply_edits(content, request)
