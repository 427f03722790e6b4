from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import AmbiguousMatch, NoMatchFound, OccurrenceMismatch
from .logger import logger
from .matchers import MATCHERS
from .models import EditOperation, MatchingStrategy, MatchOutcome

# Fallthrough order used by the auto strategy
AUTO_ORDER: Tuple[MatchingStrategy, ...] = (
    MatchingStrategy.exact,
    MatchingStrategy.flexible,
    MatchingStrategy.fuzzy,
)

# Fuzzy replaces only the first location, so it never reports ambiguity
AMBIGUITY_CHECKED = frozenset({MatchingStrategy.exact, MatchingStrategy.flexible})


def _check_ambiguity(
    outcome: MatchOutcome, edit: EditOperation, fail_on_ambiguous: bool
) -> None:
    if outcome.strategy not in AMBIGUITY_CHECKED:
        return
    if not fail_on_ambiguous or outcome.occurrences <= 1:
        return
    # An explicit expectation of more than one occurrence opts into multi-replace
    if edit.expected_occurrences is not None and edit.expected_occurrences != 1:
        return
    raise AmbiguousMatch(
        outcome.strategy.value,
        outcome.occurrences,
        outcome.ambiguity_locations,
        instruction=edit.instruction,
    )


def _check_occurrences(outcome: MatchOutcome, edit: EditOperation) -> None:
    expected = edit.expected_occurrences
    if expected is not None and outcome.occurrences != expected:
        raise OccurrenceMismatch(
            outcome.strategy.value,
            expected,
            outcome.occurrences,
            instruction=edit.instruction,
        )


def apply_edit_with_strategy(
    content: str,
    edit: EditOperation,
    strategy: MatchingStrategy = MatchingStrategy.auto,
    fail_on_ambiguous: bool = True,
) -> MatchOutcome:
    """
    Locate edit.old_text in content and return the outcome of the first
    strategy that finds it. Content and edit texts must already be
    "\\n"-normalized.

    Raises AmbiguousMatch, OccurrenceMismatch or NoMatchFound.
    """
    order = AUTO_ORDER if strategy == MatchingStrategy.auto else (strategy,)
    attempted: List[str] = []
    outcome: Optional[MatchOutcome] = None

    for name in order:
        attempted.append(name.value)
        outcome = MATCHERS[name](content, edit.old_text, edit.new_text)
        if outcome is not None:
            logger.debug(
                "Edit located",
                strategy=name.value,
                occurrences=outcome.occurrences,
                line=outcome.line_range.start if outcome.line_range else None,
            )
            break
        logger.debug("Strategy found no match", strategy=name.value)

    if outcome is None:
        logger.info("No match found", attempted=attempted)
        raise NoMatchFound(edit.old_text, attempted, instruction=edit.instruction)

    _check_ambiguity(outcome, edit, fail_on_ambiguous)
    _check_occurrences(outcome, edit)
    return outcome
