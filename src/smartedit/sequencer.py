from __future__ import annotations

from typing import List

from .cascade import apply_edit_with_strategy
from .errors import EditError
from .logger import logger
from .models import EditOperation, EditRequest, EditResult, MatchOutcome
from .text import (
    count_lines,
    detect_line_ending,
    normalize_line_endings,
    restore_line_endings,
)

DRY_RUN_PREFIX = "[DRY RUN] "


def format_outcome(index: int, outcome: MatchOutcome) -> str:
    line = outcome.line_range.start if outcome.line_range else "?"
    plural = "s" if outcome.occurrences > 1 else ""
    return (
        f"Edit {index + 1}: {outcome.strategy.value} match at line {line} "
        f"({outcome.occurrences} occurrence{plural})"
    )


def build_diff_summary(outcomes: List[MatchOutcome], *, dry_run: bool) -> str:
    header = f"{DRY_RUN_PREFIX if dry_run else ''}Applied {len(outcomes)} edit(s)"
    if not outcomes:
        return header
    entries = [format_outcome(i, o) for i, o in enumerate(outcomes)]
    return "\n".join([header, "", *entries])


def apply_edits(content: str, request: EditRequest) -> EditResult:
    """
    Apply request.edits in order, each against the result of the previous ones.

    The first failing edit aborts the whole request: its classified EditError
    is re-raised with edit_index set, and no content is returned. Line endings
    are detected on the original content and restored on the final result only.
    """
    line_ending = detect_line_ending(content)
    current = normalize_line_endings(content)

    outcomes: List[MatchOutcome] = []
    warnings: List[str] = []
    lines_added = 0
    lines_removed = 0

    for idx, raw_edit in enumerate(request.edits):
        edit = EditOperation(
            old_text=normalize_line_endings(raw_edit.old_text),
            new_text=normalize_line_endings(raw_edit.new_text),
            instruction=raw_edit.instruction,
            expected_occurrences=raw_edit.expected_occurrences,
        )
        try:
            outcome = apply_edit_with_strategy(
                current,
                edit,
                request.matching_strategy,
                request.fail_on_ambiguous,
            )
        except EditError as e:
            e.edit_index = idx
            logger.info(
                "Edit sequence aborted",
                edit_index=idx,
                error=type(e).__name__,
                remaining=len(request.edits) - idx - 1,
            )
            raise

        current = outcome.modified_content
        outcomes.append(outcome)
        if outcome.warning:
            warnings.append(f"Edit {idx + 1}: {outcome.warning}")
        # Coarse per-edit delta, not a true diff
        lines_added += count_lines(edit.new_text)
        lines_removed += count_lines(edit.old_text)

    summary = build_diff_summary(outcomes, dry_run=request.dry_run)
    logger.debug(
        "Edit sequence applied",
        edits=len(outcomes),
        lines_added=lines_added,
        lines_removed=lines_removed,
        dry_run=request.dry_run,
    )
    return EditResult(
        success=True,
        diff_summary=summary,
        lines_added=lines_added,
        lines_removed=lines_removed,
        edits_applied=len(outcomes),
        content=restore_line_endings(current, line_ending),
        dry_run=request.dry_run,
        outcomes=outcomes,
        warnings=warnings,
    )
