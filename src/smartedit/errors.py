from __future__ import annotations

from typing import List, Optional, Sequence


class EditError(ValueError):
    """Any classified problem detected while locating or applying an edit."""

    def __init__(
        self,
        msg: str,
        *,
        hint: Optional[str] = None,
        instruction: Optional[str] = None,
    ) -> None:
        self.msg = msg
        self.hint = hint
        self.instruction = instruction
        # Index (0-based) of the failing edit within its request; set by the sequencer
        self.edit_index: Optional[int] = None
        super().__init__(msg)

    def details(self) -> List[str]:
        return []

    def __str__(self) -> str:
        lines: List[str] = []
        if self.edit_index is not None:
            lines.append(f"Edit {self.edit_index + 1} failed: {self.msg}")
        else:
            lines.append(self.msg)
        if self.instruction:
            lines.append(f"Edit goal: {self.instruction}")
        lines.extend(self.details())
        if self.hint:
            lines.append(self.hint)
        return "\n".join(lines)


class NoMatchFound(EditError):
    def __init__(
        self,
        old_text: str,
        attempted: Sequence[str],
        *,
        instruction: Optional[str] = None,
    ) -> None:
        self.old_text = old_text
        self.attempted = list(attempted)
        hint = "\n".join(
            [
                "Troubleshooting tips:",
                "- Ensure oldText matches the file content exactly (check whitespace, indentation)",
                "- Include 3-5 lines of context before and after the target change",
                '- Try matchingStrategy: "flexible" if whitespace is the issue',
            ]
        )
        super().__init__(
            "Failed to apply edit: search text not found",
            hint=hint,
            instruction=instruction,
        )

    def details(self) -> List[str]:
        return [
            "",
            "Searched for:",
            self.old_text,
            "",
            f"Attempted strategies: {', '.join(self.attempted)}",
            "",
        ]


class AmbiguousMatch(EditError):
    def __init__(
        self,
        strategy: str,
        occurrences: int,
        locations: Sequence[int],
        *,
        instruction: Optional[str] = None,
    ) -> None:
        self.strategy = strategy
        self.occurrences = occurrences
        self.locations = list(locations)
        super().__init__(
            f"Ambiguous match: found {occurrences} occurrences of the search text",
            hint=(
                "Suggestion: Add more context lines to uniquely identify the target location, "
                "or set expectedOccurrences to the number of locations to change"
            ),
            instruction=instruction,
        )

    def details(self) -> List[str]:
        locs = ", ".join(str(n) for n in self.locations) or "multiple"
        return [f"Strategy used: {self.strategy}", f"Locations (lines): {locs}"]


class OccurrenceMismatch(EditError):
    def __init__(
        self,
        strategy: str,
        expected: int,
        actual: int,
        *,
        instruction: Optional[str] = None,
    ) -> None:
        self.strategy = strategy
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} occurrence(s) but found {actual}",
            instruction=instruction,
        )

    def details(self) -> List[str]:
        return [f"Strategy used: {self.strategy}"]


class FileAccessError(EditError):
    """Raised by the file store boundary for unsafe or unreadable paths."""

    def __init__(self, msg: str, *, path: Optional[str] = None, hint: Optional[str] = None) -> None:
        self.path = path
        super().__init__(msg, hint=hint)
