from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MatchingStrategy(str, Enum):
    exact = "exact"
    flexible = "flexible"
    fuzzy = "fuzzy"
    auto = "auto"


@dataclass(frozen=True)
class LineRange:
    # 1-indexed, inclusive
    start: int
    end: int


@dataclass(frozen=True)
class MatchOutcome:
    strategy: MatchingStrategy
    # Number of matches found before replacement
    occurrences: int
    modified_content: str
    message: str
    line_range: Optional[LineRange] = None
    ambiguity_locations: Tuple[int, ...] = ()
    warning: Optional[str] = None


class WireModel(BaseModel):
    # Inbound payloads use camelCase keys (oldText, dryRun, ...); attribute
    # names stay snake_case.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class EditOperation(WireModel):
    old_text: str = Field(min_length=1)
    new_text: str
    # Human-readable intent; only used in diagnostics
    instruction: Optional[str] = None
    expected_occurrences: Optional[int] = Field(default=None, ge=1)


class EditRequest(WireModel):
    edits: List[EditOperation] = Field(default_factory=list)
    matching_strategy: MatchingStrategy = MatchingStrategy.auto
    dry_run: bool = False
    fail_on_ambiguous: bool = True


class EditResult(BaseModel):
    success: bool = True
    diff_summary: str
    lines_added: int = 0
    lines_removed: int = 0
    edits_applied: int = 0
    # Final content with the original line-ending style restored
    content: str
    dry_run: bool = False
    outcomes: List[MatchOutcome] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
