from __future__ import annotations

import pathlib
from typing import Any, Dict, Optional

from pydantic import Field, ValidationError

from .errors import EditError
from .fileops import EditFileOps, FileSystemEditFileOps, edit_file
from .logger import apply_logging_settings, logger
from .models import EditOperation, EditRequest, MatchingStrategy, WireModel
from .settings import Settings

TOOL_NAME = "edit_file"


class EditFileArgs(WireModel):
    path: str = Field(min_length=1, description="Relative path of the file to edit.")
    edits: list[EditOperation] = Field(min_length=1)
    # None => use the configured engine defaults
    matching_strategy: Optional[MatchingStrategy] = None
    dry_run: bool = False
    fail_on_ambiguous: Optional[bool] = None


class EditFileChanges(WireModel):
    lines_added: int = 0
    lines_removed: int = 0
    edits_applied: int = 0


class EditFileResponse(WireModel):
    success: bool
    diff: Optional[str] = None
    changes: Optional[EditFileChanges] = None
    warnings: list[str] = Field(default_factory=list)
    error: Optional[str] = None


def _format_validation_error(exc: ValidationError) -> str:
    lines = ["Invalid edit_file arguments:"]
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        lines.append(f"* {loc or '<root>'}: {err.get('msg')}")
    return "\n".join(lines)


class EditFileTool:
    """
    Apply find/replace edits to a single text file under base_path.
    Validates the raw arguments, enforces configured limits, runs the edit
    engine and writes the file back unless dryRun is set. Failures are
    returned as response text rather than raised.
    """

    name = TOOL_NAME

    def __init__(
        self,
        base_path: pathlib.Path,
        settings: Optional[Settings] = None,
        ops: Optional[EditFileOps] = None,
    ) -> None:
        self.base_path = base_path
        self.settings = settings or Settings()
        apply_logging_settings(self.settings.logging)
        self.ops = ops or FileSystemEditFileOps(base_path)

    def build_request(self, args: EditFileArgs) -> EditRequest:
        engine = self.settings.engine
        limit = engine.max_old_text_chars
        for idx, edit in enumerate(args.edits):
            if len(edit.old_text) > limit:
                raise EditError(
                    f"Edit {idx + 1}: oldText is {len(edit.old_text)} characters, limit is {limit}",
                    hint="Split the change into smaller edits with shorter search text",
                    instruction=edit.instruction,
                )
        return EditRequest(
            edits=args.edits,
            matching_strategy=args.matching_strategy or engine.default_strategy,
            dry_run=args.dry_run,
            fail_on_ambiguous=(
                engine.fail_on_ambiguous
                if args.fail_on_ambiguous is None
                else args.fail_on_ambiguous
            ),
        )

    async def run(self, args: Any) -> EditFileResponse:
        try:
            parsed = EditFileArgs.model_validate(args)
        except ValidationError as e:
            return EditFileResponse(success=False, error=_format_validation_error(e))

        try:
            request = self.build_request(parsed)
            result = edit_file(parsed.path, request, self.ops)
        except EditError as e:
            logger.info("edit_file failed", path=parsed.path, error=type(e).__name__)
            return EditFileResponse(success=False, error=str(e))

        return EditFileResponse(
            success=True,
            diff=result.diff_summary,
            changes=EditFileChanges(
                lines_added=result.lines_added,
                lines_removed=result.lines_removed,
                edits_applied=result.edits_applied,
            ),
            warnings=result.warnings,
        )

    def openapi_spec(self) -> Dict[str, Any]:
        """
        Return this tool's definition in OpenAI 'function' tool format,
        using JSON Schema for parameters.
        """
        description = (
            "Edit a text file by replacing oldText with newText for each edit, in order. "
            "matchingStrategy selects how oldText is located: 'exact' (character for "
            "character), 'flexible' (ignores leading/trailing whitespace per line), "
            "'fuzzy' (token based, first occurrence only) or 'auto' (tries them in that "
            "order). Multiple matches fail unless expectedOccurrences is given. "
            "Set dryRun to preview without writing."
        )
        return {
            "name": self.name,
            "description": description,
            "parameters": EditFileArgs.model_json_schema(by_alias=True),
        }
