from __future__ import annotations

import pathlib
from abc import ABC, abstractmethod
from typing import List

from .errors import FileAccessError
from .logger import logger
from .models import EditRequest, EditResult
from .sequencer import apply_edits


class EditFileOps(ABC):
    """
    File store used around the edit engine. The engine itself never touches
    files: content is read before edits are applied and written at most once,
    after every edit succeeded.
    """

    @abstractmethod
    def read(self, rel: str) -> str: ...

    @abstractmethod
    def write(self, rel: str, content: str) -> None: ...


class FileSystemEditFileOps(EditFileOps):
    """
    File-backed implementation that keeps every path under base_path and
    records which files were written.
    """

    def __init__(self, base_path: pathlib.Path):
        self._base_path = base_path
        self._written: List[str] = []

    def _resolve_safe_path(self, rel: str) -> pathlib.Path:
        if rel.startswith("/") or rel.startswith("~"):
            raise FileAccessError(f"Absolute paths are not allowed: {rel}", path=rel)
        abs_path = (self._base_path / rel).resolve()
        base_resolved = self._base_path.resolve()
        if abs_path == base_resolved or base_resolved in abs_path.parents:
            return abs_path
        raise FileAccessError(f"Path escapes project root: {rel}", path=rel)

    def read(self, rel: str) -> str:
        path = self._resolve_safe_path(rel)
        try:
            # newline="" keeps \r\n so the original line ending can be restored
            with path.open("rt", encoding="utf-8", newline="") as fh:
                return fh.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(
                f"Failed to read file: {rel}",
                path=rel,
                hint=f"{type(e).__name__}: {e}",
            ) from e

    def write(self, rel: str, content: str) -> None:
        path = self._resolve_safe_path(rel)
        try:
            with path.open("wt", encoding="utf-8", newline="") as fh:
                fh.write(content)
        except OSError as e:
            raise FileAccessError(
                f"Failed to write file: {rel}",
                path=rel,
                hint=f"{type(e).__name__}: {e}",
            ) from e
        self._written.append(rel)

    @property
    def written(self) -> List[str]:
        return list(self._written)


def edit_file(path: str, request: EditRequest, ops: EditFileOps) -> EditResult:
    """
    Read path through ops, apply the request and write the result back unless
    this is a dry run. Nothing is written when any edit fails.
    """
    content = ops.read(path)
    result = apply_edits(content, request)
    if not request.dry_run:
        ops.write(path, result.content)
        logger.info("File updated", path=path, edits=result.edits_applied)
    return result
