from __future__ import annotations

import logging
import warnings

import pytest

from smartedit.errors import NoMatchFound
from smartedit.logger import (
    LOGGER_NAME,
    LogManager,
    apply_logging_settings,
    get_log_manager,
    init_log_manager,
)
from smartedit.models import EditOperation, EditRequest
from smartedit.sequencer import apply_edits
from smartedit.settings import LoggingSettings, LogLevel


def test_log_manager_captures_engine_records() -> None:
    manager = init_log_manager(max_entries=None)
    assert isinstance(manager, LogManager)
    assert get_log_manager() is manager
    manager.clear()
    apply_logging_settings(LoggingSettings(default_level=LogLevel.debug))
    try:
        request = EditRequest(edits=[EditOperation(old_text="a", new_text="b")])
        apply_edits("a\n", request)
    finally:
        apply_logging_settings(None)

    messages = [record.message for record in manager.get_logs()]
    assert any("Edit located" in m for m in messages)
    assert any("Edit sequence applied" in m for m in messages)


def test_log_manager_respects_levels() -> None:
    manager = init_log_manager(max_entries=None)
    manager.clear()
    apply_logging_settings(None)

    apply_edits("a\n", EditRequest(edits=[EditOperation(old_text="a", new_text="b")]))

    assert manager.get_logs() == []


def test_logger_overrides() -> None:
    apply_logging_settings(
        LoggingSettings(
            default_level=LogLevel.error,
            enabled_loggers={"smartedit.extra": LogLevel.disabled},
        )
    )
    try:
        assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
        assert logging.getLogger("smartedit.extra").level == logging.CRITICAL + 1
    finally:
        apply_logging_settings(None)


def test_log_manager_max_entries() -> None:
    manager = LogManager(max_entries=2)
    log = logging.getLogger("smartedit.test.max")
    for i in range(3):
        manager.add_record(log.makeRecord(log.name, logging.INFO, __file__, 1, f"m{i}", (), None))

    assert [r.message for r in manager.get_logs()] == ["m1", "m2"]


def test_capture_max_entries_installs_log_manager() -> None:
    apply_logging_settings(LoggingSettings(default_level=LogLevel.info, capture_max_entries=1))
    try:
        manager = get_log_manager()
        assert manager is not None
        manager.clear()
        request = EditRequest(edits=[EditOperation(old_text="zzz", new_text="b")])
        for _ in range(2):
            with pytest.raises(NoMatchFound):
                apply_edits("a\n", request)
    finally:
        apply_logging_settings(None)
        init_log_manager(max_entries=None)

    logs = manager.get_logs()
    assert len(logs) == 1
    assert "Edit sequence aborted" in logs[0].message


def test_warnings_are_not_redirected() -> None:
    original = warnings.showwarning
    init_log_manager(max_entries=None)
    apply_logging_settings(LoggingSettings(capture_max_entries=10))
    try:
        assert warnings.showwarning is original
    finally:
        apply_logging_settings(None)
        init_log_manager(max_entries=None)
