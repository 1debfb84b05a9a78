"""Tests for logging setup and context injection."""

import logging

from desk_commands.core.logging import (
    CommandContextFilter,
    command_var,
    generate_request_id,
    request_id_var,
    setup_logging,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("desk_commands.test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_injects_defaults():
    record = _record()

    assert CommandContextFilter().filter(record) is True
    assert record.request_id == "-"
    assert record.command == "-"


def test_filter_injects_current_context():
    rid_token = request_id_var.set("abc123")
    cmd_token = command_var.set("read_data_file")
    try:
        record = _record()
        CommandContextFilter().filter(record)
    finally:
        command_var.reset(cmd_token)
        request_id_var.reset(rid_token)

    assert record.request_id == "abc123"
    assert record.command == "read_data_file"


def test_generate_request_id_is_short_hex():
    rid = generate_request_id()
    assert len(rid) == 12
    int(rid, 16)


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")
        setup_logging("DEBUG")

        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert any(isinstance(f, CommandContextFilter) for f in root.handlers[0].filters)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
