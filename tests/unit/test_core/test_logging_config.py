"""Unit tests for logging configuration."""
import io
import json
import logging

from spritekeys.core.logging_config import (
    CorrelationContext, get_correlation_id, logging_manager,
)


def test_console_logging_includes_correlation_id():
    stream = io.StringIO()
    logging_manager.configure(log_level="INFO", stream=stream)

    with CorrelationContext("run-42"):
        logging.getLogger("spritekeys.services.discovery").info("searching")

    output = stream.getvalue()
    assert "spritekeys.services.discovery" in output
    assert "run-42" in output
    assert "searching" in output


def test_structured_logging_emits_json():
    stream = io.StringIO()
    logging_manager.configure(log_level="DEBUG", structured_logging=True, stream=stream)

    logging.getLogger("spritekeys.test").info("hello", extra={"trials": 7})

    lines = [line for line in stream.getvalue().splitlines() if '"hello"' in line]
    entry = json.loads(lines[-1])
    assert entry["level"] == "INFO"
    assert entry["logger"] == "spritekeys.test"
    assert entry["extra"]["trials"] == 7


def test_level_filters_records():
    stream = io.StringIO()
    logging_manager.configure(log_level="WARNING", stream=stream)

    logging.getLogger("spritekeys.test").info("quiet")
    logging.getLogger("spritekeys.test").warning("loud")

    assert "quiet" not in stream.getvalue()
    assert "loud" in stream.getvalue()


def test_file_logging_writes_log_file(temp_dir):
    logging_manager.configure(enable_console_logging=False, enable_file_logging=True,
                              log_dir=temp_dir)
    logging.getLogger("spritekeys.test").info("to file")
    logging_manager.shutdown()

    assert "to file" in (temp_dir / "spritekeys.log").read_text(encoding="utf-8")


def test_correlation_context_restores_previous_id():
    with CorrelationContext("outer"):
        with CorrelationContext("inner"):
            assert get_correlation_id() == "inner"
        assert get_correlation_id() == "outer"
    assert get_correlation_id() is None


def test_correlation_context_generates_id():
    with CorrelationContext() as corr_id:
        assert corr_id
        assert get_correlation_id() == corr_id
