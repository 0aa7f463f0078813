import logging

import pytest

from dashcam_mosaic.utils.logging_utils import (
    StructuredLogger,
    clear_logging_context,
    get_logging_context,
    log_operation,
    set_logging_context,
)


@pytest.fixture(autouse=True)
def _reset_context():
    clear_logging_context()
    yield
    clear_logging_context()


def test_context_is_attached_to_records(caplog):
    set_logging_context(event="2019-09-20_12-34-56")
    logger = StructuredLogger("dashcam_mosaic.test")

    with caplog.at_level(logging.INFO, logger="dashcam_mosaic.test"):
        logger.info("joined", extra={"camera": "front"})

    record = caplog.records[-1]
    assert record.event == "2019-09-20_12-34-56"
    assert record.camera == "front"


def test_set_context_merges_keys():
    set_logging_context(event="a")
    set_logging_context(camera="front")

    assert get_logging_context() == {"event": "a", "camera": "front"}
    clear_logging_context()
    assert get_logging_context() == {}


def test_log_operation_logs_failure_and_reraises(caplog):
    @log_operation("explode")
    def explode():
        raise ValueError("nope")

    with caplog.at_level(logging.INFO):
        with pytest.raises(ValueError):
            explode()

    messages = [r.getMessage() for r in caplog.records]
    assert "Starting explode" in messages
    assert "Failed explode" in messages
    assert caplog.records[-1].error_type == "ValueError"


def test_log_operation_returns_result(caplog):
    @log_operation("add")
    def add(a, b):
        return a + b

    with caplog.at_level(logging.INFO):
        assert add(1, 2) == 3
    assert "Completed add" in caplog.text
