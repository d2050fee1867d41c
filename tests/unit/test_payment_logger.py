"""Unit tests for the structured payment logger"""

import io
import json
import logging
from datetime import datetime

import pytest
from payment_core.infrastructure.observability.logging import (
    CustomJsonFormatter,
    PAYMENT_LOGGER_NAME,
    PaymentLogger,
    payment_logger,
)


@pytest.fixture
def json_stream():
    """PaymentLogger writing JSON lines into a buffer"""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))

    logger = logging.getLogger("tests.payment_json")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    yield PaymentLogger(logger), stream

    logger.handlers = []


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_record_shape(json_stream):
    logger, stream = json_stream
    logger.info("refund_issued", {"amount_minor": 1050, "currency": "NGN"})

    [record] = _lines(stream)
    assert record["level"] == "INFO"
    assert record["service"] == "payment"
    assert record["operation"] == "refund_issued"
    assert record["amount_minor"] == 1050
    assert record["currency"] == "NGN"
    assert datetime.fromisoformat(record["timestamp"])


def test_levels(json_stream):
    logger, stream = json_stream
    logger.info("a")
    logger.warn("b")
    logger.error("c")

    assert [r["level"] for r in _lines(stream)] == ["INFO", "WARNING", "ERROR"]


def test_reserved_keys_are_prefixed(json_stream):
    """Keys logging reserves for itself do not raise"""
    logger, stream = json_stream
    logger.info("payout_created", {"message": "hello", "args": [1, 2]})

    [record] = _lines(stream)
    assert record["data_message"] == "hello"
    assert record["data_args"] == [1, 2]


async def test_track_operation_success(payment_logs):
    async def charge():
        return {"reference": "ref_123"}

    result = await payment_logger.track_operation("charge", {"provider": "paystack"}, charge)

    assert result == {"reference": "ref_123"}
    records = [r for r in payment_logs.records if r.name == PAYMENT_LOGGER_NAME]
    assert [r.getMessage() for r in records] == ["charge_started", "charge_completed"]

    started, completed = records
    assert started.correlation_id == completed.correlation_id
    assert completed.provider == "paystack"
    assert completed.duration_ms >= 0


async def test_track_operation_reraises_identical_error(payment_logs):
    error = RuntimeError("provider exploded")

    async def charge():
        raise error

    with pytest.raises(RuntimeError) as exc_info:
        await payment_logger.track_operation("charge", {}, charge)

    assert exc_info.value is error
    failed = [r for r in payment_logs.records if r.getMessage() == "charge_failed"]
    assert len(failed) == 1
    assert failed[0].levelname == "ERROR"
    assert failed[0].error == "provider exploded"
    assert failed[0].duration_ms >= 0


async def test_track_operation_uses_fresh_correlation_ids(payment_logs):
    async def noop():
        return None

    await payment_logger.track_operation("ping", None, noop)
    await payment_logger.track_operation("ping", None, noop)

    ids = {r.correlation_id for r in payment_logs.records if r.name == PAYMENT_LOGGER_NAME}
    assert len(ids) == 2
