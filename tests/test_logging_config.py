"""
Test Structured Logging Configuration
"""

import json
import logging

import pytest

from creem.config import get_settings
from creem.handlers.event_router import WebhookEventRouter
from creem.handlers.registry import WebhookHandlers
from creem.utils.logging_config import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    get_webhook_event,
    set_correlation_id,
    setup_logging,
    webhook_event_context,
)
from creem.webhooks.normalizer import normalize_webhook_data
from creem.webhooks.parser import parse_webhook_event


@pytest.fixture
def json_logger(capsys):
    logger = setup_logging("DEBUG")
    yield logger
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    clear_correlation_id()


def test_get_logger_namespaces_under_creem():
    assert get_logger("creem.handlers.event_router").name == "creem.handlers.event_router"
    assert get_logger("tests").name == "creem.tests"


def test_correlation_id_roundtrip():
    generated = set_correlation_id()
    assert get_correlation_id() == generated
    assert set_correlation_id("req-1") == "req-1"
    clear_correlation_id()
    assert get_correlation_id() is None


def test_json_output_includes_correlation_id(json_logger, capsys):
    set_correlation_id("req-42")

    get_logger("tests").info("hello", extra={"event_id": "evt_1"})

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "hello"
    assert record["level"] == "INFO"
    assert record["logger"] == "creem.tests"
    assert record["correlation_id"] == "req-42"
    assert record["event_id"] == "evt_1"


def _last_record(capsys):
    return json.loads(capsys.readouterr().out.strip().splitlines()[-1])


def test_webhook_event_context_tags_records(json_logger, capsys):
    with webhook_event_context("evt_7", "subscription.paid"):
        assert get_webhook_event() == ("evt_7", "subscription.paid")
        get_logger("tests").info("granting access")
        record = _last_record(capsys)

    assert record["event_id"] == "evt_7"
    assert record["event_type"] == "subscription.paid"

    assert get_webhook_event() is None
    get_logger("tests").info("outside")
    assert "event_id" not in _last_record(capsys)


@pytest.mark.asyncio
async def test_dispatch_tags_handler_logs(json_logger, capsys, make_event, subscription_object):
    envelope = parse_webhook_event(json.dumps(make_event("subscription.canceled", subscription_object)))
    handlers = WebhookHandlers(
        on_subscription_canceled=lambda event: get_logger("app").info("canceled")
    )

    await WebhookEventRouter().dispatch(
        envelope, normalize_webhook_data(envelope.object), handlers
    )

    record = _last_record(capsys)
    assert record["message"] == "canceled"
    assert record["event_id"] == "evt_1"
    assert record["event_type"] == "subscription.canceled"


def test_setup_logging_defaults_to_settings_level(monkeypatch):
    monkeypatch.setenv("CREEM_LOG_LEVEL", "warning")
    get_settings.cache_clear()
    try:
        logger = setup_logging()
        assert logger.level == logging.WARNING
    finally:
        get_settings.cache_clear()
        logger.handlers.clear()
        logger.addHandler(logging.NullHandler())
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
