import io
import json

import pytest
import structlog

from core import logging_config
from core.logging_config import (
    REDACTED,
    build_pre_chain,
    configure_logging,
    redact_secrets,
)


def test_redacts_published_and_source_secret_names():
    event = redact_secrets(None, "info", {
        "event": "config_resolved",
        "DB_PASSWORD": "hunter2",
        "WP_AUTH_KEY": "k",
        "NONCE_SALT": "s",
        "REDIS_PASSWORD": "r",
        "DB_NAME": "wordpress",
    })
    assert event == {
        "event": "config_resolved",
        "DB_PASSWORD": REDACTED,
        "WP_AUTH_KEY": REDACTED,
        "NONCE_SALT": REDACTED,
        "REDIS_PASSWORD": REDACTED,
        "DB_NAME": "wordpress",
    }


def test_redacts_nested_mappings_and_password_like_keys():
    event = redact_secrets(None, "info", {
        "event": "ping",
        "db_password": "x",
        "constants": {"AUTH_SALT": "s", "WP_HOME": "https://example.com"},
    })
    assert event["db_password"] == REDACTED
    assert event["constants"] == {"AUTH_SALT": REDACTED, "WP_HOME": "https://example.com"}


def test_event_name_is_never_masked():
    event = redact_secrets(None, "info", {"event": "DB_PASSWORD"})
    assert event["event"] == "DB_PASSWORD"


def test_pre_chain_ends_with_redaction():
    assert build_pre_chain()[-1] is redact_secrets


@pytest.fixture
def captured_log(monkeypatch):
    monkeypatch.setattr(logging_config.settings, "DEBUG", False)
    stream = io.StringIO()
    configure_logging(stream)
    yield stream
    configure_logging()


def test_secret_values_do_not_reach_log_output(captured_log):
    structlog.get_logger("tests.logging").info(
        "config_resolved", DB_PASSWORD="hunter2", DB_USER="wp"
    )
    line = captured_log.getvalue().strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "config_resolved"
    assert record["DB_PASSWORD"] == REDACTED
    assert record["DB_USER"] == "wp"
    assert "hunter2" not in captured_log.getvalue()
