# tests/unit/test_json_logging.py
import json
import logging

import pytest

from libs.utils.json_logging import JsonFormatter, SecretMaskingFilter


@pytest.mark.parametrize(
    "message",
    [
        'password="Password123!"',
        "password_hash='$2b$12$abc'",
        '{"confirmation_token": "tok-123"}',
        "unlock_token='tok-456'",
    ],
)
def test_secret_masking(message: str):
    masked = SecretMaskingFilter().mask_secrets(message)
    assert "***MASKED***" in masked
    for secret in ("Password123!", "$2b$12$abc", "tok-123", "tok-456"):
        assert secret not in masked


def test_filter_masks_args():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "login %s", ("password='x1'",), None)
    SecretMaskingFilter().filter(record)
    assert "x1" not in record.getMessage()


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("apps.test", logging.WARNING, __file__, 1, "Account %s banned", (7,), None)
    record.account_id = 7
    payload = json.loads(JsonFormatter(static_fields={"svc": "account-svc"}).format(record))
    assert payload["msg"] == "Account 7 banned"
    assert payload["level"] == "WARNING"
    assert payload["svc"] == "account-svc"
    assert payload["account_id"] == 7


def test_success_level_registered():
    from libs.utils.logging_setup import SUCCESS_LEVEL_NUM, app_logger

    assert logging.getLevelName(SUCCESS_LEVEL_NUM) == "SUCCESS"
    assert callable(getattr(app_logger, "success"))


@pytest.mark.parametrize(("env_value", "expected"), [("debug", logging.DEBUG), ("nonsense", logging.INFO)])
def test_logger_config_reads_level(monkeypatch, env_value, expected):
    from libs.utils.logging_setup import LoggerConfig

    monkeypatch.setenv("LOG_LEVEL", env_value)
    assert LoggerConfig().console_log_level == expected


@pytest.mark.parametrize("root_name", ["apps", "libs"])
def test_service_loggers_write_once(root_name):
    from libs.utils.logging_setup import _attach_console_handler, config

    logger = logging.getLogger(root_name)
    _attach_console_handler(logger, config.console_log_level, config.container_id)

    assert logger.propagate is False
    assert len([h for h in logger.handlers if getattr(h, "_account_svc_console", False)]) == 1
