# libs/utils/logging_setup.py
import os
import logging
import sys
from typing import Any
from logging import Logger

from .json_logging import JsonFormatter, SecretMaskingFilter

# --- Пользовательский уровень SUCCESS ---
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")


def success_log_method(self: Logger, message: str, *args: Any, **kwargs: Any):
    if self.isEnabledFor(SUCCESS_LEVEL_NUM):
        self._log(SUCCESS_LEVEL_NUM, message, args, **kwargs)


setattr(logging.Logger, "success", success_log_method)

# Логгеры модулей сервиса (logging.getLogger(__name__)) живут под этими корнями
SERVICE_LOGGER_ROOTS = ("apps", "libs")
EXTERNAL_LOGGERS = ("gunicorn.error", "gunicorn.access", "uvicorn.error", "uvicorn.access")
SQL_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool", "sqlalchemy.orm", "asyncpg", "aiosqlite")


class LoggerConfig:
    """Читает настройки логирования из окружения."""

    def __init__(self):
        self.container_id = os.getenv("CONTAINER_ID", "account-svc")
        self.console_log_level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(self.console_log_level, int):
            self.console_log_level = logging.INFO
        self.sql_echo = os.getenv("SQL_ECHO", "False").lower() == "true"

    def silence_sql_loggers(self) -> None:
        level = logging.INFO if self.sql_echo else logging.WARNING
        for name in SQL_LOGGERS:
            logging.getLogger(name).setLevel(level)


def get_json_console_handler(level: int, service_name: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter(static_fields={"svc": service_name}))
    handler.addFilter(SecretMaskingFilter())
    return handler


def _attach_console_handler(logger: Logger, level: int, service_name: str) -> None:
    if not any(getattr(h, "_account_svc_console", False) for h in logger.handlers):
        handler = get_json_console_handler(level, service_name)
        setattr(handler, "_account_svc_console", True)
        logger.addHandler(handler)


config = LoggerConfig()
config.silence_sql_loggers()

# Логгер приложения: старт/остановка сервиса, middleware
app_logger = logging.getLogger("account_svc_app_logger")
app_logger.setLevel(logging.DEBUG)
app_logger.propagate = False
_attach_console_handler(app_logger, config.console_log_level, config.container_id)

# Переходы статусов и удаления пишутся через логгеры модулей.
# Как и app_logger, наверх не пробрасываем, иначе под uvicorn строки дублируются.
for root_name in SERVICE_LOGGER_ROOTS:
    service_logger = logging.getLogger(root_name)
    service_logger.propagate = False
    _attach_console_handler(service_logger, config.console_log_level, config.container_id)

# gunicorn/uvicorn пишут в stdout тем же JSON-форматом
for ext_name in EXTERNAL_LOGGERS:
    ext_logger = logging.getLogger(ext_name)
    ext_logger.handlers = [get_json_console_handler(config.console_log_level, "gunicorn")]
    ext_logger.propagate = False
