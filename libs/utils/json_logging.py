# libs/utils/json_logging.py
import json
import logging
import re

# --- ФИЛЬТР ДЛЯ МАСКИРОВАНИЯ СЕКРЕТОВ ---

MASKED_KEYS = [
    "password_hash",
    "password",
    "confirmation_token",
    "unlock_token",
    "token",
    "authorization",
]
MASKED_PATTERN = re.compile(r"(\"?)(" + "|".join(MASKED_KEYS) + r")(\"?\s*[:=]\s*[\"'])(.*?)([\"'])", re.IGNORECASE)


class SecretMaskingFilter(logging.Filter):
    """Фильтр, который маскирует чувствительные данные в логах."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.mask_secrets(record.msg)
        if isinstance(record.args, dict):
            record.args = {k: self.mask_secrets(v) if isinstance(v, str) else v for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self.mask_secrets(v) if isinstance(v, str) else v for v in record.args)
        return True

    def mask_secrets(self, message: str) -> str:
        return MASKED_PATTERN.sub(r'\1\2\3***MASKED***\5', message)


# --- JSON ФОРМАТТЕР ---

class JsonFormatter(logging.Formatter):
    """Форматирует записи лога в одну JSON-строку."""

    extra_fields = ["req_id", "account_id", "path", "method", "status", "latency_ms", "err_code"]

    def __init__(self, static_fields: dict | None = None, **kwargs):
        super().__init__(**kwargs)
        self.static_fields = static_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "svc": getattr(record, "svc", self.static_fields.get("svc", "unknown")),
        }

        # Добавляем кастомные поля, если они есть
        for field in self.extra_fields:
            if hasattr(record, field):
                log_record[field] = getattr(record, field)

        if record.exc_info:
            log_record['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)
