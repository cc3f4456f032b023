# apps/account_svc/config/settings_account.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccountServiceSettings(BaseSettings):
    """
    Централизованные настройки сервиса аккаунтов.
    Pydantic автоматически читает их из .env файла или переменных окружения.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Подключение к БД
    DATABASE_URL: str
    DB_SCHEMA: str = "auth"
    DB_ECHO: bool = False

    # Настройки безопасности
    AUTH_PASSWORD_BCRYPT_ROUNDS: int = 12
    CONFIRMATION_TOKEN_BYTES: int = 32

    # Блокировка после неудачных попыток входа
    LOCK_MAX_ATTEMPTS: int = 3
    LOCK_UNLOCK_IN_SEC: int = 3600
