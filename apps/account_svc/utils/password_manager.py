# apps/account_svc/utils/password_manager.py
import secrets

import bcrypt


# bcrypt учитывает только первые 72 байта пароля
BCRYPT_MAX_BYTES = 72


class PasswordManager:
    """Утилита для работы с паролями и одноразовыми токенами."""

    def __init__(self, rounds: int = 12, token_bytes: int = 32):
        self.rounds = rounds
        self.token_bytes = token_bytes

    def hash_password(self, password: str) -> str:
        """Hash пароль с использованием bcrypt."""
        pwd_bytes = password.encode('utf-8')[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed_password = bcrypt.hashpw(pwd_bytes, salt)
        return hashed_password.decode('utf-8')

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Проверяет, соответствует ли plain-пароль хешу."""
        password_bytes = plain_password.encode('utf-8')[:BCRYPT_MAX_BYTES]
        hashed_password_bytes = hashed_password.encode('utf-8')
        return bcrypt.checkpw(password_bytes, hashed_password_bytes)

    def generate_token(self) -> str:
        """URL-safe токен для подтверждения email или разблокировки."""
        return secrets.token_urlsafe(self.token_bytes)
