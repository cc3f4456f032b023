from enum import Enum
from fastapi import status


class ErrorCode(str, Enum):
    # Auth
    AUTH_INVALID_CREDENTIALS = "auth.invalid_credentials"
    AUTH_USER_EXISTS = "auth.user_exists"
    AUTH_ACCOUNT_LOCKED = "auth.account_locked"
    AUTH_UNCONFIRMED = "auth.unconfirmed"
    AUTH_TOKEN_INVALID = "auth.token_invalid"

    # Account
    ACCOUNT_NOT_FOUND = "account.not_found"

    # Common
    INTERNAL_ERROR = "common.internal_error"


# Карта для преобразования кодов ошибок в HTTP статусы
ERROR_CODE_TO_HTTP_STATUS = {
    ErrorCode.AUTH_INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_USER_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.AUTH_ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    ErrorCode.AUTH_UNCONFIRMED: status.HTTP_403_FORBIDDEN,
    ErrorCode.AUTH_TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_http_status(error_code: str) -> int:
    """Возвращает HTTP статус для кода ошибки, по умолчанию 500."""
    return ERROR_CODE_TO_HTTP_STATUS.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
