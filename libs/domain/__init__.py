from .dto.auth import (
    RegisterRequest as RegisterRequest,
    LoginRequest as LoginRequest,
)
