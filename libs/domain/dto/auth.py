from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


# ----- REGISTER -----
class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    user_name: Optional[str] = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        # уникальность email проверяется без учёта регистра
        return v.lower()


# ----- LOGIN -----
class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    ip: Optional[str] = Field(None, max_length=45, description="IP клиента для трекинга входов")
