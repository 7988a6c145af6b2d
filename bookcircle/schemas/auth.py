from pydantic import Field, field_validator

from bookcircle.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=1, max_length=256)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class RegisterResponse(CamelModel):
    message: str
    user_id: int


class TokenResponse(CamelModel):
    token: str
    user_id: int
