"""Auth Schemas — credential and token payloads for /login and /register."""

from pydantic import BaseModel, EmailStr, Field, field_validator


class Credentials(BaseModel):
    """Login/register request body."""
    email: EmailStr
    password: str = Field(min_length=1, max_length=256)

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("password cannot be empty or whitespace")
        return v


class RegisterCredentials(Credentials):
    """Register body — server enforces the same minimum the client checks."""
    password: str = Field(min_length=8, max_length=256)


class LoginResponse(BaseModel):
    token: str


class RegisterResponse(BaseModel):
    id: int
    email: str
