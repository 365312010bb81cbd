from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticCustomError

from user_management.domain.users.entities import (
    EMAIL_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    UserProfile,
    normalize_email,
)
from user_management.shared.errors.validation_types import ValidationErrorType

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128


def _invalid_email() -> PydanticCustomError:
    return PydanticCustomError(
        ValidationErrorType.EMAIL_INVALID,
        "Invalid email format.",
        {},
    )


def _validate_email(value: Any, handler: ValidatorFunctionWrapHandler) -> str:
    if isinstance(value, str):
        value = value.strip()
    if not value:
        raise PydanticCustomError(
            ValidationErrorType.MISSING,
            "Email is required.",
            {},
        )
    try:
        email = normalize_email(handler(value))
    except ValidationError as exc:
        raise _invalid_email() from exc

    # email-validator accepts single-letter top-level labels.
    if len(email.rpartition("@")[2].rpartition(".")[2]) < 2:
        raise _invalid_email()
    # Checked on the stored form: lower() can lengthen some Unicode strings.
    if len(email) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_TOO_LONG,
            "Email must be at most {max_length} characters.",
            {"max_length": EMAIL_MAX_LENGTH},
        )
    return email


def _validate_password(value: str) -> str:
    if not value:
        raise PydanticCustomError(
            ValidationErrorType.MISSING,
            "Password is required.",
            {},
        )
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError(
            ValidationErrorType.PASSWORD_TOO_SHORT,
            "Password must be at least {min_length} characters.",
            {"min_length": PASSWORD_MIN_LENGTH},
        )
    if len(value) > PASSWORD_MAX_LENGTH:
        raise PydanticCustomError(
            ValidationErrorType.PASSWORD_TOO_LONG,
            "Password must be at most {max_length} characters.",
            {"max_length": PASSWORD_MAX_LENGTH},
        )
    return value


class RegisterRequestDTO(BaseModel):
    email: EmailStr
    username: str
    password: str

    @field_validator("email", mode="wrap")
    @classmethod
    def validate_email(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> str:
        return _validate_email(value, handler)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Username is required.",
                {},
            )
        if len(value) < USERNAME_MIN_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.USERNAME_TOO_SHORT,
                "Username must be at least {min_length} characters.",
                {"min_length": USERNAME_MIN_LENGTH},
            )
        if len(value) > USERNAME_MAX_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.USERNAME_TOO_LONG,
                "Username must be at most {max_length} characters.",
                {"max_length": USERNAME_MAX_LENGTH},
            )
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _validate_password(value)


class LoginRequestDTO(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="wrap")
    @classmethod
    def validate_email(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> str:
        return _validate_email(value, handler)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _validate_password(value)


class UserResponseDTO(BaseModel):
    id: UUID
    email: str
    username: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_profile(cls, profile: UserProfile) -> UserResponseDTO:
        return cls(
            id=profile.id,
            email=profile.email,
            username=profile.username,
            created_at=profile.created_at,
        )


class TokenResponseDTO(BaseModel):
    token: str


class MessageDTO(BaseModel):
    message: str


class UserListResponseDTO(BaseModel):
    message: str = "List of all users."
    users: list[UserResponseDTO]
