from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from portal.shared.logging import logger


class LoginRequestDTO(BaseModel):
    # No length or charset rules: anything that does not match the configured
    # pair is simply rejected by the login use case.
    username: str = ""
    password: str = ""

    @field_validator("username", "password")
    @classmethod
    def _encodable(cls, value: str) -> str:
        # JSON may carry lone surrogates that have no UTF-8 form.
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError("credential is not valid UTF-8") from exc
        return value

    @classmethod
    def from_payload(cls, payload: Any) -> "LoginRequestDTO":
        """Build credentials from a request body, treating malformed input as empty."""
        if not isinstance(payload, dict):
            return cls()
        try:
            return cls.model_validate(
                {key: payload.get(key) or "" for key in ("username", "password")}
            )
        except ValidationError:
            logger.debug("auth.login: malformed credentials payload")
            return cls()


class LoginSuccessDTO(BaseModel):
    ok: bool = True
    redirect: str


class LoginFailureDTO(BaseModel):
    ok: bool = False
    error: str


class UserDTO(BaseModel):
    username: str


class MeResponseDTO(BaseModel):
    user: UserDTO
