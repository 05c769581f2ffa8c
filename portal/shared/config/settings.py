# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parents[2]

INSECURE_SECRETS = ("dev-secret", "cambia-esto-por-un-secreto-fuerte", "dev", "")

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


def _parse_flag(value: str | bool | None) -> bool | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


class SessionConfig(BaseSettings):
    secret: str = Field("dev-secret", alias="SESSION_SECRET")
    ttl_seconds: int = Field(60 * 60 * 8, ge=1, alias="SESSION_TTL")
    cookie_name: str = Field("sid", min_length=1, alias="SESSION_COOKIE_NAME")

    model_config = _SECTION_CONFIG


class CredentialsConfig(BaseSettings):
    username: str = Field("prueba", alias="DEMO_USER")
    password: str = Field("1234", alias="DEMO_PASS")

    model_config = _SECTION_CONFIG

    def is_default(self) -> bool:
        return (self.username, self.password) == ("prueba", "1234")


class ServerConfig(BaseSettings):
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    public_dir: Path = Field(_PACKAGE_ROOT / "public", alias="PUBLIC_DIR")
    views_dir: Path = Field(_PACKAGE_ROOT / "views", alias="VIEWS_DIR")

    model_config = _SECTION_CONFIG


class SecurityConfig(BaseSettings):
    # None means "secure only in production"
    cookie_secure: bool | None = Field(None, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # Reverse proxy (X-Forwarded-*)
    trust_proxy: bool = Field(False, alias="TRUST_PROXY")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", mode="before")
    @classmethod
    def _parse_optional_bool(cls, value: str | bool | None) -> bool | None:
        if isinstance(value, str) and not value.strip():
            return None
        return _parse_flag(value)

    @field_validator("trust_proxy", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return bool(_parse_flag(value))


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _credentials_config_factory() -> CredentialsConfig:
    return CredentialsConfig()  # type: ignore[call-arg]


def _server_config_factory() -> ServerConfig:
    return ServerConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")

    session: SessionConfig = Field(default_factory=_session_config_factory)
    credentials: CredentialsConfig = Field(default_factory=_credentials_config_factory)
    server: ServerConfig = Field(default_factory=_server_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return bool(_parse_flag(value))

    @field_validator("log_file", mode="before")
    @classmethod
    def _empty_log_file(cls, value: str | Path | None) -> str | Path | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.session.secret in INSECURE_SECRETS:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SESSION_SECRET detected in production!\n"
                "   SESSION_SECRET must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if self.credentials.is_default():
            warnings.append("⚠️  Demo credentials are the built-in defaults (set DEMO_USER/DEMO_PASS)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider fixing these settings in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def secure_cookies(self) -> bool:
        if self.security.cookie_secure is None:
            return self.is_production()
        return self.security.cookie_secure


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "CredentialsConfig",
    "SecurityConfig",
    "ServerConfig",
    "SessionConfig",
    "load_config",
]
