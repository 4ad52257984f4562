# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "")


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///tailorshop.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)


class AuthConfig(BaseSettings):
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    token_ttl_days: int = Field(7, ge=1, alias="JWT_EXPIRES_DAYS")
    # werkzeug method string, e.g. "scrypt" or "pbkdf2:sha256:600000"
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")
    min_password_length: int = Field(6, ge=1, alias="MIN_PASSWORD_LENGTH")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(days=self.token_ttl_days)


class SecurityConfig(BaseSettings):
    # Cookie flags for client sessions, applied by ClientSession.from_security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Strict", alias="COOKIE_SAMESITE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # Reverse proxies in front of the app; X-Forwarded-For is ignored when 0
    trusted_proxies: int = Field(0, ge=0, alias="TRUSTED_PROXIES")

    # Rate limiting
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, alias="RL_WINDOW")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", "enable_rate_limit", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _refuse_insecure_production(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in _INSECURE_SECRETS:
            print(
                "\nRefusing to start: SECRET_KEY is a development placeholder.\n"
                "   Tokens signed with it can be forged by anyone who reads the source.\n"
                "   Set SECRET_KEY to a long random value (32+ bytes) and restart.\n",
                file=sys.stderr,
            )
            sys.exit(1)

        issues = self.production_issues()
        if issues:
            print("\nProduction configuration issues:", file=sys.stderr)
            for issue in issues:
                print(f"   - {issue}", file=sys.stderr)

        return self

    def production_issues(self) -> list[str]:
        security = self.security
        issues = []
        if not security.cookie_secure:
            issues.append("COOKIE_SECURE is off, tokens may travel over plain HTTP")
        if security.cookie_samesite.lower() != "strict":
            issues.append(f"COOKIE_SAMESITE is {security.cookie_samesite}, expected Strict")
        if "*" in security.allowed_origins:
            issues.append("ALLOWED_ORIGINS contains '*'")
        if not security.enable_hsts:
            issues.append("ENABLE_HSTS is off")
        return issues

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "SecurityConfig", "load_config"]
