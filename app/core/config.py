"""
Configuration Management with AWS SSM Parameter Store Support
Loads the token hashing secret from AWS SSM or environment variables.
"""
from functools import lru_cache
from typing import Optional

import boto3
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with AWS SSM integration for secrets."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "session-guard"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Debug mode")
    ENVIRONMENT: str = Field(default="production", description="Environment name")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    # Binding store (Redis)
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for session bindings",
    )
    REDIS_SOCKET_TIMEOUT: float = Field(
        default=2.0, description="Redis connect/read timeout in seconds"
    )
    SESSION_KEY_PREFIX: str = Field(
        default="session_binding:", description="Key namespace for bindings"
    )
    SESSION_BINDING_TTL_SECONDS: Optional[int] = Field(
        default=None, description="Expiry applied on bind (unset = no expiry)"
    )

    # Request shaping
    SESSION_COOKIE_NAME: str = Field(
        default="session_token", description="Cookie carrying the session token"
    )
    FINGERPRINT_HEADER: str = Field(
        default="X-Client-Fingerprint",
        description="Header carrying the client fingerprint",
    )

    # AWS SSM Configuration
    AWS_REGION: str = Field(default="us-east-1", description="AWS region for SSM")
    AWS_SSM_ENABLED: bool = Field(
        default=False, description="Enable AWS SSM Parameter Store"
    )

    # Token hashing (HMAC-SHA256 when a secret is configured)
    TOKEN_HASH_SECRET_SSM_PATH: Optional[str] = Field(
        default="/prod/session-guard/token_hash_secret",
        description="SSM path for the token hashing secret",
    )
    TOKEN_HASH_SECRET: Optional[str] = Field(
        default=None, description="Token hashing secret - fallback to env"
    )

    @field_validator("SESSION_BINDING_TTL_SECONDS")
    @classmethod
    def validate_binding_ttl(cls, v: Optional[int]) -> Optional[int]:
        """A TTL, when given, must be positive."""
        if v is not None and v <= 0:
            raise ValueError("SESSION_BINDING_TTL_SECONDS must be positive")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    def __init__(self, **kwargs):
        """Initialize settings and load secrets from AWS SSM if enabled."""
        super().__init__(**kwargs)
        if self.AWS_SSM_ENABLED:
            self._load_secrets_from_ssm()

    def _load_secrets_from_ssm(self) -> None:
        """Load sensitive values from AWS SSM Parameter Store."""
        try:
            ssm_client = boto3.client("ssm", region_name=self.AWS_REGION)

            if self.TOKEN_HASH_SECRET_SSM_PATH and not self.TOKEN_HASH_SECRET:
                try:
                    response = ssm_client.get_parameter(
                        Name=self.TOKEN_HASH_SECRET_SSM_PATH, WithDecryption=True
                    )
                    self.TOKEN_HASH_SECRET = response["Parameter"]["Value"]
                except ssm_client.exceptions.ParameterNotFound:
                    pass  # Fallback to env var

        except Exception as e:
            # Local development runs without AWS credentials
            if self.DEBUG:
                print(f"Warning: Could not load from SSM: {e}. Using environment variables.")

    @property
    def token_hash_secret_bytes(self) -> Optional[bytes]:
        """Get the token hashing secret as bytes, if configured."""
        if not self.TOKEN_HASH_SECRET:
            return None
        return self.TOKEN_HASH_SECRET.encode("utf-8")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()
