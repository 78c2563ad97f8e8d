from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("SESSION_BINDING_TTL_SECONDS", raising=False)
    settings = Settings(_env_file=None)

    assert settings.SESSION_KEY_PREFIX == "session_binding:"
    assert settings.SESSION_BINDING_TTL_SECONDS is None
    assert settings.AWS_SSM_ENABLED is False
    assert settings.token_hash_secret_bytes is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SESSION_BINDING_TTL_SECONDS", "600")
    monkeypatch.setenv("TOKEN_HASH_SECRET", "pepper")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.SESSION_BINDING_TTL_SECONDS == 600
    assert settings.token_hash_secret_bytes == b"pepper"
    assert settings.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("ttl", ["0", "-5"])
def test_rejects_non_positive_ttl(monkeypatch, ttl):
    monkeypatch.setenv("SESSION_BINDING_TTL_SECONDS", ttl)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


# =============================================================================
# AWS SSM secret loading
# =============================================================================


def ssm_client_returning(value):
    ssm_client = MagicMock()
    ssm_client.get_parameter.return_value = {"Parameter": {"Value": value}}
    return ssm_client


def test_ssm_secret_loaded_when_env_unset(monkeypatch):
    monkeypatch.setenv("AWS_SSM_ENABLED", "true")
    monkeypatch.delenv("TOKEN_HASH_SECRET", raising=False)
    ssm_client = ssm_client_returning("ssmpepper")
    monkeypatch.setattr("app.core.config.boto3.client", MagicMock(return_value=ssm_client))

    settings = Settings(_env_file=None)

    assert settings.TOKEN_HASH_SECRET == "ssmpepper"
    ssm_client.get_parameter.assert_called_once_with(
        Name="/prod/session-guard/token_hash_secret", WithDecryption=True
    )


def test_env_secret_takes_precedence_over_ssm(monkeypatch):
    monkeypatch.setenv("AWS_SSM_ENABLED", "true")
    monkeypatch.setenv("TOKEN_HASH_SECRET", "envpepper")
    ssm_client = ssm_client_returning("ssmpepper")
    monkeypatch.setattr("app.core.config.boto3.client", MagicMock(return_value=ssm_client))

    settings = Settings(_env_file=None)

    assert settings.TOKEN_HASH_SECRET == "envpepper"
    ssm_client.get_parameter.assert_not_called()


def test_ssm_failure_falls_back_to_env(monkeypatch):
    monkeypatch.setenv("AWS_SSM_ENABLED", "true")
    monkeypatch.setenv("TOKEN_HASH_SECRET", "envpepper")
    monkeypatch.setattr(
        "app.core.config.boto3.client", MagicMock(side_effect=RuntimeError("no credentials"))
    )

    settings = Settings(_env_file=None)

    assert settings.TOKEN_HASH_SECRET == "envpepper"


def test_ssm_failure_without_env_leaves_secret_unset(monkeypatch):
    monkeypatch.setenv("AWS_SSM_ENABLED", "true")
    monkeypatch.delenv("TOKEN_HASH_SECRET", raising=False)
    ssm_client = MagicMock()
    ssm_client.exceptions.ParameterNotFound = type("ParameterNotFound", (Exception,), {})
    ssm_client.get_parameter.side_effect = RuntimeError("throttled")
    monkeypatch.setattr("app.core.config.boto3.client", MagicMock(return_value=ssm_client))

    settings = Settings(_env_file=None)

    assert settings.TOKEN_HASH_SECRET is None
    assert settings.token_hash_secret_bytes is None
