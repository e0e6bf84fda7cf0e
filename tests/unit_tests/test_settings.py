import pytest
from pydantic import ValidationError

from tracker_api.config.settings import Settings


def test_invalid_mode_is_rejected():
    with pytest.raises(ValidationError):
        Settings(deployment_mode="staging")
    with pytest.raises(ValidationError):
        Settings(deployment_mode="cloud")


def test_aws_mock_defaults(monkeypatch):
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)

    settings = Settings(deployment_mode="aws-mock")

    assert settings.aws_endpoint_url == "http://localhost:5000"
    assert settings.aws_access_key_id == "mock"
    assert settings.uses_s3


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MEETING_ID_PREFIX", "ZN")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.meeting_id_prefix == "ZN"
    assert settings.log_level == "DEBUG"


def test_only_aws_modes_use_s3():
    assert not Settings(deployment_mode="local-dev").uses_s3
    assert Settings(deployment_mode="aws-prod").uses_s3


def test_max_upload_bytes_from_environment(monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "1024")

    assert Settings().max_upload_bytes == 1024
    assert Settings(max_upload_bytes=5).max_upload_bytes == 5
    with pytest.raises(ValidationError):
        Settings(max_upload_bytes=0)
