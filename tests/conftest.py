"""Global test configuration and fixtures."""

from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as gcp_exceptions
from google.cloud import secretmanager

from secretsync.config.settings import Settings
from secretsync.secrets.store import SecretStore

TEST_PROJECT_ID = "test-project-123"

ACTION_ENV_VARS = (
    "INPUT_PROJECT_ID",
    "PROJECT_ID",
    "INPUT_SECRETS",
    "SECRETS",
    "INPUT_LOG_LEVEL",
    "LOG_LEVEL",
    "STRUCTURED_LOGGING",
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
)


@pytest.fixture(autouse=True)
def clean_action_env(monkeypatch):
    """Keep runner variables of the host from leaking into tests."""
    for name in ACTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_id() -> str:
    return TEST_PROJECT_ID


@pytest.fixture
def test_settings():
    """Settings for a plain local run."""
    return Settings(
        project_id=TEST_PROJECT_ID,
        secrets="KEY_ONE=val1",
        log_level="DEBUG",
    )


def not_found(message: str = "Secret not found") -> gcp_exceptions.NotFound:
    return gcp_exceptions.NotFound(message)


def latest_version(value: bytes) -> secretmanager.AccessSecretVersionResponse:
    return secretmanager.AccessSecretVersionResponse(
        name="projects/test-project-123/secrets/KEY/versions/1",
        payload=secretmanager.SecretPayload(data=value),
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Secret Manager client where every secret is absent and writes succeed."""
    client = MagicMock(spec=secretmanager.SecretManagerServiceClient)
    client.get_secret.side_effect = not_found()
    client.create_secret.return_value = secretmanager.Secret(name="created")
    client.add_secret_version.return_value = secretmanager.SecretVersion(name="version")
    client.access_secret_version.side_effect = not_found("Version not found")
    return client


@pytest.fixture
def store(mock_client, project_id) -> SecretStore:
    return SecretStore(project_id, client=mock_client)


def secret_name(key: str) -> str:
    return f"projects/{TEST_PROJECT_ID}/secrets/{key}"
