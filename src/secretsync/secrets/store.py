"""Google Secret Manager access for the reconciler."""

from typing import Any, Optional

import structlog
from google.api_core import exceptions as gcp_exceptions
from google.cloud import secretmanager

from .errors import FailureKind, SecretStoreError

logger = structlog.get_logger("secrets.store")

# gRPC status code for NOT_FOUND
NOT_FOUND_CODE = 5

TRANSIENT_ERRORS = (
    gcp_exceptions.ServiceUnavailable,
    gcp_exceptions.DeadlineExceeded,
    gcp_exceptions.TooManyRequests,
    gcp_exceptions.InternalServerError,
    gcp_exceptions.RetryError,
)


def classify_failure(error: BaseException) -> FailureKind:
    """Map a client exception onto a FailureKind."""
    if isinstance(error, gcp_exceptions.NotFound):
        return FailureKind.NOT_FOUND

    grpc_code = getattr(error, "grpc_status_code", None)
    if grpc_code is not None and getattr(grpc_code, "value", (None,))[0] == NOT_FOUND_CODE:
        return FailureKind.NOT_FOUND
    if getattr(error, "code", None) == NOT_FOUND_CODE:
        return FailureKind.NOT_FOUND

    if isinstance(error, TRANSIENT_ERRORS):
        return FailureKind.TRANSIENT
    return FailureKind.OTHER


class SecretStore:
    """Thin wrapper over SecretManagerServiceClient scoped to one project.

    Calls are blocking and made one at a time. Failures surface as
    SecretStoreError; nothing is retried here beyond the client's own defaults.
    """

    def __init__(self, project_id: str, client: Optional[secretmanager.SecretManagerServiceClient] = None):
        self._project_id = project_id
        self._client = client

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        if self._client is None:
            # Credentials come from Application Default Credentials
            self._client = secretmanager.SecretManagerServiceClient()
            logger.debug("Secret Manager client created", project_id=self._project_id)
        return self._client

    @property
    def parent(self) -> str:
        return f"projects/{self._project_id}"

    def secret_path(self, key: str) -> str:
        return f"{self.parent}/secrets/{key}"

    def get_secret(self, key: str) -> Any:
        """Fetch the secret resource; raises SecretStoreError (NOT_FOUND if absent)."""
        return self._call("get_secret", {"name": self.secret_path(key)})

    def create_secret(self, key: str) -> Any:
        """Create the secret resource with automatic replication."""
        return self._call(
            "create_secret",
            {
                "parent": self.parent,
                "secret_id": key,
                "secret": {"replication": {"automatic": {}}},
            },
        )

    def add_secret_version(self, key: str, value: str) -> Any:
        """Append a version holding ``value`` encoded as UTF-8."""
        return self._call(
            "add_secret_version",
            {
                "parent": self.secret_path(key),
                "payload": {"data": value.encode("UTF-8")},
            },
        )

    def access_latest_value(self, key: str) -> Optional[str]:
        """Return the latest version's payload as text.

        None means the response carried no payload data, or data that is not
        valid UTF-8.
        """
        response = self._call("access_secret_version", {"name": f"{self.secret_path(key)}/versions/latest"})

        payload = getattr(response, "payload", None)
        data = getattr(payload, "data", None) if payload is not None else None
        if not isinstance(data, (bytes, bytearray)):
            return None

        try:
            return bytes(data).decode("UTF-8")
        except UnicodeDecodeError:
            logger.debug("Latest version payload is not UTF-8", key=key)
            return None

    def _call(self, operation: str, request: dict) -> Any:
        method = getattr(self.client, operation)
        try:
            return method(request=request)
        except Exception as e:
            kind = classify_failure(e)
            logger.debug(
                "Secret Manager call failed",
                operation=operation,
                kind=kind.value,
                error_type=type(e).__name__,
            )
            raise SecretStoreError(kind, e, operation) from e
