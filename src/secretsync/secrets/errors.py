"""Error types raised while reconciling secrets."""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of a failed Secret Manager call."""

    NOT_FOUND = "not_found"
    TRANSIENT = "transient"
    OTHER = "other"


class ReconcileStep(str, Enum):
    """Stage of reconciliation a key was in when a call failed.

    The value reads naturally inside ``Error <step> <key>`` messages.
    """

    CHECK = "checking secret"
    CREATE = "creating secret"
    ADD_INITIAL_VERSION = "adding initial version to secret"
    ACCESS = "accessing secret"
    ADD_VERSION = "adding version to secret"
    ADD_MISSING_VERSION = "adding version to secret with no accessible latest version"


class SecretSyncError(Exception):
    """Base class for every failure reported by the action."""


class ActionInputError(SecretSyncError):
    """An action input is missing or malformed."""


class SecretsFormatError(SecretSyncError):
    """The secrets list contains an entry that cannot be reconciled."""


class SecretStoreError(SecretSyncError):
    """A Secret Manager call failed.

    Every client failure is wrapped in this type so callers branch on ``kind``
    instead of inspecting the underlying exception.
    """

    def __init__(self, kind: FailureKind, cause: BaseException, operation: str = ""):
        self.kind = kind
        self.cause = cause
        self.operation = operation
        super().__init__(str(cause))

    @property
    def is_not_found(self) -> bool:
        return self.kind is FailureKind.NOT_FOUND

    @property
    def detail(self) -> str:
        """Human readable text of the underlying failure, empty if it has none."""
        text = str(self.cause).strip()
        if not text:
            text = (getattr(self.cause, "message", "") or "").strip()
        return text


class ReconciliationError(SecretSyncError):
    """Fatal failure that aborted the batch at ``key``."""

    def __init__(self, key: str, step: ReconcileStep, error: SecretStoreError):
        self.key = key
        self.step = step
        self.error = error
        super().__init__(self._format())

    def _format(self) -> str:
        detail = self.error.detail
        if not detail:
            return f"An unknown error occurred while {self.step.value} {self.key}"
        message = f"Error {self.step.value} {self.key}: {detail}"
        if self.step is ReconcileStep.ADD_INITIAL_VERSION:
            message += " (the secret was created and may have no versions)"
        return message

    @property
    def kind(self) -> FailureKind:
        return self.error.kind
