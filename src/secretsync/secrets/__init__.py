"""Secret list parsing and reconciliation against Google Secret Manager."""

from .errors import (
    ActionInputError,
    FailureKind,
    ReconcileStep,
    ReconciliationError,
    SecretsFormatError,
    SecretStoreError,
    SecretSyncError,
)
from .parser import SecretEntry, load_entries, parse_secrets, validate_entries
from .reconciler import ChangeAction, ReconciliationResult, SecretChange, SecretReconciler
from .store import SecretStore, classify_failure

__all__ = [
    "ActionInputError",
    "ChangeAction",
    "FailureKind",
    "ReconcileStep",
    "ReconciliationError",
    "ReconciliationResult",
    "SecretChange",
    "SecretEntry",
    "SecretReconciler",
    "SecretStore",
    "SecretStoreError",
    "SecretSyncError",
    "SecretsFormatError",
    "classify_failure",
    "load_entries",
    "parse_secrets",
    "validate_entries",
]
