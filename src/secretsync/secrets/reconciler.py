"""Reconcile desired secret values against Google Secret Manager."""

from enum import Enum

import structlog
from pydantic import BaseModel, Field

from .errors import ReconcileStep, ReconciliationError, SecretStoreError
from .parser import SecretEntry
from .store import SecretStore

logger = structlog.get_logger("secrets.reconciler")


class ChangeAction(str, Enum):
    """What reconciliation did to one secret."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class SecretChange(BaseModel):
    key: str
    action: ChangeAction


class ReconciliationResult(BaseModel):
    """Outcome of a run that finished without a fatal error."""

    changes: list[SecretChange] = Field(default_factory=list)

    @property
    def updated_keys(self) -> list[str]:
        """Keys that were created or got a new version, in processing order."""
        return [c.key for c in self.changes if c.action is not ChangeAction.UNCHANGED]

    def count(self, action: ChangeAction) -> int:
        return sum(1 for c in self.changes if c.action is action)


class SecretReconciler:
    """Applies the minimal set of create/add-version calls for a list of entries.

    Entries are processed strictly in order. The first failure that is not an
    expected NOT_FOUND raises ReconciliationError and later entries are never
    attempted. Writes already made for earlier entries are not rolled back.
    """

    def __init__(self, store: SecretStore):
        self._store = store

    def reconcile(self, entries: list[SecretEntry]) -> ReconciliationResult:
        result = ReconciliationResult()

        for entry in entries:
            log = logger.bind(key=entry.key)
            if self._exists(entry):
                action = self._update(entry, log)
            else:
                action = self._create(entry, log)
            result.changes.append(SecretChange(key=entry.key, action=action))

        logger.info(
            "Reconciliation finished",
            created=result.count(ChangeAction.CREATED),
            updated=result.count(ChangeAction.UPDATED),
            unchanged=result.count(ChangeAction.UNCHANGED),
        )
        return result

    def _exists(self, entry: SecretEntry) -> bool:
        try:
            self._store.get_secret(entry.key)
        except SecretStoreError as e:
            if e.is_not_found:
                return False
            raise ReconciliationError(entry.key, ReconcileStep.CHECK, e) from e
        return True

    def _create(self, entry: SecretEntry, log) -> ChangeAction:
        self._write(entry, ReconcileStep.CREATE, self._store.create_secret, entry.key)
        # No compensating delete if this fails; the secret is left without versions
        self._write(entry, ReconcileStep.ADD_INITIAL_VERSION, self._store.add_secret_version, entry.key, entry.value)
        log.info("Created secret with initial version")
        return ChangeAction.CREATED

    def _update(self, entry: SecretEntry, log) -> ChangeAction:
        try:
            current = self._store.access_latest_value(entry.key)
        except SecretStoreError as e:
            if not e.is_not_found:
                raise ReconciliationError(entry.key, ReconcileStep.ACCESS, e) from e
            log.warning(
                "Secret exists but its latest version is not accessible "
                "(perhaps no enabled versions?). Adding a new version."
            )
            self._add_version(entry, ReconcileStep.ADD_MISSING_VERSION)
            return ChangeAction.UPDATED

        if current is None:
            log.warning("Could not retrieve current data for secret. Adding a new version.")
            self._add_version(entry, ReconcileStep.ADD_VERSION)
            return ChangeAction.UPDATED

        if current == entry.value:
            log.info("Secret is already up-to-date")
            return ChangeAction.UNCHANGED

        self._add_version(entry, ReconcileStep.ADD_VERSION)
        log.info("Updated secret with a new version")
        return ChangeAction.UPDATED

    def _add_version(self, entry: SecretEntry, step: ReconcileStep) -> None:
        self._write(entry, step, self._store.add_secret_version, entry.key, entry.value)

    @staticmethod
    def _write(entry: SecretEntry, step: ReconcileStep, call, *args) -> None:
        try:
            call(*args)
        except SecretStoreError as e:
            raise ReconciliationError(entry.key, step, e) from e
