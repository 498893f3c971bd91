"""
Entry point of the Google Secret Manager sync action.

Reads the ``project_id`` and ``secrets`` inputs, reconciles every ``KEY=VALUE``
entry against Secret Manager and publishes the keys that changed as the
``updated_secrets`` step output.
"""

import sys
from typing import Optional

import structlog
from pydantic import BaseModel, Field

from .config.settings import Settings, load_settings
from .github.commands import set_failed, set_output
from .secrets.errors import ActionInputError, ReconciliationError, SecretsFormatError
from .secrets.parser import load_entries
from .secrets.reconciler import SecretChange, SecretReconciler
from .secrets.store import SecretStore
from .utils.logging import setup_logging

logger = structlog.get_logger(__name__)

OUTPUT_NAME = "updated_secrets"


class ActionResult(BaseModel):
    """Single outcome of a run: either the updated keys or the failure message."""

    updated_keys: list[str] = Field(default_factory=list)
    changes: list[SecretChange] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run(settings: Settings, store: Optional[SecretStore] = None) -> ActionResult:
    """Parse, validate and reconcile; expected failures become ``error``."""
    try:
        entries = load_entries(settings.secrets)
        logger.info("Parsed secrets", count=len(entries), project_id=settings.project_id)

        reconciler = SecretReconciler(store or SecretStore(settings.project_id))
        result = reconciler.reconcile(entries)

    except SecretsFormatError as e:
        return ActionResult(error=str(e))
    except ReconciliationError as e:
        logger.debug("Reconciliation aborted", key=e.key, step=e.step.name, kind=e.kind.value)
        return ActionResult(error=str(e))

    return ActionResult(updated_keys=result.updated_keys, changes=result.changes)


def main(store: Optional[SecretStore] = None) -> int:
    """Run the action and return its exit code."""
    try:
        settings = load_settings()
    except ActionInputError as e:
        return set_failed(str(e))

    setup_logging(settings)

    try:
        outcome = run(settings, store=store)
    except Exception as e:
        logger.debug("Unexpected failure", error_type=type(e).__name__, exc_info=True)
        return set_failed(str(e) or "An unknown error occurred during action execution.")

    if not outcome.ok:
        return set_failed(outcome.error)

    set_output(OUTPUT_NAME, outcome.updated_keys, path=settings.github_output)
    logger.info("Secrets reconciled", updated=len(outcome.updated_keys), total=len(outcome.changes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
