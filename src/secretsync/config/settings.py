"""Action configuration using Pydantic Settings.

GitHub exposes every ``with:`` input of an action step as an ``INPUT_<NAME>``
environment variable, so the inputs are read from the environment alongside the
runner's own variables (``GITHUB_OUTPUT``, ``GITHUB_ACTIONS``).
"""

from pydantic import AliasChoices, Field, ValidationError, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..secrets.errors import ActionInputError

REQUIRED_INPUTS = ("project_id", "secrets")


class Settings(BaseSettings):
    """Action settings with environment variable support."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Action inputs
    project_id: str = Field(
        validation_alias=AliasChoices("INPUT_PROJECT_ID", "PROJECT_ID"),
        description="GCP project that owns the secrets",
    )
    secrets: str = Field(
        validation_alias=AliasChoices("INPUT_SECRETS", "SECRETS"),
        description="Comma-separated KEY=VALUE list",
        repr=False,
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("INPUT_LOG_LEVEL", "LOG_LEVEL"),
        description="Logging level",
    )

    # Runner environment
    structured_logging: bool = Field(default=False, description="Emit JSON log lines")
    github_actions: bool = Field(default=False, description="Running inside GitHub Actions")
    github_output: str | None = Field(default=None, description="Path of the step output file")

    @validator("project_id")
    def validate_project_id(cls, v: str) -> str:
        """Reject a blank project identifier."""
        v = v.strip()
        if not v:
            raise ValueError("Input required and not supplied: project_id")
        return v

    @validator("secrets")
    def validate_secrets(cls, v: str) -> str:
        """Reject a blank secrets list."""
        if not v.strip():
            raise ValueError("Input required and not supplied: secrets")
        return v

    @validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level setting."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.strip().upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.strip().upper()

    @property
    def parent(self) -> str:
        """Resource name of the owning project."""
        return f"projects/{self.project_id}"


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, reporting bad inputs as ActionInputError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ActionInputError(_describe_validation_error(e)) from e


def _describe_validation_error(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        loc = item.get("loc") or ()
        field = _field_name(loc[0]) if loc else "input"
        if item.get("type") == "missing" and field in REQUIRED_INPUTS:
            messages.append(f"Input required and not supplied: {field}")
            continue
        msg = item.get("msg", "invalid value")
        # pydantic prefixes errors raised from validators
        msg = msg.removeprefix("Value error, ")
        messages.append(msg if msg.startswith("Input required") else f"Invalid input {field}: {msg}")
    return "; ".join(messages) or str(error)


def _field_name(loc_item) -> str:
    name = str(loc_item).lower()
    return name.removeprefix("input_")
