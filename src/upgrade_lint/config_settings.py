"""Settings model for the lint tool."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .check.selector import WILDCARD

ENV_PREFIX = "UPGRADE_LINT_"


class Settings(BaseSettings):
    """Defaults for the lint command.

    Values come from (highest first) command-line flags, ``UPGRADE_LINT_*``
    environment variables, a ``.env`` file and the YAML config file.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Cluster access
    kubeconfig: Path | None = Field(
        default=None, description="Path to the kubeconfig file"
    )
    context: str | None = Field(
        default=None, description="Kubeconfig context to use"
    )
    verify_tls: bool = Field(
        default=True, description="Verify the API server certificate"
    )

    # Lint behaviour
    output_format: Literal["table", "json", "yaml"] = Field(default="table")
    checks: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [WILDCARD]
    )
    timeout_seconds: float = Field(default=300.0, gt=0)
    qps: float = Field(default=50.0, gt=0, description="Client-side request rate")
    burst: int = Field(default=100, ge=1, description="Client-side burst capacity")
    fail_on_blocking: bool = Field(default=True)
    fail_on_advisory: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="WARNING")
    log_file: Path | None = Field(default=None)

    @field_validator("output_format", mode="before")
    @classmethod
    def _lower_format(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("checks", mode="before")
    @classmethod
    def _split_checks(cls, v: object) -> object:
        # "a,b" from the environment or a scalar in YAML
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL (got {v!r})"
            raise ValueError(msg)
        return level

    @field_validator("kubeconfig", "log_file", mode="after")
    @classmethod
    def _expand_path(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None
