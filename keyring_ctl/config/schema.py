"""Pydantic configuration models for keyring-ctl."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class BackendConfig(BaseModel):
    """Which keyring backend to talk to."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["keyring", "memory"] = Field(
        default="keyring",
        description="Secret backend: the OS keyring or a process-local dictionary.",
    )
    keyring_class: Optional[str] = Field(
        default=None,
        description="Dotted path of a keyring backend class, e.g. 'keyring.backends.SecretService.Keyring'.",
    )


class CtlConfig(BaseModel):
    """Top-level configuration file model."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="warning", description="Log level for stderr and file logging.")
    log_file: Optional[str] = Field(
        default=None,
        description="Append log records to this file in addition to stderr.",
    )
    backend: BackendConfig = Field(default_factory=BackendConfig)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return value
