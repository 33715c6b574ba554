"""Environment-driven settings and logging setup.

Environment variables:
    MUTATOR_MATCH_TYPE: ``field_name`` (default) or ``type_qualified``.
    MUTATOR_CHECK_TYPES: check hook results against declared field types
        (default ``true``).
    MUTATOR_MASK: mask used by the CLI and `MutatorSettings.mask_hook`.
    MUTATOR_LOG_LEVEL: level applied by `configure_logging` (default ``WARNING``).
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from .defaults import DEFAULT_MASK, MaskHook
from .engine import MatchType
from .utils import ConfigurationError

__all__ = ["MutatorSettings", "configure_logging"]

LOG_FORMAT = "[%(asctime)s] [%(levelname)-5s] [%(name)s:%(lineno)d] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class MutatorSettings(BaseModel):
    """Settings for building a `Mutator` and for the command line."""

    model_config = ConfigDict(frozen=True)

    match_type: MatchType = MatchType.FIELD_NAME
    check_types: bool = True
    mask: str = DEFAULT_MASK
    log_level: str = "WARNING"

    @field_validator("match_type", mode="before")
    @classmethod
    def _parse_match_type(cls, value: object) -> MatchType:
        return MatchType.parse(value)  # type: ignore[arg-type]

    @field_validator("check_types", mode="before")
    @classmethod
    def _parse_bool(cls, value: object) -> object:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(f"expected a boolean, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MutatorSettings":
        """Read settings from `environ` (``os.environ`` by default).

        Raises:
            ConfigurationError: if any variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        raw = {
            "match_type": env.get("MUTATOR_MATCH_TYPE", "field_name"),
            "check_types": env.get("MUTATOR_CHECK_TYPES", "true"),
            "mask": env.get("MUTATOR_MASK", DEFAULT_MASK),
            "log_level": env.get("MUTATOR_LOG_LEVEL", "WARNING"),
        }
        try:
            return cls(**raw)
        except PydanticValidationError as e:
            fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise ConfigurationError(
                f"Invalid mutator settings: {', '.join(fields)}",
                [
                    "MUTATOR_MATCH_TYPE must be 'field_name' or 'type_qualified'",
                    "MUTATOR_CHECK_TYPES must be true/false",
                    "MUTATOR_LOG_LEVEL must be a logging level name",
                ],
                {"invalid_fields": fields, "errors": [err["msg"] for err in e.errors()]},
            ) from e

    def mask_hook(self) -> MaskHook:
        return MaskHook(self.mask)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging in the package's standard format."""
    logging.basicConfig(
        level=(level or os.getenv("MUTATOR_LOG_LEVEL", "WARNING")).upper(),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
