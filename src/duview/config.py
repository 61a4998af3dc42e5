"""Runtime settings for duview."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from duview.sizing import SizePolicy

ENV_PREFIX = "DUVIEW_"


class Settings(BaseModel):
    """Settings read from the environment, overridable from the command line."""

    size_policy: SizePolicy = Field(
        SizePolicy.LOGICAL, description="How on-disk sizes are computed for a scan"
    )
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from DUVIEW_* environment variables."""
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls(**values)
