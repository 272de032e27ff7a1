import logging
from pathlib import Path
from typing import Optional

import pydantic
import pydantic_settings as settings

from .base import Settings
from ..context.context import DuplicateBindingPolicy
from ..utils import expanded_path


class LoggingSettings(pydantic.BaseModel):
    level: str = pydantic.Field(
        default="INFO",
        description="Level of the application logger"
    )

    format: str = pydantic.Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format of the records written by the application logger"
    )

    @pydantic.field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v):
        if isinstance(v, int):
            v = logging.getLevelName(v)
        v = str(v).strip().upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown logging level: {v}")
        return v


class ApplicationSettings(Settings):
    model_config = settings.SettingsConfigDict(
        env_prefix="BINDKIT_",
    )

    name: str = pydantic.Field(
        default="application",
        description="Application name, used for the context name and the application logger"
    )

    config_path: Optional[Path] = pydantic.Field(
        default=None,
        description="YAML or JSON file the settings are loaded from"
    )

    duplicate_bindings: DuplicateBindingPolicy = pydantic.Field(
        default=DuplicateBindingPolicy.OVERWRITE,
        description="What to do when a binding key is added twice: 'overwrite' or 'reject'"
    )

    start_concurrently: bool = pydantic.Field(
        default=True,
        description="Start and stop servers concurrently instead of one after another"
    )

    logging: LoggingSettings = pydantic.Field(default_factory=LoggingSettings)

    @pydantic.field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Application name must not be empty")
        return v

    @pydantic.field_validator("config_path", mode="before")
    @classmethod
    def validate_config_path(cls, v):
        if v is None:
            return v
        return expanded_path(v)
