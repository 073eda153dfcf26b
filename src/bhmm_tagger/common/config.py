"""Run configuration for the tagger, loaded from YAML and validated by pydantic."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


class TaggerConfig(BaseModel):
    """Hyperparameters, annealing schedule and file locations for one run.

    Field aliases match the keys of the configuration file, so ``max`` and
    ``min`` in YAML populate ``max_temperature`` and ``min_temperature``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    alpha: float = Field(gt=0)
    beta: float = Field(gt=0)
    iterations: int = Field(ge=0)
    decrease: int = Field(default=1, ge=1)
    rate: float = Field(default=1.0, gt=0)
    max_temperature: float = Field(default=1.0, gt=0, alias="max")
    min_temperature: float = Field(default=1.0, gt=0, alias="min")
    dbg: int = Field(default=0, ge=0)
    seed: Optional[int] = None

    corpus: Path
    lexicon: Path
    gold: Optional[Path] = None
    out: Path
    log: Optional[Path] = None

    @field_validator("corpus", "lexicon", "gold", "out", "log", mode="before")
    def expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            text = v.strip()
            if not text:
                raise ValueError("path must not be empty")
            return Path(text).expanduser()
        return v

    @model_validator(mode="after")
    def check_temperatures(self) -> "TaggerConfig":
        if self.min_temperature > self.max_temperature:
            raise ValueError(
                f"min temperature {self.min_temperature} exceeds max temperature {self.max_temperature}"
            )
        return self

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "TaggerConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> TaggerConfig:
    """Read and validate the YAML configuration at *path*.

    A missing file is reported as an ``OSError``; unparsable YAML and invalid
    values are reported as :class:`ConfigError`.
    """

    config_path = Path(path)
    text = config_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {config_path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping of settings")

    config = TaggerConfig.from_mapping(data)
    logger.debug("Loaded configuration from %s: %s", config_path, config.model_dump(by_alias=True))
    return config


__all__ = ["DEFAULT_CONFIG_PATH", "TaggerConfig", "load_config"]
