from __future__ import annotations

from pathlib import Path
from typing import Union

import yaml

from battery_model.io.schema import ModelConfig


def load_config(path: Union[str, Path]) -> ModelConfig:
    """Read and validate the YAML tariff/battery document.

    Any failure here is fatal for a run: OSError for an unreadable file,
    yaml.YAMLError for bad syntax, pydantic.ValidationError for bad values.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return ModelConfig.model_validate(raw)


def apply_overrides(cfg: ModelConfig, **overrides) -> ModelConfig:
    """Return a re-validated copy of cfg with the non-None overrides applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    if not changes:
        return cfg
    return ModelConfig.model_validate({**cfg.model_dump(), **changes})
