from typing import Any, Union
from pathlib import Path

import yaml
import json5  # type: ignore

from .models import Settings


def _load_raw_file(path: Path) -> Any:
    ext = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if ext in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    elif ext in {".json5", ".jsonc", ".json"}:
        data = json5.loads(text)
    else:
        raise ValueError(f"Unsupported config file extension: {ext}")
    return {} if data is None else data


def load_settings(path: Union[str, Path]) -> Settings:
    """
    Load engine and logging settings from a YAML or JSON5 file.
    Raises ValueError (including pydantic ValidationError) on bad input.
    """
    data = _load_raw_file(Path(path).resolve())
    if not isinstance(data, dict):
        raise ValueError("Root configuration must be a mapping/object")
    return Settings.model_validate(data)
