from __future__ import annotations

import json
from pathlib import Path

from result import Err, Ok, Result

from projclean.config.defaults import default_config
from projclean.config.schema import AppConfig

CONFIG_FILENAME = "cleanup-config.json"


def default_config_path(root: Path) -> Path:
    return root / CONFIG_FILENAME


def load_config(path: Path) -> Result[AppConfig, str]:
    if not path.exists():
        return Ok(default_config())

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            return Err(f"Config at {path} must be a JSON object.")
        return Ok(AppConfig.from_dict(payload, default_config()))
    except Exception as exc:  # noqa: BLE001
        return Err(f"Failed reading config at {path}: {exc}.")


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
