from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from salary_explorer.config.model import ExplorerConfig, GlobalConfig
from salary_explorer.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _resolve_data_path(root: Path, raw_path: str) -> Path:
    """
    Absolute paths are used as-is. Relative paths are resolved against
    SALARY_EXPLORER_DATA_ROOT when set, otherwise against the config root.
    """
    path = Path(raw_path)
    if path.is_absolute():
        return path

    data_root = os.environ.get("SALARY_EXPLORER_DATA_ROOT")
    if data_root:
        return (Path(data_root) / path).resolve()

    return (root / path).resolve()


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    global.json keys:

    - ui_title: title for UI, defaults to 'Salary Explorer'
    - subtitle: navbar subtitle
    - data_path: CSV with the salary records (required)
    - explorer: optional block of {@link ExplorerConfig} overrides

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if the file is not valid JSON or has invalid values.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw_global = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw_global, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    raw_data_path = raw_global.get("data_path")
    if not raw_data_path:
        raise ConfigError(f"'data_path' is required in {global_path}")

    try:
        explorer = ExplorerConfig.from_raw(raw_global.get("explorer", {}))
    except TypeError as e:
        raise ConfigError(f"Invalid explorer config in {global_path}: {e}") from e

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Salary Explorer"),
        subtitle=raw_global.get("subtitle", "Data science job salaries"),
        data_path=_resolve_data_path(root, raw_data_path),
        explorer=explorer,
        source_path=global_path,
    )
