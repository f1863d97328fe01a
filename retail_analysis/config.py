from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

REQUIRED_SECTIONS = ("source", "output")


def load_config(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """
    Load the pipeline configuration from YAML.

    Falls back to the packaged config.yaml. Missing optional sections are
    filled with their defaults.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    missing = [section for section in REQUIRED_SECTIONS if section not in config]
    if missing:
        raise ValueError(f"Configuration sections {missing} missing in {config_path}")
    if not config["source"].get("path"):
        raise ValueError(f"source.path missing in {config_path}")
    if not config["output"].get("folder"):
        raise ValueError(f"output.folder missing in {config_path}")

    config.setdefault("logging", {}).setdefault("level", "INFO")
    analytics = config.setdefault("analytics", {})
    analytics.setdefault("max_workers", 1)
    analytics["queries"] = analytics.get("queries") or {}
    config["source"].setdefault("date_format", "%Y-%m-%d")
    config["source"]["column_aliases"] = config["source"].get("column_aliases") or {}

    return config
