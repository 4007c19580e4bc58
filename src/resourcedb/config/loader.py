from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("resourcedb.config.yaml")
DEFAULT_LOG_LEVEL = "INFO"


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load resourcedb configuration from YAML file.

    Args:
        path: Optional path to config file. Defaults to resourcedb.config.yaml

    Returns:
        Dictionary with `database` and `logging` sections, defaults applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    # Validate structure
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    database = config.get("database")
    if not isinstance(database, dict):
        raise ValueError("Config must have a 'database' section")
    if not database.get("url") or not isinstance(database["url"], str):
        raise ValueError("Config 'database' section missing required field: url")
    if "echo" not in database:
        database["echo"] = False
    elif not isinstance(database["echo"], bool):
        raise ValueError("Config 'database.echo' must be a boolean")

    logging_cfg = config.get("logging")
    if logging_cfg is None:
        logging_cfg = config["logging"] = {}
    elif not isinstance(logging_cfg, dict):
        raise ValueError("Config 'logging' must be a dictionary if provided")
    logging_cfg.setdefault("level", DEFAULT_LOG_LEVEL)

    return config
