import copy
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "compiler": "capnp",
    # Searched after any paths the caller passes in.
    "import_paths": [],
    # Seconds; None waits forever.
    "timeout": 30.0,
}


def _is_number_or_none(value: Any) -> bool:
    return value is None or (isinstance(value, (int, float)) and not isinstance(value, bool))


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


# A user value replaces the default only when it passes its check.
_VALIDATORS: Dict[str, Callable[[Any], bool]] = {
    "compiler": lambda value: isinstance(value, str) and bool(value),
    "import_paths": _is_str_list,
    "timeout": _is_number_or_none,
}


class ConfigManager:
    """
    User settings stored as JSON in ~/.capnls/config.json.
    Missing keys fall back to DEFAULT_CONFIG.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".capnls"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = copy.deepcopy(DEFAULT_CONFIG)
        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)
            return config

        if not isinstance(user_config, dict):
            logger.warning("Ignoring config %s: expected a JSON object", self.config_file)
            return config

        for key, value in user_config.items():
            validator = _VALIDATORS.get(key)
            if validator is not None and not validator(value):
                logger.warning(
                    "Ignoring %r in %s: invalid value %r, using %r",
                    key, self.config_file, value, DEFAULT_CONFIG[key],
                )
                continue
            config[key] = value
        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()
