import json
from pathlib import Path

from utils.logging_setup import get_logger
from utils.utils import Utils

logger = get_logger("config")


class ConfigManager:
    """Editor settings read from configs/default_config.json.

    Values in configs/user_config.json override the defaults key by key, so a
    user config only needs to hold what it changes. Keys are addressed with
    dot notation, e.g. "document.extension".
    """
    CONFIGS_DIR_LOC = Path(__file__).parent.parent / "configs"

    def __init__(self, config_dir=None):
        self.config_dir = Path(config_dir) if config_dir else ConfigManager.CONFIGS_DIR_LOC
        self.default_config_path = self.config_dir / "default_config.json"
        self.user_config_path = self.config_dir / "user_config.json"
        self.user_config = {}
        self.config = self.load_config()

    @staticmethod
    def _read_json(path, description) -> dict:
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load {description} config from {path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {description} config {path}, top level is not an object")
            return {}
        return data

    def load_config(self) -> dict:
        """Load the default and user configs and return them merged."""
        if not self.default_config_path.exists():
            logger.warning(f"Default config file not found at {self.default_config_path}")
        default_config = self._read_json(self.default_config_path, "default")
        self.user_config = self._read_json(self.user_config_path, "user")
        config = self.merge_configs(default_config, self.user_config)

        # Fall back to the system language for the UI if none is configured
        ui = config.get('ui') if isinstance(config.get('ui'), dict) else {}
        ui_locale = ui.get('locale')
        if not isinstance(ui_locale, str) or len(ui_locale) < 2:
            config['ui'] = dict(ui, locale=Utils.get_default_user_language())
        return config

    def merge_configs(self, default, user) -> dict:
        """Overlay user on default. Sections present in both are merged recursively."""
        merged = dict(default)
        for key, value in user.items():
            base = merged.get(key)
            if isinstance(base, dict) and isinstance(value, dict):
                value = self.merge_configs(base, value)
            merged[key] = value
        return merged

    @staticmethod
    def _walk(config, keys, create=False):
        section = config
        for k in keys:
            child = section.get(k)
            if child is None and create:
                child = section[k] = {}
            if not isinstance(child, dict):
                return None
            section = child
        return section

    def save_user_config(self, config=None) -> bool:
        """Write the user overrides and reload the merged config."""
        if config is not None:
            self.user_config = config
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.user_config_path, 'w', encoding='utf-8') as f:
                json.dump(self.user_config, f, indent=4)
        except OSError as e:
            logger.error(f"Error saving user config to {self.user_config_path}: {e}")
            return False
        self.config = self.load_config()
        return True

    def get(self, key, default=None):
        *parents, name = key.split('.')
        section = self._walk(self.config, parents)
        if section is None or name not in section:
            return default
        return section[name]

    def set(self, key, value) -> bool:
        """Store a user override and save it.

        Raises:
            TypeError: If a parent of the key holds a value rather than a section
        """
        *parents, name = key.split('.')
        section = self._walk(self.user_config, parents, create=True)
        if section is None:
            raise TypeError(f"Cannot set {key}: a parent key is not a section")
        section[name] = value
        return self.save_user_config()


config_manager = ConfigManager()
