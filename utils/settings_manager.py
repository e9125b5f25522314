import json
import os
from pathlib import Path
from typing import Optional, Any

from utils.logging_setup import get_logger

logger = get_logger("settings_manager")


class SettingsManager:
    MAX_RECENT_ROOTS = 10

    def __init__(self, settings_file=None):
        if settings_file is None:
            settings_file = Path.home() / '.module_lang_editor' / 'settings.json'
        self.settings_file = Path(settings_file)
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)

    def _read_settings(self) -> dict:
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                settings = json.load(f)
            return settings if isinstance(settings, dict) else {}
        except (OSError, ValueError) as e:
            logger.error(f"Error reading settings from {self.settings_file}: {e}")
            return {}

    def _write_settings(self, settings: dict) -> bool:
        try:
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=4)
            return True
        except OSError as e:
            logger.error(f"Error writing settings to {self.settings_file}: {e}")
            return False

    def load_last_root(self) -> Optional[str]:
        """Load the last opened lang root from settings.

        Returns:
            str: The root path if it still exists, None otherwise
        """
        root = self._read_settings().get('last_root')
        if root and os.path.isdir(root):
            return root
        return None

    def load_recent_roots(self) -> list[str]:
        """Load the list of recently opened roots, dropping any that no longer exist.

        Returns:
            list: Existing root paths, most recent first
        """
        settings = self._read_settings()
        recent_roots = settings.get('recent_roots', [])
        valid_roots = [p for p in recent_roots if os.path.isdir(p)]

        if len(valid_roots) != len(recent_roots):
            settings['recent_roots'] = valid_roots
            self._write_settings(settings)

        return valid_roots

    def save_last_root(self, root):
        """Save the last opened root and move it to the front of the recent roots.

        Args:
            root (str): The root path to save
        """
        settings = self._read_settings()
        settings['last_root'] = root

        recent_roots = settings.get('recent_roots', [])
        if root in recent_roots:
            recent_roots.remove(root)
        recent_roots.insert(0, root)
        settings['recent_roots'] = recent_roots[:self.MAX_RECENT_ROOTS]

        self._write_settings(settings)

    def remove_root(self, root):
        """Remove a root from the recent roots along with its settings.

        Args:
            root (str): The root path to remove
        """
        if not self.settings_file.exists():
            return

        settings = self._read_settings()
        recent_roots = settings.get('recent_roots', [])
        if root in recent_roots:
            recent_roots.remove(root)
            settings['recent_roots'] = recent_roots

        if settings.get('last_root') == root:
            settings['last_root'] = None

        root_settings = settings.get('root_settings', {})
        if root in root_settings:
            del root_settings[root]
            settings['root_settings'] = root_settings

        self._write_settings(settings)

    def get_root_setting(self, root: str, key: str, default: Any = None) -> Any:
        """Get a setting stored for one root.

        Args:
            root (str): Root path
            key (str): Setting key to retrieve
            default (Any): Default value if setting doesn't exist
        """
        root_settings = self._read_settings().get('root_settings', {})
        return root_settings.get(root, {}).get(key, default)

    def save_root_setting(self, root: str, key: str, value: Any) -> bool:
        """Save a setting for one root.

        Returns:
            bool: True if successful, False otherwise
        """
        settings = self._read_settings()
        settings.setdefault('root_settings', {}).setdefault(root, {})[key] = value
        return self._write_settings(settings)

    def get_last_selection(self, root: str) -> tuple[Optional[str], Optional[str]]:
        """Return the (module, language) last selected for a root."""
        return (self.get_root_setting(root, 'last_module'),
                self.get_root_setting(root, 'last_language'))

    def save_last_selection(self, root: str, module: Optional[str], language: Optional[str]) -> bool:
        settings = self._read_settings()
        root_config = settings.setdefault('root_settings', {}).setdefault(root, {})
        root_config['last_module'] = module
        root_config['last_language'] = language
        return self._write_settings(settings)
