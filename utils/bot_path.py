import os
from typing import Optional

from utils.config import config_manager
from utils.logging_setup import get_logger

logger = get_logger("bot_path")

DEFAULT_REQUIRED_FILES = ["bot", "run.py", "config.yml.example"]
DEFAULT_REQUIRED_BOT_FILES = ["bot.py", "command.py", "manager.py", "events", "libs"]


class BotPathValidator:
    """Checks that a directory is a bot installation and locates its lang directory."""

    def __init__(self, required_files=None, required_bot_files=None, lang_dir_name=None):
        self.required_files = list(required_files or config_manager.get(
            "bot_path.required_files", DEFAULT_REQUIRED_FILES))
        self.required_bot_files = list(required_bot_files or config_manager.get(
            "bot_path.required_bot_files", DEFAULT_REQUIRED_BOT_FILES))
        self.lang_dir_name = lang_dir_name or config_manager.get("bot_path.lang_dir_name", "lang")

    @property
    def bot_dir_name(self) -> str:
        return self.required_files[0] if self.required_files else "bot"

    def validate(self, bot_path: str) -> bool:
        """Check that a directory has the expected bot layout.

        Every top-level entry named in required_files counts once. The bot
        directory must be a directory, and each of its entries named in
        required_bot_files counts once more. The path is valid only if the
        count equals the total number of required names.

        Args:
            bot_path: Directory to check

        Returns:
            bool: True if the directory is a bot installation
        """
        if not bot_path or not os.path.isdir(bot_path):
            logger.debug(f"Bot path does not exist or is not a directory: {bot_path}")
            return False

        validation_count = 0
        for entry in os.listdir(bot_path):
            if entry == self.bot_dir_name:
                bot_folder_path = os.path.join(bot_path, entry)
                if not os.path.isdir(bot_folder_path):
                    logger.debug(f"{bot_folder_path} is not a directory")
                    return False
                validation_count += 1
                for bot_entry in os.listdir(bot_folder_path):
                    if bot_entry in self.required_bot_files:
                        validation_count += 1
            elif entry in self.required_files:
                validation_count += 1

        expected = len(self.required_files) + len(self.required_bot_files)
        if validation_count != expected:
            logger.debug(f"Bot path {bot_path} matched {validation_count} of {expected} required entries")
            return False
        return True

    def resolve_lang_dir(self, bot_path: str) -> str:
        """Return the lang directory of a bot, creating it if missing.

        Raises:
            NotADirectoryError: If bot_path is not a directory, or if the lang
                entry exists but is not a directory
        """
        if not os.path.isdir(bot_path):
            raise NotADirectoryError(f"Bot path is not a directory: {bot_path}")

        lang_path = os.path.join(bot_path, self.lang_dir_name)
        if os.path.exists(lang_path) and not os.path.isdir(lang_path):
            raise NotADirectoryError(f"{lang_path} exists but is not a directory")
        if not os.path.exists(lang_path):
            os.mkdir(lang_path)
            logger.info(f"Created lang directory {lang_path}")
        return lang_path

    def find_lang_dir(self, bot_path: str) -> Optional[str]:
        """Validate a bot path and resolve its lang directory.

        Returns:
            str: The lang directory, or None if bot_path is not a valid bot
        """
        if not self.validate(bot_path):
            logger.warning(f"Not a valid bot path: {bot_path}")
            return None
        return self.resolve_lang_dir(bot_path)
