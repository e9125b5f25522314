import os

from utils.config import config_manager


class Globals:
    APP_NAME = "Module Language Editor"
    APP_VERSION = "1.0.0"
    HOME = os.path.expanduser("~")
    SKIP_CONFIRMATIONS = config_manager.get("skip_confirmations", False)
