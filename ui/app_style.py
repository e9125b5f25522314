from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import QApplication


class AppStyle:
    IS_DARK_THEME = False
    LIGHT_THEME = "light"
    DARK_THEME = "dark"

    @staticmethod
    def get_theme_name():
        return AppStyle.DARK_THEME if AppStyle.IS_DARK_THEME else AppStyle.LIGHT_THEME

    @staticmethod
    def sync_theme_from_application(app: QApplication):
        """Persist the detected app theme in shared style state."""
        window_color = app.palette().color(QPalette.ColorRole.Window)
        AppStyle.IS_DARK_THEME = window_color.lightness() < 128

    @staticmethod
    def get_string_highlight_colors() -> dict[str, QColor]:
        """Theme-aware background colors for string table cells."""
        if AppStyle.get_theme_name() == AppStyle.DARK_THEME:
            return {
                "empty": QColor(120, 90, 30),      # deep amber
                "modified": QColor(40, 80, 110),   # deep blue
            }
        return {
            "empty": QColor(255, 255, 200),        # light yellow
            "modified": QColor(210, 230, 255),     # light blue
        }
