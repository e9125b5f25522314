import argparse
import os
import sys

from PyQt6.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout,
                             QHBoxLayout, QPushButton, QLabel, QListWidget,
                             QMessageBox, QFrame, QComboBox, QInputDialog,
                             QSplitter)
from PyQt6.QtCore import Qt

from lang.store_errors import StringStoreError
from lang.string_store import StringStore
from ui.add_language_dialog import AddLanguageDialog
from ui.app_style import AppStyle
from ui.recent_roots_dialog import RecentRootsDialog
from ui.string_table_widget import StringTableWidget
from utils.bot_path import BotPathValidator
from utils.config import config_manager
from utils.globals import Globals
from utils.logging_setup import get_logger, set_console_level
from utils.settings_manager import SettingsManager
from utils.translations import I18N

logger = get_logger("app")

_ = I18N._


class MainWindow(QMainWindow):
    def __init__(self, root=None, bot_path=None):
        super().__init__()
        logger.debug("Initializing MainWindow")
        self.setWindowTitle(_(Globals.APP_NAME))
        self.resize(1000, 700)

        self.settings_manager = SettingsManager()
        self.bot_path_validator = BotPathValidator()

        # Selection lives here, the store only receives explicit module/language arguments
        self.store = None
        self.current_module = None
        self.current_language = None

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        layout = QVBoxLayout(main_widget)

        # Root selection
        root_frame = QFrame()
        root_frame.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Raised)
        root_layout = QHBoxLayout(root_frame)
        title_label = QLabel(_("Lang Directory:"))
        title_label.setStyleSheet("font-weight: bold; font-size: 14px;")
        self.root_label = QLabel(_("No directory selected"))
        self.root_label.setStyleSheet("font-size: 14px;")
        open_btn = QPushButton(_("Open..."))
        open_btn.clicked.connect(self.show_root_selector)
        help_btn = QPushButton(_("Help"))
        help_btn.clicked.connect(self.show_help)
        root_layout.addWidget(title_label)
        root_layout.addWidget(self.root_label)
        root_layout.addStretch()
        root_layout.addWidget(open_btn)
        root_layout.addWidget(help_btn)
        layout.addWidget(root_frame)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Modules
        modules_widget = QWidget()
        modules_layout = QVBoxLayout(modules_widget)
        modules_layout.setContentsMargins(0, 0, 0, 0)
        modules_title = QLabel(_("Modules"))
        modules_title.setStyleSheet("font-weight: bold;")
        self.module_list = QListWidget()
        self.module_list.currentTextChanged.connect(self.handle_module_changed)
        self.create_module_btn = QPushButton(_("Create Module"))
        self.create_module_btn.clicked.connect(self.create_module)
        modules_layout.addWidget(modules_title)
        modules_layout.addWidget(self.module_list)
        modules_layout.addWidget(self.create_module_btn)
        splitter.addWidget(modules_widget)

        # Strings
        strings_widget = QWidget()
        strings_layout = QVBoxLayout(strings_widget)
        strings_layout.setContentsMargins(0, 0, 0, 0)

        controls_layout = QHBoxLayout()
        controls_layout.addWidget(QLabel(_("Language:")))
        self.language_combo = QComboBox()
        self.language_combo.currentTextChanged.connect(self.handle_language_changed)
        controls_layout.addWidget(self.language_combo)
        controls_layout.addWidget(QLabel(_("Copy from:")))
        self.copy_from_combo = QComboBox()
        controls_layout.addWidget(self.copy_from_combo)
        self.copy_btn = QPushButton(_("Copy Strings"))
        self.copy_btn.clicked.connect(self.copy_strings)
        controls_layout.addWidget(self.copy_btn)
        controls_layout.addStretch()
        self.create_language_btn = QPushButton(_("Create Language"))
        self.create_language_btn.clicked.connect(self.create_language)
        controls_layout.addWidget(self.create_language_btn)
        strings_layout.addLayout(controls_layout)

        self.string_table = StringTableWidget()
        self.string_table.modified_changed.connect(lambda _modified: self.update_button_states())
        self.string_table.itemSelectionChanged.connect(self.update_button_states)
        strings_layout.addWidget(self.string_table)

        button_layout = QHBoxLayout()
        self.add_string_btn = QPushButton(_("Add String"))
        self.add_string_btn.clicked.connect(self.add_string)
        self.delete_string_btn = QPushButton(_("Delete String"))
        self.delete_string_btn.clicked.connect(self.delete_string)
        self.save_btn = QPushButton(_("Save"))
        self.save_btn.clicked.connect(self.save)
        button_layout.addWidget(self.add_string_btn)
        button_layout.addWidget(self.delete_string_btn)
        button_layout.addStretch()
        button_layout.addWidget(self.save_btn)
        strings_layout.addLayout(button_layout)

        splitter.addWidget(strings_widget)
        splitter.setStretchFactor(1, 4)
        layout.addWidget(splitter)

        self.update_button_states()

        if bot_path:
            self.handle_bot_path_selection(bot_path)
        elif root:
            self.open_root(root)
        else:
            self.load_last_root()

    def update_window_title(self, root=None):
        title = _(Globals.APP_NAME)
        if root:
            self.setWindowTitle(f"{title} - {root}")
        else:
            self.setWindowTitle(title)

    def update_button_states(self):
        has_store = self.store is not None
        has_module = has_store and self.current_module is not None
        has_languages = self.language_combo.count() > 0
        self.create_module_btn.setEnabled(has_store)
        self.create_language_btn.setEnabled(has_store and self.module_list.count() > 0)
        self.add_string_btn.setEnabled(has_module and has_languages)
        self.delete_string_btn.setEnabled(has_module and self.string_table.selected_key() is not None)
        self.copy_btn.setEnabled(has_module and self.copy_from_combo.count() > 0)
        self.save_btn.setEnabled(has_module and bool(self.string_table.modified_languages))

    def load_last_root(self):
        last_root = self.settings_manager.load_last_root()
        if last_root:
            self.open_root(last_root)

    def show_root_selector(self):
        if not self.maybe_save_changes():
            return
        dialog = RecentRootsDialog(self.settings_manager.load_recent_roots(), self)
        dialog.root_selected.connect(self.open_root)
        dialog.bot_path_selected.connect(self.handle_bot_path_selection)
        dialog.root_removed.connect(self.settings_manager.remove_root)
        dialog.exec()

    def handle_bot_path_selection(self, bot_path):
        try:
            lang_dir = self.bot_path_validator.find_lang_dir(bot_path)
        except OSError as e:
            logger.error(f"Could not open lang directory of {bot_path}: {e}")
            QMessageBox.critical(self, _("Error"), str(e))
            return
        if lang_dir is None:
            QMessageBox.critical(self, _("Invalid bot path"), _("Could not find bot in the selected path."))
            return
        self.open_root(lang_dir)

    def open_root(self, root):
        try:
            store = StringStore(root)
        except NotADirectoryError as e:
            logger.error(str(e))
            QMessageBox.critical(self, _("Error"), str(e))
            return

        logger.info(f"Opened lang directory {root}")
        self.store = store
        self.current_module = None
        self.current_language = None
        self.root_label.setText(root)
        self.update_window_title(root)
        self.settings_manager.save_last_root(root)

        last_module, last_language = self.settings_manager.get_last_selection(root)
        self.refresh_languages(last_language)
        self.refresh_modules(last_module)

    def refresh_modules(self, select_module=None):
        modules = self.store.list_modules()
        self.module_list.blockSignals(True)
        self.module_list.clear()
        self.module_list.addItems(modules)
        self.module_list.blockSignals(False)

        if select_module not in modules:
            select_module = modules[0] if modules else None
        if select_module is not None:
            self.module_list.setCurrentRow(modules.index(select_module))
            if self.current_module != select_module:
                self.handle_module_changed(select_module)
        else:
            self.current_module = None
            self.string_table.load_tables([], {})
        self.update_button_states()

    def refresh_languages(self, select_language=None):
        languages = self.store.list_languages()
        if select_language not in languages:
            select_language = self.current_language if self.current_language in languages else None
        if select_language is None and languages:
            select_language = languages[0]

        for combo in (self.language_combo, self.copy_from_combo):
            combo.blockSignals(True)
            combo.clear()
            combo.addItems(languages)
            combo.blockSignals(False)
        if select_language is not None:
            self.language_combo.setCurrentText(select_language)
        self.current_language = select_language
        self.update_button_states()

    def refresh_strings(self):
        if self.store is None or self.current_module is None:
            return
        keys = self.store.list_string_keys(self.current_module)
        tables = self.store.get_tables(self.current_module)
        if keys is None or tables is None:
            logger.warning(f"Module {self.current_module} no longer exists")
            self.refresh_modules()
            return
        self.string_table.load_tables(keys, tables)
        self.statusBar().showMessage(
            _("{count} strings in {languages} languages").format(count=len(keys), languages=len(tables)))
        self.update_button_states()

    def handle_module_changed(self, module):
        if not module or module == self.current_module:
            return
        if not self.maybe_save_changes():
            previous = self.module_list.findItems(self.current_module, Qt.MatchFlag.MatchExactly)
            if previous:
                self.module_list.blockSignals(True)
                self.module_list.setCurrentItem(previous[0])
                self.module_list.blockSignals(False)
            return
        self.current_module = module
        self.settings_manager.save_last_selection(self.store.root, module, self.current_language)
        self.refresh_strings()

    def handle_language_changed(self, language):
        if not language:
            return
        self.current_language = language
        if self.store is not None:
            self.settings_manager.save_last_selection(self.store.root, self.current_module, language)
        self.update_button_states()

    def run_store_action(self, description, action, *args):
        """Run a mutating store call, reporting failures to the user.

        Returns:
            The call's result, or None if it raised
        """
        try:
            return action(*args)
        except (StringStoreError, OSError) as e:
            logger.error(f"Failed to {description}: {e}", exc_info=True)
            QMessageBox.critical(self, _("Error"), _("Failed to {action}:").format(action=description) + f"\n\n{e}")
            return None

    def maybe_save_changes(self) -> bool:
        """Offer to save unsaved edits.

        Returns:
            bool: False if the user cancelled
        """
        if not self.string_table.modified_languages:
            return True
        reply = QMessageBox.question(
            self,
            _("Unsaved Changes"),
            _("Save changes to module \"{module}\"?").format(module=self.current_module),
            QMessageBox.StandardButton.Save | QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel,
            QMessageBox.StandardButton.Save,
        )
        if reply == QMessageBox.StandardButton.Cancel:
            return False
        if reply == QMessageBox.StandardButton.Save:
            return self.save()
        self.refresh_strings()
        return True

    def save(self) -> bool:
        if self.store is None or self.current_module is None:
            return False
        tables = self.string_table.get_modified_tables()
        if not tables:
            return True
        if not self.run_store_action(_("save strings"), self.store.save_tables, self.current_module, tables):
            return False
        self.statusBar().showMessage(_("Saved {count} languages").format(count=len(tables)))
        self.refresh_strings()
        return True

    def add_string(self):
        if self.current_module is None or not self.maybe_save_changes():
            return
        name, ok = QInputDialog.getText(
            self, _("Add string"),
            _("Type in the name for the new string. It will be added to all of available languages."))
        name = name.strip()
        if not ok or not name:
            return
        if self.run_store_action(_("add string"), self.store.add_string_key, self.current_module, name):
            self.refresh_strings()
        else:
            self.statusBar().showMessage(_("String \"{name}\" was not added").format(name=name))

    def delete_string(self):
        key = self.string_table.selected_key()
        if self.current_module is None or key is None:
            return
        if not Globals.SKIP_CONFIRMATIONS:
            reply = QMessageBox.warning(
                self,
                _("Confirm action"),
                _("Do you really want to delete \"{key}\" from all the languages?").format(key=key),
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return
        if not self.maybe_save_changes():
            return
        if self.run_store_action(_("delete string"), self.store.delete_string_key, self.current_module, key):
            self.refresh_strings()

    def create_module(self):
        if self.store is None or not self.maybe_save_changes():
            return
        name, ok = QInputDialog.getText(
            self, _("Create module"),
            _("Type in the name for the new module folder. Files will be created for all of the available languages."))
        name = name.strip()
        if not ok or not name:
            return
        if self.run_store_action(_("create module"), self.store.add_module, name):
            self.current_module = None
            self.refresh_modules(name)
        else:
            self.statusBar().showMessage(_("Module \"{name}\" was not created").format(name=name))

    def create_language(self):
        if self.store is None or not self.maybe_save_changes():
            return
        dialog = AddLanguageDialog(self.store.list_languages(), self.current_language, self)
        if not dialog.exec():
            return
        if self.run_store_action(_("create language"), self.store.add_language,
                                 dialog.identifier, dialog.copy_from):
            self.refresh_languages(dialog.identifier)
            self.refresh_strings()

    def copy_strings(self):
        source = self.copy_from_combo.currentText()
        target = self.current_language
        if not source or not target or source == target:
            return
        table = self.string_table.get_table(target)
        changed = table.copy_values_from(self.string_table.get_table(source))
        self.string_table.set_language_values(target, table)
        self.statusBar().showMessage(
            _("Copied {count} values from {source} to {target}").format(count=changed, source=source, target=target))

    def show_help(self):
        QMessageBox.about(
            self,
            _(Globals.APP_NAME),
            f"{_(Globals.APP_NAME)} {Globals.APP_VERSION}\n\n"
            + _("Each module is a folder inside the lang directory, and each language is a "
                "LANGUAGE.{extension} file inside every module.").format(
                    extension=self.store.extension if self.store else "yml"))

    def closeEvent(self, event):
        if self.maybe_save_changes():
            event.accept()
        else:
            event.ignore()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=Globals.APP_NAME)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--root", help="Lang directory to open")
    group.add_argument("--bot-path", help="Bot directory whose lang directory should be opened")
    parser.add_argument("--log-level", default=config_manager.get("logging.level", "INFO"),
                        help="Console logging level")
    return parser.parse_args(argv)


def main():
    args = parse_args()
    set_console_level(args.log_level)
    I18N.install_locale(config_manager.get("ui.locale", "en"))

    app = QApplication(sys.argv)
    AppStyle.sync_theme_from_application(app)
    root = os.path.abspath(args.root) if args.root else None
    bot_path = os.path.abspath(args.bot_path) if args.bot_path else None
    window = MainWindow(root=root, bot_path=bot_path)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
