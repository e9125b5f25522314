from PyQt6.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QPushButton,
                             QLabel, QLineEdit, QFormLayout, QComboBox, QMessageBox)

from utils.translations import I18N
from utils.utils import Utils

_ = I18N._


class AddLanguageDialog(QDialog):
    """Asks for a new language identifier and an optional language to copy from."""

    NO_COPY = ""

    def __init__(self, languages, current_language=None, parent=None):
        super().__init__(parent)
        self.languages = list(languages)
        self.setWindowTitle(_("Create Language"))
        self.setMinimumWidth(400)
        self.setup_ui(current_language)

    def setup_ui(self, current_language):
        layout = QVBoxLayout(self)

        layout.addWidget(QLabel(_("Type in the new language name. A document is created in every module.")))

        form = QFormLayout()
        self.identifier_input = QLineEdit()
        self.identifier_input.setPlaceholderText(_("New language name (e.g. fr)"))
        form.addRow(_("Language:"), self.identifier_input)

        self.copy_from_combo = QComboBox()
        self.copy_from_combo.addItem(_("(empty strings)"), AddLanguageDialog.NO_COPY)
        for language in self.languages:
            self.copy_from_combo.addItem(language, language)
        if current_language in self.languages:
            self.copy_from_combo.setCurrentIndex(self.languages.index(current_language) + 1)
        form.addRow(_("Copy values from:"), self.copy_from_combo)
        layout.addLayout(form)

        button_layout = QHBoxLayout()
        create_btn = QPushButton(_("Create"))
        create_btn.setDefault(True)
        create_btn.clicked.connect(self.handle_create)
        cancel_btn = QPushButton(_("Cancel"))
        cancel_btn.clicked.connect(self.reject)
        button_layout.addWidget(create_btn)
        button_layout.addWidget(cancel_btn)
        layout.addLayout(button_layout)

    @property
    def identifier(self) -> str:
        return self.identifier_input.text().strip()

    @property
    def copy_from(self):
        return self.copy_from_combo.currentData() or None

    def handle_create(self):
        identifier = self.identifier
        if not Utils.is_plain_name(identifier):
            QMessageBox.warning(self, _("Invalid Language"), _("Please enter a valid language name."))
            return
        if identifier in self.languages:
            QMessageBox.warning(self, _("Invalid Language"),
                                _("Language \"{language}\" already exists.").format(language=identifier))
            return
        self.accept()
