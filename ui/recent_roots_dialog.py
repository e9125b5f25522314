from PyQt6.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QPushButton,
                             QLabel, QListWidget, QListWidgetItem, QFileDialog,
                             QWidget, QCheckBox)
from PyQt6.QtCore import pyqtSignal

from utils.translations import I18N

_ = I18N._


class RootListItem(QWidget):
    remove_clicked = pyqtSignal(str)
    select_clicked = pyqtSignal(str)

    def __init__(self, root_path, parent=None):
        super().__init__(parent)
        self.root_path = root_path
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.path_label = QLabel(root_path)
        self.path_label.setStyleSheet("padding: 5px;")
        layout.addWidget(self.path_label)

        button_container = QWidget()
        button_layout = QHBoxLayout(button_container)
        button_layout.setContentsMargins(0, 0, 0, 0)
        button_layout.setSpacing(5)

        select_btn = QPushButton(_("Open"))
        select_btn.setStyleSheet("QPushButton { padding: 2px 8px; }")
        select_btn.clicked.connect(lambda: self.select_clicked.emit(root_path))
        button_layout.addWidget(select_btn)

        remove_btn = QPushButton("×")
        remove_btn.setFixedSize(24, 24)
        remove_btn.setStyleSheet("QPushButton { padding: 0; }")
        remove_btn.clicked.connect(lambda: self.remove_clicked.emit(root_path))
        button_layout.addWidget(remove_btn)

        layout.addWidget(button_container)


class RecentRootsDialog(QDialog):
    """Lets the user reopen a recent lang directory or browse for a new one.

    Browsed directories are emitted through bot_path_selected unless the
    "lang directory" box is checked, in which case they are used as the root
    directly.
    """
    root_selected = pyqtSignal(str)
    bot_path_selected = pyqtSignal(str)
    root_removed = pyqtSignal(str)

    def __init__(self, recent_roots, parent=None):
        super().__init__(parent)
        self.setWindowTitle(_("Open Strings"))
        self.setMinimumSize(500, 300)
        self.setup_ui(recent_roots)

    def setup_ui(self, recent_roots):
        layout = QVBoxLayout(self)

        title = QLabel(_("Recent lang directories"))
        title.setStyleSheet("font-weight: bold; font-size: 14px;")
        layout.addWidget(title)

        self.list_widget = QListWidget()
        self.list_widget.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        self.list_widget.itemDoubleClicked.connect(self.handle_selection)
        layout.addWidget(self.list_widget)

        for root in recent_roots:
            self.add_root_item(root)

        self.direct_root_checkbox = QCheckBox(_("Browsed directory is a lang directory, not a bot directory"))
        layout.addWidget(self.direct_root_checkbox)

        button_layout = QHBoxLayout()

        select_btn = QPushButton(_("Open"))
        select_btn.clicked.connect(self.handle_selection)
        select_btn.setEnabled(False)

        browse_btn = QPushButton(_("Browse..."))
        browse_btn.clicked.connect(self.browse)

        cancel_btn = QPushButton(_("Cancel"))
        cancel_btn.clicked.connect(self.reject)

        button_layout.addWidget(select_btn)
        button_layout.addWidget(browse_btn)
        button_layout.addWidget(cancel_btn)
        layout.addLayout(button_layout)

        self.list_widget.itemSelectionChanged.connect(
            lambda: select_btn.setEnabled(bool(self.list_widget.selectedItems()))
        )

    def add_root_item(self, root_path):
        item = QListWidgetItem()
        widget = RootListItem(root_path)
        item.setSizeHint(widget.sizeHint())
        widget.remove_clicked.connect(self.remove_root)
        widget.select_clicked.connect(self.emit_root)
        self.list_widget.addItem(item)
        self.list_widget.setItemWidget(item, widget)

    def remove_root(self, root_path):
        for i in range(self.list_widget.count()):
            widget = self.list_widget.itemWidget(self.list_widget.item(i))
            if widget.root_path == root_path:
                self.list_widget.takeItem(i)
                self.root_removed.emit(root_path)
                break

    def emit_root(self, root_path):
        self.root_selected.emit(root_path)
        self.accept()

    def handle_selection(self):
        selected_items = self.list_widget.selectedItems()
        if selected_items:
            self.emit_root(self.list_widget.itemWidget(selected_items[0]).root_path)

    def browse(self):
        directory = QFileDialog.getExistingDirectory(
            self,
            _("Select Bot Directory"),
            "",
            QFileDialog.Option.ShowDirsOnly
        )
        if not directory:
            return
        if self.direct_root_checkbox.isChecked():
            self.root_selected.emit(directory)
        else:
            self.bot_path_selected.emit(directory)
        self.accept()
