"""Table of a module's strings with one column per language.

The key column stays fixed while the language columns scroll horizontally.
"""

from PyQt6.QtCore import Qt, QModelIndex, pyqtSignal
from PyQt6.QtWidgets import (
    QTableWidget,
    QTableWidgetItem,
    QTableView,
    QHeaderView,
    QAbstractItemView,
)

from lang.string_table import StringTable
from ui.app_style import AppStyle
from utils.translations import I18N

_ = I18N._


class StringTableWidget(QTableWidget):
    modified_changed = pyqtSignal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.languages: list[str] = []
        self.modified_languages: set[str] = set()
        self._loading = False

        # Overlay view on the same model showing only the key column
        self._key_column_view = QTableView(self)
        self._key_column_view.setModel(self.model())
        self._init_key_column_view()
        self._connect_signals()
        self.setHorizontalScrollMode(QTableWidget.ScrollMode.ScrollPerPixel)
        self.setVerticalScrollMode(QTableWidget.ScrollMode.ScrollPerPixel)
        self.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.horizontalHeader().setMinimumSectionSize(90)
        self.verticalHeader().setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        self.viewport().stackUnder(self._key_column_view)
        self._key_column_view.show()
        self.itemChanged.connect(self._handle_item_changed)

    def _init_key_column_view(self):
        view = self._key_column_view
        view.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        view.verticalHeader().hide()
        view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Fixed)
        view.setSelectionModel(self.selectionModel())
        view.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        view.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        view.setVerticalScrollMode(QTableView.ScrollMode.ScrollPerPixel)
        view.setStyleSheet("QTableView { border: none; }")

    def _connect_signals(self):
        self.horizontalHeader().sectionResized.connect(self._update_section_width)
        self.verticalHeader().sectionResized.connect(
            lambda row, _old, new: self._key_column_view.setRowHeight(row, new))
        self._key_column_view.verticalScrollBar().valueChanged.connect(self.verticalScrollBar().setValue)
        self.verticalScrollBar().valueChanged.connect(self._key_column_view.verticalScrollBar().setValue)

    def _update_section_width(self, logical_index: int, _old_size: int, new_size: int):
        if logical_index == 0:
            self._key_column_view.setColumnWidth(0, new_size)
            self._update_key_column_geometry()

    def _update_key_column_geometry(self):
        if self.columnCount() == 0:
            self._key_column_view.setGeometry(0, 0, 0, 0)
            return
        for col in range(1, self.columnCount()):
            self._key_column_view.setColumnHidden(col, True)
        self._key_column_view.setColumnWidth(0, self.columnWidth(0))
        x = self.verticalHeader().width() + self.frameWidth()
        y = self.frameWidth()
        h = self.viewport().height() + self.horizontalHeader().height()
        self._key_column_view.setGeometry(x, y, self.columnWidth(0), h)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._update_key_column_geometry()

    def moveCursor(self, action: QAbstractItemView.CursorAction, modifiers: Qt.KeyboardModifier):
        current = super().moveCursor(action, modifiers)
        key_width = self._key_column_view.columnWidth(0)
        if (
            action == QAbstractItemView.CursorAction.MoveLeft
            and current.column() > 0
            and self.visualRect(current).topLeft().x() < key_width
        ):
            self.horizontalScrollBar().setValue(
                self.horizontalScrollBar().value() + self.visualRect(current).topLeft().x() - key_width)
        return current

    def scrollTo(self, index: QModelIndex, hint: QAbstractItemView.ScrollHint = QAbstractItemView.ScrollHint.EnsureVisible):
        if index.column() > 0:
            super().scrollTo(index, hint)

    def load_tables(self, keys: list[str], tables: dict[str, StringTable]):
        """Fill the table with one row per key and one column per language.

        Args:
            keys: String keys of the module, in display order
            tables: Reconciled table per language identifier
        """
        self._loading = True
        try:
            self.clear()
            self.languages = list(tables.keys())
            self.setColumnCount(len(self.languages) + 1)
            self.setHorizontalHeaderLabels([_("String Key")] + self.languages)
            self.setRowCount(len(keys))

            for row, key in enumerate(keys):
                key_item = QTableWidgetItem(key)
                key_item.setFlags(key_item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                key_item.setData(Qt.ItemDataRole.UserRole, key)
                self.setItem(row, 0, key_item)
                for col, language in enumerate(self.languages, 1):
                    item = QTableWidgetItem(tables[language].get(key, ""))
                    self._apply_highlight(item)
                    self.setItem(row, col, item)

            self.resizeColumnsToContents()
            self.setColumnWidth(0, max(self.columnWidth(0), 140))
            self._update_key_column_geometry()
        finally:
            self._loading = False
        self._set_modified_languages(set())

    def _apply_highlight(self, item: QTableWidgetItem, modified: bool = False):
        colors = AppStyle.get_string_highlight_colors()
        if modified:
            item.setBackground(colors["modified"])
        elif item.text() == "":
            item.setBackground(colors["empty"])
        else:
            item.setData(Qt.ItemDataRole.BackgroundRole, None)

    def _handle_item_changed(self, item: QTableWidgetItem):
        if self._loading or item.column() == 0:
            return
        self._loading = True
        try:
            self._apply_highlight(item, modified=True)
        finally:
            self._loading = False
        language = self.languages[item.column() - 1]
        self._set_modified_languages(self.modified_languages | {language})

    def _set_modified_languages(self, languages: set[str]):
        was_modified = bool(self.modified_languages)
        self.modified_languages = languages
        if was_modified != bool(languages):
            self.modified_changed.emit(bool(languages))

    def key_at_row(self, row: int) -> str:
        item = self.item(row, 0)
        return item.data(Qt.ItemDataRole.UserRole) if item else ""

    def selected_key(self):
        rows = sorted({index.row() for index in self.selectedIndexes()})
        return self.key_at_row(rows[0]) if rows else None

    def get_table(self, language: str) -> StringTable:
        """Current cell values of one language column as a table."""
        col = self.languages.index(language) + 1
        table = StringTable()
        for row in range(self.rowCount()):
            item = self.item(row, col)
            table.append(self.key_at_row(row), item.text() if item else "")
        return table

    def get_modified_tables(self) -> dict[str, StringTable]:
        return {language: self.get_table(language) for language in self.languages
                if language in self.modified_languages}

    def set_language_values(self, language: str, table: StringTable):
        """Replace the cells of one language column with the values of a table."""
        col = self.languages.index(language) + 1
        for row in range(self.rowCount()):
            key = self.key_at_row(row)
            if key in table:
                self.item(row, col).setText(table.get(key))
