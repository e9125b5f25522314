import os
from typing import Mapping, Optional

from lang.string_table import StringTable
from lang.store_results import StagedWrites, StoreAction, StoreActionResults
from lang.yaml_document import dump_document, load_document, write_document
from utils.config import config_manager
from utils.logging_setup import get_logger
from utils.utils import Utils

logger = get_logger("string_store")


class StringStore:
    """File-backed store of translation strings organized by module and language.

    The root directory holds one subdirectory per module. Each module directory
    holds one YAML document per language, named <language>.<extension>, mapping
    string keys to values:

        lang/
            core/
                en.yml
                es.yml
            shop/
                en.yml

    A language exists if any module has a document for it. A module lacking a
    document for a language behaves as if the document were empty.

    Lookups on an unknown module return None, and mutating operations return
    False when their target is unknown or already exists. Every call reads the
    documents it needs from disk; nothing is cached between calls.

    Operations that write several documents (adding or deleting a string,
    adding a module or a language, saving all languages of a module) stage the
    new contents in memory and check every target is writable before writing
    any of them.
    """

    def __init__(self, root, extension: str = None, quote_values: bool = None):
        if not os.path.isdir(root):
            raise NotADirectoryError(f"String store root is not a directory: {root}")
        self._root = str(root)
        self.extension = (extension or config_manager.get("document.extension", "yml")).lstrip(".")
        if quote_values is None:
            quote_values = config_manager.get("document.quote_values", True)
        self.quote_values = bool(quote_values)
        self.last_results: Optional[StoreActionResults] = None
        logger.debug(f"Initialized StringStore at {self._root} with extension .{self.extension}")

    @property
    def root(self) -> str:
        return self._root

    def _document_suffix(self) -> str:
        return "." + self.extension

    def get_module_path(self, module: str) -> Optional[str]:
        """Full path of a module directory, or None if there is no such module."""
        if not Utils.is_path_component(module):
            return None
        module_path = os.path.join(self._root, module)
        if not os.path.isdir(module_path):
            return None
        return module_path

    def get_document_path(self, module: str, language: str) -> Optional[str]:
        """Full path of the document for a module and language, whether or not it exists."""
        module_path = self.get_module_path(module)
        if module_path is None or not Utils.is_path_component(language):
            return None
        return os.path.join(module_path, language + self._document_suffix())

    def _list_document_files(self, module_path: str) -> list[str]:
        suffix = self._document_suffix()
        return sorted(
            name for name in os.listdir(module_path)
            if name.endswith(suffix) and len(name) > len(suffix)
            and os.path.isfile(os.path.join(module_path, name))
        )

    def list_modules(self) -> list[str]:
        """Names of all modules, sorted."""
        return sorted(
            name for name in os.listdir(self._root)
            if os.path.isdir(os.path.join(self._root, name))
        )

    def list_languages(self) -> list[str]:
        """Identifiers of all languages, in the order first found across modules."""
        languages = []
        suffix_len = len(self._document_suffix())
        for module in self.list_modules():
            for filename in self._list_document_files(os.path.join(self._root, module)):
                language = filename[:-suffix_len]
                if language not in languages and Utils.is_path_component(language):
                    languages.append(language)
        return languages

    def list_string_keys(self, module: str) -> Optional[list[str]]:
        """Union of the keys of every document of a module, in first-seen order.

        Returns:
            list: The keys, or None if the module does not exist
        """
        module_path = self.get_module_path(module)
        if module_path is None:
            return None

        keys = []
        seen = set()
        for filename in self._list_document_files(module_path):
            document = load_document(os.path.join(module_path, filename))
            for key in document:
                if key not in seen:
                    seen.add(key)
                    keys.append(key)
        return keys

    def _reconcile(self, module: str, language: str, keys: list[str]) -> StringTable:
        document = load_document(self.get_document_path(module, language))
        table = StringTable()
        for key in keys:
            if key not in table:
                table.append(key, document.get(key, ""))
        return table

    def get_table(self, module: str, language: str) -> Optional[StringTable]:
        """Reconciled string table of a module for one language.

        Every key of the module appears exactly once, in list_string_keys order.
        Keys missing from the language's document have an empty value.

        Returns:
            StringTable: The table, or None if the module does not exist
        """
        keys = self.list_string_keys(module)
        if keys is None:
            return None
        return self._reconcile(module, language, keys)

    def get_tables(self, module: str) -> Optional[dict[str, StringTable]]:
        """Reconciled string tables of a module for every known language."""
        keys = self.list_string_keys(module)
        if keys is None:
            return None
        return {language: self._reconcile(module, language, keys) for language in self.list_languages()}

    def save_table(self, module: str, language: str, table) -> bool:
        """Overwrite the document of a module and language with the given table.

        Keys missing from the table are dropped from this language's document
        only. An empty table produces an empty document.

        Returns:
            bool: False if the module does not exist or the language name is invalid
        """
        if self.get_module_path(module) is None:
            logger.warning(f"Cannot save strings, module not found: {module}")
            return False
        if not Utils.is_path_component(language):
            logger.warning(f"Cannot save strings, invalid language identifier: {language!r}")
            return False

        table = StringTable.coerce(table)
        path = self.get_document_path(module, language)
        write_document(path, table.to_dict(), self.quote_values)
        logger.debug(f"Saved {len(table)} strings to {path}")
        self.last_results = StoreActionResults(StoreAction.SAVE_TABLE, module=module,
                                               languages=[language], written_paths=[path])
        return True

    def save_tables(self, module: str, tables: Mapping) -> bool:
        """Save tables for several languages of a module in one validated batch.

        Args:
            module: Module name
            tables: Mapping of language identifier to table
        """
        if self.get_module_path(module) is None:
            logger.warning(f"Cannot save strings, module not found: {module}")
            return False
        invalid = [language for language in tables if not Utils.is_path_component(language)]
        if invalid:
            logger.warning(f"Cannot save strings, invalid language identifiers: {invalid}")
            return False

        staged = StagedWrites()
        for language, table in tables.items():
            staged.add(self.get_document_path(module, language),
                       dump_document(StringTable.coerce(table).to_dict(), self.quote_values))
        written = staged.commit()
        self.last_results = StoreActionResults(StoreAction.SAVE_TABLES, module=module,
                                               languages=list(tables), written_paths=written)
        logger.info(f"Saved {len(written)} documents for module {module}")
        return True

    def add_string_key(self, module: str, key: str) -> bool:
        """Add a key with an empty value to every language's document of a module.

        Returns:
            bool: False if the module does not exist, the key is empty or already
                present, or no language is known
        """
        keys = self.list_string_keys(module)
        if keys is None:
            logger.warning(f"Cannot add string {key!r}, module not found: {module}")
            return False
        if not isinstance(key, str) or key == "":
            logger.warning(f"Cannot add an empty string key to module {module}")
            return False
        if key in keys:
            logger.debug(f"String {key!r} already exists in module {module}")
            return False

        languages = self.list_languages()
        if not languages:
            logger.warning(f"Cannot add string {key!r} to module {module}, no languages exist")
            return False

        staged = StagedWrites()
        for language in languages:
            table = self._reconcile(module, language, keys)
            table.append(key, "")
            staged.add(self.get_document_path(module, language),
                       dump_document(table.to_dict(), self.quote_values))
        written = staged.commit()
        self.last_results = StoreActionResults(StoreAction.ADD_STRING, module=module, key=key,
                                               languages=languages, written_paths=written)
        logger.info(f"Added string {key!r} to module {module} in {len(languages)} languages")
        return True

    def delete_string_key(self, module: str, key: str) -> bool:
        """Remove a key from every language's document of a module.

        Returns:
            bool: False if the module does not exist or does not have the key
        """
        keys = self.list_string_keys(module)
        if keys is None:
            logger.warning(f"Cannot delete string {key!r}, module not found: {module}")
            return False
        if key not in keys:
            logger.debug(f"String {key!r} not found in module {module}")
            return False

        languages = self.list_languages()
        staged = StagedWrites()
        for language in languages:
            table = self._reconcile(module, language, keys)
            table.remove(key)
            staged.add(self.get_document_path(module, language),
                       dump_document(table.to_dict(), self.quote_values))
        written = staged.commit()
        self.last_results = StoreActionResults(StoreAction.DELETE_STRING, module=module, key=key,
                                               languages=languages, written_paths=written)
        logger.info(f"Deleted string {key!r} from module {module} in {len(languages)} languages")
        return True

    def add_module(self, name: str) -> bool:
        """Create a module directory with an empty document for every known language.

        Returns:
            bool: False if the module already exists or the name is not a plain
                directory name
        """
        if not Utils.is_plain_name(name):
            logger.warning(f"Invalid module name: {name!r}")
            return False
        if name in self.list_modules():
            logger.debug(f"Module already exists: {name}")
            return False

        languages = self.list_languages()
        module_path = os.path.join(self._root, name)
        os.mkdir(module_path)

        staged = StagedWrites()
        for language in languages:
            staged.add(os.path.join(module_path, language + self._document_suffix()), "")
        written = staged.commit()
        self.last_results = StoreActionResults(StoreAction.ADD_MODULE, module=name,
                                               languages=languages, written_paths=written)
        logger.info(f"Created module {name} with {len(languages)} language documents")
        return True

    def add_language(self, language: str, copy_from: Optional[str] = None) -> bool:
        """Create a document for a new language in every module.

        If copy_from is given, each module's copy_from document is duplicated
        as-is. Modules without a copy_from document get an empty document.

        Returns:
            bool: False if the language already exists, the identifier is invalid,
                or copy_from is given but is not a known language
        """
        if not Utils.is_plain_name(language):
            logger.warning(f"Invalid language identifier: {language!r}")
            return False

        languages = self.list_languages()
        if language in languages:
            logger.debug(f"Language already exists: {language}")
            return False
        if copy_from is not None and copy_from not in languages:
            logger.warning(f"Cannot copy language {language} from unknown language {copy_from}")
            return False

        staged = StagedWrites()
        suffix = self._document_suffix()
        for module in self.list_modules():
            module_path = os.path.join(self._root, module)
            target_path = os.path.join(module_path, language + suffix)
            source_path = os.path.join(module_path, copy_from + suffix) if copy_from else None
            if source_path and os.path.isfile(source_path):
                with open(source_path, 'rb') as f:
                    staged.add(target_path, f.read())
            else:
                staged.add(target_path, "")
        written = staged.commit()
        self.last_results = StoreActionResults(StoreAction.ADD_LANGUAGE,
                                               languages=[language], written_paths=written)
        if copy_from:
            logger.info(f"Created language {language} from {copy_from} in {len(written)} modules")
        else:
            logger.info(f"Created language {language} in {len(written)} modules")
        return True
