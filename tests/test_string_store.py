import os

import pytest

from lang.store_errors import DocumentFormatError, StoreWriteError
from lang.store_results import StoreAction
from lang.string_store import StringStore
from lang.string_table import StringTable
from lang.yaml_document import load_document
from conftest import write_documents


def read_tree(root):
    """Snapshot of every file under root as {relative path: bytes}."""
    snapshot = {}
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            path = os.path.join(dirpath, filename)
            with open(path, 'rb') as f:
                snapshot[os.path.relpath(path, root)] = f.read()
    return snapshot


class TestDiscovery:

    def test_root_must_be_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            StringStore(tmp_path / "missing")

    def test_empty_root(self, lang_root):
        store = StringStore(lang_root)

        assert store.list_modules() == []
        assert store.list_languages() == []

    def test_list_modules_ignores_files(self, store, populated_root):
        (populated_root / "README.txt").write_text("not a module")

        assert store.list_modules() == ["core", "shop"]

    def test_list_languages(self, store):
        assert store.list_languages() == ["en", "es"]

    def test_list_languages_ignores_other_extensions(self, store, populated_root):
        (populated_root / "shop" / "notes.txt").write_text("x")
        (populated_root / "shop" / "fr.yaml").write_text("x: y")

        assert store.list_languages() == ["en", "es"]

    def test_module_without_documents_contributes_nothing(self, store, populated_root):
        (populated_root / "empty").mkdir()

        assert store.list_languages() == ["en", "es"]
        assert store.list_string_keys("empty") == []

    def test_extension_is_configurable(self, lang_root):
        write_documents(lang_root, {"core": {"en.yaml": "a: b\n", "es.yml": "c: d\n"}})
        store = StringStore(lang_root, extension=".yaml")

        assert store.list_languages() == ["en"]
        assert store.list_string_keys("core") == ["a"]


class TestStringKeys:

    def test_union_in_first_seen_order(self, store):
        assert store.list_string_keys("core") == ["hello", "bye", "thanks"]

    def test_unknown_module(self, store):
        assert store.list_string_keys("missing") is None
        assert store.list_string_keys("../lang") is None

    def test_no_duplicates(self, store):
        for module in store.list_modules():
            keys = store.list_string_keys(module)
            assert len(keys) == len(set(keys))

    def test_invalid_document_raises(self, store, populated_root):
        (populated_root / "core" / "fr.yml").write_text("key: [unclosed\n")

        with pytest.raises(DocumentFormatError):
            store.list_string_keys("core")


class TestGetTable:

    def test_missing_document_gives_empty_values(self, lang_root):
        write_documents(lang_root, {"core": {"en.yml": 'hello: "Hi"\n'}})
        store = StringStore(lang_root)

        table = store.get_table("core", "es")

        assert [entry.to_dict() for entry in table] == [{"key": "hello", "value": ""}]

    def test_one_entry_per_key_in_order(self, store):
        for module in store.list_modules():
            keys = store.list_string_keys(module)
            for language in store.list_languages():
                assert store.get_table(module, language).keys() == keys

    def test_values(self, store):
        assert store.get_table("core", "es").to_dict() == {"hello": "Hola", "bye": "", "thanks": "Gracias"}

    def test_unknown_module(self, store):
        assert store.get_table("missing", "en") is None

    def test_get_tables(self, store):
        tables = store.get_tables("shop")

        assert list(tables) == ["en", "es"]
        assert tables["es"].to_dict() == {"buy": ""}
        assert store.get_tables("missing") is None


class TestSaveTable:

    def test_round_trip(self, store):
        table = StringTable([("hello", "Hello there"), ("bye", "See you"), ("thanks", "Thanks")])

        assert store.save_table("core", "en", table) is True
        assert store.get_table("core", "en") == table

    def test_keys_missing_from_table_dropped_for_that_language_only(self, store, populated_root):
        assert store.save_table("core", "en", {"hello": "Hey"}) is True

        assert load_document(populated_root / "core" / "en.yml") == {"hello": "Hey"}
        # "bye" only lived in en.yml, "thanks" still lives in es.yml
        assert store.list_string_keys("core") == ["hello", "thanks"]
        assert store.get_table("core", "en").to_dict() == {"hello": "Hey", "thanks": ""}
        assert load_document(populated_root / "core" / "es.yml") == {"hello": "Hola", "thanks": "Gracias"}

    def test_empty_table_writes_empty_document(self, store, populated_root):
        assert store.save_table("shop", "en", []) is True

        path = populated_root / "shop" / "en.yml"
        assert path.exists()
        assert path.read_bytes() == b""

    def test_creates_missing_document(self, store, populated_root):
        assert store.save_table("shop", "es", {"buy": "Comprar"}) is True

        assert load_document(populated_root / "shop" / "es.yml") == {"buy": "Comprar"}

    def test_unknown_module(self, store, populated_root):
        before = read_tree(populated_root)

        assert store.save_table("missing", "en", {"a": "b"}) is False
        assert read_tree(populated_root) == before

    def test_invalid_language(self, store):
        assert store.save_table("core", "../en", {"a": "b"}) is False

    def test_records_results(self, store):
        store.save_table("core", "en", {"hello": "Hey"})

        assert store.last_results.action == StoreAction.SAVE_TABLE
        assert store.last_results.languages == ["en"]
        assert store.last_results.written_paths[0].endswith(os.path.join("core", "en.yml"))

    def test_rows_from_entry_dicts(self, store, populated_root):
        rows = [entry.to_dict() for entry in store.get_table("core", "en")]
        rows[0]["value"] = "Hey"

        assert store.save_table("core", "en", rows) is True

        assert load_document(populated_root / "core" / "en.yml") == {"hello": "Hey", "bye": "Bye", "thanks": ""}


class TestSaveTables:

    def test_saves_every_language(self, store):
        assert store.save_tables("core", {
            "en": {"hello": "Hi", "bye": "Bye", "thanks": "Thanks"},
            "es": {"hello": "Hola", "bye": "Adios", "thanks": "Gracias"},
        }) is True

        assert store.get_table("core", "es").to_dict() == {"hello": "Hola", "bye": "Adios", "thanks": "Gracias"}
        assert store.last_results.action == StoreAction.SAVE_TABLES
        assert len(store.last_results.written_paths) == 2

    def test_unknown_module(self, store):
        assert store.save_tables("missing", {"en": {}}) is False


class TestAddStringKey:

    def test_adds_empty_value_in_every_language(self, store, populated_root):
        assert store.add_string_key("shop", "sell") is True

        assert "sell" in store.list_string_keys("shop")
        for language in store.list_languages():
            assert store.get_table("shop", language).get("sell") == ""
        # es.yml did not exist for shop and is created with the full key set
        assert load_document(populated_root / "shop" / "es.yml") == {"buy": "", "sell": ""}

    def test_appended_last(self, store):
        store.add_string_key("core", "welcome")

        assert store.list_string_keys("core") == ["hello", "bye", "thanks", "welcome"]

    def test_reconciles_existing_keys(self, store, populated_root):
        store.add_string_key("core", "welcome")

        assert load_document(populated_root / "core" / "en.yml") == {
            "hello": "Hi", "bye": "Bye", "thanks": "", "welcome": ""}
        assert load_document(populated_root / "core" / "es.yml") == {
            "hello": "Hola", "bye": "", "thanks": "Gracias", "welcome": ""}

    def test_existing_key_leaves_documents_unchanged(self, store, populated_root):
        before = read_tree(populated_root)

        # "thanks" only exists in es.yml but is part of the module's keys
        assert store.add_string_key("core", "thanks") is False
        assert read_tree(populated_root) == before

    def test_unknown_module(self, store):
        assert store.add_string_key("missing", "key") is False

    def test_empty_key(self, store):
        assert store.add_string_key("core", "") is False

    def test_no_languages(self, lang_root):
        (lang_root / "core").mkdir()
        store = StringStore(lang_root)

        assert store.add_string_key("core", "hello") is False

    def test_unwritable_document_changes_nothing(self, store, populated_root):
        # A directory in place of shop/es.yml cannot be overwritten
        (populated_root / "shop" / "es.yml").mkdir()
        before = read_tree(populated_root)

        with pytest.raises(StoreWriteError) as exc_info:
            store.add_string_key("shop", "sell")

        assert exc_info.value.written_paths == []
        assert exc_info.value.failed_paths == [str(populated_root / "shop" / "es.yml")]
        assert read_tree(populated_root) == before


class TestDeleteStringKey:

    def test_purges_key_from_every_language(self, store, populated_root):
        assert store.delete_string_key("core", "hello") is True

        assert "hello" not in store.list_string_keys("core")
        for language in ("en", "es"):
            assert "hello" not in load_document(populated_root / "core" / f"{language}.yml")

    def test_creates_missing_documents(self, store, populated_root):
        assert store.delete_string_key("shop", "buy") is True

        assert store.list_string_keys("shop") == []
        assert (populated_root / "shop" / "es.yml").read_bytes() == b""
        assert (populated_root / "shop" / "en.yml").read_bytes() == b""

    def test_absent_key(self, store, populated_root):
        before = read_tree(populated_root)

        assert store.delete_string_key("core", "missing") is False
        assert read_tree(populated_root) == before

    def test_unknown_module(self, store):
        assert store.delete_string_key("missing", "hello") is False

    def test_records_results(self, store):
        store.delete_string_key("core", "bye")

        assert store.last_results.action == StoreAction.DELETE_STRING
        assert store.last_results.key == "bye"
        assert store.last_results.languages == ["en", "es"]


class TestAddModule:

    def test_creates_empty_documents_for_every_language(self, store, populated_root):
        assert store.add_module("checkout") is True

        assert "checkout" in store.list_modules()
        assert store.list_string_keys("checkout") == []
        for language in ("en", "es"):
            assert (populated_root / "checkout" / f"{language}.yml").read_bytes() == b""

    def test_existing_module(self, store):
        assert store.add_module("core") is False

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", " "])
    def test_invalid_name(self, store, populated_root, name):
        before = read_tree(populated_root)

        assert store.add_module(name) is False
        assert read_tree(populated_root) == before

    def test_without_languages(self, lang_root):
        store = StringStore(lang_root)

        assert store.add_module("core") is True
        assert os.listdir(lang_root / "core") == []


class TestAddLanguage:

    def test_copy_from_duplicates_raw_content(self, lang_root):
        raw = '# greeting strings\ngreeting: "hi"\n'
        write_documents(lang_root, {"core": {"en.yml": raw}, "shop": {"es.yml": 'buy: "Comprar"\n'}})
        store = StringStore(lang_root)

        assert store.add_language("fr", copy_from="en") is True

        assert (lang_root / "core" / "fr.yml").read_text(encoding="utf-8") == raw
        assert store.get_table("core", "fr").to_dict() == {"greeting": "hi"}
        # shop has no en.yml, so it gets an empty fr document
        assert (lang_root / "shop" / "fr.yml").read_bytes() == b""

    def test_without_copy_creates_empty_documents(self, store, populated_root):
        assert store.add_language("fr") is True

        assert "fr" in store.list_languages()
        for module in ("core", "shop"):
            assert (populated_root / module / "fr.yml").read_bytes() == b""
        assert store.get_table("core", "fr").to_dict() == {"hello": "", "bye": "", "thanks": ""}

    def test_existing_language(self, store):
        assert store.add_language("es") is False

    def test_unknown_copy_from(self, store, populated_root):
        before = read_tree(populated_root)

        assert store.add_language("fr", copy_from="de") is False
        assert read_tree(populated_root) == before

    def test_invalid_identifier(self, store):
        assert store.add_language("fr/x") is False

    def test_records_results(self, store):
        store.add_language("fr", copy_from="en")

        assert store.last_results.action == StoreAction.ADD_LANGUAGE
        assert len(store.last_results.written_paths) == 2
        assert "ADD_LANGUAGE" in store.last_results.format_status_report()


class TestUnusualModuleNames:

    @pytest.fixture
    def blank_module_root(self, lang_root):
        write_documents(lang_root, {"core": {"en.yml": 'hello: "Hi"\n'}, " ": {"en.yml": 'buy: "Buy"\n'}})
        return lang_root

    def test_blank_module_is_readable(self, blank_module_root):
        store = StringStore(blank_module_root)

        assert store.list_modules() == [" ", "core"]
        assert store.list_string_keys(" ") == ["buy"]
        assert store.get_table(" ", "en").to_dict() == {"buy": "Buy"}

    def test_add_language_writes_inside_every_module(self, blank_module_root, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        store = StringStore(blank_module_root)

        assert store.add_language("fr") is True

        assert not (tmp_path / "None").exists()
        assert (blank_module_root / " " / "fr.yml").read_bytes() == b""
        assert (blank_module_root / "core" / "fr.yml").read_bytes() == b""
        assert all(path is not None and path != "None" for path in store.last_results.written_paths)

    def test_new_blank_module_refused(self, lang_root):
        store = StringStore(lang_root)

        assert store.add_module(" ") is False
        assert store.add_module("a\\b") is False
