import pytest

from lang.string_table import StringEntry, StringTable


class TestStringTable:

    def test_append_keeps_first_position_on_duplicate_key(self):
        table = StringTable()
        table.append("a", "1")
        table.append("b", "2")
        table.append("a", "3")

        assert table.keys() == ["a", "b"]
        assert table.get("a") == "3"
        assert len(table) == 2

    def test_append_coerces_values_to_text(self):
        table = StringTable()
        table.append("count", 3)
        table.append("missing", None)

        assert table.get("count") == "3"
        assert table.get("missing") == ""

    def test_remove(self):
        table = StringTable([("a", "1"), ("b", "2"), ("c", "3")])

        assert table.remove("b") is True
        assert table.remove("b") is False
        assert table.keys() == ["a", "c"]
        assert table.get("c") == "3"
        assert "b" not in table

    def test_coerce_accepts_mapping_entries_and_pairs(self):
        from_mapping = StringTable.coerce({"a": "1", "b": "2"})
        from_entries = StringTable.coerce([StringEntry("a", "1"), StringEntry("b", "2")])
        from_pairs = StringTable.coerce([("a", "1"), ("b", "2")])

        assert from_mapping == from_entries == from_pairs
        assert StringTable.coerce(None) == StringTable()

    def test_coerce_accepts_key_value_rows(self):
        rows = [{"key": "a", "value": "1"}, {"key": "b", "value": "2"}]

        assert StringTable.coerce(rows).to_dict() == {"a": "1", "b": "2"}

    @pytest.mark.parametrize("row", [{"name": "a", "value": "1"}, "ab", ("a", "1", "x")])
    def test_unsupported_rows_rejected(self, row):
        with pytest.raises(TypeError):
            StringTable([row])

    def test_coerce_returns_same_table(self):
        table = StringTable([("a", "1")])
        assert StringTable.coerce(table) is table

    def test_to_dict_preserves_order(self):
        table = StringTable([("z", "1"), ("a", "2")])
        assert list(table.to_dict().items()) == [("z", "1"), ("a", "2")]

    def test_entry_to_dict(self):
        assert StringEntry("greeting", "hi").to_dict() == {"key": "greeting", "value": "hi"}

    def test_copy_is_independent(self):
        table = StringTable([("a", "1")])
        copied = table.copy()
        copied.append("a", "2")

        assert table.get("a") == "1"


class TestCopyValuesFrom:

    @pytest.fixture
    def target(self):
        return StringTable([("hello", "Hi"), ("bye", ""), ("only_here", "x")])

    def test_copies_matching_keys(self, target):
        changed = target.copy_values_from({"hello": "Hola", "bye": "Adios", "extra": "ignored"})

        assert changed == 2
        assert target.to_dict() == {"hello": "Hola", "bye": "Adios", "only_here": "x"}
        assert "extra" not in target

    def test_keep_filled_values(self, target):
        changed = target.copy_values_from({"hello": "Hola", "bye": "Adios"}, overwrite_filled=False)

        assert changed == 1
        assert target.get("hello") == "Hi"
        assert target.get("bye") == "Adios"

    def test_unchanged_values_not_counted(self, target):
        assert target.copy_values_from({"hello": "Hi"}) == 0
