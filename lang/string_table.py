from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional


@dataclass
class StringEntry:
    """A single string key with its value in one language."""
    key: str
    value: str = ""

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value}


class StringTable:
    """Ordered, key-unique sequence of string entries.

    Entries keep the order in which their keys were first added. Adding a key
    that is already present replaces its value without moving it.
    """

    def __init__(self, entries: Iterable = None):
        self._entries: list[StringEntry] = []
        self._index: dict[str, int] = {}
        if entries is not None:
            for entry in entries:
                self.append(*self._entry_fields(entry))

    @staticmethod
    def _entry_fields(entry) -> tuple:
        if isinstance(entry, StringEntry):
            return entry.key, entry.value
        if isinstance(entry, Mapping):
            if "key" not in entry:
                raise TypeError(f"Table row has no 'key' item: {entry!r}")
            return entry["key"], entry.get("value", "")
        if isinstance(entry, (tuple, list)) and len(entry) == 2:
            return entry[0], entry[1]
        raise TypeError(f"Unsupported table row: {entry!r}")

    @classmethod
    def from_dict(cls, mapping: Mapping) -> 'StringTable':
        return cls(mapping.items())

    @classmethod
    def coerce(cls, table) -> 'StringTable':
        """Build a table from any of the accepted table representations.

        Args:
            table: A StringTable, a mapping of key to value, or an iterable of
                StringEntry objects, {"key", "value"} rows or
                (key, value) pairs

        Returns:
            StringTable: The table itself if already a StringTable, otherwise a new one
        """
        if table is None:
            return cls()
        if isinstance(table, StringTable):
            return table
        if isinstance(table, Mapping):
            return cls.from_dict(table)
        return cls(table)

    def append(self, key: str, value: str = ""):
        key = str(key)
        value = "" if value is None else str(value)
        if key in self._index:
            self._entries[self._index[key]].value = value
        else:
            self._index[key] = len(self._entries)
            self._entries.append(StringEntry(key, value))

    def remove(self, key: str) -> bool:
        """Remove an entry by key.

        Returns:
            bool: True if the key was present
        """
        if key not in self._index:
            return False
        del self._entries[self._index[key]]
        self._index = {entry.key: i for i, entry in enumerate(self._entries)}
        return True

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        if key in self._index:
            return self._entries[self._index[key]].value
        return default

    def keys(self) -> list[str]:
        return [entry.key for entry in self._entries]

    def values(self) -> list[str]:
        return [entry.value for entry in self._entries]

    def items(self) -> list[tuple[str, str]]:
        return [(entry.key, entry.value) for entry in self._entries]

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())

    def copy(self) -> 'StringTable':
        return StringTable(self.items())

    def copy_values_from(self, other, overwrite_filled: bool = True) -> int:
        """Copy values of matching keys from another table into this one.

        Keys only present in the other table are ignored.

        Args:
            other: Table to copy values from (any representation accepted by coerce)
            overwrite_filled: If False, only empty values in this table are replaced

        Returns:
            int: Number of values that changed
        """
        other = StringTable.coerce(other)
        changed = 0
        for entry in self._entries:
            if entry.key not in other:
                continue
            if not overwrite_filled and entry.value != "":
                continue
            new_value = other.get(entry.key)
            if new_value != entry.value:
                entry.value = new_value
                changed += 1
        return changed

    def __len__(self):
        return len(self._entries)

    def __iter__(self) -> Iterator[StringEntry]:
        return iter(list(self._entries))

    def __contains__(self, key):
        return key in self._index

    def __eq__(self, other):
        if isinstance(other, StringTable):
            return self.items() == other.items()
        return NotImplemented

    def __repr__(self):
        return f"StringTable({self.items()!r})"
