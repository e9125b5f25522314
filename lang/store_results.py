from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import List, Optional
import os

from lang.store_errors import StoreWriteError
from utils.logging_setup import get_logger

logger = get_logger("store_results")


class StoreAction(Enum):
    SAVE_TABLE = auto()
    SAVE_TABLES = auto()
    ADD_STRING = auto()
    DELETE_STRING = auto()
    ADD_MODULE = auto()
    ADD_LANGUAGE = auto()


@dataclass
class StagedWrite:
    """Content waiting to be written to one document path."""
    path: str
    content: object  # str for serialized documents, bytes for copied documents

    def write(self):
        if isinstance(self.content, bytes):
            with open(self.path, 'wb') as f:
                f.write(self.content)
        else:
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(self.content)


class StagedWrites:
    """A batch of document writes that is validated before any file is touched.

    Usage:
        staged = StagedWrites()
        staged.add(path, content)
        written = staged.commit()  # validates first
    """

    def __init__(self):
        self._writes: list[StagedWrite] = []

    def add(self, path, content):
        path = str(path)
        for write in self._writes:
            if write.path == path:
                write.content = content
                return
        self._writes.append(StagedWrite(path, content))

    @property
    def paths(self) -> List[str]:
        return [write.path for write in self._writes]

    def __len__(self):
        return len(self._writes)

    def get_unwritable_paths(self) -> List[str]:
        """Return the staged paths that cannot be written."""
        unwritable = []
        for path in self.paths:
            parent = os.path.dirname(path) or "."
            if os.path.exists(path):
                if not os.path.isfile(path) or not os.access(path, os.W_OK):
                    unwritable.append(path)
            elif not os.path.isdir(parent) or not os.access(parent, os.W_OK):
                unwritable.append(path)
        return unwritable

    def validate(self):
        """Raise StoreWriteError if any staged path cannot be written."""
        unwritable = self.get_unwritable_paths()
        if unwritable:
            raise StoreWriteError(
                f"{len(unwritable)} of {len(self._writes)} documents cannot be written, nothing was changed",
                written_paths=[], failed_paths=unwritable)

    def commit(self) -> List[str]:
        """Validate and write every staged document.

        Returns:
            list: Paths written, in staging order

        Raises:
            StoreWriteError: If validation fails (nothing written) or a write fails
                part way through (written_paths lists what was already changed)
        """
        self.validate()
        written = []
        for i, staged in enumerate(self._writes):
            try:
                staged.write()
            except OSError as e:
                failed = [w.path for w in self._writes[i:]]
                logger.error(f"Failed writing {staged.path}: {e}. {len(written)} documents already written")
                raise StoreWriteError(f"Failed writing {staged.path}: {e}",
                                      written_paths=written, failed_paths=failed) from e
            written.append(staged.path)
        return written


@dataclass
class StoreActionResults:
    """Record of the last mutating store operation."""
    action: StoreAction
    module: Optional[str] = None
    languages: List[str] = field(default_factory=list)
    key: Optional[str] = None
    written_paths: List[str] = field(default_factory=list)
    action_timestamp: datetime = field(default_factory=datetime.now)

    def format_status_report(self) -> str:
        """Generate a human-readable summary."""
        lines = [f"Action: {self.action.name} at {self.action_timestamp:%Y-%m-%d %H:%M:%S}"]
        if self.module:
            lines.append(f"Module: {self.module}")
        if self.key:
            lines.append(f"String: {self.key}")
        if self.languages:
            lines.append(f"Languages: {', '.join(self.languages)}")
        lines.append(f"Documents written: {len(self.written_paths)}")
        for path in self.written_paths:
            lines.append(f"  - {path}")
        return "\n".join(lines)
