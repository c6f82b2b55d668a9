"""An in-memory key-value store that performs storage tasks."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from samodcore.io import (
    DeleteResult,
    DeleteTask,
    LoadRangeResult,
    LoadRangeTask,
    LoadResult,
    LoadTask,
    PutResult,
    PutTask,
    StorageResult,
    StorageTask,
)
from samodcore.storage_key import StorageKey


class MemoryStorage:
    """A dictionary from storage keys to bytes."""

    def __init__(self, data: Optional[Mapping[StorageKey, bytes]] = None) -> None:
        self.data: Dict[StorageKey, bytes] = dict(data or {})

    def handle_task(self, task: StorageTask) -> StorageResult:
        """Perform ``task`` against the stored data and return its result."""
        match task:
            case LoadTask(key=key):
                return LoadResult(self.data.get(key))
            case LoadRangeTask(prefix=prefix):
                return LoadRangeResult(
                    {k: v for k, v in self.data.items() if prefix.is_prefix_of(k)}
                )
            case PutTask(key=key, value=value):
                self.data[key] = value
                return PutResult()
            case DeleteTask(key=key):
                self.data.pop(key, None)
                return DeleteResult()
        raise TypeError(f"unknown storage task: {task!r}")