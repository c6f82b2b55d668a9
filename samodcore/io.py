"""IO tasks handed to the caller and the results it hands back."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Optional, TypeVar, Union

from samodcore.storage_key import StorageKey

A = TypeVar("A")
B = TypeVar("B")
P = TypeVar("P")

_task_counter = itertools.count()
_task_counter_lock = threading.Lock()


@dataclass(frozen=True)
class IoTaskId:
    """Process-wide unique identifier of an IO task."""

    value: int

    @classmethod
    def next(cls) -> IoTaskId:
        """Allocate the next unused task ID."""
        with _task_counter_lock:
            return cls(next(_task_counter))


@dataclass(frozen=True)
class IoTask(Generic[A]):
    """An action the caller must perform, tagged with its task ID."""

    task_id: IoTaskId
    action: A

    @classmethod
    def new(cls, action: A) -> IoTask[A]:
        """Wrap ``action`` in a task with a fresh ID."""
        return cls(IoTaskId.next(), action)

    def map(self, func: Callable[[A], B]) -> IoTask[B]:
        """The same task with its action transformed by ``func``."""
        return IoTask(self.task_id, func(self.action))


@dataclass(frozen=True)
class IoResult(Generic[P]):
    """The outcome of performing the task with ``task_id``."""

    task_id: IoTaskId
    payload: P


@dataclass(frozen=True)
class LoadTask:
    """Load the single value stored under ``key``."""

    key: StorageKey


@dataclass(frozen=True)
class LoadRangeTask:
    """Load every entry whose key starts with ``prefix``."""

    prefix: StorageKey


@dataclass(frozen=True)
class PutTask:
    """Store ``value`` under ``key``, replacing any existing value."""

    key: StorageKey
    value: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))


@dataclass(frozen=True)
class DeleteTask:
    """Remove the entry under ``key``; a missing key is not an error."""

    key: StorageKey


@dataclass(frozen=True)
class LoadResult:
    """The value that was loaded, or None if the key was absent."""

    value: Optional[bytes]


@dataclass(frozen=True)
class LoadRangeResult:
    """All entries found below the requested prefix."""

    values: Dict[StorageKey, bytes] = field(default_factory=dict)


@dataclass(frozen=True)
class PutResult:
    """A put completed."""


@dataclass(frozen=True)
class DeleteResult:
    """A delete completed."""


StorageTask = Union[LoadTask, LoadRangeTask, PutTask, DeleteTask]
StorageResult = Union[LoadResult, LoadRangeResult, PutResult, DeleteResult]