"""Notification that a document's heads have moved."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DocumentChanged:
    """The heads a document has after a change."""

    new_heads: Tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "new_heads", tuple(self.new_heads))