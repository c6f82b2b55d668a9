"""Parsing and formatting of ``automerge:`` URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from samodcore.document_id import BadDocumentId, DocumentId

_PREFIX = "automerge:"
_INDEX_PATTERN = re.compile(r"\+?[0-9]+")
_MAX_INDEX = 2**64 - 1

Prop = Union[int, str]


class InvalidUrlError(ValueError):
    """Raised when a string is not a valid automerge URL."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Invalid Automerge URL: {self.detail}"

    def __repr__(self) -> str:
        return f"InvalidUrlError({self.detail})"


def _parse_prop(part: str) -> Prop:
    if _INDEX_PATTERN.fullmatch(part):
        index = int(part)
        if index <= _MAX_INDEX:
            return index
    return part


@dataclass(frozen=True, repr=False)
class AutomergeUrl:
    """A document ID with an optional path of map keys and list indices."""

    document_id: DocumentId
    path: Optional[Tuple[Prop, ...]] = None

    def __post_init__(self) -> None:
        if self.path is not None:
            object.__setattr__(self, "path", tuple(self.path))

    @classmethod
    def from_document_id(cls, document_id: DocumentId) -> AutomergeUrl:
        """A URL that points at the whole document."""
        return cls(document_id)

    @classmethod
    def parse(cls, text: str) -> AutomergeUrl:
        """Parse ``automerge:<document id>[/<prop>...]``."""
        if not text.startswith(_PREFIX):
            raise InvalidUrlError(f"invalid automerge url: {text}")
        doc_part, *prop_parts = text[len(_PREFIX):].split("/")
        try:
            document_id = DocumentId.parse(doc_part)
        except BadDocumentId:
            raise InvalidUrlError(f"invalid automerge url: {text}") from None
        props = tuple(_parse_prop(part) for part in prop_parts)
        return cls(document_id, props or None)

    def __str__(self) -> str:
        suffix = "".join(f"/{prop}" for prop in self.path or ())
        return f"{_PREFIX}{self.document_id}{suffix}"

    def __repr__(self) -> str:
        return f"AutomergeUrl({self})"