"""Identifiers, storage keys, storage tasks, ephemeral sessions, connection types and the CBOR wire protocol for document sync."""

__version__ = "0.3.1"