"""
Identifier store interface.

The listing flow needs two things from wherever identifiers are persisted:
a snapshot of the identifiers in use, and an allocation that generates and
records a new one without another writer slipping in between.
"""

import threading
from typing import Any, Dict, Optional, Protocol, Set

from deedseal.lib import identifier
from deedseal.lib.log import get_logger, log

logger = get_logger("store")


class IdentifierStore(Protocol):
    """A keyed record store consulted for identifier uniqueness."""

    def existing_ids(self) -> Set[str]: ...

    def contains(self, id_hex: str) -> bool: ...

    def get(self, id_hex: str) -> Optional[Dict[str, Any]]: ...

    def allocate(self, plaintext: str, metadata: Dict[str, Any]) -> str: ...


class InMemoryIdentifierStore:
    """
    A process-local identifier store.

    Generation and insertion happen under one lock, so concurrent listings
    sharing this store can never be handed the same identifier.
    """

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        # records: { id_hex: metadata }
        self.records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        for id_hex, metadata in (initial or {}).items():
            self.records[identifier.normalize_identifier(id_hex)] = dict(metadata)

    def existing_ids(self) -> Set[str]:
        with self._lock:
            return set(self.records)

    def contains(self, id_hex: str) -> bool:
        with self._lock:
            return id_hex.strip().upper() in self.records

    def get(self, id_hex: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            metadata = self.records.get(id_hex.strip().upper())
            return dict(metadata) if metadata is not None else None

    def allocate(self, plaintext: str, metadata: Dict[str, Any]) -> str:
        """Generate an unused identifier and record it with its metadata."""
        with self._lock:
            id_hex = identifier.generate(plaintext, self.records.keys())
            self.records[id_hex] = dict(metadata)
        log(logger, "info", "Identifier allocated", id_hex=id_hex, total=len(self.records))
        return id_hex

    def clear(self):
        with self._lock:
            self.records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self.records)
