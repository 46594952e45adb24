"""BaseService — foundation for services bound to one record store.

Every service receives a :class:`RecordStore` at construction time and
passes it explicitly to the stateless primitives it wraps. Nothing is
looked up from ambient state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from upsertctl.domain.store import RecordStore

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for store-bound service classes.

    Usage::

        class AuditService(BaseService):
            def touch(self, record: Record) -> PersistenceResult:
                return self._store.insert_or_update(record)
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        logger.debug("%s bound to %s", type(self).__name__, type(store).__name__)

    @property
    def store(self) -> RecordStore:
        """The store every call of this service goes through."""
        return self._store
