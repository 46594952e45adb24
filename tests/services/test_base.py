"""Tests for BaseService."""

from upsertctl.infrastructure.memory import MemoryStore
from upsertctl.services.base import BaseService
from tests.conftest import User


class TestBaseService:
    def test_binds_store(self) -> None:
        store = MemoryStore()
        service = BaseService(store)
        assert service.store is store

    def test_subclass_uses_bound_store(self) -> None:
        class CountingService(BaseService):
            def total(self) -> int:
                return self._store.count(User)

        store = MemoryStore()
        store.insert(User(name="Harry"))
        assert CountingService(store).total() == 1
