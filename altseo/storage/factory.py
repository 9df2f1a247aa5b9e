from typing import ClassVar

from altseo.config.settings import Settings
from altseo.storage.base import BaseKeyValueStore
from altseo.storage.memory_store import InMemoryKeyValueStore
from altseo.storage.postgres_store import PostgresKeyValueStore


class StateStoreFactory:
    """Creates the configured persisted key/value store."""

    STORES: ClassVar[dict[str, type[BaseKeyValueStore]]] = {
        "memory": InMemoryKeyValueStore,
        "postgres": PostgresKeyValueStore,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.state_store.lower()
        store_cls = cls.STORES.get(backend)
        if store_cls is None:
            raise ValueError(
                f"Unknown state store '{backend}'. Choose from: {list(cls.STORES)}"
            )
        return store_cls()
