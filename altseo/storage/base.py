from abc import ABC, abstractmethod
from typing import Any


class BaseKeyValueStore(ABC):
    """Contract for the persisted key/value store shared by all bulk steps.

    Values must be JSON-serialisable. Each single-key operation is atomic.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or default when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Create or overwrite the value under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Deleting an absent key is a no-op."""

    @abstractmethod
    def compare_and_set(self, key: str, expected: Any, new: Any) -> bool:
        """Atomically replace the value under key if it still equals expected.

        Args:
            key: Target key.
            expected: Value the caller last observed; None means "absent".
            new: Value to store.

        Returns:
            True when the swap happened, False when another writer got there first.
        """

    @abstractmethod
    def compare_and_delete(self, key: str, expected: Any) -> bool:
        """Atomically remove key if its value still equals expected.

        Returns:
            True when the key was removed, False when it was absent or changed.
        """
