from abc import ABC, abstractmethod
from typing import Any

class IPreferenceStore(ABC):
    """
    Key-value storage for user preferences.
    Values must be JSON-serializable.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass
