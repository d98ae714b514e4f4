from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Nook


class INookRepository(ABC):
    """Backing store for nooks.

    Mutations either return the stored nook, return ``None`` when the store
    declines, or raise a :class:`~remi.errors.RemiError` subclass.
    """

    @abstractmethod
    def fetch_all(self) -> List[Nook]:
        """Return every stored nook, in no particular order"""
        pass

    @abstractmethod
    def create(self, name: str) -> Optional[Nook]:
        pass

    @abstractmethod
    def delete(self, nook: Nook) -> None:
        """Delete *nook*; raises ``NookNotFoundError`` when it is unknown"""
        pass

    @abstractmethod
    def rename(self, nook: Nook, new_name: str) -> Optional[Nook]:
        pass

    @abstractmethod
    def update(self, nook: Nook) -> Optional[Nook]:
        """Persist every field of *nook* except its name"""
        pass


class IPreferenceSink(ABC):
    @abstractmethod
    def read_last_viewed_reference(self) -> Optional[str]:
        """Return the url of the last viewed nook, if one was stored"""
        pass

    @abstractmethod
    def write_last_viewed(self, nook: Nook) -> None:
        pass
