"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, Type
from uuid import UUID
from abc import ABC

from adapters.store import PersistentStore

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing lookups over a PersistentStore.
    All repositories should inherit from this class.
    """

    def __init__(self, store: PersistentStore, model: Type[ModelType]):
        self.store = store
        self.model = model

    @property
    def db(self):
        return self.store.session

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """Get entity by primary key, None if absent"""
        return self.store.get(self.model, entity_id)
