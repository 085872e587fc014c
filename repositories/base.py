"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, Type
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common record operations.
    All repositories should inherit from this class.

    Subclasses expose their aggregate as DTOs (see domain.mappers); the
    ORM records stay inside the repository.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def _get_record(self, entity_id) -> Optional[ModelType]:
        """Get ORM record by primary key"""
        return self.db.get(self.model, entity_id)

    def _save(self, record: ModelType) -> ModelType:
        """Add or update a record and commit"""
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def count(self) -> int:
        return self.db.query(self.model).count()
