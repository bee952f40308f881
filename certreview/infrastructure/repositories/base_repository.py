"""
Base Repository - Keyed store over one SQLAlchemy model.

Records are addressed by their integer primary key. Repositories flush so
that generated ids are visible, but never commit: the request (or CLI
command) that opened the session decides when the transaction ends.
"""
from abc import ABC
from typing import Generic, TypeVar, List, Optional, Type
from sqlalchemy.orm import Query, Session

from certreview.models import Base

T = TypeVar('T', bound=Base)


class BaseRepository(ABC, Generic[T]):
    """
    Create/read/list/delete by integer id for a single model.

    Type Parameters:
        T: The SQLAlchemy model type this repository manages
    """

    def __init__(self, session: Session, model_class: Type[T]):
        self.session = session
        self.model_class = model_class

    def _query(self) -> Query:
        return self.session.query(self.model_class)

    def get_by_id(self, entity_id: int) -> Optional[T]:
        """Entity with this primary key, or None."""
        return self.session.get(self.model_class, entity_id)

    def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """
        Entities in id order, which is also creation order.

        Args:
            limit: Maximum number of entities to return
            offset: Number of entities to skip
        """
        query = self._query().order_by(self.model_class.id).offset(offset)
        if limit:
            query = query.limit(limit)
        return query.all()

    def add(self, entity: T) -> T:
        """Stage a new entity and flush so its id is assigned."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete_by_id(self, entity_id: int) -> bool:
        """
        Stage deletion of the entity with this primary key.

        Returns:
            True if the entity existed, False otherwise
        """
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        return True

    def flush(self) -> None:
        self.session.flush()
