"""
Base repository providing common CRUD operations over aggregates.
"""

from typing import Generic, TypeVar, List, Optional, Type, Any
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import ConcurrencyError, NotFoundError
from constants import ErrorMessages
from .db_errors import translate_db_error

M = TypeVar('M')
A = TypeVar('A')


class BaseRepository(Generic[M, A]):
    """
    Generic base repository mapping ORM rows to domain aggregates.

    Subclasses implement ``_to_domain`` and ``_apply``. Writes flush
    immediately so constraint violations surface inside the repository call;
    committing is left to the unit of work.
    """

    def __init__(self, db: Session, model: Type[M]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _to_domain(self, row: M) -> A:
        raise NotImplementedError

    def _apply(self, aggregate: A, row: M) -> None:
        """Copy mutable aggregate fields onto the row."""
        raise NotImplementedError

    def _flush(self, operation: str, **context: Any) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise translate_db_error(e, operation, **context) from e

    def _get_row(self, id: str) -> Optional[M]:
        return self.db.get(self.model, id)

    def get_by_id(self, id: str) -> Optional[A]:
        """
        Retrieve an aggregate by its ID.

        Returns:
            Aggregate or None if not found
        """
        row = self._get_row(id)
        return self._to_domain(row) if row is not None else None

    def add(self, aggregate: A, **context: Any) -> A:
        """
        Insert a new aggregate.

        Returns:
            The same aggregate, now carrying its stored version
        """
        row = self.model(id=aggregate.state.id, created_at=aggregate.state.created_at)
        self._apply(aggregate, row)
        row.updated_at = aggregate.state.updated_at
        self.db.add(row)
        self._flush(f"add {self.model.__tablename__}", **context)
        aggregate.state.version = row.version
        return aggregate

    def update(self, aggregate: A, **context: Any) -> A:
        """
        Persist changes to an existing aggregate.

        Raises:
            NotFoundError: If the row no longer exists
            ConcurrencyError: If the row changed since the aggregate was loaded
        """
        row = self._get_row(aggregate.state.id)
        if row is None:
            raise NotFoundError(f"{self.model.__name__} with ID {aggregate.state.id} not found")
        if aggregate.state.version is not None and aggregate.state.version != row.version:
            raise ConcurrencyError(ErrorMessages.CONCURRENT_UPDATE, {"id": aggregate.state.id})

        self._apply(aggregate, row)
        row.updated_at = aggregate.state.updated_at
        self._flush(f"update {self.model.__tablename__}", **context)
        aggregate.state.version = row.version
        return aggregate

    def delete(self, id: str) -> bool:
        """
        Delete a record by its ID.

        Returns:
            True if deleted, False if not found
        """
        row = self._get_row(id)
        if row is None:
            return False
        self.db.delete(row)
        self._flush(f"delete {self.model.__tablename__}")
        return True

    def count(self) -> int:
        return self.db.query(self.model).count()

    def exists(self, id: str) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == id).first() is not None

    @staticmethod
    def _page(query, page: int, page_size: int) -> List[Any]:
        return query.offset((page - 1) * page_size).limit(page_size).all()
