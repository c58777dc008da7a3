from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.errors import RepositoryError


def is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig).upper()
    return "UNIQUE" in message or "DUPLICATE" in message


def is_foreign_key_violation(error: IntegrityError) -> bool:
    return "FOREIGN KEY" in str(error.orig).upper()


class SqlRepository:
    """
    Shared plumbing for the SQLAlchemy repositories.

    Store failures other than the constraint violations each repository
    classifies itself are wrapped in ``error_cls``.
    """

    error_cls: type[RepositoryError] = RepositoryError

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_errors(self):
        try:
            yield
        except SQLAlchemyError as e:
            raise self.error_cls(str(e)) from e

    def _flush(self) -> IntegrityError | None:
        """
        Flush pending changes, returning the constraint violation if any.

        The unit of work is rolled back on a violation, so callers must not
        rely on earlier unflushed changes afterwards.
        """
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            return e
        return None
