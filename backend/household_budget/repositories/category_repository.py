from ulid import ULID

from .. import models
from ..domain import KEEP, Category, CategoryName, CategoryRepository, FieldUpdate, utc_now
from ..domain.errors import (
    CategoryNameAlreadyExists,
    CategoryNotFound,
    CategoryRepositoryError,
)
from ..domain.updates import apply_update
from .base import SqlRepository, is_unique_violation


def to_category(row: models.Category) -> Category:
    return Category(
        id=row.id,
        name=CategoryName(row.name),
        label=row.label,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlCategoryRepository(SqlRepository, CategoryRepository):
    error_cls = CategoryRepositoryError

    def list_all(self) -> list[Category]:
        with self._store_errors():
            rows = self.db.query(models.Category).order_by(models.Category.name).all()
            return [to_category(row) for row in rows]

    def find_by_id(self, category_id: ULID) -> Category | None:
        with self._store_errors():
            row = self.db.get(models.Category, category_id)
            return to_category(row) if row else None

    def _name_taken(self, name: CategoryName, exclude_id: ULID | None = None) -> bool:
        query = self.db.query(models.Category.id).filter(models.Category.name == name.value)
        if exclude_id is not None:
            query = query.filter(models.Category.id != exclude_id)
        return query.first() is not None

    def _get_row(self, category_id: ULID) -> models.Category:
        row = self.db.get(models.Category, category_id)
        if row is None:
            raise CategoryNotFound()
        return row

    def _save(self, row: models.Category, name: CategoryName) -> Category:
        error = self._flush()
        if error is not None:
            if is_unique_violation(error):
                raise CategoryNameAlreadyExists(name.value) from error
            raise CategoryRepositoryError(str(error)) from error
        return to_category(row)

    def create(self, name: CategoryName, label: str | None = None) -> Category:
        with self._store_errors():
            if self._name_taken(name):
                raise CategoryNameAlreadyExists(name.value)

            now = utc_now()
            row = models.Category(name=name.value, label=label, created_at=now, updated_at=now)
            self.db.add(row)
            return self._save(row, name)

    def update_name(self, category_id: ULID, name: CategoryName) -> Category:
        return self.update(category_id, name=name)

    def update(
        self,
        category_id: ULID,
        name: CategoryName | None = None,
        label: FieldUpdate[str] = KEEP,
    ) -> Category:
        with self._store_errors():
            row = self._get_row(category_id)

            if name is not None and name.value != row.name:
                if self._name_taken(name, exclude_id=category_id):
                    raise CategoryNameAlreadyExists(name.value)
                row.name = name.value
            row.label = apply_update(row.label, label)

            return self._save(row, name or CategoryName(row.name))
