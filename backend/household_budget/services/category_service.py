import structlog
from ulid import ULID

from ..domain import KEEP, Category, CategoryName, CategoryRepository, FieldUpdate
from ..domain.errors import CategoryNotFound
from ..domain.updates import map_update

logger = structlog.get_logger(__name__)


def normalize_label(label: str | None) -> str | None:
    """Trim a label; empty or whitespace-only labels become None."""
    if label is None:
        return None
    label = label.strip()
    return label or None


class CategoryService:
    def __init__(self, category_repo: CategoryRepository):
        self.category_repo = category_repo

    def list_all(self) -> list[Category]:
        return self.category_repo.list_all()

    def find_by_id(self, category_id: ULID) -> Category:
        category = self.category_repo.find_by_id(category_id)
        if category is None:
            raise CategoryNotFound()
        return category

    def create(self, name: CategoryName, label: str | None = None) -> Category:
        category = self.category_repo.create(name, normalize_label(label))
        logger.info("category_created", category_id=str(category.id), name=str(category.name))
        return category

    def rename(self, category_id: ULID, name: CategoryName) -> Category:
        category = self.category_repo.update_name(category_id, name)
        logger.info("category_renamed", category_id=str(category.id), name=str(category.name))
        return category

    def update(
        self,
        category_id: ULID,
        name: CategoryName | None = None,
        label: FieldUpdate[str] = KEEP,
    ) -> Category:
        """
        Partially update a category.

        ``name=None`` keeps the current name. ``label`` is KEEP, CLEAR or
        Set(text); a blank text clears the label.
        """
        label = map_update(label, normalize_label)
        category = self.category_repo.update(category_id, name=name, label=label)
        logger.info("category_updated", category_id=str(category.id), name=str(category.name))
        return category
