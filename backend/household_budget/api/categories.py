from fastapi import APIRouter, Depends

from ..domain import CLEAR, KEEP, Category, CategoryName, Set
from ..models.types import format_timestamp
from ..schemas import CategoryCreate, CategoryUpdate, CategoryResponse
from ..services import CategoryService
from .deps import get_category_service
from .errors import parse_id

router = APIRouter()


def _build_response(category: Category) -> dict:
    return {
        "id": str(category.id),
        "name": str(category.name),
        "label": category.label,
        "created_at": format_timestamp(category.created_at),
        "updated_at": format_timestamp(category.updated_at),
    }


@router.get("", response_model=list[CategoryResponse])
def list_categories(service: CategoryService = Depends(get_category_service)):
    """Get all categories, sorted by name."""
    return [_build_response(c) for c in service.list_all()]


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    data: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    """Create a new category."""
    category = service.create(CategoryName(data.name), data.label)
    return _build_response(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """Rename a category and/or change its label."""
    category_ulid = parse_id(category_id)

    name = CategoryName(data.name) if data.name is not None else None
    if "label" not in data.model_fields_set and name is not None:
        return _build_response(service.rename(category_ulid, name))

    label = KEEP
    if "label" in data.model_fields_set:
        label = CLEAR if data.label is None else Set(data.label)

    category = service.update(category_ulid, name=name, label=label)
    return _build_response(category)
