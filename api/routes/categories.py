"""Category management endpoints."""
from fastapi import APIRouter, Response, status

from api.models import CategoryCreate
from api.repositories import CategoryRepository
from api.services.test_service import require_category
from serialization import serialize_category

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
def list_categories(categories: CategoryRepository) -> list[dict[str, object]]:
    """List all categories."""
    return [serialize_category(category) for category in categories.list()]


@router.get("/{category_id}")
def get_category(category_id: int, categories: CategoryRepository) -> dict[str, object]:
    """Get category."""
    return serialize_category(require_category(categories, category_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate, categories: CategoryRepository
) -> dict[str, object]:
    """Create a new category."""
    category = categories.create(name=payload.name, description=payload.description)
    return serialize_category(category)


@router.put("/{category_id}")
def update_category(
    category_id: int, payload: CategoryCreate, categories: CategoryRepository
) -> dict[str, object]:
    """Replace category fields."""
    require_category(categories, category_id)
    category = categories.update(
        category_id, name=payload.name, description=payload.description
    )
    return serialize_category(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, categories: CategoryRepository) -> Response:
    """Delete category together with its tests and their questions."""
    require_category(categories, category_id)
    categories.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
