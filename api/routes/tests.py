"""Test management endpoints."""
from fastapi import APIRouter, Query, Response, status

from api.models import TestCreate
from api.repositories import CategoryRepository, TestRepository
from api.services.test_service import require_category, require_test
from serialization import serialize_test

router = APIRouter(prefix="/api/tests", tags=["tests"])


@router.get("")
def list_tests(
    tests: TestRepository,
    category_id: int | None = Query(default=None, alias="categoryId"),
) -> list[dict[str, object]]:
    """List tests, optionally only those of one category."""
    return [serialize_test(test) for test in tests.list(category_id=category_id)]


@router.get("/{test_id}")
def get_test(test_id: int, tests: TestRepository) -> dict[str, object]:
    """Get test metadata."""
    return serialize_test(require_test(tests, test_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_test(
    payload: TestCreate,
    tests: TestRepository,
    categories: CategoryRepository,
) -> dict[str, object]:
    """Create a new test."""
    require_category(categories, payload.categoryId)
    test = tests.create(
        name=payload.name,
        category_id=payload.categoryId,
        time_limit=payload.timeLimit,
    )
    return serialize_test(test)


@router.put("/{test_id}")
def update_test(
    test_id: int,
    payload: TestCreate,
    tests: TestRepository,
    categories: CategoryRepository,
) -> dict[str, object]:
    """Replace test fields. The upload date is kept."""
    require_test(tests, test_id)
    require_category(categories, payload.categoryId)
    test = tests.update(
        test_id,
        name=payload.name,
        category_id=payload.categoryId,
        time_limit=payload.timeLimit,
    )
    return serialize_test(test)


@router.delete("/{test_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_test(test_id: int, tests: TestRepository) -> Response:
    """Delete test together with its questions."""
    require_test(tests, test_id)
    tests.delete(test_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
