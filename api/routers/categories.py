"""Category endpoints. Categories are read-only over HTTP."""

from typing import List

from fastapi import APIRouter

from api.dependencies import ServicesDep
from api.schemas import CategoryResponse

router = APIRouter()


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(services: ServicesDep):
    """List all categories, sorted by name."""
    return [
        CategoryResponse.model_validate(category)
        for category in services.categories.find_all()
    ]
