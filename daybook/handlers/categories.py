"""
Category module handlers
"""

from datetime import datetime
from typing import Any, Dict

from daybook.core.categories import CategoryStore
from daybook.core.exceptions import ConflictError
from daybook.models import CreateCategoryRequest, CreateSubcategoryRequest

from . import api_handler


@api_handler(
    body=CreateCategoryRequest,
    method="POST",
    path="/categories",
    tags=["categories"],
    status_code=201,
    description="Create a category; answers 409 with the existing category when the name is taken",
)
def create_category(body: CreateCategoryRequest) -> Dict[str, Any]:
    """Create a category"""
    result = CategoryStore().create_category(body.name)
    if not result.created:
        raise ConflictError(
            "Category already exists", existing=result.value.model_dump(mode="json")
        )

    return {
        "success": True,
        "data": result.value.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(
    body=CreateSubcategoryRequest,
    method="POST",
    path="/categories/{category_name}/subcategories",
    tags=["categories"],
    status_code=201,
    description="Create a subcategory; answers 409 with the existing one when the name is taken",
)
def create_subcategory(
    category_name: str, body: CreateSubcategoryRequest
) -> Dict[str, Any]:
    """Create a subcategory under an existing category"""
    result = CategoryStore().create_subcategory(category_name, body.name)
    if not result.created:
        raise ConflictError(
            "Subcategory already exists", existing=result.value.model_dump(mode="json")
        )

    return {
        "success": True,
        "data": result.value.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }
