# =============================================================================
# app/routers/admin_categories.py - Category Management Endpoints
# =============================================================================
# Admin CRUD for categories. Every response is an ActionResult envelope:
# {"success", "data", "error", "code", "status_code", "warnings"}.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path
from pydantic import BaseModel, Field

from app.dependencies import ActionsDep, CategoryServiceDep, result_response
from core.models import Category

router = APIRouter()


# =============================================================================
# Request Models
# =============================================================================

class CategoryRequest(BaseModel):
    """Category form fields. Slug defaults to a slugified name."""
    name: str = Field(..., examples=["Kue Kering"])
    slug: str | None = Field(default=None, examples=["kue-kering"])
    description: str | None = Field(default=None, examples=["Nastar, kastengel, putri salju"])


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[Category])
async def list_categories(categories: CategoryServiceDep):
    """All categories in display order."""
    return categories.list_categories()


@router.post("")
async def create_category(request: CategoryRequest, actions: ActionsDep):
    """Create a category at the end of the display order."""
    result = actions.create_category(
        name=request.name,
        slug=request.slug,
        description=request.description,
    )
    return result_response(result)


@router.put("/{category_id}")
async def update_category(
    category_id: Annotated[UUID, Path(description="Category UUID")],
    request: CategoryRequest,
    actions: ActionsDep,
):
    """Update a category's name, slug and description."""
    result = actions.update_category(
        str(category_id),
        name=request.name,
        slug=request.slug,
        description=request.description,
    )
    return result_response(result)


@router.delete("/{category_id}")
async def delete_category(
    category_id: Annotated[UUID, Path(description="Category UUID")],
    actions: ActionsDep,
):
    """Delete a category. Its products stay, uncategorized."""
    return result_response(actions.delete_category(str(category_id)))
