# =============================================================================
# app/routers/catalog.py - Public Catalog Endpoints
# =============================================================================
# Read-only endpoints behind the storefront: category pages, the gallery,
# product detail and related products. No authentication required.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel

from app.dependencies import CatalogDep, CategoryServiceDep
from app.exceptions import NotFoundError
from core.models import Category, ProductDetail, ProductWithImages

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class CategoryPageResponse(BaseModel):
    """A category with its available products."""
    category: Category
    products: list[ProductWithImages]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/categories", response_model=list[Category])
async def list_categories(categories: CategoryServiceDep):
    """List all categories in display order."""
    return categories.list_categories()


@router.get("/categories/{slug}", response_model=CategoryPageResponse)
async def get_category_page(
    slug: Annotated[str, Path(description="Category slug, e.g. kue-kering")],
    catalog: CatalogDep,
):
    """Category page: the category plus its available products, newest first."""
    page = catalog.get_category_page(slug)
    if page is None:
        raise NotFoundError("category", slug)

    category, products = page
    return CategoryPageResponse(category=category, products=products)


@router.get("/products", response_model=list[ProductWithImages])
async def list_products(
    catalog: CatalogDep,
    category_id: Annotated[UUID | None, Query(description="Only products in this category")] = None,
):
    """Gallery: available products with their images, newest first."""
    return catalog.list_available_products(str(category_id) if category_id else None)


@router.get("/products/{product_id}", response_model=ProductDetail)
async def get_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    catalog: CatalogDep,
):
    """Product detail with images in display order and its category."""
    detail = catalog.get_product_detail(str(product_id))
    if detail is None:
        raise NotFoundError("product", str(product_id))
    return detail


@router.get("/products/{product_id}/related", response_model=list[ProductWithImages])
async def list_related_products(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    catalog: CatalogDep,
    limit: Annotated[int, Query(ge=1, le=12)] = 4,
):
    """Other available products from the same category."""
    return catalog.list_related_products(str(product_id), limit=limit)
