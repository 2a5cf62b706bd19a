# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the catalog services.
#
# The Supabase client and the view invalidator are built once in the app
# lifespan (see main.py) and kept on app.state; services are cheap and are
# constructed per request around them.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request, UploadFile
from fastapi.responses import JSONResponse
from supabase import Client

from app.config import Settings, get_settings
from app.revalidation import ViewInvalidator
from core.actions import CatalogActions
from core.models import ActionResult
from core.services import (
    CatalogService,
    CategoryService,
    ImageFile,
    ImageService,
    ProductService,
    StorageService,
    TestimonialService,
)


def get_supabase(request: Request) -> Client:
    """Supabase client created at startup."""
    return request.app.state.supabase


def get_invalidator(request: Request) -> ViewInvalidator:
    """View invalidator created at startup."""
    return request.app.state.invalidator


def get_storage_service(
    client: Client = Depends(get_supabase),
    settings: Settings = Depends(get_settings),
) -> StorageService:
    return StorageService(client, settings)


def get_catalog_service(client: Client = Depends(get_supabase)) -> CatalogService:
    return CatalogService(client)


def get_category_service(
    client: Client = Depends(get_supabase),
    invalidator: ViewInvalidator = Depends(get_invalidator),
) -> CategoryService:
    return CategoryService(client, invalidator)


def get_product_service(
    client: Client = Depends(get_supabase),
    storage: StorageService = Depends(get_storage_service),
    invalidator: ViewInvalidator = Depends(get_invalidator),
) -> ProductService:
    return ProductService(client, storage, invalidator)


def get_testimonial_service(
    client: Client = Depends(get_supabase),
    storage: StorageService = Depends(get_storage_service),
    invalidator: ViewInvalidator = Depends(get_invalidator),
) -> TestimonialService:
    return TestimonialService(client, storage, invalidator)


def get_image_service(
    client: Client = Depends(get_supabase),
    storage: StorageService = Depends(get_storage_service),
    invalidator: ViewInvalidator = Depends(get_invalidator),
) -> ImageService:
    return ImageService(client, storage, invalidator)


def result_response(result: ActionResult) -> JSONResponse:
    """Render an ActionResult with its own status code."""
    return JSONResponse(
        status_code=result.status_code,
        content=result.model_dump(mode="json"),
    )


# Type aliases for dependency injection
CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
TestimonialServiceDep = Annotated[TestimonialService, Depends(get_testimonial_service)]


async def read_image_file(upload: UploadFile) -> ImageFile:
    """Read a multipart upload into the ImageFile the services expect."""
    return ImageFile(
        filename=upload.filename,
        content=await upload.read(),
        content_type=upload.content_type,
    )


def get_actions(
    categories: CategoryService = Depends(get_category_service),
    products: ProductService = Depends(get_product_service),
    images: ImageService = Depends(get_image_service),
    testimonials: TestimonialService = Depends(get_testimonial_service),
) -> CatalogActions:
    """Result-returning mutation facade wired to this request's services."""
    return CatalogActions(categories, products, images, testimonials)


ActionsDep = Annotated[CatalogActions, Depends(get_actions)]
