# =============================================================================
# app/routers/admin_products.py - Product and Product Image Endpoints
# =============================================================================
# Admin CRUD for products plus the image workflow:
# - POST   ""                                  create (JSON)
# - POST   "/with-images"                      create with photos (multipart)
# - PUT    "/{product_id}"                     update
# - DELETE "/{product_id}"                     delete, cascading to images
# - POST   "/{product_id}/images"              upload one photo
# - POST   "/{product_id}/images/batch"        upload several photos
# - PUT    "/{product_id}/images/{id}/primary" make a photo the primary
# - DELETE "/{product_id}/images/{id}"         delete a photo
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, Path, UploadFile
from pydantic import BaseModel, Field

from app.dependencies import (
    ActionsDep,
    ImageServiceDep,
    ProductServiceDep,
    read_image_file,
    result_response,
)
from core.models import Product, ProductImage

router = APIRouter()


# =============================================================================
# Request Models
# =============================================================================

class ProductRequest(BaseModel):
    """
    Product form fields.

    Price accepts a number or free text such as "Rp 25.000"; only the
    digits are kept. Blank price means "ask for price".
    """
    name: str = Field(..., examples=["Nastar Keju"])
    description: str | None = Field(default=None, examples=["Toples 500 gr"])
    price: int | str | None = Field(default=None, examples=[85000, "Rp 85.000"])
    category_id: str | None = None
    is_available: bool = True


# =============================================================================
# Products
# =============================================================================

@router.get("", response_model=list[Product])
async def list_products(products: ProductServiceDep):
    """All products, available or not, newest first."""
    return products.list_products()


@router.post("")
async def create_product(request: ProductRequest, actions: ActionsDep):
    """Create a product without photos."""
    result = actions.create_product(**request.model_dump())
    return result_response(result)


@router.post("/with-images")
async def create_product_with_images(
    actions: ActionsDep,
    name: Annotated[str, Form()],
    files: Annotated[list[UploadFile] | None, File(description="Product photos; the first becomes primary")] = None,
    description: Annotated[str | None, Form()] = None,
    price: Annotated[str | None, Form()] = None,
    category_id: Annotated[str | None, Form()] = None,
    is_available: Annotated[bool, Form()] = True,
):
    """
    The admin "add product" form: create the product, then upload its photos.

    Photos that fail come back in `warnings`; the product and the photos
    that did upload are kept.
    """
    images = [await read_image_file(upload) for upload in files or []]
    result = actions.create_product_with_images(
        name=name,
        files=images,
        description=description,
        price=price,
        category_id=category_id,
        is_available=is_available,
    )
    return result_response(result)


@router.put("/{product_id}")
async def update_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    request: ProductRequest,
    actions: ActionsDep,
):
    """Update a product's fields."""
    result = actions.update_product(str(product_id), **request.model_dump())
    return result_response(result)


@router.delete("/{product_id}")
async def delete_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    actions: ActionsDep,
):
    """Delete a product, its image rows and its stored photos."""
    return result_response(actions.delete_product(str(product_id)))


# =============================================================================
# Product Images
# =============================================================================

@router.get("/{product_id}/images", response_model=list[ProductImage])
async def list_product_images(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    images: ImageServiceDep,
):
    """A product's photos in display order."""
    return images.list_images(str(product_id))


@router.post("/{product_id}/images")
async def upload_product_image(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    file: Annotated[UploadFile, File(description="JPEG, PNG, WebP or GIF photo")],
    actions: ActionsDep,
    is_primary: Annotated[bool, Form()] = False,
):
    """Upload one photo and append it to the product's gallery."""
    image = await read_image_file(file)
    result = actions.upload_product_image(str(product_id), image, is_primary=is_primary)
    return result_response(result)


@router.post("/{product_id}/images/batch")
async def upload_product_images(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    files: Annotated[list[UploadFile], File(description="Photos, uploaded in order")],
    actions: ActionsDep,
    first_is_primary: Annotated[bool | None, Form()] = None,
):
    """
    Upload several photos one after another.

    When `first_is_primary` is omitted the first photo becomes primary only
    if the product has no primary photo yet.
    """
    images = [await read_image_file(upload) for upload in files]
    result = actions.upload_product_images(str(product_id), images, first_is_primary=first_is_primary)
    return result_response(result)


@router.put("/{product_id}/images/{image_id}/primary")
async def set_primary_image(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    image_id: Annotated[UUID, Path(description="Image UUID")],
    actions: ActionsDep,
):
    """Make this photo the product's only primary photo."""
    return result_response(actions.set_primary_image(str(image_id), str(product_id)))


@router.delete("/{product_id}/images/{image_id}")
async def delete_product_image(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    image_id: Annotated[UUID, Path(description="Image UUID")],
    actions: ActionsDep,
):
    """Delete a photo row and its stored file. Deleting a missing photo succeeds."""
    return result_response(actions.delete_product_image(str(image_id), str(product_id)))
