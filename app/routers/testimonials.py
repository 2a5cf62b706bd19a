# =============================================================================
# app/routers/testimonials.py - Testimonial Endpoints
# =============================================================================
# Two routers:
# - router: public. Customers list testimonials, upload an optional photo
#   and submit their testimonial with the returned URL.
# - admin_router: moderation (feature/unfeature, delete).
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Path, UploadFile
from pydantic import BaseModel, Field

from app.dependencies import (
    ActionsDep,
    TestimonialServiceDep,
    read_image_file,
    result_response,
)
from core.models import TestimonialWithProduct

router = APIRouter()
admin_router = APIRouter()


# =============================================================================
# Request Models
# =============================================================================

class TestimonialRequest(BaseModel):
    """A customer's testimonial."""
    customer_name: str = Field(..., examples=["Ibu Sari"])
    message: str = Field(..., examples=["Nastarnya lembut dan tidak terlalu manis, pasti pesan lagi!"])
    product_id: str | None = None
    image_url: str | None = None


class FeaturedRequest(BaseModel):
    """New featured flag."""
    is_featured: bool


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("", response_model=list[TestimonialWithProduct])
async def list_testimonials(testimonials: TestimonialServiceDep):
    """Testimonials with their product, featured first then newest first."""
    return testimonials.list_testimonials()


@router.post("")
async def create_testimonial(request: TestimonialRequest, actions: ActionsDep):
    """Submit a testimonial. New testimonials are never featured."""
    result = actions.create_testimonial(
        customer_name=request.customer_name,
        message=request.message,
        product_id=request.product_id,
        image_url=request.image_url,
    )
    return result_response(result)


@router.post("/images")
async def upload_testimonial_image(
    file: Annotated[UploadFile, File(description="JPEG, PNG, WebP or GIF photo")],
    actions: ActionsDep,
):
    """Upload a testimonial photo; pass the returned URL as `image_url`."""
    image = await read_image_file(file)
    return result_response(actions.upload_testimonial_image(image))


# =============================================================================
# Admin Endpoints
# =============================================================================

@admin_router.get("", response_model=list[TestimonialWithProduct])
async def list_all_testimonials(testimonials: TestimonialServiceDep):
    """All testimonials, newest first."""
    return testimonials.list_testimonials(featured_first=False)


@admin_router.put("/{testimonial_id}/featured")
async def toggle_featured(
    testimonial_id: Annotated[UUID, Path(description="Testimonial UUID")],
    request: FeaturedRequest,
    actions: ActionsDep,
):
    """Feature or unfeature a testimonial."""
    return result_response(actions.toggle_testimonial_featured(str(testimonial_id), request.is_featured))


@admin_router.delete("/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: Annotated[UUID, Path(description="Testimonial UUID")],
    actions: ActionsDep,
):
    """Delete a testimonial. Its photo, if any, stays in storage."""
    return result_response(actions.delete_testimonial(str(testimonial_id)))
