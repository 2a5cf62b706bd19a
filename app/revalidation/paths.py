# =============================================================================
# app/revalidation/paths.py - View Paths Invalidated by Mutations
# =============================================================================
# Server-rendered pages cache their output; after a successful mutation the
# renderer must rebuild exactly these views.
# =============================================================================

HOME = "/"
GALLERY = "/galeri"
TESTIMONIALS = "/testimoni"

ADMIN_CATEGORIES = "/admin/kategori"
ADMIN_PRODUCTS = "/admin/produk"
ADMIN_TESTIMONIALS = "/admin/testimoni"


def product_detail(product_id: str) -> str:
    return f"/produk/{product_id}"


def admin_product_detail(product_id: str) -> str:
    return f"/admin/produk/{product_id}"


def category_paths() -> list[str]:
    """Views affected by any category mutation."""
    return [ADMIN_CATEGORIES, GALLERY, HOME]


def product_paths(product_id: str | None = None) -> list[str]:
    """Views affected by a product mutation (plus its detail page when known)."""
    paths = [ADMIN_PRODUCTS, GALLERY, HOME]
    if product_id:
        paths.insert(1, product_detail(product_id))
    return paths


def product_image_paths(product_id: str) -> list[str]:
    """Views affected by adding or removing a product photo."""
    return [admin_product_detail(product_id), product_detail(product_id), GALLERY, HOME]


def testimonial_paths() -> list[str]:
    """Views affected by any testimonial mutation."""
    return [ADMIN_TESTIMONIALS, TESTIMONIALS]
