# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - catalog.py: Public storefront reads (categories, gallery, product detail)
# - testimonials.py: Public testimonial submission and admin moderation
# - admin_categories.py: Category management
# - admin_products.py: Product management and the product image workflow
# - dashboard.py: Admin dashboard counters
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import catalog
from . import testimonials
from . import admin_categories
from . import admin_products
from . import dashboard

__all__ = [
    "health",
    "catalog",
    "testimonials",
    "admin_categories",
    "admin_products",
    "dashboard",
]
