# =============================================================================
# core/services/catalog_service.py - Public Catalog Reads
# =============================================================================
# Read-only queries behind the storefront pages and the admin dashboard.
# Related rows (images, categories) are fetched with one extra query per
# relation and stitched together here.
# =============================================================================

import logging
from collections import defaultdict

from supabase import Client

from core.models import (
    Category,
    DashboardStats,
    Product,
    ProductDetail,
    ProductImage,
    ProductWithImages,
)
from lib.supabase_client import decode_row, decode_rows, execute

logger = logging.getLogger(__name__)

RELATED_PRODUCTS_LIMIT = 4
RECENT_PRODUCTS_LIMIT = 5


class CatalogService:
    """
    Read side of the catalog.
    """

    def __init__(self, client: Client):
        self.client = client

    def _images_for(self, product_ids: list[str]) -> dict[str, list[ProductImage]]:
        """Images grouped by product id, each group in display order."""
        grouped: dict[str, list[ProductImage]] = defaultdict(list)
        if not product_ids:
            return grouped

        response = execute(
            self.client.table("product_images")
            .select("*")
            .in_("product_id", product_ids)
            .order("display_order"),
            "list_images_for_products",
        )
        for image in decode_rows(ProductImage, response.data, "list_images_for_products"):
            grouped[image.product_id].append(image)
        return grouped

    def _with_images(self, products: list[Product]) -> list[ProductWithImages]:
        images = self._images_for([p.id for p in products])
        return [ProductWithImages(product=p, images=images.get(p.id, [])) for p in products]

    def list_available_products(self, category_id: str | None = None) -> list[ProductWithImages]:
        """Available products newest first, optionally within one category."""
        query = self.client.table("products").select("*").eq("is_available", True)
        if category_id:
            query = query.eq("category_id", category_id)
        response = execute(query.order("created_at", desc=True), "list_available_products")
        return self._with_images(decode_rows(Product, response.data, "list_available_products"))

    def get_category_page(self, slug: str) -> tuple[Category, list[ProductWithImages]] | None:
        """Category by slug with its available products, or None if unknown."""
        response = execute(
            self.client.table("categories").select("*").eq("slug", slug).limit(1),
            "get_category_by_slug",
            slug=slug,
        )
        category = decode_row(Category, response.data, "get_category_by_slug")
        if category is None:
            return None
        return category, self.list_available_products(category.id)

    def get_product_detail(self, product_id: str) -> ProductDetail | None:
        """Product with images (display order) and category, or None if unknown."""
        response = execute(
            self.client.table("products").select("*").eq("id", product_id).limit(1),
            "get_product_detail",
            product_id=product_id,
        )
        product = decode_row(Product, response.data, "get_product_detail")
        if product is None:
            return None

        category = None
        if product.category_id:
            category_response = execute(
                self.client.table("categories").select("*").eq("id", product.category_id).limit(1),
                "get_product_category",
                category_id=product.category_id,
            )
            category = decode_row(Category, category_response.data, "get_product_category")

        images = self._images_for([product.id]).get(product.id, [])
        return ProductDetail(product=product, images=images, category=category)

    def list_related_products(
        self,
        product_id: str,
        limit: int = RELATED_PRODUCTS_LIMIT,
    ) -> list[ProductWithImages]:
        """Other available products from the same category."""
        product_response = execute(
            self.client.table("products").select("*").eq("id", product_id).limit(1),
            "get_product",
            product_id=product_id,
        )
        product = decode_row(Product, product_response.data, "get_product")
        if product is None or not product.category_id:
            return []

        response = execute(
            self.client.table("products")
            .select("*")
            .eq("category_id", product.category_id)
            .eq("is_available", True)
            .neq("id", product_id)
            .limit(limit),
            "list_related_products",
            product_id=product_id,
        )
        return self._with_images(decode_rows(Product, response.data, "list_related_products"))

    def _count(self, table: str, **filters) -> int:
        query = self.client.table(table).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        response = execute(query, f"count_{table}")
        return response.count or 0

    def dashboard_stats(self) -> DashboardStats:
        """Counters and the most recent products for the admin dashboard."""
        recent_response = execute(
            self.client.table("products")
            .select("*")
            .order("created_at", desc=True)
            .limit(RECENT_PRODUCTS_LIMIT),
            "recent_products",
        )
        return DashboardStats(
            total_products=self._count("products"),
            total_categories=self._count("categories"),
            total_testimonials=self._count("testimonials"),
            available_products=self._count("products", is_available=True),
            recent_products=decode_rows(Product, recent_response.data, "recent_products"),
        )
