# =============================================================================
# core/services/product_service.py - Product Business Logic
# =============================================================================
# Create/update/delete for catalog products.
#
# Deleting a product runs in order, stopping at the first database failure:
#   1. read the product's image rows (to know their storage keys)
#   2. delete the image rows
#   3. delete the product row
#   4. remove the image objects from storage (best effort; a failure here
#      only leaks objects, the database is already consistent)
# =============================================================================

import logging
from datetime import datetime, timezone

from supabase import Client

from app.exceptions import NotFoundError, PersistenceError
from app.revalidation import ViewInvalidator, paths
from core.models import Product, ProductImage, ProductInput
from core.services.storage_service import StorageService
from lib.supabase_client import decode_row, decode_rows, execute

logger = logging.getLogger(__name__)

TABLE = "products"
IMAGES_TABLE = "product_images"


class ProductService:
    """
    Service for product management operations.
    """

    def __init__(self, client: Client, storage: StorageService, invalidator: ViewInvalidator):
        self.client = client
        self.storage = storage
        self.invalidator = invalidator

    def get_product(self, product_id: str) -> Product | None:
        response = execute(
            self.client.table(TABLE).select("*").eq("id", product_id).limit(1),
            "get_product",
            product_id=product_id,
        )
        return decode_row(Product, response.data, "get_product")

    def require_product(self, product_id: str) -> Product:
        """
        Raises:
            NotFoundError: If the product doesn't exist
        """
        product = self.get_product(product_id)
        if product is None:
            raise NotFoundError("product", product_id)
        return product

    def create_product(self, data: ProductInput) -> Product:
        """
        Insert a product and return it with its generated id.

        Callers upload images against the returned id right after.

        Raises:
            PersistenceError: On invalid category_id (409) or store failure
        """
        response = execute(
            self.client.table(TABLE).insert(data.to_row()),
            "create_product",
            category_id=data.category_id,
        )

        product = decode_row(Product, response.data, "create_product")
        if product is None:
            raise PersistenceError("Insert returned no data", operation="create_product")

        logger.info(f"Created product: {product.id} ({product.name})")
        self.invalidator.invalidate(paths.product_paths())
        return product

    def update_product(self, product_id: str, data: ProductInput) -> Product:
        """
        Full replace of a product's mutable fields.

        A blank price arrives here already normalized to None.

        Raises:
            NotFoundError: If no row has this id
            PersistenceError: On invalid category_id (409) or store failure
        """
        row = {
            **data.to_row(),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        response = execute(
            self.client.table(TABLE).update(row).eq("id", product_id),
            "update_product",
            product_id=product_id,
        )

        product = decode_row(Product, response.data, "update_product")
        if product is None:
            raise NotFoundError("product", product_id)

        logger.info(f"Updated product: {product_id}")
        self.invalidator.invalidate(paths.product_paths(product_id))
        return product

    def delete_product(self, product_id: str) -> Product:
        """
        Delete a product, its image rows, then its image objects.

        Returns:
            The deleted product

        Raises:
            NotFoundError: If the product doesn't exist
            PersistenceError: If deleting image rows or the product fails;
                later steps are then skipped
        """
        self.require_product(product_id)

        images_response = execute(
            self.client.table(IMAGES_TABLE).select("*").eq("product_id", product_id),
            "read_product_images",
            product_id=product_id,
        )
        images = decode_rows(ProductImage, images_response.data, "read_product_images")

        execute(
            self.client.table(IMAGES_TABLE).delete().eq("product_id", product_id),
            "delete_product_images",
            product_id=product_id,
        )

        response = execute(
            self.client.table(TABLE).delete().eq("id", product_id),
            "delete_product",
            product_id=product_id,
        )
        product = decode_row(Product, response.data, "delete_product")
        if product is None:
            # Removed concurrently between the existence check and here
            raise NotFoundError("product", product_id)

        storage_keys = [key for key in (self.storage.resolve_key(img) for img in images) if key]
        if len(storage_keys) < len(images):
            logger.warning(
                f"{len(images) - len(storage_keys)} image(s) of product {product_id} "
                f"have no recoverable storage key"
            )
        self.storage.remove_quietly(storage_keys)

        logger.info(f"Deleted product: {product_id} with {len(images)} image(s)")
        self.invalidator.invalidate(paths.product_paths(product_id))
        return product

    def list_products(self) -> list[Product]:
        """All products, newest first (admin list)."""
        response = execute(
            self.client.table(TABLE).select("*").order("created_at", desc=True),
            "list_products",
        )
        return decode_rows(Product, response.data, "list_products")
