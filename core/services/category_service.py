# =============================================================================
# core/services/category_service.py - Category Business Logic
# =============================================================================
# Create/update/delete for catalog categories.
#
# - New categories are appended: display_order = current max + 1
# - Updates replace name/slug/description and never touch display_order
# - Deleting a category leaves its products in place (category_id set to
#   NULL by the foreign key)
# =============================================================================

import logging

from supabase import Client

from app.exceptions import NotFoundError, PersistenceError
from app.revalidation import ViewInvalidator, paths
from core.models import Category, CategoryInput
from lib.supabase_client import decode_row, decode_rows, execute

logger = logging.getLogger(__name__)

TABLE = "categories"


class CategoryService:
    """
    Service for category management operations.
    """

    def __init__(self, client: Client, invalidator: ViewInvalidator):
        self.client = client
        self.invalidator = invalidator

    def next_display_order(self) -> int:
        """Current highest display_order + 1 (1 for an empty table)."""
        response = execute(
            self.client.table(TABLE)
            .select("display_order")
            .order("display_order", desc=True)
            .limit(1),
            "max_category_order",
        )
        rows = response.data or []
        current = rows[0].get("display_order") if rows else None
        return (current or 0) + 1

    def create_category(self, data: CategoryInput) -> Category:
        """
        Insert a category at the end of the catalog order.

        Raises:
            PersistenceError: On duplicate slug (409) or store failure
        """
        row = {**data.to_row(), "display_order": self.next_display_order()}

        response = execute(
            self.client.table(TABLE).insert(row),
            "create_category",
            slug=data.slug,
        )

        category = decode_row(Category, response.data, "create_category")
        if category is None:
            raise PersistenceError("Insert returned no data", operation="create_category")

        logger.info(f"Created category: {category.id} ({category.slug}) at order {category.display_order}")
        self.invalidator.invalidate(paths.category_paths())
        return category

    def update_category(self, category_id: str, data: CategoryInput) -> Category:
        """
        Replace a category's name, slug and description.

        Raises:
            NotFoundError: If no row has this id
            PersistenceError: On duplicate slug (409) or store failure
        """
        response = execute(
            self.client.table(TABLE).update(data.to_row()).eq("id", category_id),
            "update_category",
            category_id=category_id,
        )

        category = decode_row(Category, response.data, "update_category")
        if category is None:
            raise NotFoundError("category", category_id)

        logger.info(f"Updated category: {category_id}")
        self.invalidator.invalidate(paths.category_paths())
        return category

    def delete_category(self, category_id: str) -> Category:
        """
        Delete a category row. Products in it keep existing, uncategorized.

        Raises:
            NotFoundError: If no row has this id
        """
        response = execute(
            self.client.table(TABLE).delete().eq("id", category_id),
            "delete_category",
            category_id=category_id,
        )

        category = decode_row(Category, response.data, "delete_category")
        if category is None:
            raise NotFoundError("category", category_id)

        logger.info(f"Deleted category: {category_id}")
        self.invalidator.invalidate(paths.category_paths())
        return category

    def list_categories(self) -> list[Category]:
        """All categories in catalog order."""
        response = execute(
            self.client.table(TABLE).select("*").order("display_order"),
            "list_categories",
        )
        return decode_rows(Category, response.data, "list_categories")

