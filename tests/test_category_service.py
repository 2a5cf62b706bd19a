# =============================================================================
# tests/test_category_service.py - Category Service Tests
# =============================================================================

import pytest

from app.exceptions import NotFoundError, PersistenceError
from app.revalidation import paths
from core.models import CategoryInput, ProductInput


class TestCreateCategory:
    def test_first_category_gets_order_one(self, category_service):
        category = category_service.create_category(CategoryInput(name="Kue Kering"))

        assert category.display_order == 1
        assert category.slug == "kue-kering"
        assert category.id

    def test_display_order_strictly_increases(self, category_service):
        names = ["Kue Kering", "Kue Basah", "Nasi Kotak", "Snack Box", "Tumpeng"]
        orders = [category_service.create_category(CategoryInput(name=n)).display_order for n in names]

        assert orders == [1, 2, 3, 4, 5]

    def test_order_follows_max_not_count(self, category_service, client):
        first = category_service.create_category(CategoryInput(name="Kue Kering"))
        second = category_service.create_category(CategoryInput(name="Kue Basah"))
        category_service.delete_category(first.id)

        third = category_service.create_category(CategoryInput(name="Tumpeng"))
        assert third.display_order == second.display_order + 1

    def test_duplicate_slug_is_conflict(self, category_service):
        category_service.create_category(CategoryInput(name="Kue Kering"))

        with pytest.raises(PersistenceError) as exc_info:
            category_service.create_category(CategoryInput(name="Lain", slug="kue-kering"))
        assert exc_info.value.status_code == 409

    def test_invalidates_category_views(self, category_service, invalidator):
        category_service.create_category(CategoryInput(name="Kue Kering"))
        assert invalidator.calls == [paths.category_paths()]

    def test_store_failure_does_not_invalidate(self, category_service, client, invalidator):
        client.fail("categories", "insert")

        with pytest.raises(PersistenceError) as exc_info:
            category_service.create_category(CategoryInput(name="Kue Kering"))
        assert exc_info.value.status_code == 500
        assert invalidator.calls == []


class TestUpdateCategory:
    def test_update_keeps_display_order(self, category_service, category):
        updated = category_service.update_category(
            category.id,
            CategoryInput(name="Kue Kering Lebaran", description="Edisi lebaran"),
        )

        assert updated.name == "Kue Kering Lebaran"
        assert updated.slug == "kue-kering-lebaran"
        assert updated.description == "Edisi lebaran"
        assert updated.display_order == category.display_order

    def test_update_to_own_slug_is_allowed(self, category_service, category):
        updated = category_service.update_category(
            category.id, CategoryInput(name="Kue Kering", slug="kue-kering")
        )
        assert updated.slug == "kue-kering"

    def test_update_unknown_id(self, category_service):
        with pytest.raises(NotFoundError) as exc_info:
            category_service.update_category("missing", CategoryInput(name="X"))
        assert exc_info.value.code == "CATEGORY_NOT_FOUND"


class TestDeleteCategory:
    def test_products_survive_uncategorized(self, category_service, product_service, category):
        product = product_service.create_product(
            ProductInput(name="Nastar", category_id=category.id)
        )

        category_service.delete_category(category.id)

        survivor = product_service.get_product(product.id)
        assert survivor is not None
        assert survivor.category_id is None

    def test_delete_unknown_id(self, category_service):
        with pytest.raises(NotFoundError):
            category_service.delete_category("missing")


class TestListCategories:
    def test_listed_in_display_order(self, category_service, client):
        for name in ["Tumpeng", "Kue Kering", "Snack Box"]:
            category_service.create_category(CategoryInput(name=name))

        listed = [c.name for c in category_service.list_categories()]
        assert listed == ["Tumpeng", "Kue Kering", "Snack Box"]
