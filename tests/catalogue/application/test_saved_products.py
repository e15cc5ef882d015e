"""Application tests for saved products."""

import pytest
from protean.exceptions import InvalidOperationError, ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.product.management import AddProduct
from catalogue.saved.management import RemoveSavedProduct, SaveProduct, list_saved_products


def _save(user_id, product_id):
    return current_domain.process(SaveProduct(user_id=user_id, product_id=product_id), asynchronous=False)


@pytest.fixture()
def product_id():
    return current_domain.process(
        AddProduct(name="Milo", price=4500, category="packaged-foods", image="/products/milo.jpg"),
        asynchronous=False,
    )


class TestSaveProduct:
    def test_save_snapshots_product(self, product_id):
        _save("user-001", product_id)
        [saved] = list_saved_products("user-001")
        assert saved.name == "Milo"
        assert saved.price == 4500
        assert saved.image == "/products/milo.jpg"

    def test_save_is_idempotent(self, product_id):
        first = _save("user-001", product_id)
        second = _save("user-001", product_id)
        assert first == second
        assert len(list_saved_products("user-001")) == 1

    def test_saved_products_are_scoped_to_user(self, product_id):
        _save("user-001", product_id)
        assert list_saved_products("user-002") == []

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _save("user-001", "nope")


class TestRemoveSavedProduct:
    def test_owner_can_remove(self, product_id):
        saved_id = _save("user-001", product_id)
        current_domain.process(
            RemoveSavedProduct(user_id="user-001", saved_product_id=saved_id), asynchronous=False
        )
        assert list_saved_products("user-001") == []

    def test_other_user_cannot_remove(self, product_id):
        saved_id = _save("user-001", product_id)
        with pytest.raises(InvalidOperationError):
            current_domain.process(
                RemoveSavedProduct(user_id="user-002", saved_product_id=saved_id), asynchronous=False
            )
        assert len(list_saved_products("user-001")) == 1
