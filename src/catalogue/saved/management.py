"""Saved products: commands and handler."""

from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product
from catalogue.saved.saved_product import SavedProduct


@catalogue.command(part_of="SavedProduct")
class SaveProduct:
    user_id: String(required=True, max_length=255)
    product_id: Identifier(required=True)


@catalogue.command(part_of="SavedProduct")
class RemoveSavedProduct:
    user_id: String(required=True, max_length=255)
    saved_product_id: Identifier(required=True)


@catalogue.command_handler(part_of=SavedProduct)
class ManageSavedProductsHandler:
    @handle(SaveProduct)
    def save_product(self, command):
        """Save a product for the user. Saving the same product twice returns the existing entry."""
        repo = current_domain.repository_for(SavedProduct)
        existing = repo.entry(command.user_id, command.product_id)
        if existing is not None:
            return str(existing.id)

        product = current_domain.repository_for(Product).get(command.product_id)
        saved = SavedProduct(
            user_id=command.user_id,
            product_id=product.id,
            name=product.name,
            price=product.display_price,
            image=product.image,
            category=product.category,
        )
        repo.add(saved)

        logger.info("product_saved", user_id=command.user_id, product_id=product.id)
        return str(saved.id)

    @handle(RemoveSavedProduct)
    def remove_saved_product(self, command):
        repo = current_domain.repository_for(SavedProduct)
        saved = repo.get(command.saved_product_id)
        if saved.user_id != command.user_id:
            raise InvalidOperationError("Saved product belongs to another user")
        repo._dao.delete(saved)

        logger.info("saved_product_removed", user_id=command.user_id, saved_product_id=saved.id)


def list_saved_products(user_id: str) -> list[SavedProduct]:
    return current_domain.repository_for(SavedProduct).for_user(user_id)
