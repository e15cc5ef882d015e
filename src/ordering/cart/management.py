"""Cart lifecycle: creation and identity changes."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import logger, ordering


@ordering.command(part_of="Cart")
class CreateCart:
    user_id = String(max_length=255)


@ordering.command(part_of="Cart")
class ChangeCartIdentity:
    """Sent by the client whenever the signed-in user changes (sign-in or sign-out)."""

    cart_id = Identifier(required=True)
    user_id = String(max_length=255)


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = Cart.create(user_id=command.user_id)
        current_domain.repository_for(Cart).add(cart)

        logger.info("cart_created", cart_id=cart.id, user_id=command.user_id)
        return str(cart.id)

    @handle(ChangeCartIdentity)
    def change_cart_identity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.reset_for_identity(command.user_id)
        repo.add(cart)

        logger.info("cart_identity_changed", cart_id=cart.id, user_id=command.user_id)
