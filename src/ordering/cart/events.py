"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartCreated:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = String(max_length=255)


@ordering.event(part_of="Cart")
class CartItemAdded:
    """One unit of a product was added; ``quantity`` is the line's new quantity."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemDecreased:
    """One unit was taken off a line; a ``quantity`` of zero means the line is gone."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    reason = String(required=True, max_length=50)


@ordering.event(part_of="Cart")
class CartIdentityChanged:
    """The signed-in user changed; the cart was emptied and rebound."""

    __version__ = 1

    cart_id = Identifier(required=True)
    previous_user_id = String(max_length=255)
    user_id = String(max_length=255)
