"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """An admin added a product to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    slug: String(required=True, max_length=200)
    category: String(required=True, max_length=100)
    price: Float(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """An admin edited product fields; prices on existing orders are unaffected."""

    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: Text(required=True)  # JSON array of field names
