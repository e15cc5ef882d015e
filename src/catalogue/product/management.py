"""Product management: admin commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=100)
    section: String(max_length=100)
    slug: String(max_length=200)
    product_id: Identifier()
    image: String(max_length=500)
    description: Text()
    in_stock: Boolean(default=True)
    stock: Integer(min_value=0)
    variants: Text()  # JSON array of {name, price, in_stock}
    search_keywords: Text()  # JSON array


@catalogue.command(part_of="Product")
class UpdateProduct:
    """Partial update: only the fields that are set are changed."""

    product_id: Identifier(required=True)
    name: String(max_length=200)
    slug: String(max_length=200)
    price: Float(min_value=0.0)
    category: String(max_length=100)
    section: String(max_length=100)
    image: String(max_length=500)
    description: Text()
    in_stock: Boolean()
    stock: Integer(min_value=0)
    variants: Text()
    search_keywords: Text()


@catalogue.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


def _json_list(raw):
    return json.loads(raw) if raw else []


@catalogue.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        product = Product.create(
            name=command.name,
            price=command.price,
            category=command.category,
            slug=command.slug,
            product_id=command.product_id,
            section=command.section,
            image=command.image,
            description=command.description,
            in_stock=command.in_stock,
            stock=command.stock,
            variants=_json_list(command.variants),
            search_keywords=_json_list(command.search_keywords),
        )
        _ensure_unique_slug(repo, product.slug)
        repo.add(product)

        logger.info("product_added", product_id=product.id, slug=product.slug, category=product.category)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        changes = {}
        for field in ("name", "slug", "price", "category", "section", "image", "description", "in_stock", "stock"):
            value = getattr(command, field)
            if value is not None:
                changes[field] = value
        if command.variants is not None:
            changes["variants"] = _json_list(command.variants)
        if command.search_keywords is not None:
            changes["search_keywords"] = _json_list(command.search_keywords)

        product.update_details(**changes)
        if "slug" in changes:
            _ensure_unique_slug(repo, product.slug, exclude_id=product.id)
        repo.add(product)

        logger.info("product_updated", product_id=product.id, fields=sorted(changes))

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

        logger.info("product_removed", product_id=product.id, slug=product.slug)


def _ensure_unique_slug(repo, slug: str, exclude_id: str | None = None) -> None:
    existing = repo.by_slug(slug)
    if existing is not None and existing.id != exclude_id:
        raise ValidationError({"slug": [f"Slug '{slug}' is already used by another product"]})
