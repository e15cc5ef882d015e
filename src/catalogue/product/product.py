"""Product aggregate with optional variants.

A product either sells at a single ``price`` or, when it carries variants,
at the price of the chosen variant. ``display_price`` is what listings show.
"""

import json
import re
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.product.events import ProductAdded, ProductDetailsUpdated

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")
_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

# Fields an admin may change after creation
EDITABLE_FIELDS = (
    "name",
    "slug",
    "price",
    "category",
    "section",
    "image",
    "description",
    "in_stock",
    "stock",
    "variants",
    "search_keywords",
)


def slugify(value: str) -> str:
    """Lowercase ``value`` and collapse anything non-alphanumeric into single hyphens."""
    return _SLUG_INVALID.sub("-", (value or "").lower()).strip("-")


def normalise_keywords(keywords) -> str:
    """JSON array of trimmed, lower-cased, non-empty keywords."""
    return json.dumps([keyword.strip().lower() for keyword in keywords or [] if keyword and keyword.strip()])


@catalogue.entity(part_of="Product")
class ProductVariant:
    """A purchasable option of a product, e.g. a wig length."""

    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    in_stock: Boolean(default=True)
    position: Integer(default=0)


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=200)
    slug: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=100)
    section: String(max_length=100)
    image: String(max_length=500)
    description: Text()
    in_stock: Boolean(default=True)
    stock: Integer(min_value=0)
    variants: HasMany(ProductVariant)
    search_keywords: Text()  # JSON array of lower-cased keywords
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not _SLUG_PATTERN.match(self.slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase alphanumeric characters and hyphens"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, category, slug=None, product_id=None, variants=None, search_keywords=None, **details):
        slug = slugify(slug or name)
        if not slug:
            raise ValidationError({"slug": ["Slug cannot be derived from an empty name"]})

        now = datetime.now(UTC)
        fields = {
            "name": name,
            "slug": slug,
            "price": price,
            "category": category,
            "search_keywords": normalise_keywords(search_keywords),
            "created_at": now,
            "updated_at": now,
            **{key: value for key, value in details.items() if value is not None},
        }
        if product_id:
            fields["id"] = product_id
        product = cls(**fields)
        product._replace_variants(variants or [])

        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                slug=product.slug,
                category=product.category,
                price=product.price,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ordered_variants(self) -> list:
        return sorted(self.variants, key=lambda variant: variant.position)

    @property
    def has_variants(self) -> bool:
        return bool(self.variants)

    @property
    def display_price(self) -> float:
        if self.has_variants:
            return min(variant.price for variant in self.variants)
        return self.price

    @property
    def is_out_of_stock(self) -> bool:
        if self.has_variants:
            return not any(variant.in_stock for variant in self.variants)
        return not self.in_stock

    @property
    def keywords(self) -> list[str]:
        return json.loads(self.search_keywords) if self.search_keywords else []

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def _replace_variants(self, variants) -> None:
        for existing in list(self.variants):
            self.remove_variants(existing)
        for position, data in enumerate(variants):
            self.add_variants(
                ProductVariant(
                    name=data["name"],
                    price=data["price"],
                    in_stock=data.get("in_stock", True),
                    position=position,
                )
            )

    def update_details(self, **changes) -> None:
        """Apply admin edits. ``variants`` is a list of dicts that replaces the current set."""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})

        if "slug" in changes:
            changes["slug"] = slugify(changes["slug"])
            if not changes["slug"]:
                raise ValidationError({"slug": ["Slug cannot be empty"]})

        with atomic_change(self):
            for field, value in changes.items():
                if field == "variants":
                    self._replace_variants(value)
                elif field == "search_keywords":
                    self.search_keywords = normalise_keywords(value)
                else:
                    setattr(self, field, value)
            self.updated_at = datetime.now(UTC)

        self.raise_(ProductDetailsUpdated(product_id=self.id, changed_fields=json.dumps(sorted(changes))))
