"""Product repository."""

from catalogue.domain import catalogue
from catalogue.product.product import Product

# Listings read the whole catalogue; the store carries a few hundred products
CATALOGUE_LIMIT = 5000


@catalogue.repository(part_of=Product)
class ProductRepository:
    def by_slug(self, slug: str) -> Product | None:
        return self._dao.query.filter(slug=slug).all().first

    def by_category(self, category: str, section: str | None = None) -> list[Product]:
        filters = {"category": category}
        if section:
            filters["section"] = section
        return self._dao.query.filter(**filters).order_by("name").limit(CATALOGUE_LIMIT).all().items

    def newest_in_category(self, category: str, limit: int) -> list[Product]:
        return self._dao.query.filter(category=category).order_by("-created_at").limit(limit).all().items

    def all(self) -> list[Product]:
        return self._dao.query.order_by("name").limit(CATALOGUE_LIMIT).all().items

    def search(self, term: str, limit: int = 10) -> list[Product]:
        """Case-insensitive substring match on name, category, section and keywords."""
        needle = term.strip().lower()
        matches = [
            product
            for product in self.all()
            if needle in (product.name or "").lower()
            or needle in (product.category or "").lower()
            or needle in (product.section or "").lower()
            or any(needle in keyword for keyword in product.keywords)
        ]
        return matches[:limit]

    def count(self) -> int:
        return self._dao.query.all().total
