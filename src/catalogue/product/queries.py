"""Read-side queries the storefront uses to browse the catalogue.

Nothing here is cached: every call goes back to the provider.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.category.tree import CATEGORY_TREE
from catalogue.product.product import Product

SEARCH_LIMIT = 8


def get_product(product_id: str) -> Product:
    return current_domain.repository_for(Product).get(product_id)


def get_product_by_slug(slug: str) -> Product:
    product = current_domain.repository_for(Product).by_slug(slug)
    if product is None:
        raise ObjectNotFoundError(f"Product with slug {slug} does not exist")
    return product


def list_products(category: str | None = None, section: str | None = None) -> list[Product]:
    repo = current_domain.repository_for(Product)
    if category:
        return repo.by_category(category, section)
    return repo.all()


def search_products(term: str, limit: int = SEARCH_LIMIT) -> list[Product]:
    if not term or not term.strip():
        return []
    return current_domain.repository_for(Product).search(term, limit=limit)


def category_sections(per_category: int = 4) -> list[dict]:
    """Products grouped under each top-level category, for the home page rails.

    Categories without products are left out.
    """
    repo = current_domain.repository_for(Product)
    sections = []
    for category in CATEGORY_TREE:
        products = repo.newest_in_category(category.slug, limit=per_category)
        if products:
            sections.append({"category": category, "products": products})
    return sections


def count_products() -> int:
    return current_domain.repository_for(Product).count()
