"""Starter catalogue loaded by ``manage.py seed-products``.

Prices are in the store currency (naira by default). Product ids equal their
slugs and products that already exist are left alone, so re-seeding is
idempotent.
"""

from protean.utils.globals import current_domain

from catalogue.domain import logger
from catalogue.product.product import Product, slugify

SEED_PRODUCTS = [
    {
        "name": "Stockfish Middle",
        "price": 18500,
        "category": "african-foodstuff",
        "section": "tubers",
        "description": "Premium dried stockfish middle cuts, rich in protein and perfect for traditional soups.",
    },
    {
        "name": "Stockfish Ear",
        "price": 22000,
        "category": "african-foodstuff",
        "section": "tubers",
        "description": "High-grade stockfish ear pieces, carefully dried for authentic African cooking.",
    },
    {
        "name": "Nido Milk Powder",
        "slug": "nido-milk",
        "price": 9500,
        "category": "packaged-foods",
        "section": "drinks",
        "description": "Full cream milk powder for the whole family.",
    },
    {
        "name": "Peak Milk Powder",
        "slug": "peak-milk",
        "price": 8700,
        "category": "packaged-foods",
        "section": "drinks",
        "description": "Rich and creamy instant milk powder.",
    },
    {
        "name": "Crunchy Coconut Peanut",
        "price": 1200,
        "category": "packaged-foods",
        "section": "snacks",
        "description": "Crunchy coated peanuts with a coconut twist.",
    },
    {
        "name": "Milo",
        "price": 7200,
        "category": "packaged-foods",
        "section": "drinks",
        "description": "Chocolate malt energy drink.",
    },
    {
        "name": "Golden Morn",
        "price": 3500,
        "category": "packaged-foods",
        "section": "cereals",
        "description": "Maize and soya based breakfast cereal.",
    },
    {
        "name": "De Rica Tin Tomato",
        "price": 800,
        "category": "packaged-foods",
        "section": "ready-meals",
        "description": "Concentrated tomato paste.",
    },
    {
        "name": "Ghana Fresh Palmnut Cream (400g)",
        "price": 3200,
        "category": "african-foodstuff",
        "section": "oil",
        "description": "Palm nut cream for banga and palm nut soup.",
    },
    {
        "name": "Body Wave Lace Frontal Wig",
        "price": 85000,
        "category": "wigs",
        "section": "lace-frontal",
        "description": "Natural hairline body wave wig.",
        "variants": [
            {"name": "16 inch", "price": 85000},
            {"name": "20 inch", "price": 110000},
        ],
    },
]


def seed_products() -> int:
    """Add the starter catalogue. Returns the number of products written."""
    repo = current_domain.repository_for(Product)
    written = 0
    for data in SEED_PRODUCTS:
        fields = dict(data)
        slug = slugify(fields.pop("slug", None) or fields["name"])
        if repo.by_slug(slug) is not None:
            continue
        product = Product.create(slug=slug, product_id=slug, image=f"/products/{slug}.jpg", **fields)
        repo.add(product)
        written += 1

    logger.info("products_seeded", count=written, skipped=len(SEED_PRODUCTS) - written)
    return written
