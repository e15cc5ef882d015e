"""Catalogue bounded context: products, category tree, saved products and images.

The storefront only reads from the catalogue; the admin back office is the
sole writer.
"""

import structlog
from protean.domain import Domain

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
