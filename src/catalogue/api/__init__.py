"""Catalogue domain API package."""

from catalogue.api.routes import category_router, product_router, saved_product_router, upload_router

__all__ = ["product_router", "category_router", "saved_product_router", "upload_router"]
