"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CategoryResponse,
    CategorySectionResponse,
    CreateProductRequest,
    ImportReportResponse,
    ProductIdResponse,
    ProductResponse,
    SavedProductIdResponse,
    SavedProductResponse,
    SaveProductRequest,
    StatusResponse,
    UpdateProductRequest,
    UploadResponse,
)
from catalogue.category.tree import CATEGORY_TREE, get_category
from catalogue.domain import logger
from catalogue.product import queries
from catalogue.product.bulk_import import import_products as run_import
from catalogue.product.images import upload_product_image
from catalogue.product.management import AddProduct, RemoveProduct, UpdateProduct
from catalogue.saved.management import RemoveSavedProduct, SaveProduct, list_saved_products
from catalogue.storage.port import StorageError
from shared.api import require_admin

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
saved_product_router = APIRouter(prefix="/saved-products", tags=["saved-products"])
upload_router = APIRouter(prefix="/uploads", tags=["uploads"], dependencies=[Depends(require_admin)])


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(category: str | None = None, section: str | None = None) -> list[ProductResponse]:
    products = queries.list_products(category=category, section=section)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/search", response_model=list[ProductResponse])
async def search_products(
    q: str = "",
    limit: int = Query(queries.SEARCH_LIMIT, ge=1, le=50),
) -> list[ProductResponse]:
    return [ProductResponse.from_product(product) for product in queries.search_products(q, limit=limit)]


@product_router.get("/slug/{slug}", response_model=ProductResponse)
async def get_product_by_slug(slug: str) -> ProductResponse:
    return ProductResponse.from_product(queries.get_product_by_slug(slug))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(queries.get_product(product_id))


@product_router.post(
    "",
    status_code=201,
    response_model=ProductIdResponse,
    dependencies=[Depends(require_admin)],
)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        price=body.price,
        category=body.category,
        section=body.section,
        slug=body.slug,
        image=body.image,
        description=body.description,
        in_stock=body.in_stock,
        stock=body.stock,
        variants=json.dumps([variant.model_dump() for variant in body.variants]),
        search_keywords=json.dumps(body.search_keywords),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@product_router.patch("/{product_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "variants" in changes:
        changes["variants"] = json.dumps(changes["variants"])
    if "search_keywords" in changes:
        changes["search_keywords"] = json.dumps(changes["search_keywords"])
    current_domain.process(UpdateProduct(product_id=product_id, **changes), asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.post("/import", response_model=ImportReportResponse, dependencies=[Depends(require_admin)])
async def import_products(request: Request, filename: str = "upload.csv") -> ImportReportResponse:
    """Import products from a CSV body (``Content-Type: text/csv``)."""
    payload = await request.body()
    if not payload:
        raise ValidationError({"file": ["No file uploaded"]})
    try:
        csv_text = payload.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError({"file": ["File must be UTF-8 encoded CSV"]}) from None

    report = run_import(csv_text, source_name=filename)
    return ImportReportResponse(
        imported=report.imported,
        skipped=report.skipped,
        product_ids=report.product_ids,
        errors=report.errors,
    )


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [CategoryResponse.from_category(category) for category in CATEGORY_TREE]


@category_router.get("/sections", response_model=list[CategorySectionResponse])
async def category_sections(per_category: int = Query(4, ge=1, le=20)) -> list[CategorySectionResponse]:
    return [
        CategorySectionResponse(
            category=CategoryResponse.from_category(entry["category"]),
            products=[ProductResponse.from_product(product) for product in entry["products"]],
        )
        for entry in queries.category_sections(per_category=per_category)
    ]


@category_router.get("/{slug}", response_model=CategoryResponse)
async def get_category_detail(slug: str) -> CategoryResponse:
    category = get_category(slug)
    if category is None:
        raise ObjectNotFoundError(f"Category {slug} does not exist")
    return CategoryResponse.from_category(category)


@category_router.get("/{slug}/{section}/products", response_model=list[ProductResponse])
async def list_section_products(slug: str, section: str) -> list[ProductResponse]:
    category = get_category(slug)
    if category is None or category.section(section) is None:
        raise ObjectNotFoundError(f"Section {slug}/{section} does not exist")
    products = queries.list_products(category=slug, section=section)
    return [ProductResponse.from_product(product) for product in products]


# --- Saved product endpoints ---


@saved_product_router.get("", response_model=list[SavedProductResponse])
async def list_saved(user_id: str) -> list[SavedProductResponse]:
    return [SavedProductResponse.from_saved(saved) for saved in list_saved_products(user_id)]


@saved_product_router.post("", status_code=201, response_model=SavedProductIdResponse)
async def save_product(body: SaveProductRequest) -> SavedProductIdResponse:
    saved_id = current_domain.process(
        SaveProduct(user_id=body.user_id, product_id=body.product_id),
        asynchronous=False,
    )
    return SavedProductIdResponse(saved_product_id=saved_id)


@saved_product_router.delete("/{saved_product_id}", response_model=StatusResponse)
async def remove_saved(saved_product_id: str, user_id: str) -> StatusResponse:
    current_domain.process(
        RemoveSavedProduct(user_id=user_id, saved_product_id=saved_product_id),
        asynchronous=False,
    )
    return StatusResponse()


# --- Upload endpoints ---


@upload_router.post("/images", status_code=201, response_model=UploadResponse)
async def upload_image(request: Request, filename: str) -> UploadResponse:
    """Upload a product image sent as the raw request body."""
    data = await request.body()
    try:
        url = upload_product_image(filename, data, request.headers.get("content-type", ""))
    except StorageError as exc:
        logger.error("product_image_upload_failed", filename=filename, error=str(exc))
        raise HTTPException(status_code=502, detail="Upload failed") from exc
    return UploadResponse(url=url)
