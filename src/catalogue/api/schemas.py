"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Shared sub-models ---


class VariantSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0)
    in_stock: bool = True


# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Stockfish Middle",
                    "price": 18500,
                    "category": "african-foodstuff",
                    "section": "tubers",
                    "image": "/products/stockfish-middle.jpg",
                    "description": "Premium dried stockfish middle cuts.",
                    "in_stock": True,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    section: str = ""
    slug: str | None = Field(None, max_length=200)
    image: str = ""
    description: str = ""
    in_stock: bool = True
    stock: int | None = Field(None, ge=0)
    variants: list[VariantSchema] = Field(default_factory=list)
    search_keywords: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price": 19500,
                    "in_stock": False,
                }
            ]
        }
    }

    name: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, max_length=200)
    price: float | None = Field(None, ge=0)
    category: str | None = None
    section: str | None = None
    image: str | None = None
    description: str | None = None
    in_stock: bool | None = None
    stock: int | None = Field(None, ge=0)
    variants: list[VariantSchema] | None = None
    search_keywords: list[str] | None = None


# --- Saved Product Request Schemas ---


class SaveProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"user_id": "user-001", "product_id": "stockfish-middle"}]}}

    user_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    price: float
    display_price: float
    category: str
    section: str
    image: str
    description: str
    in_stock: bool
    stock: int | None = None
    has_variants: bool
    variants: list[VariantSchema]
    search_keywords: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            slug=product.slug,
            price=product.price,
            display_price=product.display_price,
            category=product.category,
            section=product.section or "",
            image=product.image or "",
            description=product.description or "",
            in_stock=bool(product.in_stock),
            stock=product.stock,
            has_variants=product.has_variants,
            variants=[
                VariantSchema(name=variant.name, price=variant.price, in_stock=bool(variant.in_stock))
                for variant in product.ordered_variants
            ],
            search_keywords=product.keywords,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class SectionResponse(BaseModel):
    slug: str
    name: str
    description: str
    image: str


class CategoryResponse(BaseModel):
    slug: str
    name: str
    description: str
    sections: list[SectionResponse]

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(
            slug=category.slug,
            name=category.name,
            description=category.description,
            sections=[SectionResponse(**vars(section)) for section in category.sections],
        )


class CategorySectionResponse(BaseModel):
    category: CategoryResponse
    products: list[ProductResponse]


class SavedProductResponse(BaseModel):
    id: str
    user_id: str
    product_id: str
    name: str
    price: float
    image: str
    category: str
    saved_at: datetime

    @classmethod
    def from_saved(cls, saved) -> SavedProductResponse:
        return cls(
            id=str(saved.id),
            user_id=saved.user_id,
            product_id=str(saved.product_id),
            name=saved.name,
            price=saved.price,
            image=saved.image or "",
            category=saved.category or "",
            saved_at=saved.saved_at,
        )


class ImportReportResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"imported": 12, "skipped": 1, "errors": []}]}}

    imported: int
    skipped: int
    product_ids: list[str]
    errors: list[str]


class ProductIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "stockfish-middle"}]}}

    product_id: str


class SavedProductIdResponse(BaseModel):
    saved_product_id: str


class UploadResponse(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"url": "https://storage.example.test/products/1700000000000-yam.jpg"}]}
    }

    url: str


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
