"""
Products API Router - Listings and their images.

Endpoints:
- POST /api/products        (authenticated, multipart/form-data)
- GET  /api/products        newest first
- GET  /api/products/{id}   with the seller's public details

Uploaded images are written by ImageStorageService and served from /uploads.
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel

from marketplace.application.commands.products import (
    CreateProductCommand,
    CreateProductHandler,
    ImageUpload,
)
from marketplace.application.dto.product import (
    ProductCreatedDTO,
    ProductDetailDTO,
    ProductListItemDTO,
)
from marketplace.application.queries.products import (
    GetProductHandler,
    GetProductQuery,
    ListProductsHandler,
    ListProductsQuery,
)
from marketplace.config.settings import get_config
from marketplace.domain.exceptions import DomainValidationError, EntityNotFoundError
from marketplace.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== RESPONSE MODELS ====================


class CreateProductResponse(BaseModel):
    success: bool = True
    message: str
    product: ProductCreatedDTO


class ListProductsResponse(BaseModel):
    success: bool = True
    products: list[ProductListItemDTO]


class GetProductResponse(BaseModel):
    success: bool = True
    product: ProductDetailDTO


# ==================== ROUTER ====================

router = APIRouter(prefix="/api/products", tags=["products"])


async def _read_images(images: list[UploadFile]) -> list[ImageUpload]:
    """Read uploads into memory, enforcing count and per-file size limits."""
    settings = get_config()
    if len(images) > settings.MAX_PRODUCT_IMAGES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.MAX_PRODUCT_IMAGES} images are allowed",
        )

    max_bytes = int(settings.MAX_IMAGE_MB * 1024 * 1024)
    uploads = []
    for image in images:
        # Read one byte past the limit to detect oversize files without reading them whole
        content = await image.read(max_bytes + 1)
        if len(content) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Each image must be at most {settings.MAX_IMAGE_MB:g} MB",
            )
        uploads.append(ImageUpload(filename=image.filename or "", content=content))
    return uploads


# ==================== ENDPOINTS ====================


@router.post(
    "",
    response_model=CreateProductResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_product(
    handler: FromDishka[CreateProductHandler],
    title: str = Form(...),
    category: str = Form(...),
    location: str = Form(...),
    price: float = Form(...),
    description: str = Form(...),
    images: Optional[list[UploadFile]] = File(default=None),
    current_user: AuthUser = Depends(get_current_user),
):
    """Create a listing from multipart form data."""
    uploads = await _read_images(images or [])
    try:
        product = await handler.execute(
            CreateProductCommand(
                owner_id=current_user.id,
                title=title,
                category=category,
                location=location,
                price=price,
                description=description,
                images=uploads,
            )
        )
    except DomainValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

    return CreateProductResponse(
        message="Product created successfully",
        product=ProductCreatedDTO.from_entity(product),
    )


@router.get("", response_model=ListProductsResponse, status_code=status.HTTP_200_OK)
@inject
async def list_products(handler: FromDishka[ListProductsHandler]):
    query = ListProductsQuery(limit=get_config().PRODUCT_LIST_LIMIT)
    products = await handler.execute(query)
    return ListProductsResponse(
        products=[ProductListItemDTO.from_entity(p) for p in products]
    )


@router.get(
    "/{product_id}",
    response_model=GetProductResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def get_product(product_id: str, handler: FromDishka[GetProductHandler]):
    try:
        detail = await handler.execute(GetProductQuery(product_id=product_id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return GetProductResponse(
        product=ProductDetailDTO.from_entity(detail.product, detail.seller)
    )
