"""
CreateProduct Command - Publish a listing with its images.

Images arrive already read into memory by the router (which enforces the
per-file size limit). Extensions are checked before anything touches disk;
if saving the listing fails, images written so far are removed again.
"""

import logging
from dataclasses import dataclass, field

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.domain.entities.product import MAX_IMAGES, Product
from marketplace.domain.exceptions import DomainValidationError
from marketplace.domain.ports.repositories import ProductRepository
from marketplace.domain.value_objects.user_id import UserId
from marketplace.infrastructure.storage import ImageStorageService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content: bytes


@dataclass(frozen=True)
class CreateProductCommand(Command[Product]):
    owner_id: UserId
    title: str
    category: str
    location: str
    price: float
    description: str
    images: list[ImageUpload] = field(default_factory=list)


class CreateProductHandler(CommandHandler[Product]):
    def __init__(
        self,
        product_repository: ProductRepository,
        image_storage: ImageStorageService,
    ):
        self._product_repository = product_repository
        self._image_storage = image_storage

    async def execute(self, command: CreateProductCommand) -> Product:
        if len(command.images) > MAX_IMAGES:
            raise DomainValidationError(f"At most {MAX_IMAGES} images are allowed")
        for image in command.images:
            if not self._image_storage.is_allowed(image.filename):
                raise DomainValidationError(
                    f"Unsupported image type: {image.filename or 'unnamed file'}"
                )

        # Validate the listing before writing any file
        product = Product.create(
            owner_id=command.owner_id,
            title=command.title,
            category=command.category,
            location=command.location,
            price=command.price,
            description=command.description,
        )

        saved: list[str] = []
        try:
            for image in command.images:
                saved.append(self._image_storage.save_image(image.content, image.filename))
            product.images = saved
            await self._product_repository.save(product)
        except Exception:
            for url in saved:
                self._image_storage.delete_image(url)
            raise

        logger.info(f"Product {product.id.value} created with {len(saved)} image(s)")
        return product
