"""Product commands."""

from .create_product import CreateProductCommand, CreateProductHandler, ImageUpload

__all__ = ["CreateProductCommand", "CreateProductHandler", "ImageUpload"]
