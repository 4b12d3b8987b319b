"""
ImageStorageService - Disk I/O for product images.

Images are written under UPLOAD_PATH and served by the app at /uploads.
This is a SYNC service - no database, no async.
"""

import os
import re
import logging
from datetime import datetime
from typing import Optional

from marketplace.config.settings import get_config

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"


class ImageStorageService:
    """
    Pure file system operations for uploaded product images.

    All methods are synchronous since file I/O in Python is sync.
    """

    def __init__(
        self,
        upload_path: Optional[str] = None,
        allowed_extensions: Optional[list[str]] = None,
    ):
        """
        Args:
            upload_path: Directory for images (default: the UPLOAD_PATH setting)
            allowed_extensions: Accepted extensions without dot
                (default: the ALLOWED_IMAGE_EXTENSIONS setting)
        """
        self.upload_path = upload_path or get_config().UPLOAD_PATH
        self.allowed_extensions = [
            ext.strip().lower()
            for ext in (allowed_extensions or get_config().ALLOWED_IMAGE_EXTENSIONS)
            if ext.strip()
        ]

    def is_allowed(self, filename: str) -> bool:
        return self.get_extension(filename) in self.allowed_extensions

    def save_image(self, content: bytes, filename: str) -> str:
        """
        Save image content to disk under a unique, sanitized name.

        Returns:
            Public URL path, e.g. /uploads/20250127_120000123456_photo.jpg
        """
        os.makedirs(self.upload_path, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S%f")
        safe_filename = f"{timestamp}_{self._sanitize_filename(filename)}"
        file_path = os.path.join(self.upload_path, safe_filename)

        with open(file_path, "wb") as f:
            f.write(content)

        logger.debug(f"[ImageStorage] Saved image: {file_path} ({len(content)} bytes)")
        return f"{PUBLIC_PREFIX}/{safe_filename}"

    def delete_image(self, public_url: str) -> bool:
        """
        Delete a previously saved image by its public URL.

        Returns:
            True if deleted, False if the file didn't exist
        """
        file_path = os.path.join(self.upload_path, os.path.basename(public_url))
        if not os.path.exists(file_path):
            logger.warning(f"[ImageStorage] Image not found for deletion: {file_path}")
            return False

        os.remove(file_path)
        logger.debug(f"[ImageStorage] Deleted image: {file_path}")
        return True

    def _sanitize_filename(self, filename: str) -> str:
        # Replace unsafe characters with underscore
        safe = re.sub(r"[^\w\-_\.]", "_", os.path.basename(filename or ""))
        safe = safe.strip("._ ")
        if not safe:
            safe = "image"
        return safe

    def get_extension(self, filename: str) -> str:
        """Extension without dot (lowercase), or empty string."""
        if filename and "." in filename:
            return filename.rsplit(".", 1)[1].lower()
        return ""
