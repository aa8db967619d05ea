"""
Services module for timeless application.

This module contains the service classes behind the pages:
- MemoryRepository: DuckDB persistence for memories
- ImageUploader / asset hosts: Cloudinary or Google Cloud Storage uploads
- ImageProcessor: Image validation and EXIF date suggestions
- TimelessClient: Explicitly initialized bundle of the above
"""

from .client import TimelessClient, build_asset_host
from .image_processor import ImageProcessor, get_image_processor
from .repository import MemoryRepository
from .uploads import CloudinaryAssetHost, GCSAssetHost, ImageFile, ImageUploader

__all__ = [
    "TimelessClient",
    "build_asset_host",
    "ImageProcessor",
    "get_image_processor",
    "MemoryRepository",
    "CloudinaryAssetHost",
    "GCSAssetHost",
    "ImageFile",
    "ImageUploader",
]
