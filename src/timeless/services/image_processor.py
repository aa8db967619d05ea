"""Image validation service for timeless application."""

import io
import os
from datetime import date, datetime
from pathlib import Path
from typing import Any

from PIL import ExifTags, Image

from timeless.ui.handlers.error import ImageProcessingError, ValidationError
from ..logging_config import get_logger, log_error, log_performance

try:
    from pillow_heif import register_heif_opener  # type: ignore[import-untyped]

    register_heif_opener()
    HEIF_AVAILABLE = True
except ImportError:
    HEIF_AVAILABLE = False

logger = get_logger(__name__)


class ImageProcessor:
    """Checks selected files before they are sent to the asset host."""

    SUPPORTED_FORMATS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic", ".heif"}

    # EXIF date tags in priority order
    EXIF_DATE_TAGS = [
        "DateTimeOriginal",
        "DateTime",
        "DateTimeDigitized",
    ]

    def __init__(self) -> None:
        self.MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", 20 * 1024 * 1024))  # Default: 20MB
        self.MIN_FILE_SIZE = int(os.getenv("MIN_FILE_SIZE", 1))

    def is_supported_format(self, filename: str) -> bool:
        """
        Check if the image format is supported.

        Args:
            filename: Name of the image file

        Returns:
            bool: True if format is supported, False otherwise
        """
        file_extension = Path(filename).suffix.lower()
        if file_extension in {".heic", ".heif"}:
            if not HEIF_AVAILABLE:
                logger.warning("heic_format_unsupported", filename=filename, install_command="pip install pillow-heif")
            return HEIF_AVAILABLE
        return file_extension in self.SUPPORTED_FORMATS

    def validate_file_size(self, image_data: bytes, filename: str) -> None:
        """
        Validate that the file size is within acceptable limits.

        Raises:
            ValidationError: If file size is outside acceptable limits
        """
        file_size = len(image_data)

        if file_size < self.MIN_FILE_SIZE:
            raise ValidationError(
                f"File '{filename}' is empty",
                code="file_too_small",
                user_message=f"'{filename}' is empty.",
                details={"filename": filename, "file_size": file_size},
            )

        if file_size > self.MAX_FILE_SIZE:
            max_size_mb = self.MAX_FILE_SIZE / (1024 * 1024)
            current_size_mb = file_size / (1024 * 1024)
            raise ValidationError(
                f"File '{filename}' is too large ({current_size_mb:.1f}MB). Maximum size: {max_size_mb:.0f}MB",
                code="file_too_large",
                user_message=f"'{filename}' is too large. Maximum size: {max_size_mb:.0f}MB",
                details={"filename": filename, "file_size": file_size, "max_size": self.MAX_FILE_SIZE},
            )

    def validate_image(self, image_data: bytes, filename: str) -> None:
        """
        Validate that the data is a readable image of a supported format.

        Raises:
            ValidationError: If size or format is not acceptable
            ImageProcessingError: If the image is corrupted
        """
        start_time = datetime.now()

        self.validate_file_size(image_data, filename)

        if not self.is_supported_format(filename):
            raise ValidationError(
                f"Unsupported format for file '{filename}'",
                code="unsupported_format",
                user_message=f"'{filename}' is not a supported image format.",
                details={"filename": filename, "extension": Path(filename).suffix.lower()},
            )

        try:
            with Image.open(io.BytesIO(image_data)) as image:
                image.verify()
                detected_format = image.format
        except Exception as e:
            log_error(e, {"operation": "validate_image", "filename": filename, "file_size": len(image_data)})
            raise ImageProcessingError(
                f"Invalid or corrupted image file '{filename}': {e}",
                code="image_validation_failed",
                user_message=f"'{filename}' is not a valid image file.",
                details={"filename": filename, "file_size": len(image_data)},
                original_exception=e,
            ) from e

        duration = (datetime.now() - start_time).total_seconds()
        log_performance("validate_image", duration, filename=filename, file_size=len(image_data), format=detected_format)

    def extract_memory_date(self, image_data: bytes) -> date | None:
        """
        Suggest a memory date from the photo's EXIF data.

        Returns:
            date: Day the photo was taken, or None if not available
        """
        try:
            with Image.open(io.BytesIO(image_data)) as image:
                exif_data = image.getexif()
                if not exif_data:
                    return None

                # DateTimeOriginal and DateTimeDigitized live in the Exif IFD
                tags: dict[Any, Any] = dict(exif_data)
                tags.update(exif_data.get_ifd(ExifTags.IFD.Exif))

                for tag_name in self.EXIF_DATE_TAGS:
                    taken_at = self._get_exif_date_by_name(tags, tag_name)
                    if taken_at:
                        logger.debug("exif_date_extracted", tag_name=tag_name, date_value=taken_at.isoformat())
                        return taken_at.date()

                return None

        except Exception as e:
            log_error(e, {"operation": "extract_memory_date"})
            return None

    def _get_exif_date_by_name(self, exif_data: dict[Any, Any], tag_name: str) -> datetime | None:
        tag_id = next((tag for tag, name in ExifTags.TAGS.items() if name == tag_name), None)
        if tag_id is None:
            return None

        date_string = exif_data.get(tag_id)
        if not date_string:
            return None

        try:
            return datetime.strptime(str(date_string), "%Y:%m:%d %H:%M:%S")
        except (ValueError, TypeError) as e:
            logger.debug("exif_date_parse_failed", tag_name=tag_name, date_string=date_string, error=str(e))
            return None


_image_processor: ImageProcessor | None = None


def get_image_processor() -> ImageProcessor:
    """Get the shared image processor instance."""
    global _image_processor
    if _image_processor is None:
        _image_processor = ImageProcessor()
    return _image_processor
