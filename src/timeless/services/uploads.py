"""Image upload adapters for the external asset host.

Every upload returns a stable, directly fetchable URL. Batches are uploaded
concurrently and either all succeed or the whole batch fails.
"""

import uuid
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

import requests
from google.cloud import storage  # type: ignore[attr-defined]
from google.cloud.exceptions import GoogleCloudError

from timeless.ui.handlers.error import StorageError, UploadError
from ..logging_config import get_logger, log_performance

logger = get_logger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
DEFAULT_UPLOAD_PRESET = "unsigned_memories"


@dataclass(frozen=True)
class ImageFile:
    """A raw image selected by the user."""

    name: str
    data: bytes
    mime_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_uploaded(cls, uploaded_file: Any) -> "ImageFile":
        """
        Adapt a Streamlit UploadedFile.

        Args:
            uploaded_file: Object with ``name``, ``type`` and ``getvalue()``
        """
        return cls(
            name=uploaded_file.name,
            data=uploaded_file.getvalue(),
            mime_type=getattr(uploaded_file, "type", None) or "application/octet-stream",
        )


class AssetHost(Protocol):
    """Something that stores one image and hands back its public URL."""

    def upload(self, image: ImageFile) -> str: ...


class CloudinaryAssetHost:
    """Unsigned uploads to Cloudinary under a fixed upload preset."""

    def __init__(
        self,
        cloud_name: str,
        upload_preset: str = DEFAULT_UPLOAD_PRESET,
        session: requests.Session | None = None,
        timeout: float = 60.0,
    ) -> None:
        if not cloud_name:
            raise UploadError("Cloudinary cloud name is required", code="asset_host_not_configured")
        self.cloud_name = cloud_name
        self.upload_preset = upload_preset
        self.session = session or requests.Session()
        self.timeout = timeout
        self.upload_url = CLOUDINARY_UPLOAD_URL.format(cloud_name=cloud_name)

    def upload(self, image: ImageFile) -> str:
        """
        Upload one image.

        Returns:
            str: The ``secure_url`` reported by Cloudinary

        Raises:
            UploadError: If the request fails or no secure URL is returned
        """
        try:
            response = self.session.post(
                self.upload_url,
                files={"file": (image.name, image.data, image.mime_type)},
                data={"upload_preset": self.upload_preset},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UploadError(
                f"Image upload failed for '{image.name}': {e}",
                details={"filename": image.name},
                original_exception=e,
            ) from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        secure_url = payload.get("secure_url") if isinstance(payload, dict) else None
        if not response.ok or not secure_url:
            remote_error = payload.get("error") if isinstance(payload, dict) else None
            message = remote_error.get("message") if isinstance(remote_error, dict) else remote_error
            raise UploadError(
                f"Image upload failed for '{image.name}'",
                details={"filename": image.name, "status_code": response.status_code, "remote_message": message},
            )

        logger.info("image_uploaded", filename=image.name, size=image.size, url=secure_url)
        return str(secure_url)


class GCSAssetHost:
    """Uploads to a publicly readable Google Cloud Storage bucket."""

    def __init__(
        self,
        bucket_name: str,
        project_id: str | None = None,
        public_base_url: str | None = None,
        client: Any = None,
    ) -> None:
        if not bucket_name:
            raise StorageError("GCS_PHOTOS_BUCKET is required for the gcs asset host")
        self.bucket_name = bucket_name
        self.public_base_url = (public_base_url or f"https://storage.googleapis.com/{bucket_name}").rstrip("/")

        try:
            self.client = client or storage.Client(project=project_id)
            self.bucket = self.client.bucket(bucket_name)
        except Exception as e:
            raise StorageError(f"Failed to initialize GCS client: {e}", original_exception=e) from e

        logger.info("gcs_asset_host_initialized", bucket=bucket_name, project_id=project_id)

    def _object_path(self, filename: str) -> str:
        # Sanitize filename to prevent path traversal
        safe_filename = Path(filename).name or "image"
        return f"memories/{uuid.uuid4()}/{safe_filename}"

    def upload(self, image: ImageFile) -> str:
        """
        Upload one image.

        Returns:
            str: Public URL of the stored object

        Raises:
            StorageError: If the upload fails
        """
        gcs_path = self._object_path(image.name)
        try:
            blob = self.bucket.blob(gcs_path)
            blob.metadata = {
                "original_filename": image.name,
                "uploaded_at": datetime.now().isoformat(),
            }
            blob.upload_from_string(image.data, content_type=image.mime_type)
        except GoogleCloudError as e:
            raise StorageError(
                f"Failed to upload '{image.name}': {e}",
                details={"filename": image.name, "gcs_path": gcs_path},
                original_exception=e,
            ) from e

        url = f"{self.public_base_url}/{gcs_path}"
        logger.info("image_uploaded", filename=image.name, size=image.size, url=url)
        return url


class ImageUploader:
    """Uploads a batch of images concurrently, preserving input order."""

    def __init__(self, asset_host: AssetHost, max_workers: int = 4) -> None:
        self.asset_host = asset_host
        self.max_workers = max(1, max_workers)

    def upload_all(
        self,
        images: list[ImageFile],
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> list[str]:
        """
        Upload every image and return their URLs in input order.

        Args:
            images: Files to upload
            progress_callback: Called with (completed, total) as uploads finish

        Returns:
            list[str]: One URL per input image, same order

        Raises:
            UploadError: If any upload fails; no partial list is returned
        """
        if not images:
            return []

        start_time = datetime.now()
        total = len(images)

        with ThreadPoolExecutor(max_workers=min(self.max_workers, total), thread_name_prefix="image-upload") as executor:
            futures = [executor.submit(self.asset_host.upload, image) for image in images]

            urls: list[str | None] = []
            failures: list[dict[str, str]] = []
            for position, (image, future) in enumerate(zip(images, futures), start=1):
                try:
                    urls.append(future.result())
                except Exception as e:
                    logger.warning("image_upload_failed", filename=image.name, error=str(e))
                    urls.append(None)
                    failures.append({"filename": image.name, "error": str(e)})
                if progress_callback:
                    progress_callback(position, total)

        if failures:
            uploaded = [url for url in urls if url]
            if uploaded:
                logger.warning("orphaned_assets", urls=uploaded, reason="batch_upload_failed")
            failed_names = ", ".join(failure["filename"] for failure in failures)
            raise UploadError(
                f"Image upload failed for: {failed_names}",
                user_message=f"Image upload failed ({failed_names}). Nothing was saved.",
                details={"failures": failures, "uploaded_count": len(uploaded), "total": total},
            )

        duration = (datetime.now() - start_time).total_seconds()
        log_performance("upload_all", duration, file_count=total)
        return [url for url in urls if url is not None]
