"""
Explicitly constructed service client.

The client bundles the memory repository, the image uploader and the image
validator. It is built from configuration, opened with ``initialize()`` and
passed to the pages and form handlers that need it.
"""

from typing import Any

from timeless.ui.handlers.error import DatabaseError
from ..config import Config
from ..logging_config import get_logger
from ..models.database import DatabaseManager, create_database
from .image_processor import ImageProcessor, get_image_processor
from .repository import MemoryRepository
from .uploads import (
    DEFAULT_UPLOAD_PRESET,
    AssetHost,
    CloudinaryAssetHost,
    GCSAssetHost,
    ImageUploader,
)

logger = get_logger(__name__)


def build_asset_host(config: Config) -> AssetHost:
    """
    Create the asset host selected by ``ASSET_HOST``.

    Raises:
        ValueError: If the backend name is unknown or required settings are missing
    """
    kind = str(config.get("ASSET_HOST", "cloudinary")).lower()

    if kind == "cloudinary":
        return CloudinaryAssetHost(
            cloud_name=config.get_required("CLOUDINARY_CLOUD_NAME"),
            upload_preset=config.get("CLOUDINARY_UPLOAD_PRESET", DEFAULT_UPLOAD_PRESET),
            timeout=config.get("UPLOAD_TIMEOUT_SECONDS", 60.0, float),
        )

    if kind == "gcs":
        return GCSAssetHost(
            bucket_name=config.get_required("GCS_PHOTOS_BUCKET"),
            project_id=config.get("GOOGLE_CLOUD_PROJECT"),
            public_base_url=config.get("GCS_PUBLIC_BASE_URL"),
        )

    raise ValueError(f"Unknown ASSET_HOST '{kind}' (expected 'cloudinary' or 'gcs')")


class TimelessClient:
    """Repository, uploader and validator for one app process."""

    def __init__(
        self,
        db_path: str,
        asset_host: AssetHost,
        max_workers: int = 4,
        image_processor: ImageProcessor | None = None,
    ) -> None:
        self.db_path = db_path
        self.asset_host = asset_host
        self.uploader = ImageUploader(asset_host, max_workers=max_workers)
        self.image_processor = image_processor or get_image_processor()
        self._db_manager: DatabaseManager | None = None
        self._repository: MemoryRepository | None = None

    @classmethod
    def from_config(cls, config: Config) -> "TimelessClient":
        return cls(
            db_path=str(config.get("TIMELESS_DB_PATH", "data/timeless.duckdb")),
            asset_host=build_asset_host(config),
            max_workers=config.get("UPLOAD_MAX_WORKERS", 4, int),
        )

    @property
    def is_initialized(self) -> bool:
        return self._repository is not None

    def initialize(self) -> "TimelessClient":
        """
        Open the database and make sure the schema exists.

        Raises:
            DatabaseError: If the database cannot be opened
        """
        if self.is_initialized:
            return self

        try:
            self._db_manager = create_database(self.db_path)
        except RuntimeError as e:
            raise DatabaseError(
                f"Failed to open memories database: {e}",
                code="database_init_failed",
                details={"db_path": self.db_path},
                original_exception=e,
            ) from e

        self._repository = MemoryRepository(self._db_manager)
        logger.info(
            "client_initialized",
            db_path=self.db_path,
            asset_host=type(self.asset_host).__name__,
            memory_count=self._repository.count(),
        )
        return self

    @property
    def repository(self) -> MemoryRepository:
        if self._repository is None:
            raise RuntimeError("TimelessClient.initialize() must be called before use")
        return self._repository

    def close(self) -> None:
        if self._db_manager is not None:
            self._db_manager.close()
        self._db_manager = None
        self._repository = None
        logger.info("client_closed", db_path=self.db_path)

    def __enter__(self) -> "TimelessClient":
        return self.initialize()

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
