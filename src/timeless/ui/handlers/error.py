"""
Centralized error handling and classification for timeless application.

This module provides error classification, handling, and user-friendly
error message generation for the timeline, create and edit flows.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from timeless.logging_config import get_logger, log_error

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    UPLOAD = "upload"
    IMAGE_PROCESSING = "image_processing"
    DATABASE = "database"
    STORAGE = "storage"
    VALIDATION = "validation"
    NETWORK = "network"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorInfo:
    """Structured error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    user_message: str
    details: dict[str, Any]
    timestamp: datetime
    recoverable: bool = True
    retry_suggested: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
        }


class TimelessError(Exception):
    """Base exception class for timeless application."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        retry_suggested: bool = False,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.code = code or f"{category.value}_error"
        self.user_message = user_message or self._generate_user_message()
        self.details = details or {}
        self.recoverable = recoverable
        self.retry_suggested = retry_suggested
        self.original_exception = original_exception
        self.timestamp = datetime.now()

        self._log_error()

    def _generate_user_message(self) -> str:
        """Generate user-friendly error message."""
        user_messages = {
            ErrorCategory.UPLOAD: "Image upload failed.",
            ErrorCategory.IMAGE_PROCESSING: "One of the selected files could not be read as an image.",
            ErrorCategory.DATABASE: "Could not reach the memories database.",
            ErrorCategory.STORAGE: "Could not reach image storage.",
            ErrorCategory.VALIDATION: "All fields are required",
            ErrorCategory.NETWORK: "A network error occurred.",
            ErrorCategory.SYSTEM: "A system error occurred.",
            ErrorCategory.UNKNOWN: "An unexpected error occurred.",
        }
        return user_messages.get(self.category, "An error occurred.")

    def _log_error(self) -> None:
        """Log the error with appropriate level."""
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        log_error(self, error_context)

    def get_error_info(self) -> ErrorInfo:
        """Get structured error information."""
        return ErrorInfo(
            category=self.category,
            severity=self.severity,
            code=self.code,
            message=str(self),
            user_message=self.user_message,
            details=self.details,
            timestamp=self.timestamp,
            recoverable=self.recoverable,
            retry_suggested=self.retry_suggested,
        )


class UploadError(TimelessError):
    """Asset host rejected a file or returned no usable URL."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.UPLOAD,
            severity=ErrorSeverity.MEDIUM,
            code=code or "upload_failed",
            user_message=user_message or "Image upload failed. Please try again.",
            details=details,
            recoverable=True,
            retry_suggested=True,
            original_exception=original_exception,
        )


class ImageProcessingError(TimelessError):
    """Image processing-related errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.IMAGE_PROCESSING,
            severity=ErrorSeverity.MEDIUM,
            code=code or "image_processing_failed",
            user_message=user_message or "One of the selected files could not be read as an image.",
            details=details,
            recoverable=True,
            retry_suggested=False,
            original_exception=original_exception,
        )


class DatabaseError(TimelessError):
    """Persistence-related errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.DATABASE,
            severity=ErrorSeverity.HIGH,
            code=code or "database_error",
            user_message=user_message or "Could not save or load memories. Please try again.",
            details=details,
            recoverable=True,
            retry_suggested=True,
            original_exception=original_exception,
        )


class StorageError(TimelessError):
    """Google Cloud Storage errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.HIGH,
            code=code or "storage_error",
            user_message=user_message or "Could not reach image storage. Please try again.",
            details=details,
            recoverable=True,
            retry_suggested=True,
            original_exception=original_exception,
        )


class ValidationError(TimelessError):
    """Missing or invalid form input."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            code=code or "validation_failed",
            user_message=user_message or "All fields are required",
            details=details,
            recoverable=True,
            retry_suggested=False,
            original_exception=original_exception,
        )


class NetworkError(TimelessError):
    """Network-related errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.MEDIUM,
            code=code or "network_error",
            user_message=user_message or "A network error occurred. Check your connection.",
            details=details,
            recoverable=True,
            retry_suggested=True,
            original_exception=original_exception,
        )


class ErrorHandler:
    """Centralized error handler for the application."""

    def __init__(self) -> None:
        self.error_counts: dict[str, int] = {}
        self.logger = get_logger(__name__)

    def handle_error(
        self,
        error: Exception | TimelessError,
        context: dict[str, Any] | None = None,
    ) -> ErrorInfo:
        """
        Handle and classify errors.

        Args:
            error: Exception to handle
            context: Additional context information

        Returns:
            ErrorInfo: Structured error information
        """
        context = context or {}

        if isinstance(error, TimelessError):
            error_info = error.get_error_info()
            self._track_error(error_info.code)
            return error_info

        classified_error = self._classify_error(error, context)
        error_info = classified_error.get_error_info()
        self._track_error(error_info.code)

        return error_info

    def _classify_error(
        self,
        error: Exception,
        context: dict[str, Any],
    ) -> TimelessError:
        """Classify an exception into appropriate TimelessError."""
        error_type = type(error).__name__
        error_message = str(error)
        lowered = error_message.lower()
        details = {"original_type": error_type, **context}

        if any(keyword in lowered for keyword in ["upload", "secure_url", "cloudinary"]):
            return UploadError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["image", "pillow", "heic", "jpeg"]):
            return ImageProcessingError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["database", "duckdb", "sql", "query"]):
            return DatabaseError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["storage", "gcs", "bucket"]):
            return StorageError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["validation", "invalid", "required", "missing"]):
            return ValidationError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["network", "connection", "timeout", "unreachable"]):
            return NetworkError(message=error_message, details=details, original_exception=error)

        return TimelessError(
            message=error_message,
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.MEDIUM,
            details=details,
            original_exception=error,
        )

    def _track_error(self, error_code: str) -> None:
        """Track error occurrence for monitoring."""
        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1

        if self.error_counts[error_code] % 10 == 0:
            self.logger.warning("frequent_error_detected", error_code=error_code, count=self.error_counts[error_code])


# Global error handler instance
error_handler = ErrorHandler()


def handle_error(
    error: Exception | TimelessError,
    context: dict[str, Any] | None = None,
) -> ErrorInfo:
    """
    Global error handling function.

    Args:
        error: Exception to handle
        context: Additional context information

    Returns:
        ErrorInfo: Structured error information
    """
    return error_handler.handle_error(error, context)
