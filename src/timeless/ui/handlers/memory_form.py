"""Create and edit form handlers for timeless application.

These functions hold the submission logic of the create and edit pages:
validate, upload every new image concurrently, then persist. Nothing is
persisted unless every upload succeeded.
"""

from collections.abc import Callable, MutableMapping
from datetime import date
from typing import Any

import structlog

from timeless.core.dates import parse_date
from timeless.models.memory import MemoryDraft
from timeless.services.client import TimelessClient
from timeless.services.uploads import ImageFile
from timeless.ui.handlers.error import DatabaseError, TimelessError, ValidationError

logger = structlog.get_logger(__name__)

CREATE_REQUIRED_MESSAGE = "All fields are required"
EDIT_REQUIRED_MESSAGE = "Please fill in all fields"

ProgressCallback = Callable[[int, int], None]


def _coerce_date(memory_date: date | str | None) -> date | None:
    if memory_date in (None, ""):
        return None
    try:
        return parse_date(memory_date)  # type: ignore[arg-type]
    except ValueError:
        return None


def _missing_fields(title: str, description: str, memory_date: date | None) -> list[str]:
    missing = []
    if not title or not title.strip():
        missing.append("title")
    if not description or not description.strip():
        missing.append("description")
    if memory_date is None:
        missing.append("date")
    return missing


def validate_create_form(
    title: str,
    description: str,
    memory_date: date | str | None,
    files: list[Any],
) -> MemoryDraft:
    """
    Check the create form before any network call.

    Returns:
        MemoryDraft: Draft without image URLs

    Raises:
        ValidationError: If any field is empty or no image was selected
    """
    parsed_date = _coerce_date(memory_date)
    missing = _missing_fields(title, description, parsed_date)
    if not files:
        missing.append("images")

    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            code="required_fields_missing",
            user_message=CREATE_REQUIRED_MESSAGE,
            details={"missing": missing, "form": "create"},
        )

    return MemoryDraft(title=title.strip(), description=description.strip(), date=parsed_date)  # type: ignore[arg-type]


def validate_edit_form(title: str, description: str, memory_date: date | str | None) -> MemoryDraft:
    """
    Check the edit form before any network call.

    Raises:
        ValidationError: If title, description or date is empty
    """
    parsed_date = _coerce_date(memory_date)
    missing = _missing_fields(title, description, parsed_date)

    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            code="required_fields_missing",
            user_message=EDIT_REQUIRED_MESSAGE,
            details={"missing": missing, "form": "edit"},
        )

    return MemoryDraft(title=title.strip(), description=description.strip(), date=parsed_date)  # type: ignore[arg-type]


def prepare_images(client: TimelessClient, files: list[Any]) -> list[ImageFile]:
    """
    Read and validate the selected files.

    Accepts ImageFile instances or Streamlit UploadedFile objects.

    Raises:
        ValidationError: If a file is not an acceptable image
        ImageProcessingError: If a file cannot be decoded
    """
    images = [f if isinstance(f, ImageFile) else ImageFile.from_uploaded(f) for f in files]
    for image in images:
        client.image_processor.validate_image(image.data, image.name)
    return images


def remove_at(items: list[Any], index: int) -> list[Any]:
    """Copy of ``items`` without the element at ``index``."""
    return [item for position, item in enumerate(items) if position != index]


def _persist(save: Callable[[], None], uploaded_urls: list[str], operation: str) -> None:
    try:
        save()
    except DatabaseError:
        if uploaded_urls:
            logger.warning("orphaned_assets", urls=uploaded_urls, operation=operation)
        raise


def submit_create(
    client: TimelessClient,
    title: str,
    description: str,
    memory_date: date | str | None,
    files: list[Any],
    progress_callback: ProgressCallback | None = None,
) -> MemoryDraft:
    """
    Create a memory from the create form.

    Returns:
        MemoryDraft: The saved fields, with image URLs in selection order

    Raises:
        ValidationError: Before any upload, if the form is incomplete
        UploadError: If any image upload fails; nothing is saved
        DatabaseError: If saving fails after the uploads
    """
    draft = validate_create_form(title, description, memory_date, files)
    images = prepare_images(client, files)

    draft.images = client.uploader.upload_all(images, progress_callback=progress_callback)
    _persist(lambda: client.repository.create(draft), draft.images, "create")

    logger.info("memory_submitted", operation="create", image_count=len(draft.images), memory_date=str(draft.date))
    return draft


def submit_edit(
    client: TimelessClient,
    memory_id: str,
    title: str,
    description: str,
    memory_date: date | str | None,
    kept_images: list[str],
    new_files: list[Any] | None = None,
    progress_callback: ProgressCallback | None = None,
) -> MemoryDraft:
    """
    Save the edit form: kept images first, then newly uploaded ones.

    Raises:
        ValidationError: Before any upload, if the form is incomplete
        UploadError: If any new image upload fails; nothing is saved
        DatabaseError: If saving fails after the uploads
    """
    draft = validate_edit_form(title, description, memory_date)
    images = prepare_images(client, new_files or [])

    new_urls = client.uploader.upload_all(images, progress_callback=progress_callback)
    draft.images = list(kept_images) + new_urls
    _persist(lambda: client.repository.update(memory_id, draft), new_urls, "update")

    logger.info("memory_submitted", operation="update", memory_id=memory_id, image_count=len(draft.images))
    return draft


def clear_form_state(session_state: MutableMapping[str, Any], prefix: str) -> None:
    """Drop every session key belonging to one form."""
    for key in [key for key in list(session_state.keys()) if str(key).startswith(prefix)]:
        del session_state[key]


def start_submission(session_state: MutableMapping[str, Any], prefix: str) -> None:
    """
    Submit button callback: mark the form busy.

    Callbacks run before the script, so the run that performs the submission
    already renders the submit button disabled.
    """
    session_state[f"{prefix}submitting"] = True


def is_submitting(session_state: MutableMapping[str, Any], prefix: str) -> bool:
    return bool(session_state.get(f"{prefix}submitting", False))


def finish_submission(session_state: MutableMapping[str, Any], prefix: str) -> None:
    session_state[f"{prefix}submitting"] = False


def remember_failure(session_state: MutableMapping[str, Any], prefix: str, error: TimelessError) -> None:
    """Keep a failed submission's error for the next run, after the form is re-enabled."""
    session_state[f"{prefix}feedback"] = error


def pop_failure(session_state: MutableMapping[str, Any], prefix: str) -> TimelessError | None:
    return session_state.pop(f"{prefix}feedback", None)
