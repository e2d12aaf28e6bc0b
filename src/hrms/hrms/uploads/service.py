"""
Selfie storage on the local filesystem.
Images are checked with Pillow before they are written.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Protocol

import structlog
from PIL import Image, UnidentifiedImageError

from ..common.datetime_utils import now_local
from ..core.constants import SELFIE_CONTENT_TYPES, SELFIE_MAX_BYTES
from ..core.exceptions import UploadError
from .model import SelfieUpload

log = structlog.get_logger(__name__)

_ALLOWED_FORMATS = {"JPEG", "PNG"}
_ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png"}


class SelfieStorage(Protocol):
    def store(self, upload: SelfieUpload, *, user_id: int) -> str:
        """Persist the image and return a reference usable by clients."""

        raise NotImplementedError

    def discard(self, reference: str) -> None:
        """Remove an image stored by `store`; unknown references are ignored."""

        raise NotImplementedError


class LocalSelfieStorage(SelfieStorage):
    def __init__(
        self,
        upload_dir: str | Path = "uploads",
        *,
        max_bytes: int = SELFIE_MAX_BYTES,
        clock: Callable = now_local,
    ):
        self._selfie_dir = Path(upload_dir) / "selfies"
        self._selfie_dir.mkdir(parents=True, exist_ok=True)
        self._max_bytes = int(max_bytes)
        self._clock = clock

    def _validate(self, upload: SelfieUpload) -> str:
        content_type = (upload.content_type or "").lower()
        if content_type not in SELFIE_CONTENT_TYPES:
            raise UploadError("Invalid file type. Only JPEG and PNG images are allowed.")
        if not upload.data:
            raise UploadError("Selfie image is empty")
        if len(upload.data) > self._max_bytes:
            raise UploadError(f"File size exceeds {self._max_bytes // (1024 * 1024)}MB limit")

        try:
            with Image.open(io.BytesIO(upload.data)) as img:
                image_format = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise UploadError("Selfie is not a valid image") from e

        if image_format not in _ALLOWED_FORMATS:
            raise UploadError("Invalid file type. Only JPEG and PNG images are allowed.")

        ext = Path(upload.filename or "").suffix.lower()
        return ext if ext in _ALLOWED_EXTENSIONS else SELFIE_CONTENT_TYPES[content_type]

    def store(self, upload: SelfieUpload, *, user_id: int) -> str:
        ext = self._validate(upload)
        timestamp = int(self._clock().timestamp() * 1000)
        filename = f"selfie_{user_id}_{timestamp}{ext}"

        try:
            (self._selfie_dir / filename).write_bytes(upload.data)
        except OSError as e:
            raise UploadError("Could not store selfie image") from e

        log.info("upload.selfie_stored", user_id=user_id, filename=filename, size=len(upload.data))
        return f"/uploads/selfies/{filename}"

    def discard(self, reference: str) -> None:
        name = Path(reference).name
        if not name.startswith("selfie_"):
            return

        try:
            (self._selfie_dir / name).unlink(missing_ok=True)
        except OSError:
            log.warning("upload.selfie_discard_failed", filename=name, exc_info=True)
            return
        log.info("upload.selfie_discarded", filename=name)
