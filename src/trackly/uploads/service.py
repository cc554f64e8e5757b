from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Optional

from werkzeug.utils import secure_filename

from ..core.constants import MAX_UPLOAD_BYTES
from ..core.exceptions import NotFoundError, ValidationError
from ..schedule_parser.parser import ScheduleParser
from ..schedule_parser.strategies.base import ScheduleItem
from ..users.service import UserService

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"


@dataclass(frozen=True)
class ScheduleUpload:
    path: str
    original_name: str
    size: int
    items: list[ScheduleItem]

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "originalName": self.original_name,
            "size": self.size,
            "items": [i.to_dict() for i in self.items],
            "count": len(self.items),
        }


@dataclass(frozen=True)
class StoredPdf:
    path: Path
    original_name: str
    size: int
    uploaded_at: datetime

    def to_dict(self) -> dict:
        return {
            "name": self.path.name,
            "originalName": self.original_name,
            "size": self.size,
            "uploadDate": self.uploaded_at.isoformat(timespec="seconds"),
        }


class UploadService:
    """Use case: store a timetable PDF and propose schedule items from it."""

    def __init__(
        self,
        *,
        upload_dir: str | Path,
        users: UserService,
        parser: Optional[ScheduleParser] = None,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ):
        self._upload_dir = Path(upload_dir)
        self._users = users
        self._parser = parser or ScheduleParser()
        self._max_bytes = int(max_bytes)

    def save_schedule_pdf(self, user_id: int, *, stream: BinaryIO, filename: str, mimetype: str) -> ScheduleUpload:
        if mimetype != PDF_MIMETYPE:
            raise ValidationError("Only PDF files are allowed")

        data = stream.read(self._max_bytes + 1)
        if not data:
            raise ValidationError("Please upload a PDF file")
        if len(data) > self._max_bytes:
            raise ValidationError(f"File too large (max {self._max_bytes // (1024 * 1024)}MB)")

        user = self._users.get(user_id)
        target_dir = self._upload_dir / "schedules" / str(user.user_id)
        target_dir.mkdir(parents=True, exist_ok=True)
        safe_name = secure_filename(filename) or "schedule.pdf"
        target = target_dir / f"{int(time.time() * 1000)}-{safe_name}"
        target.write_bytes(data)
        logger.info("Stored schedule PDF for user %s at %s (%d bytes)", user.user_id, target, len(data))

        self._users.record_pdf_upload(user.user_id, path=str(target))
        items = self._parser.parse_file(target)
        return ScheduleUpload(path=str(target), original_name=filename, size=len(data), items=items)

    def stored_schedule_pdf(self, user_id: int) -> StoredPdf:
        user = self._users.get(user_id)
        if not user.pdf_schedule_path:
            raise NotFoundError("No PDF schedule found for this user")
        path = Path(user.pdf_schedule_path)
        if not path.is_file():
            raise NotFoundError("PDF file not found")

        stat = path.stat()
        # stored as "<millis>-<name>"
        stamp, _, original = path.name.partition("-")
        return StoredPdf(
            path=path.resolve(),
            original_name=original if stamp.isdigit() and original else path.name,
            size=stat.st_size,
            uploaded_at=datetime.fromtimestamp(stat.st_mtime),
        )

    def delete_schedule_pdf(self, user_id: int) -> None:
        user = self._users.get(user_id)
        if not user.pdf_schedule_path:
            raise NotFoundError("No PDF schedule found for this user")

        self._users.clear_pdf_upload(user.user_id)
        try:
            Path(user.pdf_schedule_path).unlink(missing_ok=True)
        except OSError:
            logger.exception("Could not delete schedule PDF %s", user.pdf_schedule_path)
        logger.info("Removed schedule PDF for user %s", user.user_id)
