"""
Grouping strategies for upload records.

Current-state views count only each teacher's newest upload, so corrected
re-uploads replace earlier ones. Trend views keep every upload and bucket
them by week number. The two modes are selected explicitly.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Hashable, Iterable, List

from models.records import UploadRecord

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


class GroupingStrategy(str, Enum):
    """How uploads are bucketed before aggregation."""
    LATEST_PER_TEACHER = "latest_per_teacher"
    GROUP_BY_WEEK = "group_by_week"


def _upload_time(upload: UploadRecord) -> datetime:
    return upload.upload_time or _EARLIEST


def latest_per_teacher(uploads: Iterable[UploadRecord]) -> Dict[str, UploadRecord]:
    """
    Select the most recent upload for each teacher.

    Ties on upload time are resolved last-wins in iteration order. Uploads
    without a teacher name are skipped.
    """
    latest: Dict[str, UploadRecord] = {}
    for upload in uploads:
        if not upload.teacher_name:
            logger.debug(f"Skipping upload {upload.id} without teacher name")
            continue
        current = latest.get(upload.teacher_name)
        if current is None or _upload_time(upload) >= _upload_time(current):
            latest[upload.teacher_name] = upload
    return latest


def group_by_week(uploads: Iterable[UploadRecord]) -> Dict[int, List[UploadRecord]]:
    """Bucket every upload by week number, keeping input order within a week."""
    weeks: Dict[int, List[UploadRecord]] = {}
    for upload in uploads:
        if upload.week_number is None:
            logger.debug(f"Skipping upload {upload.id} without week number")
            continue
        weeks.setdefault(upload.week_number, []).append(upload)
    return dict(sorted(weeks.items()))


def group_uploads(
    uploads: Iterable[UploadRecord],
    strategy: GroupingStrategy
) -> Dict[Hashable, List[UploadRecord]]:
    """Group uploads according to the chosen strategy."""
    if strategy == GroupingStrategy.LATEST_PER_TEACHER:
        return {teacher: [upload] for teacher, upload in latest_per_teacher(uploads).items()}
    elif strategy == GroupingStrategy.GROUP_BY_WEEK:
        return group_by_week(uploads)
    raise ValueError(f"Unknown grouping strategy: {strategy}")
