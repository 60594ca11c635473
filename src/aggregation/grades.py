"""Per-grade rollup of Math and Reading averages."""

import logging
import re
from typing import Dict, Iterable, List

from models.outputs import GradeSummary
from models.records import UploadRecord
from models.utils import safe_mean

from .extraction import SubjectScores, extract_subject_scores

logger = logging.getLogger(__name__)

UNASSIGNED_GRADE = "Unassigned"

_GRADE_NUMBER = re.compile(r"^grade\s+(\d+)$", re.IGNORECASE)


def sum_reported_student_counts(uploads: Iterable[UploadRecord]) -> int:
    """
    Sum of each upload's reported total_students.

    Students appearing in several uploads are counted once per upload. This
    is not a unique-student count.
    """
    return sum(max(u.total_students, 0) for u in uploads)


def grade_sort_key(grade: str):
    """Kindergarten, Grade 1, Grade 2, ... then other labels alphabetically."""
    if grade.strip().lower() in ("kindergarten", "k"):
        return (0, 0, grade)
    match = _GRADE_NUMBER.match(grade.strip())
    if match:
        return (1, int(match.group(1)), grade)
    return (2, 0, grade)


def rollup_by_grade(uploads: Iterable[UploadRecord]) -> List[GradeSummary]:
    """Group uploads by grade and average every extracted score per subject."""
    groups: Dict[str, List[UploadRecord]] = {}
    for upload in uploads:
        groups.setdefault(upload.grade or UNASSIGNED_GRADE, []).append(upload)

    summaries = []
    for grade, grade_uploads in groups.items():
        scores = SubjectScores()
        for upload in grade_uploads:
            scores.extend(extract_subject_scores(upload))

        summaries.append(GradeSummary(
            grade=grade,
            math_average=safe_mean(scores.math),
            reading_average=safe_mean(scores.reading),
            student_count=sum_reported_student_counts(grade_uploads),
            teacher_count=len({u.teacher_name for u in grade_uploads if u.teacher_name}),
            upload_count=len(grade_uploads),
        ))

    logger.debug(f"Rolled up {len(summaries)} grades")
    return sorted(summaries, key=lambda s: grade_sort_key(s.grade))
