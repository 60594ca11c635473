"""
Unique-student resolution.

Flattens the per-student rows of the given uploads, groups them by
studentId and combines each student's Math and Reading scores into an
overall score. The caller decides whether to pass every upload or only the
latest per teacher; this module never deduplicates uploads itself.
"""

import logging
from typing import Dict, Iterable, List, Optional

from models.outputs import AggregatedStudent, SubjectScore, TierThresholds
from models.records import Subject, UploadRecord
from models.utils import DEFAULT_THRESHOLDS, classify, safe_mean

logger = logging.getLogger(__name__)


def combine_subject_scores(subject_scores: Dict[str, float]) -> Optional[float]:
    """
    Overall score from one score per subject.

    Math and Reading together average to their midpoint; either alone stands
    as the overall score; otherwise the mean of whatever subjects are present.
    """
    math_score = subject_scores.get(Subject.MATH.value)
    reading_score = subject_scores.get(Subject.READING.value)

    if math_score is not None and reading_score is not None:
        return (math_score + reading_score) / 2
    if math_score is not None:
        return math_score
    if reading_score is not None:
        return reading_score
    if subject_scores:
        return safe_mean(list(subject_scores.values()))
    return None


def resolve_students(
    uploads: Iterable[UploadRecord],
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
) -> List[AggregatedStudent]:
    """Resolve uploads into one AggregatedStudent per studentId, ordered by id."""
    students: Dict[str, AggregatedStudent] = {}
    # Last score seen per subject; repeated subjects are the caller's concern
    latest_by_subject: Dict[str, Dict[str, float]] = {}
    dropped = 0
    unscored = 0

    for upload in uploads:
        for row in upload.students or []:
            if not row.has_identity:
                dropped += 1
                continue
            if not row.has_score:
                unscored += 1
                continue

            student = students.get(row.student_id)
            if student is None:
                student = AggregatedStudent(
                    student_id=row.student_id,
                    student_name=row.student_name,
                    grade=row.grade or upload.grade,
                    class_name=row.class_name or upload.class_name,
                    teacher_name=upload.teacher_name,
                )
                students[row.student_id] = student
                latest_by_subject[row.student_id] = {}

            student.scores.append(SubjectScore(
                subject=row.subject,
                score=row.score,
                upload_id=upload.id,
                week_number=row.week_number if row.week_number is not None else upload.week_number,
            ))
            latest_by_subject[row.student_id][row.subject] = row.score

    if dropped:
        logger.debug(f"Dropped {dropped} student rows without studentId")
    if unscored:
        logger.debug(f"Skipped {unscored} student rows without a score")

    for student_id, student in students.items():
        subject_scores = latest_by_subject[student_id]
        student.math_score = subject_scores.get(Subject.MATH.value)
        student.reading_score = subject_scores.get(Subject.READING.value)
        student.overall_score = combine_subject_scores(subject_scores)
        if student.overall_score is not None:
            student.overall_tier = classify(student.overall_score, thresholds)

    return [students[key] for key in sorted(students)]


def rank_students(students: Iterable[AggregatedStudent]) -> List[AggregatedStudent]:
    """Sort by overall score descending, then studentId ascending; unscored last."""
    def sort_key(student: AggregatedStudent):
        has_score = student.overall_score is not None
        return (
            0 if has_score else 1,
            -student.overall_score if has_score else 0.0,
            student.student_id,
        )

    return sorted(students, key=sort_key)
