"""
Report-level views built on the aggregation primitives.

- Student report: filtered, ranked students with threshold counts
- Teacher progress: week-by-week scores and growth per student
- Teacher performance: per-teacher rollup for the leadership overview
"""

import logging
from typing import Dict, Iterable, List, Optional

from models.outputs import (
    StudentProgress,
    StudentReport,
    StudentReportSummary,
    StudentWeek,
    TeacherPerformance,
    TeacherProgressReport,
    TierThresholds,
    TrendDirection,
    WeekGrowth,
    WeeklyScore,
)
from models.records import StudentScore, UploadRecord
from models.utils import DEFAULT_THRESHOLDS, classify, safe_mean, tier_color

from .extraction import extract_all
from .grouping import latest_per_teacher
from .students import combine_subject_scores, rank_students, resolve_students
from .summary import weekly_averages

logger = logging.getLogger(__name__)

ALL = "all"


def _matches(value: Optional[str], wanted: Optional[str], case_sensitive: bool = True) -> bool:
    if wanted is None or wanted.lower() == ALL:
        return True
    if value is None:
        return False
    if case_sensitive:
        return value == wanted
    return value.lower() == wanted.lower()


def _weekly_score(score: float, thresholds: TierThresholds) -> WeeklyScore:
    return WeeklyScore(
        score=score,
        tier=classify(score, thresholds),
        color=tier_color(score, thresholds),
    )


def build_student_report(
    uploads: Iterable[UploadRecord],
    grade: Optional[str] = None,
    class_name: Optional[str] = None,
    subject: Optional[str] = None,
    assessment: Optional[str] = None,
    min_score: Optional[float] = None,
    threshold: Optional[float] = None,
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
) -> StudentReport:
    """
    Filter student rows, resolve them into students and rank the result.

    Args:
        uploads: Uploads already scoped to the requesting user
        grade: Keep rows for this grade only
        class_name: Keep rows for this class only
        subject: Keep rows for this subject only (case-insensitive, "all" keeps every subject)
        assessment: Keep uploads for this assessment only ("all" keeps every assessment)
        min_score: Drop students whose overall score is below this value
        threshold: Cut-off for the above/below counts; defaults to min_score,
            then to the green threshold

    Returns:
        StudentReport with ranked students and headline counts
    """
    filtered_uploads = []
    for upload in uploads:
        if not _matches(upload.assessment, assessment):
            continue
        rows: List[StudentScore] = [
            row for row in upload.scored_students()
            if _matches(row.grade or upload.grade, grade)
            and _matches(row.class_name or upload.class_name, class_name)
            and _matches(row.subject, subject, case_sensitive=False)
        ]
        if rows:
            filtered_uploads.append(upload.model_copy(update={"students": rows}))

    students = resolve_students(filtered_uploads, thresholds)
    scored = [s.overall_score for s in students if s.overall_score is not None]

    if threshold is None:
        threshold = min_score if min_score is not None else thresholds.green

    visible = students
    if min_score is not None:
        visible = [s for s in students if s.overall_score is not None and s.overall_score >= min_score]

    return StudentReport(
        students=rank_students(visible),
        summary=StudentReportSummary(
            total_students=len(students),
            average_score=safe_mean(scored),
            above_threshold=sum(1 for score in scored if score >= threshold),
            below_threshold=sum(1 for score in scored if score < threshold),
            threshold=threshold,
        ),
        filters={
            "grade": grade,
            "class_name": class_name,
            "subject": subject or ALL,
            "assessment": assessment or ALL,
            "min_score": None if min_score is None else str(min_score),
        },
    )


def build_teacher_progress(
    uploads: Iterable[UploadRecord],
    teacher_name: str,
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
) -> Optional[TeacherProgressReport]:
    """Week-by-week progress for every student in one teacher's uploads."""
    teacher_uploads = [
        u for u in uploads
        if u.teacher_name == teacher_name and u.week_number is not None
    ]
    if not teacher_uploads:
        logger.info(f"No weekly uploads found for teacher {teacher_name}")
        return None

    teacher_uploads.sort(key=lambda u: u.week_number)

    progress: Dict[str, StudentProgress] = {}
    raw_scores: Dict[str, Dict[int, Dict[str, float]]] = {}

    for upload in teacher_uploads:
        week_number = upload.week_number
        for row in upload.scored_students():
            student = progress.get(row.student_id)
            if student is None:
                student = StudentProgress(
                    student_id=row.student_id,
                    student_name=row.student_name,
                    grade=row.grade or upload.grade,
                    class_name=row.class_name or upload.class_name,
                )
                progress[row.student_id] = student
                raw_scores[row.student_id] = {}

            week = student.weeks.get(week_number)
            if week is None:
                week = StudentWeek(week_number=week_number, week_label=upload.week_label)
                student.weeks[week_number] = week
                raw_scores[row.student_id][week_number] = {}

            week.scores[row.subject.lower()] = _weekly_score(row.score, thresholds)
            raw_scores[row.student_id][week_number][row.subject] = row.score

    for student_id, student in progress.items():
        previous_overall: Optional[float] = None
        for index, week_number in enumerate(sorted(student.weeks)):
            week = student.weeks[week_number]
            overall = combine_subject_scores(raw_scores[student_id][week_number])
            week.overall = _weekly_score(overall, thresholds)

            if index == 0:
                week.growth = WeekGrowth()
            else:
                rate = overall - previous_overall
                percentage = round(rate / previous_overall * 100, 1) if previous_overall > 0 else 0.0
                if rate > 0:
                    trend = TrendDirection.UP
                elif rate < 0:
                    trend = TrendDirection.DOWN
                else:
                    trend = TrendDirection.STABLE
                week.growth = WeekGrowth(rate=rate, percentage=percentage, trend=trend)
            previous_overall = overall

    students = sorted(
        progress.values(),
        key=lambda s: ((s.student_name or "").lower(), s.student_id)
    )

    return TeacherProgressReport(
        teacher_name=teacher_name,
        grade=teacher_uploads[0].grade,
        class_name=teacher_uploads[0].class_name,
        weeks=weekly_averages(teacher_uploads),
        students=students,
    )


def teacher_performance(uploads: Iterable[UploadRecord]) -> List[TeacherPerformance]:
    """Per-teacher rollup, best average first."""
    by_teacher: Dict[str, List[UploadRecord]] = {}
    for upload in uploads:
        if not upload.teacher_name:
            continue
        by_teacher.setdefault(upload.teacher_name, []).append(upload)

    results = []
    for teacher_name, teacher_uploads in by_teacher.items():
        student_ids = {
            row.student_id
            for upload in teacher_uploads
            for row in upload.scored_students()
        }
        subjects = list(dict.fromkeys(u.subject for u in teacher_uploads if u.subject))
        timestamps = [u.upload_time for u in teacher_uploads if u.upload_time is not None]
        newest = latest_per_teacher(teacher_uploads)[teacher_name]

        results.append(TeacherPerformance(
            teacher_name=teacher_name,
            grade=newest.grade,
            class_name=newest.class_name,
            total_uploads=len(teacher_uploads),
            total_students=len(student_ids),
            average_score=safe_mean(extract_all(teacher_uploads).all_scores()),
            last_upload=max(timestamps) if timestamps else None,
            subjects=subjects,
        ))

    return sorted(results, key=lambda t: (-t.average_score, t.teacher_name))
