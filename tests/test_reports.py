"""
Tests for report-level views: student report, teacher progress and
teacher performance.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from aggregation import build_student_report, build_teacher_progress, teacher_performance
from models import StudentScore, Tier, TrendDirection, UploadRecord


def rows(week, scores):
    """scores: {student_id: (name, math, reading)}"""
    result = []
    for student_id, (name, math, reading) in scores.items():
        result.append(StudentScore(student_id=student_id, student_name=name, subject="Math", score=math, week_number=week))
        result.append(StudentScore(student_id=student_id, student_name=name, subject="Reading", score=reading, week_number=week))
    return result


@pytest.fixture
def adams_uploads():
    """Three weeks of combined uploads for one class."""
    weeks = {
        35: {"1": ("Alice Johnson", 85, 82), "2": ("Bob Smith", 78, 75)},
        36: {"1": ("Alice Johnson", 87, 84), "2": ("Bob Smith", 80, 77)},
        37: {"1": ("Alice Johnson", 87, 84), "2": ("Bob Smith", 76, 75)},
    }
    return [
        UploadRecord(
            id=f"week{week}_adams",
            teacher_name="Mr.Adams",
            upload_time=f"2025-09-{week - 34:02d}T00:00:00Z",
            week_number=week,
            week_label=f"Week {week}",
            total_students=2,
            average_score=80,
            grade="Grade 1",
            class_name="1-A",
            subject="Both Math & Reading",
            students=rows(week, scores),
        )
        for week, scores in weeks.items()
    ]


@pytest.fixture
def kelly_upload():
    return UploadRecord(
        id="week35_kelly",
        teacher_name="Ms.Kelly",
        upload_time="2025-08-25T00:00:00Z",
        week_number=35,
        total_students=2,
        average_score=88,
        grade="Kindergarten",
        class_name="K-A",
        subject="Both Math & Reading",
        students=rows(35, {"3": ("Charlie Brown", 88, 85), "4": ("Diana Prince", 91, 89)}),
    )


class TestStudentReport:
    """Test filtering, ranking and threshold counts."""

    def test_ranked_by_overall(self, adams_uploads, kelly_upload):
        report = build_student_report([adams_uploads[0], kelly_upload])
        assert [s.student_id for s in report.students] == ["4", "3", "1", "2"]
        assert report.summary.total_students == 4
        assert report.summary.threshold == 85

    def test_grade_filter(self, adams_uploads, kelly_upload):
        report = build_student_report([adams_uploads[0], kelly_upload], grade="Kindergarten")
        assert {s.student_id for s in report.students} == {"3", "4"}

    def test_subject_filter_case_insensitive(self, adams_uploads):
        report = build_student_report([adams_uploads[0]], subject="math")
        alice = next(s for s in report.students if s.student_id == "1")
        assert alice.reading_score is None
        assert alice.overall_score == 85

    def test_subject_all_keeps_everything(self, adams_uploads):
        report = build_student_report([adams_uploads[0]], subject="all")
        alice = next(s for s in report.students if s.student_id == "1")
        assert alice.overall_score == 83.5

    def test_min_score_filters_list_not_summary(self, adams_uploads, kelly_upload):
        report = build_student_report([adams_uploads[0], kelly_upload], min_score=80)
        assert [s.student_id for s in report.students] == ["4", "3", "1"]
        assert report.summary.total_students == 4
        assert report.summary.threshold == 80
        assert report.summary.above_threshold == 3
        assert report.summary.below_threshold == 1

    def test_average_score(self, kelly_upload):
        report = build_student_report([kelly_upload])
        assert report.summary.average_score == pytest.approx((86.5 + 90) / 2)

    def test_empty(self):
        report = build_student_report([])
        assert report.students == []
        assert report.summary.average_score == 0.0

    def test_assessment_filter(self, adams_uploads, kelly_upload):
        report = build_student_report(adams_uploads + [kelly_upload], assessment="Assessment 36")
        assert [s.student_id for s in report.students] == ["1", "2"]
        assert report.students[0].overall_score == 85.5
        assert report.filters["assessment"] == "Assessment 36"

    def test_named_assessment(self, adams_uploads):
        named = adams_uploads[2].model_copy(update={"assessment_name": "Fall Benchmark"})
        report = build_student_report(adams_uploads[:2] + [named], assessment="Fall Benchmark")
        alice = next(s for s in report.students if s.student_id == "1")
        assert [score.week_number for score in alice.scores] == [37, 37]
        assert len(build_student_report([named], assessment="all").students) == 2

    def test_blank_scores_skipped(self):
        upload = UploadRecord.model_validate({
            "teacherName": "A",
            "subject": "Math",
            "students": [
                {"studentId": "1", "subject": "Math", "score": 90},
                {"studentId": "2", "subject": "Math", "score": None},
            ],
        })
        report = build_student_report([upload])
        assert [s.student_id for s in report.students] == ["1"]


class TestTeacherProgress:
    """Test week-by-week progress for one teacher."""

    def test_unknown_teacher(self, adams_uploads):
        assert build_teacher_progress(adams_uploads, "Nobody") is None

    def test_weeks_and_students(self, adams_uploads, kelly_upload):
        report = build_teacher_progress(adams_uploads + [kelly_upload], "Mr.Adams")
        assert report.grade == "Grade 1"
        assert report.class_name == "1-A"
        assert [w.week_number for w in report.weeks] == [35, 36, 37]
        assert [s.student_name for s in report.students] == ["Alice Johnson", "Bob Smith"]
        assert report.total_students == 2

    def test_growth_and_tiers(self, adams_uploads):
        report = build_teacher_progress(adams_uploads, "Mr.Adams")
        alice, bob = report.students

        first = alice.weeks[35]
        assert first.scores["math"].tier == Tier.GREEN
        assert first.scores["reading"].color == "orange"
        assert first.overall.score == 83.5
        assert first.growth.trend == TrendDirection.BASELINE

        second = alice.weeks[36]
        assert second.overall.score == 85.5
        assert second.growth.rate == 2
        assert second.growth.percentage == 2.4
        assert second.growth.trend == TrendDirection.UP

        assert alice.weeks[37].growth.trend == TrendDirection.STABLE
        assert bob.weeks[37].growth.trend == TrendDirection.DOWN


class TestTeacherPerformance:
    """Test the per-teacher rollup."""

    def test_rollup(self, adams_uploads, kelly_upload):
        results = teacher_performance(adams_uploads + [kelly_upload])
        assert [r.teacher_name for r in results] == ["Ms.Kelly", "Mr.Adams"]

        adams = results[1]
        assert adams.total_uploads == 3
        assert adams.total_students == 2
        assert adams.subjects == ["Both Math & Reading"]
        assert adams.last_upload == datetime(2025, 9, 3, tzinfo=timezone.utc)

    def test_synthetic_fallback_average(self):
        results = teacher_performance([
            UploadRecord(teacher_name="A", subject="Math", total_students=2, average_score=70),
        ])
        assert results[0].average_score == 70
        assert results[0].total_students == 0
        assert results[0].last_upload is None

    def test_missing_teacher_skipped(self):
        assert teacher_performance([UploadRecord(subject="Math")]) == []

    def test_grade_and_class_from_newest_upload(self):
        newer = UploadRecord(
            teacher_name="A", grade="Grade 4", class_name="4-A", subject="Math",
            upload_time="2024-03-01", total_students=1, average_score=80,
        )
        older = UploadRecord(
            teacher_name="A", grade="Grade 3", class_name="3-A", subject="Math",
            upload_time="2024-02-01", total_students=1, average_score=70,
        )
        result = teacher_performance([newer, older])[0]
        assert result.grade == "Grade 4"
        assert result.class_name == "4-A"
        assert result.last_upload == datetime(2024, 3, 1, tzinfo=timezone.utc)
