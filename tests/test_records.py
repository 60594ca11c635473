"""
Tests for the upload record models.

Covers camelCase aliases, identifier coercion and timestamp parsing.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import StudentScore, UploadRecord, Subject


def test_camel_case_payload():
    """Records built from the upload store's JSON keys."""
    upload = UploadRecord.model_validate({
        "id": "week35_adams",
        "teacherName": "Mr.Adams",
        "uploadTime": "2025-08-25T00:00:00.000Z",
        "weekNumber": 35,
        "weekLabel": "Week 35 - Aug 25",
        "totalStudents": 18,
        "averageScore": 76.7,
        "grade": "Grade 1",
        "className": "1-A",
        "subject": "Both Math & Reading",
        "students": [
            {"studentId": "1", "studentName": "Alice Johnson", "subject": "Math", "score": 85},
        ],
    })
    assert upload.teacher_name == "Mr.Adams"
    assert upload.class_name == "1-A"
    assert upload.week_number == 35
    assert upload.total_students == 18
    assert upload.subject == Subject.BOTH.value
    assert upload.upload_time == datetime(2025, 8, 25, tzinfo=timezone.utc)
    assert upload.students[0].student_name == "Alice Johnson"


def test_snake_case_construction():
    upload = UploadRecord(teacher_name="Ms. Lee", total_students=3, average_score=80)
    assert upload.teacher_name == "Ms. Lee"
    assert upload.students is None
    assert upload.has_student_detail is False


def test_date_only_upload_time_is_utc():
    """Naive timestamps are comparable with aware ones."""
    a = UploadRecord(upload_time="2024-01-01")
    b = UploadRecord(upload_time="2024-01-02T08:00:00Z")
    assert a.upload_time.tzinfo is not None
    assert a.upload_time < b.upload_time


def test_blank_upload_time_is_none():
    assert UploadRecord(upload_time="").upload_time is None


def test_invalid_upload_time_rejected():
    with pytest.raises(ValidationError):
        UploadRecord(upload_time="not a date")


def test_numeric_student_id_coerced():
    assert StudentScore(studentId=7, subject="Math", score=80).student_id == "7"
    assert StudentScore(studentId="  ", subject="Math", score=80).student_id is None


def test_missing_student_id():
    row = StudentScore(studentId=None, subject="Math", score=80)
    assert row.has_identity is False


def test_identified_students_filters_missing_ids():
    upload = UploadRecord(students=[
        StudentScore(student_id="1", subject="Math", score=80),
        StudentScore(student_id=None, subject="Math", score=50),
    ])
    assert [s.student_id for s in upload.identified_students()] == ["1"]


def test_null_summary_fields_default_to_zero():
    upload = UploadRecord.model_validate({"totalStudents": None, "averageScore": None})
    assert upload.total_students == 0
    assert upload.average_score == 0.0


def test_empty_student_list_is_detail():
    """An empty list means detail was supplied with no students."""
    assert UploadRecord(students=[]).has_student_detail is True


def test_null_score_is_missing():
    row = StudentScore.model_validate({"studentId": "2", "subject": "Math", "score": None})
    assert row.score is None
    assert row.has_score is False
    assert StudentScore(studentId="3", subject="Math", score=" ").has_score is False


def test_scored_students_skips_blank_scores():
    upload = UploadRecord.model_validate({"students": [
        {"studentId": "1", "subject": "Math", "score": 70},
        {"studentId": "2", "subject": "Math", "score": None},
        {"studentId": None, "subject": "Math", "score": 50},
    ]})
    assert [s.student_id for s in upload.identified_students()] == ["1", "2"]
    assert [s.student_id for s in upload.scored_students()] == ["1"]


def test_assessment_name_and_fallback():
    named = UploadRecord.model_validate({"assessmentName": "Fall Benchmark", "weekNumber": 36})
    assert named.assessment == "Fall Benchmark"
    assert UploadRecord(week_number=36).assessment == "Assessment 36"
    assert UploadRecord(assessment_name="  ", week_number=2).assessment == "Assessment 2"
    assert UploadRecord().assessment is None
