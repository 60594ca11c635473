"""
Upload record models supplied by the ingestion layer.

These Pydantic models map to the structured records produced after a
teacher's spreadsheet has been parsed:
- one UploadRecord per submission (teacher, class, subject, week)
- one StudentScore per student per subject inside that submission

Both accept the camelCase keys used by the upload store as well as the
snake_case field names.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Subject(str, Enum):
    """Subjects recognised by the score pipeline."""
    MATH = "Math"
    READING = "Reading"
    BOTH = "Both Math & Reading"


def _coerce_identifier(v: Any) -> Optional[str]:
    """Identifiers arrive as strings or bare numbers from spreadsheets."""
    if v is None:
        return None
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(int(v)) if float(v).is_integer() else str(v)
    v = str(v).strip()
    return v or None


class StudentScore(BaseModel):
    """One student's result for one subject within an upload."""
    student_id: Optional[str] = Field(None, alias="studentId")
    student_name: Optional[str] = Field(None, alias="studentName")
    subject: str = ""
    # None when the cell was left blank
    score: Optional[float] = None

    # Denormalised context copied from the parent upload by ingestion
    grade: Optional[str] = None
    class_name: Optional[str] = Field(None, alias="className")
    week_number: Optional[int] = Field(None, alias="weekNumber")
    upload_date: Optional[str] = Field(None, alias="uploadDate")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("student_id", mode="before")
    @classmethod
    def normalize_student_id(cls, v):
        return _coerce_identifier(v)

    @field_validator("score", mode="before")
    @classmethod
    def blank_score_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_identity(self) -> bool:
        return self.student_id is not None

    @property
    def has_score(self) -> bool:
        return self.score is not None


class UploadRecord(BaseModel):
    """One ingestion event: a teacher's submission for a class and week."""
    id: Optional[str] = None
    teacher_name: Optional[str] = Field(None, alias="teacherName")
    grade: Optional[str] = None
    class_name: Optional[str] = Field(None, alias="className")
    subject: str = ""

    upload_time: Optional[datetime] = Field(None, alias="uploadTime")
    week_number: Optional[int] = Field(None, alias="weekNumber")
    week_label: Optional[str] = Field(None, alias="weekLabel")
    assessment_name: Optional[str] = Field(None, alias="assessmentName")

    # Precomputed summary fields; may be redundant with students
    total_students: int = Field(0, alias="totalStudents")
    average_score: float = Field(0.0, alias="averageScore")

    # None means no per-student detail was supplied
    students: Optional[List[StudentScore]] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        return _coerce_identifier(v)

    @field_validator("teacher_name", "assessment_name", mode="before")
    @classmethod
    def strip_blank_names(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("upload_time", mode="before")
    @classmethod
    def parse_upload_time(cls, v):
        """Accept ISO dates and date-times, including a trailing Z."""
        if isinstance(v, str):
            text = v.strip()
            if not text:
                return None
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            return datetime.fromisoformat(text)
        return v

    @field_validator("upload_time")
    @classmethod
    def assume_utc(cls, v):
        # Naive and aware timestamps must remain comparable
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("total_students", mode="before")
    @classmethod
    def default_total_students(cls, v):
        return 0 if v is None else v

    @field_validator("average_score", mode="before")
    @classmethod
    def default_average_score(cls, v):
        return 0.0 if v is None else v

    @property
    def assessment(self) -> Optional[str]:
        """Assessment label, falling back to "Assessment <weekNumber>"."""
        if self.assessment_name:
            return self.assessment_name
        if self.week_number is not None:
            return f"Assessment {self.week_number}"
        return None

    @property
    def has_student_detail(self) -> bool:
        return self.students is not None

    def identified_students(self) -> List[StudentScore]:
        """Per-student rows that carry a studentId."""
        return [s for s in (self.students or []) if s.has_identity]

    def scored_students(self) -> List[StudentScore]:
        """Identified rows that also carry a score."""
        return [s for s in self.identified_students() if s.has_score]
