"""
Aggregated output schemas consumed by dashboards and reports.

These schemas are produced by the aggregation package and handed to the
presentation layer. They are recomputed from the upload records on every
request and never stored.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class Tier(str, Enum):
    """Performance band derived from a numeric score."""
    GREEN = "Green"
    ORANGE = "Orange"
    RED = "Red"
    GRAY = "Gray"


class TrendDirection(str, Enum):
    """Week-over-week movement of a student's overall score."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"
    BASELINE = "baseline"


class TierThresholds(BaseModel):
    """Inclusive lower bounds of the Green, Orange and Red bands."""
    green: float = 85.0
    orange: float = 75.0
    red: float = 65.0

    @model_validator(mode="after")
    def validate_descending(self):
        if not (self.green > self.orange > self.red):
            raise ValueError("Tier thresholds must be strictly descending: green > orange > red")
        return self


class TierDistribution(BaseModel):
    """Counts of scores per tier."""
    green: int = 0
    orange: int = 0
    red: int = 0
    gray: int = 0

    @property
    def total(self) -> int:
        return self.green + self.orange + self.red + self.gray

    def count(self, tier: Tier) -> int:
        return getattr(self, tier.value.lower())

    def add(self, tier: Tier) -> None:
        field = tier.value.lower()
        setattr(self, field, getattr(self, field) + 1)


class SubjectScore(BaseModel):
    """A single score contributed to an aggregated student."""
    subject: str
    score: float
    upload_id: Optional[str] = None
    week_number: Optional[int] = None


class AggregatedStudent(BaseModel):
    """Identity-resolved view of one student across subjects."""
    student_id: str
    student_name: Optional[str] = None
    grade: Optional[str] = None
    class_name: Optional[str] = None
    teacher_name: Optional[str] = None

    # Every raw contribution, in input order
    scores: List[SubjectScore] = []

    math_score: Optional[float] = None
    reading_score: Optional[float] = None
    overall_score: Optional[float] = None
    overall_tier: Optional[Tier] = None


class Summary(BaseModel):
    """School-wide statistics for one set of uploads."""
    total_students: int = 0
    total_assessments: int = 0
    school_average: float = 0.0
    performance_distribution: TierDistribution = Field(default_factory=TierDistribution)
    subject_distributions: Dict[str, TierDistribution] = {}


class GradeSummary(BaseModel):
    """Per-grade rollup of subject averages."""
    grade: str
    math_average: float = 0.0
    reading_average: float = 0.0
    # Sum of reported class sizes; a student in two uploads counts twice
    student_count: int = 0
    teacher_count: int = 0
    upload_count: int = 0


class WeekAverage(BaseModel):
    """Weighted school average for one week bucket."""
    week_number: int
    week_label: Optional[str] = None
    average: float = 0.0
    upload_count: int = 0
    total_students: int = 0


class TrendComparison(BaseModel):
    """Growth between two weeks."""
    latest_week: Optional[int] = None
    previous_week: Optional[int] = None
    latest_average: float = 0.0
    previous_average: float = 0.0
    growth_rate: float = 0.0
    weeks: List[WeekAverage] = []

    @property
    def growth_label(self) -> str:
        return format_growth(self.growth_rate)


def format_growth(rate: float) -> str:
    """Render a growth percentage, e.g. 12.3 -> '12.3%', 0 -> '0%'."""
    return f"{round(rate, 1):g}%"


class TeacherPerformance(BaseModel):
    """Per-teacher rollup for the leadership overview."""
    teacher_name: str
    grade: Optional[str] = None
    class_name: Optional[str] = None
    total_uploads: int = 0
    total_students: int = 0
    average_score: float = 0.0
    last_upload: Optional[datetime] = None
    subjects: List[str] = []


class StudentReportSummary(BaseModel):
    total_students: int = 0
    average_score: float = 0.0
    above_threshold: int = 0
    below_threshold: int = 0
    threshold: float = 85.0


class StudentReport(BaseModel):
    """Filtered and ranked list of students with headline counts."""
    students: List[AggregatedStudent] = []
    summary: StudentReportSummary = Field(default_factory=StudentReportSummary)
    filters: Dict[str, Optional[str]] = {}


class WeeklyScore(BaseModel):
    score: float
    tier: Tier
    color: str


class WeekGrowth(BaseModel):
    rate: float = 0.0
    percentage: float = 0.0
    trend: TrendDirection = TrendDirection.BASELINE


class StudentWeek(BaseModel):
    """One student's results in one week."""
    week_number: int
    week_label: Optional[str] = None
    scores: Dict[str, WeeklyScore] = {}
    overall: Optional[WeeklyScore] = None
    growth: WeekGrowth = Field(default_factory=WeekGrowth)


class StudentProgress(BaseModel):
    student_id: str
    student_name: Optional[str] = None
    grade: Optional[str] = None
    class_name: Optional[str] = None
    weeks: Dict[int, StudentWeek] = {}


class TeacherProgressReport(BaseModel):
    """Week-by-week progress of every student in one teacher's uploads."""
    teacher_name: str
    grade: Optional[str] = None
    class_name: Optional[str] = None
    weeks: List[WeekAverage] = []
    students: List[StudentProgress] = []

    @property
    def total_students(self) -> int:
        return len(self.students)
