"""
Core data models for school analytics.

This package contains:
- Upload record models supplied by the ingestion layer
- Aggregated output schemas for dashboards and reports
- Role scoping applied before aggregation
"""

from .records import StudentScore, UploadRecord, Subject
from .outputs import (
    Tier,
    TierThresholds,
    TierDistribution,
    TrendDirection,
    SubjectScore,
    AggregatedStudent,
    Summary,
    GradeSummary,
    WeekAverage,
    TrendComparison,
    TeacherPerformance,
    StudentReport,
    StudentReportSummary,
    StudentProgress,
    StudentWeek,
    TeacherProgressReport,
    format_growth
)
from .permissions import UserRole, UserScope
from . import utils

__all__ = [
    # Input records
    "StudentScore",
    "UploadRecord",
    "Subject",

    # Output schemas
    "Tier",
    "TierThresholds",
    "TierDistribution",
    "TrendDirection",
    "SubjectScore",
    "AggregatedStudent",
    "Summary",
    "GradeSummary",
    "WeekAverage",
    "TrendComparison",
    "TeacherPerformance",
    "StudentReport",
    "StudentReportSummary",
    "StudentProgress",
    "StudentWeek",
    "TeacherProgressReport",
    "format_growth",

    # Scoping
    "UserRole",
    "UserScope",

    # Utilities
    "utils"
]
