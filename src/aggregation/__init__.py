"""
Score aggregation engine.

Pure functions over in-memory upload records: tier classification,
latest-per-teacher deduplication, unique-student resolution, weighted
school averages, grade rollups and week-over-week trends.
"""

from models.utils import classify, tier_color, tier_hex_color, tier_distribution

from .grouping import GroupingStrategy, group_uploads, group_by_week, latest_per_teacher
from .extraction import SubjectScores, extract_subject_scores, extract_all
from .students import combine_subject_scores, resolve_students, rank_students
from .summary import (
    compute_summary,
    current_state_summary,
    weekly_averages,
    trend_summary,
    weighted_school_average
)
from .grades import rollup_by_grade, sum_reported_student_counts, grade_sort_key
from .reports import build_student_report, build_teacher_progress, teacher_performance

__all__ = [
    # Tiers
    'classify',
    'tier_color',
    'tier_hex_color',
    'tier_distribution',

    # Grouping
    'GroupingStrategy',
    'group_uploads',
    'group_by_week',
    'latest_per_teacher',

    # Extraction
    'SubjectScores',
    'extract_subject_scores',
    'extract_all',

    # Students
    'combine_subject_scores',
    'resolve_students',
    'rank_students',

    # Summaries
    'compute_summary',
    'current_state_summary',
    'weekly_averages',
    'trend_summary',
    'weighted_school_average',

    # Grades
    'rollup_by_grade',
    'sum_reported_student_counts',
    'grade_sort_key',

    # Reports
    'build_student_report',
    'build_teacher_progress',
    'teacher_performance'
]
