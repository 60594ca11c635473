"""
School-wide statistics in current-state and trend modes.

Current-state mode counts each teacher's newest upload only. Trend mode
buckets every upload by week and compares the weighted school average of
two weeks.
"""

import logging
from typing import Dict, Iterable, List, Optional

from models.outputs import (
    Summary,
    TierDistribution,
    TierThresholds,
    TrendComparison,
    WeekAverage,
)
from models.records import Subject, UploadRecord
from models.utils import DEFAULT_THRESHOLDS, growth_percentage, tier_distribution, weighted_mean

from .extraction import extract_all
from .grouping import GroupingStrategy, group_uploads
from .students import resolve_students

logger = logging.getLogger(__name__)


def weighted_school_average(uploads: Iterable[UploadRecord]) -> float:
    """sum(average * total_students) / sum(total_students), 0.0 when empty."""
    return weighted_mean((u.average_score, u.total_students) for u in uploads)


def compute_summary(
    uploads: Iterable[UploadRecord],
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
) -> Summary:
    """Summarise exactly the uploads given; no deduplication is applied."""
    uploads = list(uploads)
    if not uploads:
        return Summary()

    scores = extract_all(uploads)

    subject_distributions: Dict[str, TierDistribution] = {}
    if scores.math:
        subject_distributions[Subject.MATH.value] = tier_distribution(scores.math, thresholds)
    if scores.reading:
        subject_distributions[Subject.READING.value] = tier_distribution(scores.reading, thresholds)

    return Summary(
        total_students=len(resolve_students(uploads, thresholds)),
        total_assessments=len(uploads),
        school_average=weighted_school_average(uploads),
        performance_distribution=tier_distribution(scores.all_scores(), thresholds),
        subject_distributions=subject_distributions,
    )


def current_state_summary(
    uploads: Iterable[UploadRecord],
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
) -> Summary:
    """Summary over each teacher's most recent upload."""
    groups = group_uploads(uploads, GroupingStrategy.LATEST_PER_TEACHER)
    latest = [upload for group in groups.values() for upload in group]
    logger.debug(f"Current-state summary over {len(latest)} latest uploads")
    return compute_summary(latest, thresholds)


def weekly_averages(uploads: Iterable[UploadRecord]) -> List[WeekAverage]:
    """Weighted school average per week, ascending by week number."""
    weeks = []
    for week_number, bucket in group_uploads(uploads, GroupingStrategy.GROUP_BY_WEEK).items():
        label = next((u.week_label for u in bucket if u.week_label), None)
        weeks.append(WeekAverage(
            week_number=week_number,
            week_label=label,
            average=weighted_school_average(bucket),
            upload_count=len(bucket),
            total_students=sum(u.total_students for u in bucket),
        ))
    return weeks


def trend_summary(
    uploads: Iterable[UploadRecord],
    latest_week: Optional[int] = None,
    previous_week: Optional[int] = None
) -> TrendComparison:
    """
    Compare the weighted school average of two weeks.

    Defaults to the newest week and the week immediately before it. Growth
    is 0 when either week has no data or the previous week averages zero.
    """
    weeks = weekly_averages(uploads)
    by_number = {w.week_number: w for w in weeks}

    if latest_week is None and weeks:
        latest_week = weeks[-1].week_number
    if previous_week is None and latest_week is not None:
        earlier = [w.week_number for w in weeks if w.week_number < latest_week]
        previous_week = earlier[-1] if earlier else None

    latest = by_number.get(latest_week) if latest_week is not None else None
    previous = by_number.get(previous_week) if previous_week is not None else None

    latest_average = latest.average if latest else 0.0
    previous_average = previous.average if previous else 0.0
    if previous is None:
        logger.debug(f"No data for previous week {previous_week}; growth reported as 0")
    if latest is None:
        logger.debug(f"No data for latest week {latest_week}; growth reported as 0")

    return TrendComparison(
        latest_week=latest_week,
        previous_week=previous_week,
        latest_average=latest_average,
        previous_average=previous_average,
        growth_rate=growth_percentage(latest_average, previous_average) if previous and latest else 0.0,
        weeks=weeks,
    )
