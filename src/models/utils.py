"""
Utility functions for working with scores and tiers.

Provides helper functions for:
- Tier classification and the display colours derived from it
- Tier distribution counting
- Zero-safe averaging
"""

import math
from typing import Dict, Iterable, Optional, Sequence

from .outputs import Tier, TierDistribution, TierThresholds

DEFAULT_THRESHOLDS = TierThresholds()

TIER_COLORS: Dict[Tier, str] = {
    Tier.GREEN: "green",
    Tier.ORANGE: "orange",
    Tier.RED: "red",
    Tier.GRAY: "gray",
}

TIER_HEX_COLORS: Dict[Tier, str] = {
    Tier.GREEN: "#10b981",
    Tier.ORANGE: "#f59e0b",
    Tier.RED: "#ef4444",
    Tier.GRAY: "#6b7280",
}


def classify(score: float, thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> Tier:
    """Convert a numeric score to its tier. Lower bounds are inclusive."""
    # NaN fails every comparison and falls through to Gray
    if score >= thresholds.green:
        return Tier.GREEN
    elif score >= thresholds.orange:
        return Tier.ORANGE
    elif score >= thresholds.red:
        return Tier.RED
    else:
        return Tier.GRAY


def tier_color(score: float, thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> str:
    """Display colour name for a score."""
    return TIER_COLORS[classify(score, thresholds)]


def tier_hex_color(score: float, thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> str:
    """Hex colour used by printable reports."""
    return TIER_HEX_COLORS[classify(score, thresholds)]


def tier_distribution(
    scores: Iterable[float],
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
) -> TierDistribution:
    """Count scores per tier."""
    distribution = TierDistribution()
    for score in scores:
        distribution.add(classify(score, thresholds))
    return distribution


def safe_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def weighted_mean(pairs: Iterable[tuple], default: float = 0.0) -> float:
    """Mean of (value, weight) pairs; default when total weight is zero."""
    total = 0.0
    weight_sum = 0.0
    for value, weight in pairs:
        total += value * weight
        weight_sum += weight
    if weight_sum == 0:
        return default
    return total / weight_sum


def growth_percentage(latest: float, previous: Optional[float]) -> float:
    """Percent change from previous to latest; 0.0 when previous is missing or zero."""
    if not previous:
        return 0.0
    return (latest - previous) / previous * 100
