"""
Sprint Metrics

Forecasts ETA, confidence and spillover risk from a day's point totals.
"""

import math
from enum import Enum

from .models import DailyState, SprintMetrics


class RiskLevel(Enum):
    """Spillover risk band."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


def spillover_level(spillover_risk: float) -> RiskLevel:
    if spillover_risk > 50:
        return RiskLevel.HIGH
    elif spillover_risk > 25:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def _confidence_band(progress_delta: float) -> float:
    if progress_delta < -20:
        return 40  # Significantly behind
    elif progress_delta < -10:
        return 60
    elif progress_delta > 20:
        return 95  # Well ahead
    elif progress_delta > 10:
        return 85
    return 75  # On track


def calculate_sprint_metrics(
    planned_points: float,
    completed_points: float,
    in_progress_points: float,
    remaining_points: float,
    current_day: int,
    total_days: int,
    velocity: float
) -> SprintMetrics:
    """
    Derive forecast metrics for a sprint day.

    Args:
        planned_points: Points committed to the sprint
        completed_points: Points done so far
        in_progress_points: Points started but not done
        remaining_points: Points not started
        current_day: Day number (1-based)
        total_days: Days in the sprint
        velocity: Points per day

    Returns:
        SprintMetrics with ETA (days), confidence and spillover risk (0-100)
    """
    days_remaining = total_days - current_day
    eta = math.ceil(remaining_points / velocity) if velocity > 0 else days_remaining

    expected_progress = (current_day / total_days) * 100 if total_days > 0 else 100
    if planned_points > 0:
        progress_percent = (completed_points / planned_points) * 100
    else:
        # Nothing planned counts as exactly on schedule
        progress_percent = expected_progress

    confidence = _confidence_band(progress_percent - expected_progress)

    if total_days > 0 and velocity < planned_points / total_days * 0.8:
        confidence = max(30, confidence - 20)

    if velocity > 0 and days_remaining > 0:
        overrun = ((remaining_points / velocity) - days_remaining) / days_remaining * 100
        spillover_risk = min(100.0, max(0.0, overrun))
    else:
        spillover_risk = 100.0 if remaining_points > 0 else 0.0

    return SprintMetrics(
        planned_points=planned_points,
        remaining_points=remaining_points,
        completed_points=completed_points,
        in_progress_points=in_progress_points,
        eta=eta,
        confidence=confidence,
        velocity=velocity,
        spillover_risk=spillover_risk
    )


def metrics_for_day(
    state: DailyState,
    planned_points: float,
    total_days: int = 5
) -> SprintMetrics:
    """Metrics for a stored day, computed on demand."""
    return calculate_sprint_metrics(
        planned_points,
        state.completed_points,
        state.in_progress_points,
        state.remaining_points,
        state.day_number,
        total_days,
        state.velocity
    )
