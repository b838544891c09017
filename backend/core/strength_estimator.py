"""
Strength Estimator.

Converts a (weight, reps) set into an estimated one-repetition maximum and
tracks how that estimate moves over time:
- 1RM from the mean of the Epley, Brzycki and Lander formulas
- Trend: recent window vs older samples, as a percent change
- Best estimate with its supporting sample

Pure functions: no I/O, no logging, no shared state.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from application.exceptions import InvalidInputError
from backend.core.engine_config import StrengthConfig
from domain.models import PerformanceSample, as_utc


# Brzycki's denominator reaches zero at ~36.97 reps, Lander's at ~37.92
MAX_FORMULA_REPS = 36


# =============================================================================
# 1RM Formulas
# =============================================================================


def _validate(weight: float, reps: int) -> None:
    if weight is None or weight <= 0:
        raise InvalidInputError(f"weight must be > 0 (got {weight})")
    if reps is None or reps < 1:
        raise InvalidInputError(f"reps must be >= 1 (got {reps})")
    if reps > MAX_FORMULA_REPS:
        raise InvalidInputError(
            f"reps must be <= {MAX_FORMULA_REPS} for 1RM estimation (got {reps})"
        )


def epley(weight: float, reps: int) -> float:
    """
    Epley formula: 1RM = weight * (1 + reps/30).

    Tends to overestimate slightly at higher rep counts.
    """
    _validate(weight, reps)
    if reps == 1:
        return float(weight)
    return weight * (1.0 + reps / 30.0)


def brzycki(weight: float, reps: int) -> float:
    """
    Brzycki formula: 1RM = weight / (1.0278 - 0.0278 * reps).

    Most accurate for rep ranges 1-10.
    """
    _validate(weight, reps)
    if reps == 1:
        return float(weight)
    return weight / (1.0278 - 0.0278 * reps)


def lander(weight: float, reps: int) -> float:
    """Lander formula: 1RM = (100 * weight) / (101.3 - 2.67123 * reps)."""
    _validate(weight, reps)
    if reps == 1:
        return float(weight)
    return (100.0 * weight) / (101.3 - 2.67123 * reps)


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """
    Estimate 1RM as the arithmetic mean of Epley, Brzycki and Lander.

    A single rep is the true 1RM point: the weight is returned unchanged.

    Args:
        weight: Weight lifted (> 0)
        reps: Reps completed (>= 1)

    Returns:
        Estimated 1RM (unrounded)

    Raises:
        InvalidInputError: If weight <= 0 or reps < 1
    """
    _validate(weight, reps)
    if reps == 1:
        return float(weight)
    return (epley(weight, reps) + brzycki(weight, reps) + lander(weight, reps)) / 3.0


# =============================================================================
# Sample-level helpers
# =============================================================================


@dataclass(frozen=True)
class OneRepMaxEstimate:
    """An estimated 1RM and the sample that produced it."""

    value: float
    supporting_sample: PerformanceSample


def is_eligible(sample: PerformanceSample, config: Optional[StrengthConfig] = None) -> bool:
    """True if the sample is a strength set usable for 1RM estimation."""
    config = config or StrengthConfig()
    return sample.weight > 0 and config.min_reps <= sample.reps <= config.max_reps


def eligible_samples(
    samples: Iterable[PerformanceSample],
    config: Optional[StrengthConfig] = None,
) -> List[PerformanceSample]:
    """Drop bodyweight, timed and high-rep sets before estimation."""
    config = config or StrengthConfig()
    return [s for s in samples if is_eligible(s, config)]


def sample_estimate(sample: PerformanceSample) -> float:
    """Estimated 1RM for a single sample."""
    return estimate_one_rep_max(sample.weight, sample.reps)


def trend(
    samples: Iterable[PerformanceSample],
    window_days: int = 30,
    *,
    now: Optional[datetime] = None,
    config: Optional[StrengthConfig] = None,
) -> float:
    """
    Percent change of the average estimated 1RM, recent vs older.

    "Recent" samples are those achieved within `window_days` of `now`;
    everything before that is "older".

    Returns:
        (avg_recent - avg_older) / avg_older * 100, or 0.0 if either side
        is empty
    """
    now = as_utc(now or datetime.now(timezone.utc))
    cutoff = now - timedelta(days=window_days)

    recent: List[float] = []
    older: List[float] = []
    for sample in eligible_samples(samples, config):
        if sample.achieved_at >= cutoff:
            recent.append(sample_estimate(sample))
        else:
            older.append(sample_estimate(sample))

    if not recent or not older:
        return 0.0

    avg_recent = sum(recent) / len(recent)
    avg_older = sum(older) / len(older)
    return (avg_recent - avg_older) / avg_older * 100.0


def best_estimate(
    samples: Iterable[PerformanceSample],
    config: Optional[StrengthConfig] = None,
) -> Optional[OneRepMaxEstimate]:
    """
    Highest estimated 1RM across samples.

    Ties go to the earliest sample so the reported best stays stable as
    new, equal sets are logged.

    Returns:
        OneRepMaxEstimate, or None if no sample is eligible
    """
    best: Optional[OneRepMaxEstimate] = None
    for sample in eligible_samples(samples, config):
        value = sample_estimate(sample)
        if (
            best is None
            or value > best.value
            or (
                value == best.value
                and sample.achieved_at < best.supporting_sample.achieved_at
            )
        ):
            best = OneRepMaxEstimate(value=value, supporting_sample=sample)
    return best


def estimate_history(
    samples: Iterable[PerformanceSample],
    limit: Optional[int] = None,
    config: Optional[StrengthConfig] = None,
) -> List[OneRepMaxEstimate]:
    """Per-sample estimates, most recent first, optionally truncated."""
    estimates = [
        OneRepMaxEstimate(value=sample_estimate(s), supporting_sample=s)
        for s in eligible_samples(samples, config)
    ]
    estimates.sort(key=lambda e: e.supporting_sample.achieved_at, reverse=True)
    return estimates[:limit] if limit is not None else estimates
