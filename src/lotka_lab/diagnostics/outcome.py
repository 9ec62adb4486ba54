"""Qualitative outcome of a run: who wins a competition, what a cycle looks like."""

import math
from enum import Enum
from typing import Optional, Sequence
import numpy as np
from scipy.signal import find_peaks

from ..config.schemas import CompetitionParameters


class CompetitionOutcome(str, Enum):
    COEXISTENCE = "Coexistence"
    SPECIES_1_WINS = "Species 1 Wins"
    SPECIES_2_WINS = "Species 2 Wins"
    BISTABLE = "Bistable"


class OscillationPattern(str, Enum):
    ANALYZING = "Analyzing..."
    NEAR_EQUILIBRIUM = "Near Equilibrium"
    STABLE_CYCLES = "Stable Cycles"
    LARGE_OSCILLATIONS = "Large Oscillations"


def _ratio(numerator: float, denominator: float) -> float:
    # a zero capacity gives a signed infinity; 0/0 gives NaN and matches no branch
    if denominator == 0.0:
        if numerator == 0.0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def predict_competition_outcome(params: CompetitionParameters) -> CompetitionOutcome:
    """
    Predict the long-run outcome from the classical isocline conditions.

    Species 1 resists invasion when a21 > K2/K1 and species 2 when a12 > K1/K2.

    Args:
        params: Competition parameters

    Returns:
        The predicted outcome
    """
    a12_threshold = _ratio(params.K1, params.K2)
    a21_threshold = _ratio(params.K2, params.K1)

    if params.a12 < a12_threshold and params.a21 < a21_threshold:
        return CompetitionOutcome.COEXISTENCE
    if params.a12 > a12_threshold and params.a21 < a21_threshold:
        return CompetitionOutcome.SPECIES_2_WINS
    if params.a12 < a12_threshold and params.a21 > a21_threshold:
        return CompetitionOutcome.SPECIES_1_WINS
    return CompetitionOutcome.BISTABLE


def classify_oscillation(
    prey: Sequence[float], min_points: int = 50, window: int = 30
) -> OscillationPattern:
    """
    Classify recent predator-prey dynamics by relative prey amplitude.

    Args:
        prey: Prey population history, oldest first
        min_points: Histories this short are still ``ANALYZING``
        window: Number of most recent samples inspected

    Returns:
        Oscillation pattern
    """
    if len(prey) <= min_points:
        return OscillationPattern.ANALYZING

    recent = np.asarray(prey[-window:], dtype=float)
    mean = recent.mean()
    amplitude = recent.max() - recent.min()

    if amplitude < mean * 0.1:
        return OscillationPattern.NEAR_EQUILIBRIUM
    if amplitude > mean * 0.8:
        return OscillationPattern.LARGE_OSCILLATIONS
    return OscillationPattern.STABLE_CYCLES


def estimate_period(times: Sequence[float], values: Sequence[float]) -> np.ndarray:
    """
    Successive peak-to-peak periods of an oscillating series.

    Peak times are refined with a parabola through each maximum and its two
    neighbours, which removes most of the sampling jitter of fixed-step output.

    Args:
        times: Sample times
        values: Population values at those times

    Returns:
        Array of periods (empty when fewer than two peaks)
    """
    t = np.asarray(times, dtype=float)
    v = np.asarray(values, dtype=float)
    peaks, _ = find_peaks(v)
    if peaks.size < 2:
        return np.array([], dtype=float)

    y0, y1, y2 = v[peaks - 1], v[peaks], v[peaks + 1]
    denom = y0 - 2.0 * y1 + y2
    offset = np.where(denom != 0.0, 0.5 * (y0 - y2) / np.where(denom != 0.0, denom, 1.0), 0.0)
    # assumes locally uniform sampling around each peak
    spacing = 0.5 * (t[peaks + 1] - t[peaks - 1])
    peak_times = t[peaks] + offset * spacing
    return np.diff(peak_times)


def mean_period(times: Sequence[float], values: Sequence[float]) -> Optional[float]:
    periods = estimate_period(times, values)
    if periods.size == 0:
        return None
    return float(periods.mean())
