"""Math helpers — population statistics and circular means. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from layoutsight.utils.geometry import angular_difference


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation. 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.std(np.asarray(values, dtype=np.float64)))


def variance(values: Sequence[float]) -> float:
    """Population variance. 0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=np.float64)))


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def circular_mean(angles_deg: Sequence[float]) -> float:
    """Mean direction of a set of angles in degrees [0, 360).

    Averages unit vectors, so 350° and 10° give 0° rather than 180°.
    Falls back to the first angle when the vectors cancel out.
    """
    if len(angles_deg) == 0:
        return 0.0
    rad = np.radians(np.asarray(angles_deg, dtype=np.float64))
    s = float(np.sum(np.sin(rad)))
    c = float(np.sum(np.cos(rad)))
    if abs(s) < 1e-12 and abs(c) < 1e-12:
        return float(angles_deg[0]) % 360.0
    return (math.degrees(math.atan2(s, c)) + 360.0) % 360.0


def circular_std(angles_deg: Sequence[float]) -> float:
    """RMS of the shortest angular distance of each angle from the circular mean."""
    if len(angles_deg) < 2:
        return 0.0
    centre = circular_mean(angles_deg)
    diffs = np.array([angular_difference(a, centre) for a in angles_deg])
    return float(np.sqrt(np.mean(diffs**2)))
