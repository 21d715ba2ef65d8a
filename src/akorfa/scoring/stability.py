# src/akorfa/scoring/stability.py
"""Stability equation for the seven-layer self-assessment."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class StabilityMetrics:
    """Inputs to the stability equation.

    Attributes:
        R: Resource throughput, >= 0.
        L: Local coherence, 0-10.
        G: Global efficiency, 0-10.
        C: Coupling coefficient, 0.1-10.
        A: Conscious agreement, 0-1.
        n: Scaling exponent, 1-3.

    The ranges are the caller's contract; they are not enforced here.
    """

    R: float
    L: float
    G: float
    C: float
    A: float
    n: float


def calculate_stability(metrics: StabilityMetrics) -> float:
    """Return ``S = R*(L+G) / (|L-G| + C - A*n)``.

    A non-positive denominator describes a degenerate configuration: the result
    is unbounded (``math.inf``) when the numerator is positive and ``0.0``
    otherwise.
    """
    numerator = metrics.R * (metrics.L + metrics.G)
    denominator = abs(metrics.L - metrics.G) + metrics.C - metrics.A * metrics.n
    if denominator <= 0:
        return math.inf if numerator > 0 else 0.0
    return numerator / denominator
