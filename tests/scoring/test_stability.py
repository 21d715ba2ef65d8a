"""Tests for the stability formula."""

import math

import pytest

from akorfa.scoring import StabilityMetrics, calculate_stability


def test_reference_configuration() -> None:
    metrics = StabilityMetrics(R=100, L=6, G=7, C=2, A=0.5, n=2)
    assert calculate_stability(metrics) == 650.0


def test_symmetric_layers_use_only_coupling_term() -> None:
    metrics = StabilityMetrics(R=1, L=5, G=5, C=2, A=0, n=1)
    assert calculate_stability(metrics) == pytest.approx(5.0)


@pytest.mark.parametrize(
    "metrics",
    [
        StabilityMetrics(R=10, L=3, G=3, C=0, A=0, n=1),
        StabilityMetrics(R=10, L=3, G=4, C=0.1, A=2, n=1),
    ],
)
def test_degenerate_denominator_with_positive_numerator_is_unbounded(metrics) -> None:
    assert math.isinf(calculate_stability(metrics))
    assert calculate_stability(metrics) > 0


@pytest.mark.parametrize(
    "metrics",
    [
        StabilityMetrics(R=0, L=3, G=3, C=0, A=0, n=1),
        StabilityMetrics(R=5, L=0, G=0, C=0.1, A=1, n=1),
    ],
)
def test_degenerate_denominator_without_numerator_is_zero(metrics) -> None:
    assert calculate_stability(metrics) == 0.0
