from __future__ import annotations

from decimal import Decimal

import pytest

from visit_insights.core.errors import InvalidArgument
from visit_insights.services.evolution import calculate_evolution, format_evolution


@pytest.mark.parametrize(
    ("current", "past", "expected"),
    [
        (10, 0, 100.0),
        (0, 0, 0.0),
        (-3, 0, -100.0),
        (5, 10, -50.0),
        (15, 10, 50.0),
        (1, 3, -66.7),
        (10, -5, 300.0),
        (Decimal("12.5"), Decimal("10"), 25.0),
        ("20", "8", 150.0),
        (None, 4, -100.0),
    ],
)
def test_calculate_evolution(current, past, expected):
    assert calculate_evolution(current, past) == pytest.approx(expected)


def test_precision_controls_rounding():
    assert calculate_evolution(1, 3, precision=0) == -67.0
    assert calculate_evolution(1, 3, precision=2) == pytest.approx(-66.67)


def test_non_numeric_value_is_rejected():
    with pytest.raises(InvalidArgument):
        calculate_evolution("lots", 3)


def test_format_evolution():
    assert format_evolution(12.5) == "+12.5%"
    assert format_evolution(-50.0) == "-50%"
    assert format_evolution(0.0) == "0%"
    assert format_evolution(100.0) == "+100%"


@pytest.mark.parametrize(
    ("current", "past", "expected"),
    [
        (401, 400, 0.3),
        (399, 400, -0.3),
        (10405, 10000, 4.1),
        (9595, 10000, -4.1),
        (1001, 800, 25.1),
    ],
)
def test_halves_round_away_from_zero(current, past, expected):
    assert calculate_evolution(current, past) == expected


def test_halves_round_away_from_zero_at_whole_precision():
    assert calculate_evolution(5, 200, precision=0) == -98.0
    assert calculate_evolution(3, 2, precision=0) == 50.0
    assert calculate_evolution(201, 200, precision=0) == 1.0


def test_non_finite_value_is_rejected():
    with pytest.raises(InvalidArgument):
        calculate_evolution("inf", 3)


def test_format_evolution_keeps_large_values_positional():
    assert format_evolution(1234567.0) == "+1234567%"
    assert format_evolution(1234567.5) == "+1234567.5%"
    assert format_evolution(-2500000.0) == "-2500000%"


def test_format_evolution_precision():
    assert format_evolution(-66.67, precision=2) == "-66.67%"
    assert format_evolution(0.04) == "0%"
