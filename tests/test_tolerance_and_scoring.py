"""Tests for the compatibility predicate and the similarity score."""

import pytest

from lintelmark.unify.config import ToleranceConfig
from lintelmark.unify.keys import DimensionKey
from lintelmark.unify.scoring import similarity_score
from lintelmark.unify.tolerance import (
    aggregate_deviation,
    axis_deviations,
    classes_compatible,
    is_compatible,
)
from tests.utils_lintels import scenario_config

BASE = DimensionKey(100, 600, 2000)


def test_axis_deviations_are_absolute():
    other = DimensionKey(105, 550, 2100)
    assert axis_deviations(BASE, other) == (5, 50, 100)
    assert axis_deviations(other, BASE) == (5, 50, 100)
    assert aggregate_deviation(BASE, other) == 155


def test_per_axis_limits_are_inclusive():
    config = scenario_config()
    assert is_compatible(BASE, DimensionKey(110, 600, 2000), config)
    assert not is_compatible(BASE, DimensionKey(111, 600, 2000), config)
    assert is_compatible(BASE, DimensionKey(100, 650, 2000), config)
    assert not is_compatible(BASE, DimensionKey(100, 651, 2000), config)


def test_aggregate_deviation_is_exclusive():
    config = scenario_config()
    # 0 + 50 + 100 == 150 is not < 150
    assert not is_compatible(BASE, DimensionKey(100, 650, 2100), config)
    assert is_compatible(BASE, DimensionKey(100, 649, 2100), config)


def test_per_axis_limits_alone_are_not_sufficient():
    config = scenario_config()
    # 5 + 50 + 100 == 155, each axis at or under its limit
    other = DimensionKey(105, 650, 2100)
    assert all(diff <= limit for diff, limit in zip(axis_deviations(BASE, other), config.tolerances))
    assert not is_compatible(BASE, other, config)


def test_compatibility_is_symmetric():
    config = ToleranceConfig()
    keys = [DimensionKey(t, w, h) for t in (100, 120, 130) for w in (600, 650, 700) for h in (1800, 2100)]
    for first in keys:
        for second in keys:
            assert is_compatible(first, second, config) == is_compatible(second, first, config)


def test_classes_compatible_checks_every_pair():
    config = scenario_config()
    merged = [BASE, DimensionKey(105, 600, 1900)]
    candidate = [DimensionKey(100, 650, 2000)]
    assert is_compatible(BASE, candidate[0], config)
    assert not classes_compatible(merged, candidate, config)
    assert classes_compatible([BASE], candidate, config)


def test_score_is_tolerance_relative_and_weighted():
    config = scenario_config(group_size_weight=0.0)
    score = similarity_score(BASE, DimensionKey(105, 600, 1900), 1, 6, config)
    # (5/10) * 0.6 + (0/50) * 0.3 + (100/100) * 0.1
    assert score == pytest.approx(0.4)


def test_weights_are_normalised():
    config = scenario_config(thick_weight=6, width_weight=3, height_weight=1, group_size_weight=0.0)
    assert config.normalized_weights == pytest.approx((0.6, 0.3, 0.1))
    assert similarity_score(BASE, DimensionKey(105, 600, 1900), 1, 6, config) == pytest.approx(0.4)


def test_smaller_source_scores_lower():
    config = scenario_config()
    target = DimensionKey(100, 650, 2000)
    small = similarity_score(BASE, target, 1, 20, config)
    large = similarity_score(BASE, target, 10, 20, config)
    assert small < large
    # (0/10) * 0.6 + (50/50) * 0.3 + 0 = 0.3, scaled by 1 - (1 - 1/20) * 0.4
    assert small == pytest.approx(0.3 * (1 - 0.95 * 0.4))


def test_identical_keys_score_zero():
    assert similarity_score(BASE, BASE, 3, 10, ToleranceConfig()) == 0.0
