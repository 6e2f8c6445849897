"""Tests for the trimmed statistics."""

import logging

import numpy as np
import pytest

from iobench.statistics import StatisticsAggregator


def make(values):
    agg = StatisticsAggregator()
    for v in values:
        agg.add_sample(v)
    return agg


def test_keeps_arrival_order():
    agg = make([3, 1, 2])
    assert agg.samples == [3.0, 1.0, 2.0]
    assert len(agg) == 3


def test_average_and_min():
    agg = make([4, 2, 6])
    assert agg.average() == pytest.approx(4.0)
    assert agg.min() == 2.0


def test_robust_average_trims_five_percent_each_side():
    values = list(range(1, 101))
    agg = make(reversed(values))
    expected = np.mean(list(range(6, 96)))
    assert agg.robust_average() == pytest.approx(expected)


def test_robust_average_ignores_outliers():
    values = [100.0] * 200
    values[0] = 1e9
    values[1] = 0.0
    agg = make(values)
    assert agg.robust_average() == pytest.approx(100.0)


def test_robust_average_warns_on_few_samples(caplog):
    agg = make([1, 2, 3])
    with caplog.at_level(logging.WARNING, logger="iobench.statistics"):
        value = agg.robust_average()
    assert value == pytest.approx(2.0)
    assert "not statistically reliable" in caplog.text


def test_robust_average_single_sample():
    assert make([5]).robust_average() == pytest.approx(5.0)


def test_robust_min_drops_first_two_by_position():
    assert make([5, 1, 2, 3, 4]).robust_min() == 2.0


def test_robust_min_needs_three_samples():
    with pytest.raises(ValueError):
        make([1, 2]).robust_min()
    assert make([9, 9, 7]).robust_min() == 7.0


@pytest.mark.parametrize("method", ["average", "robust_average", "min", "robust_min"])
def test_empty_raises(method):
    with pytest.raises(ValueError):
        getattr(StatisticsAggregator(), method)()


def test_percentile():
    agg = make(range(1, 101))
    assert agg.percentile(50) == pytest.approx(50.5)


def test_robust_average_trims_evenly_when_count_not_multiple_of_twenty():
    values = list(range(1, 31))
    agg = make(reversed(values))
    # 30 * 5 // 100 = 1 с каждого края
    assert agg.robust_average() == pytest.approx(np.mean(range(2, 30)))
