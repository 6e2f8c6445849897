"""Tests for the windowed throughput estimator."""

import pytest

from iobench.throughput import ThroughputEstimator


def test_no_samples_is_zero(clock):
    est = ThroughputEstimator(clock=clock)
    clock.advance(2.0)
    assert est.rate() == 0.0


def test_rate_over_window(clock):
    est = ThroughputEstimator(clock=clock)
    clock.advance(5.0)
    for _ in range(10):
        clock.advance(0.1)
        est.add_sample(1000)
    assert est.rate(1.0) == pytest.approx(10000.0)


def test_old_samples_leave_window(clock):
    est = ThroughputEstimator(clock=clock)
    clock.advance(5.0)
    est.add_sample(1_000_000)
    clock.advance(3.0)
    est.add_sample(500)
    assert est.rate(1.0) == pytest.approx(500.0)
    assert est.total_bytes == 1_000_500
    assert est.sample_count == 2


def test_young_estimator_uses_its_age(clock):
    est = ThroughputEstimator(clock=clock)
    clock.advance(0.5)
    est.add_sample(1000)
    assert est.rate(1.0) == pytest.approx(2000.0)


def test_zero_age_is_zero(clock):
    est = ThroughputEstimator(clock=clock)
    est.add_sample(1000)
    assert est.rate() == 0.0


def test_invalid_window(clock):
    with pytest.raises(ValueError):
        ThroughputEstimator(clock=clock).rate(0)
