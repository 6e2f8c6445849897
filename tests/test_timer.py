"""Tests for the explicit timing span."""

import pytest

from iobench.timer import Timer


def test_begin_end_returns_duration():
    now = [10.0]
    timer = Timer(clock=lambda: now[0])
    timer.begin()
    now[0] = 12.5
    assert timer.elapsed() == pytest.approx(2.5)
    assert timer.end() == pytest.approx(2.5)


def test_marks_measure_since_previous_mark():
    now = [0.0]
    timer = Timer(clock=lambda: now[0]).begin()
    now[0] = 1.0
    assert timer.mark("first") == pytest.approx(1.0)
    now[0] = 3.0
    assert timer.mark("second") == pytest.approx(2.0)
    assert [label for label, _ in timer.marks] == ["first", "second"]
    assert timer.end() == pytest.approx(3.0)


def test_end_without_begin():
    with pytest.raises(RuntimeError):
        Timer().end()
