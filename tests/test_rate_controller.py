import pytest

from bldcmon.analysis.rate import RateController


def test_rate_controller_estimates_rate_for_regular_samples() -> None:
    rc = RateController(window_size=100)
    t = 0.0
    for _ in range(100):
        rc.add_sample_time(t)
        t += 0.001  # 1 kHz
    est = rc.estimated_hz
    assert 990.0 < est < 1010.0


def test_rate_controller_falls_back_to_default() -> None:
    rc = RateController(window_size=10, default_hz=5.0)
    assert rc.estimated_hz == 5.0
    rc.add_sample_time(1.0)
    assert rc.estimated_hz == 5.0
    rc.add_sample_time(1.5)
    rc.add_sample_time(2.0)
    assert rc.estimated_hz == pytest.approx(2.0)
    assert rc.buffer_span_s == pytest.approx(1.0)


def test_rate_controller_rejects_tiny_window() -> None:
    with pytest.raises(ValueError):
        RateController(window_size=1)
