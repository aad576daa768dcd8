"""Unit tests for LinearScale and extent helpers."""

import numpy as np
import pytest

from mouseviz.activity_chart.scales import FALLBACK_DOMAIN, LinearScale, domain_or_fallback, extent


def test_minute_domain_maps_to_plot_edges():
    """Minutes 0 and 1440 land on the left and right plot edges."""
    scale = LinearScale(domain=(0.0, 1440.0), range=(60.0, 1170.0))
    assert scale(0) == pytest.approx(60.0)
    assert scale(1440) == pytest.approx(1170.0)
    assert scale(720) == pytest.approx(615.0)


def test_invert_is_inverse():
    scale = LinearScale(domain=(0.0, 1440.0), range=(60.0, 1170.0))
    assert scale.invert(60.0) == pytest.approx(0.0)
    assert scale.invert(1170.0) == pytest.approx(1440.0)
    assert scale.invert(scale(333.0)) == pytest.approx(333.0)


def test_reversed_range_for_y():
    scale = LinearScale(domain=(0.0, 100.0), range=(550.0, 40.0))
    assert scale(0) == pytest.approx(550.0)
    assert scale(100) == pytest.approx(40.0)
    assert scale.contains_pixel(300.0)
    assert not scale.contains_pixel(560.0)


def test_array_input():
    scale = LinearScale(domain=(0.0, 10.0), range=(0.0, 100.0))
    out = scale(np.array([0.0, 5.0, 10.0]))
    assert isinstance(out, np.ndarray)
    assert out.tolist() == pytest.approx([0.0, 50.0, 100.0])


def test_degenerate_domain_maps_to_range_middle():
    scale = LinearScale(domain=(5.0, 5.0), range=(0.0, 100.0))
    assert scale(5.0) == 50.0
    assert scale(np.array([1.0, 2.0])).tolist() == [50.0, 50.0]


def test_with_domain_keeps_range():
    scale = LinearScale(domain=(0.0, 1.0), range=(550.0, 40.0)).with_domain((0, 20))
    assert scale.domain == (0.0, 20.0)
    assert scale.range == (550.0, 40.0)


def test_extent_ignores_nan():
    assert extent([3.0, float("nan"), -1.0, 7.0]) == (-1.0, 7.0)
    assert extent(np.array([2.0])) == (2.0, 2.0)


def test_extent_empty_or_all_nan_is_none():
    assert extent([]) is None
    assert extent([float("nan")]) is None


def test_domain_or_fallback():
    assert domain_or_fallback((1.0, 2.0), what="x") == (1.0, 2.0)
    assert domain_or_fallback(None, what="x") == FALLBACK_DOMAIN
