import math

import numpy as np
import pytest

from subsurf.radiance_cache import RadianceCache, gaussian_falloff


def test_gaussian_falloff_is_one_at_zero():
    assert gaussian_falloff(0.0, 0.5) == pytest.approx(1.0)


def test_gaussian_falloff_decreases_with_distance():
    values = [gaussian_falloff(d, 0.5) for d in (0.0, 0.1, 0.2, 0.4, 0.8)]
    assert all(a > b for a, b in zip(values, values[1:]))
    assert all(0.0 < v <= 1.0 for v in values)


def test_gaussian_falloff_at_threshold():
    assert gaussian_falloff(0.5, 0.5) == pytest.approx(math.exp(-0.5))


def test_len_and_contains():
    cache = RadianceCache()
    assert len(cache) == 0
    cache.add_mesh("a", [((0, 0, 0), (1, 1, 1))])
    cache.add_mesh("b", [((1, 0, 0), (1, 1, 1))])
    assert len(cache) == 2
    assert "a" in cache
    assert "c" not in cache


def test_add_mesh_replaces_existing():
    cache = RadianceCache()
    cache.add_mesh("a", [((0, 0, 0), (1, 1, 1))])
    cache.add_mesh("a", [((0, 0, 0), (2, 2, 2))])
    assert len(cache) == 1
    result = cache.lookup("a", (0, 0, -0.1), (0, 0, 1))
    expected = 2.0 * gaussian_falloff(0.1, 0.5) * 0.1
    np.testing.assert_allclose(result, [expected] * 3)


def test_missing_mesh_contributes_nothing():
    cache = RadianceCache()
    np.testing.assert_array_equal(cache.lookup("missing", (0, 0, 0), (0, 0, 1)), np.zeros(3))


def test_empty_samples_rejected():
    cache = RadianceCache()
    with pytest.raises(ValueError):
        cache.add_mesh("a", [])


def test_nonpositive_threshold_rejected():
    with pytest.raises(ValueError):
        RadianceCache(threshold=0.0)


def test_lookup_weighted_by_falloff_and_normal():
    cache = RadianceCache()
    cache.add_mesh("m", [((0, 0, 0), (1.0, 0.5, 0.25))])
    result = cache.lookup("m", (0, 0, -0.2), (0, 0, 1))
    weight = gaussian_falloff(0.2, 0.5) * 0.2
    np.testing.assert_allclose(result, np.array([1.0, 0.5, 0.25]) * weight)


def test_lookup_on_sample_point_is_zero():
    cache = RadianceCache()
    cache.add_mesh("m", [((1, 2, 3), (1, 1, 1))])
    np.testing.assert_allclose(cache.lookup("m", (1, 2, 3), (0, 0, 1)), np.zeros(3))


def test_normal_facing_away_gives_zero():
    cache = RadianceCache()
    cache.add_mesh("m", [((0, 0, 0), (1, 1, 1))])
    np.testing.assert_allclose(cache.lookup("m", (0, 0, -0.2), (0, 0, -1)), np.zeros(3))


def test_beyond_threshold_gives_zero():
    cache = RadianceCache(threshold=0.5)
    cache.add_mesh("m", [((0, 0, 0), (1, 1, 1))])
    np.testing.assert_allclose(cache.lookup("m", (0, 0, -2.0), (0, 0, 1)), np.zeros(3))


def test_radiance_is_clamped():
    bright = RadianceCache(max_radiance=10.0)
    bright.add_mesh("m", [((0, 0, 0), (50.0, 50.0, 5.0))])
    capped = RadianceCache(max_radiance=10.0)
    capped.add_mesh("m", [((0, 0, 0), (10.0, 10.0, 5.0))])
    a = bright.lookup("m", (0, 0, -0.1), (0, 0, 1))
    b = capped.lookup("m", (0, 0, -0.1), (0, 0, 1))
    np.testing.assert_allclose(a, b)
    assert a[2] < a[0]


def test_lookup_is_per_mesh():
    cache = RadianceCache()
    cache.add_mesh("dim", [((0, 0, 0), (1, 1, 1))])
    cache.add_mesh("bright", [((0, 0, 0), (4, 4, 4))])
    dim = cache.lookup("dim", (0, 0, -0.1), (0, 0, 1))
    bright = cache.lookup("bright", (0, 0, -0.1), (0, 0, 1))
    np.testing.assert_allclose(bright, 4.0 * dim)


def test_contribution_grows_then_fades_along_normal():
    cache = RadianceCache(threshold=0.5)
    cache.add_mesh("m", [((0, 0, 0), (1, 1, 1))])
    values = [cache.lookup("m", (0, 0, -d), (0, 0, 1))[0] for d in (0.0, 0.1, 0.49, 0.6)]
    assert values[0] == pytest.approx(0.0)
    assert values[1] > 0.0
    assert values[2] > 0.0
    assert values[3] == pytest.approx(0.0)