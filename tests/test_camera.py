import math

import numpy as np
import pytest

from subsurf.camera import Ray, ThinLensCamera


def test_ray_defaults():
    ray = Ray()
    assert np.array_equal(ray.o, np.zeros(3))
    assert ray.maxt == math.inf


def test_center_pixel_looks_down_z():
    cam = ThinLensCamera(width=200, height=100)
    ray, weight = cam.sample_ray((100.0, 50.0), (0.5, 0.5))
    assert np.allclose(ray.o, np.zeros(3))
    assert np.allclose(ray.d, [0.0, 0.0, 1.0])
    assert ray.mint == pytest.approx(cam.near_clip)
    assert ray.maxt == pytest.approx(cam.far_clip)
    assert np.array_equal(weight, np.ones(3))


def test_left_edge_matches_half_fov():
    cam = ThinLensCamera(width=200, height=100, fov=30.0)
    ray, _ = cam.sample_ray((0.0, 50.0), (0.5, 0.5))
    angle = math.degrees(math.atan2(abs(ray.d[0]), ray.d[2]))
    assert angle == pytest.approx(15.0)
    assert ray.d[1] == pytest.approx(0.0, abs=1e-12)


def test_directions_are_unit_length():
    cam = ThinLensCamera(width=64, height=48)
    for pos in [(0.0, 0.0), (10.0, 30.0), (63.0, 47.0)]:
        ray, _ = cam.sample_ray(pos, (0.2, 0.7))
        assert np.linalg.norm(ray.d) == pytest.approx(1.0)


def test_clip_range_scales_with_direction():
    cam = ThinLensCamera(width=64, height=48, near_clip=0.5, far_clip=50.0)
    ray, _ = cam.sample_ray((0.0, 0.0), (0.5, 0.5))
    assert ray.mint * ray.d[2] == pytest.approx(0.5)
    assert ray.maxt * ray.d[2] == pytest.approx(50.0)


def test_to_world_translation_moves_origin():
    to_world = np.eye(4)
    to_world[:3, 3] = [1.0, 2.0, 3.0]
    cam = ThinLensCamera(width=100, height=100, to_world=to_world)
    ray, _ = cam.sample_ray((50.0, 50.0), (0.5, 0.5))
    assert np.allclose(ray.o, [1.0, 2.0, 3.0])
    assert np.allclose(ray.d, [0.0, 0.0, 1.0])


def test_thin_lens_rays_converge_on_focal_plane():
    pinhole = ThinLensCamera(width=100, height=80)
    lens = ThinLensCamera(width=100, height=80, lens_radius=0.3, focal_distance=7.0)
    pos = (20.0, 60.0)
    p_ray, _ = pinhole.sample_ray(pos, (0.5, 0.5))
    target = p_ray.d * (7.0 / p_ray.d[2])
    for aperture in [(0.1, 0.2), (0.9, 0.6), (0.5, 0.0)]:
        ray, _ = lens.sample_ray(pos, aperture)
        assert ray.o[2] == pytest.approx(0.0)
        assert np.hypot(ray.o[0], ray.o[1]) <= 0.3 + 1e-12
        hit = ray.o + ray.d * ((7.0 - ray.o[2]) / ray.d[2])
        assert np.allclose(hit, target)


def test_str_lists_parameters():
    text = str(ThinLensCamera())
    assert text.startswith("ThinLensCamera[")
    assert "fov = 30.000000" in text
    assert "outputSize = [1280, 720]" in text
    assert "focalDistance = 10.000000" in text