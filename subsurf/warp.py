"""Warping functions that map uniform samples on the unit square to other domains.

Each sampling function has a matching ``*_pdf`` function that gives the
probability density of the resulting distribution.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

__all__ = [
    "square_to_uniform_square",
    "square_to_uniform_square_pdf",
    "square_to_tent",
    "square_to_tent_pdf",
    "square_to_uniform_disk",
    "square_to_uniform_disk_pdf",
    "square_to_uniform_triangle",
    "square_to_uniform_triangle_pdf",
    "square_to_uniform_sphere",
    "square_to_uniform_sphere_pdf",
    "square_to_uniform_hemisphere",
    "square_to_uniform_hemisphere_pdf",
    "concentric_sample_disk",
    "square_to_cosine_hemisphere",
    "square_to_cosine_hemisphere_pdf",
    "square_to_beckmann",
    "square_to_beckmann_pdf",
    "square_to_uniform_disk_concentric",
    "square_to_uniform_disk_concentric_pdf",
]

Vec = Sequence[float]


def _point2(x: float, y: float) -> np.ndarray:
    return np.array([x, y], dtype=float)


def _vector3(x: float, y: float, z: float) -> np.ndarray:
    return np.array([x, y, z], dtype=float)


def square_to_uniform_square(sample: Vec) -> np.ndarray:
    """Return the sample unchanged."""
    return np.array(sample, dtype=float)


def square_to_uniform_square_pdf(p: Vec) -> float:
    """Density of :func:`square_to_uniform_square`: 1 inside the unit square."""
    x, y = p
    return 1.0 if 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0 else 0.0


def square_to_tent(sample: Vec) -> np.ndarray:
    """Warp a square sample to a 2D tent distribution."""
    u, v = sample
    if u <= 0.5:
        return _point2(u * 2.0, v * u * 2.0)
    return _point2((1.0 - u) * 2.0, (1.0 - u) * (1.0 - v) * 2.0)


def square_to_tent_pdf(p: Vec) -> float:
    """Density of :func:`square_to_tent`."""
    x, y = p
    if x < 0.0 or x > 1.0 or y < 0.0 or y > 1.0:
        return 0.0
    return x / 2.0 if x <= 0.5 else (1.0 - x) / 2.0


def square_to_uniform_disk(sample: Vec) -> np.ndarray:
    """Uniformly sample the unit disk centred at the origin (polar mapping)."""
    r = math.sqrt(sample[0])
    theta = 2.0 * math.pi * sample[1]
    return _point2(r * math.cos(theta), r * math.sin(theta))


def square_to_uniform_disk_pdf(p: Vec) -> float:
    """Density of :func:`square_to_uniform_disk`."""
    x, y = p
    if x * x + y * y > 1.0:
        return 0.0
    return 1.0 / math.pi


def square_to_uniform_triangle(sample: Vec) -> np.ndarray:
    """Uniformly sample the right triangle (0,0), (1,0), (0,1)."""
    su0 = math.sqrt(sample[0])
    return _point2(1.0 - su0, sample[1] * su0)


def square_to_uniform_triangle_pdf(p: Vec) -> float:
    """Density of :func:`square_to_uniform_triangle`: the inverse of its area."""
    x, y = p
    if x < 0.0 or y < 0.0 or x + y > 1.0:
        return 0.0
    area = 0.5
    return 1.0 / area


def square_to_uniform_sphere(sample: Vec) -> np.ndarray:
    """Uniformly sample the unit sphere with respect to solid angle."""
    z = 1.0 - 2.0 * sample[0]
    r = math.sqrt(max(0.0, 1.0 - z * z))
    phi = sample[1] * 2.0 * math.pi
    return _vector3(r * math.cos(phi), r * math.sin(phi), z)


def square_to_uniform_sphere_pdf(v: Vec) -> float:
    """Density of :func:`square_to_uniform_sphere`."""
    return 1.0 / (4.0 * math.pi)


def square_to_uniform_hemisphere(sample: Vec) -> np.ndarray:
    """Uniformly sample the hemisphere around +z with respect to solid angle."""
    z = sample[0]
    r = math.sqrt(max(0.0, 1.0 - z * z))
    phi = 2.0 * math.pi * sample[1]
    return _vector3(r * math.cos(phi), r * math.sin(phi), z)


def square_to_uniform_hemisphere_pdf(v: Vec) -> float:
    """Density of :func:`square_to_uniform_hemisphere`."""
    if v[2] <= 0.0:
        return 0.0
    return 1.0 / (2.0 * math.pi)


def concentric_sample_disk(sample: Vec) -> np.ndarray:
    """Map the unit square onto the unit disk with the concentric mapping."""
    ox = 2.0 * sample[0] - 1.0
    oy = 2.0 * sample[1] - 1.0
    if ox == 0.0 and oy == 0.0:
        return _point2(0.0, 0.0)
    if abs(ox) > abs(oy):
        r = ox
        theta = math.pi / 4.0 * (oy / ox)
    else:
        r = oy
        theta = math.pi / 2.0 - math.pi / 4.0 * (ox / oy)
    return _point2(r * math.cos(theta), r * math.sin(theta))


def square_to_cosine_hemisphere(sample: Vec) -> np.ndarray:
    """Sample the hemisphere around +z proportionally to the cosine of theta."""
    x, y = concentric_sample_disk(sample)
    z = math.sqrt(max(0.0, 1.0 - x * x - y * y))
    return _vector3(x, y, z)


def square_to_cosine_hemisphere_pdf(v: Vec) -> float:
    """Density of :func:`square_to_cosine_hemisphere`."""
    if v[2] <= 0.0:
        return 0.0
    return v[2] / math.pi


def square_to_beckmann(sample: Vec, alpha: float) -> np.ndarray:
    """Sample a Beckmann microfacet normal (distribution times cosine)."""
    phi = 2.0 * math.pi * sample[0]
    tan_theta2 = -alpha * alpha * math.log(1.0 - sample[1])
    theta = math.atan(math.sqrt(tan_theta2))
    sin_theta = math.sin(theta)
    return _vector3(
        sin_theta * math.cos(phi),
        sin_theta * math.sin(phi),
        math.cos(theta),
    )


def square_to_beckmann_pdf(m: Vec, alpha: float) -> float:
    """Density of :func:`square_to_beckmann`: D(m) * cos(theta_m)."""
    cos_theta = m[2]
    if cos_theta <= 0.0:
        return 0.0
    cos2 = cos_theta * cos_theta
    tan_theta2 = (1.0 - cos2) / cos2
    d = math.exp(-tan_theta2 / (alpha * alpha)) / (
        math.pi * alpha * alpha * cos_theta**4
    )
    return d * cos_theta


def square_to_uniform_disk_concentric(sample: Vec) -> np.ndarray:
    """Uniformly sample the unit disk with the concentric mapping."""
    return concentric_sample_disk(sample)


def square_to_uniform_disk_concentric_pdf(p: Vec) -> float:
    """Density of :func:`square_to_uniform_disk_concentric`."""
    x, y = p
    return 1.0 / math.pi if x * x + y * y <= 1.0 else 0.0