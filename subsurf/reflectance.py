"""Reflectance helpers: refraction, Fresnel terms, microfacet and phase functions."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

__all__ = [
    "refract",
    "fresnel",
    "fresnel_schlick",
    "g1",
    "beckmann_ndf",
    "henyey_greenstein",
]

Vec = Sequence[float]


def refract(wi: Vec, n: Vec, ext_ior: float, int_ior: float) -> np.ndarray:
    """Refract ``wi`` (in the local shading frame) following Snell's law.

    ``ext_ior`` is the index of the side the normal points to, ``int_ior`` the
    interior one. The normal is taken to be +z of the local frame; ``n`` is
    accepted for symmetry with other interfaces. Under total internal
    reflection the z component is NaN.
    """
    cos_theta_i = wi[2]
    eta_i, eta_t = ext_ior, int_ior
    if cos_theta_i < 0.0:
        eta_i, eta_t = eta_t, eta_i
        cos_theta_i = -cos_theta_i

    eta = eta_i / eta_t
    sin_theta_t2 = eta * eta * (1.0 - cos_theta_i * cos_theta_i)
    cos_t2 = 1.0 - sin_theta_t2
    cos_theta_t = math.sqrt(cos_t2) if cos_t2 >= 0.0 else math.nan

    z = -cos_theta_t if wi[2] > 0.0 else cos_theta_t
    return np.array([-wi[0] * eta, -wi[1] * eta, z], dtype=float)


def fresnel(cos_theta_i: float, ext_ior: float, int_ior: float) -> float:
    """Unpolarised Fresnel reflectance of a dielectric; either side may be lit."""
    if cos_theta_i < 0.0:
        ext_ior, int_ior = int_ior, ext_ior
        cos_theta_i = -cos_theta_i

    eta = ext_ior / int_ior
    sin_theta_t2 = eta * eta * (1.0 - cos_theta_i * cos_theta_i)
    if sin_theta_t2 > 1.0:
        return 1.0

    cos_theta_t = math.sqrt(1.0 - sin_theta_t2)
    rs = (ext_ior * cos_theta_i - int_ior * cos_theta_t) / (
        ext_ior * cos_theta_i + int_ior * cos_theta_t
    )
    rp = (int_ior * cos_theta_i - ext_ior * cos_theta_t) / (
        int_ior * cos_theta_i + ext_ior * cos_theta_t
    )
    return 0.5 * (rs * rs + rp * rp)


def fresnel_schlick(cos_theta_i: float, r0) -> np.ndarray:
    """Schlick's approximation of the Fresnel term for a per-channel ``r0``."""
    r0 = np.asarray(r0, dtype=float)
    return r0 + (1.0 - r0) * (1.0 - cos_theta_i) ** 5


def g1(wv: Vec, wh: Vec, alpha: float) -> float:
    """Smith's shadowing term for the Beckmann distribution (rational fit)."""
    z = np.float64(wv[2])
    with np.errstate(divide="ignore", invalid="ignore"):
        b = np.float64(1.0) / (alpha * np.sqrt(1.0 - z * z) / z)
        ratio = np.float64(np.dot(wv, wh)) / z
    if ratio <= 0:
        return 0.0
    if b < 1.6:
        return float((3.535 * b + 2.181 * b * b) / (1.0 + 2.276 * b + 2.577 * b * b))
    return 1.0


def beckmann_ndf(wh: Vec, alpha: float) -> float:
    """Beckmann normal distribution D(wh), without the cosine factor."""
    z = np.float64(wh[2])
    with np.errstate(divide="ignore", invalid="ignore"):
        tan_theta_h = np.sqrt(1.0 - z * z) / z
        value = np.exp(-tan_theta_h * tan_theta_h / (alpha * alpha)) / (
            math.pi * alpha * alpha * z**4
        )
    return float(value)


def henyey_greenstein(cos_theta: float, g: float) -> float:
    """Henyey-Greenstein phase function; ``g`` is clamped to [-1, 1]."""
    g = max(-1.0, min(g, 1.0))
    denom = max(1.0 + g * g - 2.0 * g * cos_theta, 1e-6)
    return (1.0 - g * g) / (4.0 * math.pi * denom**1.5)