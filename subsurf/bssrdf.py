"""A simple subsurface-scattering material combining single scattering and diffusion."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from subsurf.reflectance import fresnel, henyey_greenstein
from subsurf.warp import square_to_cosine_hemisphere

__all__ = ["Measure", "BSDFQueryRecord", "BSSRDF", "cos_theta"]

ColorLike = Union[float, Sequence[float], np.ndarray]


class Measure(enum.Enum):
    """Measure with respect to which a density or value is expressed."""

    UNKNOWN = "unknown"
    SOLID_ANGLE = "solid_angle"
    DISCRETE = "discrete"


def _vec3(v) -> np.ndarray:
    return np.array(v, dtype=float).reshape(3)


def _color(c: ColorLike) -> np.ndarray:
    return np.broadcast_to(np.asarray(c, dtype=float), (3,)).copy()


def _color_str(c: np.ndarray) -> str:
    return "[{:f}, {:f}, {:f}]".format(*c)


def cos_theta(v) -> float:
    """Cosine of the angle between a local-frame direction and the +z normal."""
    return float(v[2])


@dataclass
class BSDFQueryRecord:
    """Directions (local shading frame), texture coordinates and measure of a query."""

    wi: np.ndarray
    wo: np.ndarray = field(default_factory=lambda: np.zeros(3))
    uv: np.ndarray = field(default_factory=lambda: np.zeros(2))
    measure: Measure = Measure.UNKNOWN

    def __post_init__(self) -> None:
        self.wi = _vec3(self.wi)
        self.wo = _vec3(self.wo)
        self.uv = np.array(self.uv, dtype=float).reshape(2)


class BSSRDF:
    """Approximate subsurface scattering material with a diffuse sampling strategy."""

    def __init__(
        self,
        sigma_a: ColorLike = 0.1,
        sigma_s: ColorLike = 1.0,
        eta: float = 1.5,
        alpha: float = 0.1,
        albedo: ColorLike = 0.8,
    ) -> None:
        self.sigma_a = _color(sigma_a)
        self.sigma_s = _color(sigma_s)
        self.eta = float(eta)
        self.alpha = float(alpha)
        self.albedo = _color(albedo)

    def eval(self, rec: BSDFQueryRecord) -> np.ndarray:
        """Evaluate the material for the pair of directions in ``rec``."""
        if rec.measure is not Measure.SOLID_ANGLE:
            return np.zeros(3)
        return self.albedo * (self.single_scattering(rec) + self.diffusion(rec))

    def pdf(self, rec: BSDFQueryRecord) -> float:
        """Cosine-weighted hemisphere density of ``rec.wo``."""
        if cos_theta(rec.wi) <= 0.0 or cos_theta(rec.wo) <= 0.0:
            return 0.0
        return cos_theta(rec.wo) / math.pi

    def sample(self, rec: BSDFQueryRecord, sample: Sequence[float]) -> np.ndarray:
        """Sample ``rec.wo`` (stored in ``rec``) and return eval * cos / pdf."""
        if cos_theta(rec.wi) <= 0.0:
            return np.zeros(3)
        rec.wo = square_to_cosine_hemisphere(sample)
        if cos_theta(rec.wo) <= 0.0:
            return np.zeros(3)
        if cos_theta(rec.wi) < 0.01 or cos_theta(rec.wo) < 0.01:
            return np.zeros(3)
        rec.measure = Measure.SOLID_ANGLE
        return self.eval(rec) * cos_theta(rec.wo) / self.pdf(rec)

    def is_diffuse(self) -> bool:
        """The material is treated as diffuse."""
        return True

    def single_scattering(self, rec: BSDFQueryRecord) -> np.ndarray:
        """Single-scattering term with Fresnel transmission and a HG phase function."""
        sigma_t = self.sigma_a + self.sigma_s
        attenuation = math.exp(-float(np.mean(sigma_t)))
        ft = 1.0 - fresnel(cos_theta(rec.wi), 1.0, self.eta)
        phase = henyey_greenstein(float(np.dot(rec.wi, rec.wo)), -0.1)
        result = self.sigma_s * ft * phase * attenuation
        return self.albedo * result

    def diffusion(self, rec: BSDFQueryRecord) -> np.ndarray:
        """Dipole-like diffusion term based on the distance between directions."""
        sigma_t = self.sigma_a + self.sigma_s
        dr = float(np.linalg.norm(rec.wi - rec.wo))
        if dr < 1e-4:
            return np.zeros(3)
        sigma_tr = np.sqrt(3.0 * self.sigma_a * (self.sigma_a + self.sigma_s))
        dv = np.sqrt(dr * dr + sigma_tr * sigma_tr)
        term1 = np.exp(-sigma_t * dr) / (4.0 * math.pi * dr)
        term2 = np.exp(-sigma_t * dv) / (4.0 * math.pi * dv)
        return self.albedo * self.sigma_s * (term1 - term2)

    def sample_distance(self, sigma_tr: float, xi: float) -> float:
        """Sample an exponentially distributed radial distance from uniform ``xi``."""
        return -math.log(1.0 - xi) / sigma_tr

    def __str__(self) -> str:
        return (
            "BSSRDF[\n"
            f"  sigma_a = {_color_str(self.sigma_a)},\n"
            f"  sigma_s = {_color_str(self.sigma_s)},\n"
            f"  eta = {self.eta:f},\n"
            f"  alpha = {self.alpha:f},\n"
            f"  albedo = {_color_str(self.albedo)}\n"
            "]"
        )