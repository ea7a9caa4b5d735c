"""Perspective camera with a thin-lens model for depth of field."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from subsurf.warp import square_to_uniform_disk

__all__ = ["Ray", "ThinLensCamera"]


@dataclass
class Ray:
    """A ray with origin ``o``, direction ``d`` and a valid parameter interval."""

    o: np.ndarray = field(default_factory=lambda: np.zeros(3))
    d: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 1.0]))
    mint: float = 1e-4
    maxt: float = math.inf


def _transform_point(m: np.ndarray, p: Sequence[float]) -> np.ndarray:
    h = m @ np.array([p[0], p[1], p[2], 1.0])
    return h[:3] / h[3]


def _transform_vector(m: np.ndarray, v: Sequence[float]) -> np.ndarray:
    return m[:3, :3] @ np.asarray(v, dtype=float)


def _normalized(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def _indent(text: str, amount: int) -> str:
    pad = " " * amount
    return ("\n" + pad).join(text.split("\n"))


class ThinLensCamera:
    """Pinhole camera that becomes a thin-lens camera when ``lens_radius`` > 0."""

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        to_world: Optional[np.ndarray] = None,
        fov: float = 30.0,
        near_clip: float = 1e-4,
        far_clip: float = 1e4,
        lens_radius: float = 0.0,
        focal_distance: float = 10.0,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.to_world = (
            np.eye(4) if to_world is None else np.array(to_world, dtype=float)
        )
        self.fov = float(fov)
        self.near_clip = float(near_clip)
        self.far_clip = float(far_clip)
        self.lens_radius = float(lens_radius)
        self.focal_distance = float(focal_distance)
        self._sample_to_camera = self._build_sample_to_camera()

    def _build_sample_to_camera(self) -> np.ndarray:
        aspect = self.width / self.height
        recip = 1.0 / (self.far_clip - self.near_clip)
        cot = 1.0 / math.tan(math.radians(self.fov / 2.0))
        perspective = np.array(
            [
                [cot, 0.0, 0.0, 0.0],
                [0.0, cot, 0.0, 0.0],
                [0.0, 0.0, self.far_clip * recip, -self.near_clip * self.far_clip * recip],
                [0.0, 0.0, 1.0, 0.0],
            ]
        )
        scale = np.diag([0.5, -0.5 * aspect, 1.0, 1.0])
        translate = np.eye(4)
        translate[:3, 3] = [1.0, -1.0 / aspect, 0.0]
        return np.linalg.inv(scale @ translate @ perspective)

    def sample_ray(
        self, sample_position: Sequence[float], aperture_sample: Sequence[float]
    ) -> tuple[Ray, np.ndarray]:
        """Generate a world-space ray for a pixel-space position.

        Returns the ray and its importance weight.
        """
        near_p = _transform_point(
            self._sample_to_camera,
            (sample_position[0] / self.width, sample_position[1] / self.height, 0.0),
        )
        d = _normalized(near_p)
        inv_z = 1.0 / d[2]
        origin = _transform_point(self.to_world, (0.0, 0.0, 0.0))
        direction = _transform_vector(self.to_world, d)

        if self.lens_radius > 0.0:
            p_lens = self.lens_radius * square_to_uniform_disk(aperture_sample)
            tf = self.focal_distance / d[2]
            p_focus = d * tf
            o = np.array([p_lens[0], p_lens[1], 0.0])
            origin = _transform_point(self.to_world, o)
            d = _normalized(p_focus - o)
            direction = _transform_vector(self.to_world, d)

        ray = Ray(
            o=origin,
            d=direction,
            mint=self.near_clip * inv_z,
            maxt=self.far_clip * inv_z,
        )
        return ray, np.ones(3)

    def __str__(self) -> str:
        rows = ";\n".join(
            ", ".join(f"{value:f}" for value in row) for row in self.to_world
        )
        matrix = "[" + rows + "]"
        return (
            "ThinLensCamera[\n"
            f"  cameraToWorld = {_indent(matrix, 18)},\n"
            f"  outputSize = [{self.width}, {self.height}],\n"
            f"  fov = {self.fov:f},\n"
            f"  clip = [{self.near_clip:f}, {self.far_clip:f}],\n"
            f"  lensRadius = {self.lens_radius:f},\n"
            f"  focalDistance = {self.focal_distance:f}\n"
            "]"
        )