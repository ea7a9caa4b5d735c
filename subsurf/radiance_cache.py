"""Per-mesh cache of precomputed subsurface radiance, queried through k-d trees.

Each mesh with a subsurface material gets its own :class:`~subsurf.kdtree.KDTree`
of sampled surface points and their radiance. A lookup finds the cached sample
nearest to a shading point. It returns that sample's radiance, clamped to
suppress fireflies, weighted by a Gaussian falloff in distance, and weighted by
the cosine-like factor ``max(0, n . (nearest - p))``.
"""

from __future__ import annotations

import math
from typing import Hashable, Iterable, Sequence

import numpy as np

from subsurf.kdtree import KDTree

__all__ = ["RadianceCache", "gaussian_falloff"]


def gaussian_falloff(dist: float, threshold: float) -> float:
    """Gaussian weight ``exp(-dist^2 / (2 threshold^2))``."""
    return math.exp(-dist * dist / (2.0 * threshold * threshold))


class RadianceCache:
    """Nearest-sample radiance lookup, one k-d tree per mesh key."""

    def __init__(
        self,
        threshold: float = 0.5,
        max_radiance: float = 10.0,
        far_threshold: float = 0.5,
    ) -> None:
        if threshold <= 0.0:
            raise ValueError("threshold must be positive")
        self.threshold = float(threshold)
        self.max_radiance = float(max_radiance)
        self.far_threshold = float(far_threshold)
        self._trees: dict[Hashable, KDTree] = {}

    def add_mesh(
        self,
        key: Hashable,
        samples: Iterable[tuple[Sequence[float], Sequence[float]]],
    ) -> None:
        """Build (or replace) the tree for ``key`` from ``(point, radiance)`` pairs."""
        tree = KDTree(far_threshold=self.far_threshold)
        tree.build(samples)
        self._trees[key] = tree

    def lookup(
        self, key: Hashable, point: Sequence[float], normal: Sequence[float]
    ) -> np.ndarray:
        """Subsurface contribution at ``point`` with shading ``normal``.

        Meshes without a cache, and points whose nearest sample lies at or
        beyond the threshold, contribute nothing.
        """
        tree = self._trees.get(key)
        if tree is None:
            return np.zeros(3)
        p = np.asarray(point, dtype=float).reshape(3)
        n = np.asarray(normal, dtype=float).reshape(3)
        nearest_point, nearest_radiance = tree.nearest(p)
        clamped = np.minimum(nearest_radiance, self.max_radiance)
        offset = nearest_point - p
        dist = float(np.linalg.norm(offset))
        if dist >= self.threshold:
            return np.zeros_like(clamped, dtype=float)
        weight = gaussian_falloff(dist, self.threshold) * max(0.0, float(np.dot(n, offset)))
        return clamped * weight

    def __len__(self) -> int:
        return len(self._trees)

    def __contains__(self, key: object) -> bool:
        return key in self._trees