"""A k-d tree over surface points that carry a cached radiance value.

Every node stores one representative point and the average radiance of all
points in its subtree. A leaf holds up to ``max_points_per_leaf`` points;
only the first one is kept as its position, and their radiances are averaged.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

__all__ = ["KDNode", "KDTree"]


@dataclass
class KDNode:
    """A tree node: a point, the mean radiance of its subtree and two children."""

    point: np.ndarray
    radiance: np.ndarray
    left: Optional["KDNode"] = None
    right: Optional["KDNode"] = None


@dataclass
class _Best:
    dist: float
    point: Optional[np.ndarray]
    radiance: np.ndarray


class KDTree:
    """Nearest-neighbour lookup of cached radiance over 3D points.

    If ``far_threshold`` is given, a node farther than that from the query
    overrides the returned radiance with its subtree average while the search
    unwinds, so distant queries receive a smoothed value.
    """

    def __init__(
        self, max_points_per_leaf: int = 10, far_threshold: Optional[float] = None
    ) -> None:
        if max_points_per_leaf < 1:
            raise ValueError("max_points_per_leaf must be at least 1")
        self.max_points_per_leaf = int(max_points_per_leaf)
        self.far_threshold = None if far_threshold is None else float(far_threshold)
        self.root: Optional[KDNode] = None

    def build(self, points: Iterable[tuple[Sequence[float], Sequence[float]]]) -> None:
        """Build the tree from ``(point, radiance)`` pairs."""
        items = [
            (np.asarray(p, dtype=float).reshape(3), np.asarray(r, dtype=float))
            for p, r in points
        ]
        if not items:
            raise ValueError("cannot build a k-d tree from no points")
        self.root = self._build(items, 0)

    def _build(
        self, items: list[tuple[np.ndarray, np.ndarray]], depth: int
    ) -> Optional[KDNode]:
        if not items:
            return None
        average = np.mean([radiance for _, radiance in items], axis=0)
        if len(items) <= self.max_points_per_leaf:
            return KDNode(items[0][0].copy(), average)

        axis = depth % 3
        items = sorted(items, key=lambda item: item[0][axis])
        median = len(items) // 2
        node = KDNode(items[median][0].copy(), average)
        node.left = self._build(items[:median], depth + 1)
        node.right = self._build(items[median + 1 :], depth + 1)
        return node

    def nearest(self, query: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
        """Return the closest stored point to ``query`` and its radiance."""
        if self.root is None:
            raise LookupError("the k-d tree has not been built")
        q = np.asarray(query, dtype=float).reshape(3)
        best = _Best(math.inf, None, np.zeros_like(self.root.radiance))
        self._search(self.root, q, 0, best)
        return best.point.copy(), best.radiance.copy()

    def _search(self, node: Optional[KDNode], q: np.ndarray, depth: int, best: _Best) -> None:
        if node is None:
            return
        axis = depth % 3
        dist = float(np.linalg.norm(node.point - q))
        if best.dist > dist:
            best.dist = dist
            best.point = node.point
            best.radiance = node.radiance

        offset = q[axis] - node.point[axis]
        near, far = (node.left, node.right) if offset < 0 else (node.right, node.left)
        self._search(near, q, depth + 1, best)
        if abs(offset) < best.dist:
            self._search(far, q, depth + 1, best)

        if self.far_threshold is not None and dist > self.far_threshold:
            best.radiance = node.radiance