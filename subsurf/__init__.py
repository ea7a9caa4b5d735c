"""Sampling warps, reflectance functions, a subsurface material, a thin-lens camera and a k-d tree radiance cache."""

__version__ = "0.1.0"
__all__ = ["warp", "reflectance", "bssrdf", "camera", "kdtree", "radiance_cache"]