# subsurf

Building blocks for a small Monte Carlo renderer with subsurface scattering:
sampling warps, reflectance functions, a subsurface material, a thin-lens
camera and a k-d tree cache of precomputed radiance. Vectors and colours are
NumPy arrays; functions accept any 2- or 3-element sequence.

## Modules

- `subsurf.warp`: warps from the unit square to other sampling domains, each
  with a matching `*_pdf` density function. These are uniform square
  (`square_to_uniform_square`), tent (`square_to_tent`), polar disk
  (`square_to_uniform_disk`), concentric disk (`concentric_sample_disk`,
  `square_to_uniform_disk_concentric`), triangle
  (`square_to_uniform_triangle`), sphere (`square_to_uniform_sphere`),
  hemisphere (`square_to_uniform_hemisphere`), cosine-weighted hemisphere
  (`square_to_cosine_hemisphere`) and Beckmann microfacet normals
  (`square_to_beckmann`).
- `subsurf.reflectance`: `refract` (Snell's law in the local frame, with a
  NaN z component under total internal reflection), `fresnel` (unpolarised
  dielectric Fresnel, lit from either side), `fresnel_schlick`, Smith's `g1`
  shadowing term, `beckmann_ndf` and `henyey_greenstein` (with `g` clamped to
  [-1, 1]).
- `subsurf.bssrdf`: the `BSSRDF` material, the `BSDFQueryRecord` it is queried
  with, the `Measure` enum and the `cos_theta` helper. `eval` is zero unless
  the record's measure is `Measure.SOLID_ANGLE`. It otherwise returns the
  albedo times the sum of `single_scattering` and `diffusion`. `sample` draws
  `wo` from the cosine-weighted hemisphere, writes it into the record and
  returns `eval * cos / pdf`. It returns zero at grazing angles (cosine below
  0.01).
- `subsurf.camera`: `ThinLensCamera.sample_ray(sample_position,
  aperture_sample)` takes a pixel-space position and returns a `(Ray, weight)`
  pair. It adds depth of field when `lens_radius` is positive.
- `subsurf.kdtree`: `KDTree.build` takes `(point, radiance)` pairs and
  `KDTree.nearest` returns the closest stored point and its radiance. Each
  node keeps the mean radiance of its subtree. With `far_threshold` set, nodes
  farther than that from the query replace the returned radiance with their
  average. Building from no points raises `ValueError`, and querying an
  unbuilt tree raises `LookupError`.
- `subsurf.radiance_cache`: `RadianceCache` keeps one `KDTree` per mesh key.
  `lookup(key, point, normal)` clamps the nearest sample's radiance to
  `max_radiance` and weights it by `gaussian_falloff(dist, threshold)` and by
  `max(0, normal . (nearest - point))`. It returns zero for unknown keys and
  for samples at or beyond `threshold`.

## Installation

```
pip install .
```

To also install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np

from subsurf.warp import square_to_cosine_hemisphere, square_to_cosine_hemisphere_pdf
from subsurf.reflectance import fresnel, henyey_greenstein
from subsurf.bssrdf import BSSRDF, BSDFQueryRecord, Measure

# Draw a direction from the cosine-weighted hemisphere and get its density.
wo = square_to_cosine_hemisphere((0.3, 0.7))
print(wo, square_to_cosine_hemisphere_pdf(wo))

# Dielectric Fresnel reflectance at normal incidence, and a phase function value.
print(fresnel(1.0, 1.0, 1.5))
print(henyey_greenstein(0.5, -0.1))

# Evaluate the subsurface material for a pair of directions.
material = BSSRDF(sigma_a=0.1, sigma_s=1.0, eta=1.5, alpha=0.1, albedo=0.8)
rec = BSDFQueryRecord(wi=np.array([0.0, 0.0, 1.0]), wo=wo, measure=Measure.SOLID_ANGLE)
print(material.eval(rec))
print(material)
```

### Generating camera rays

```python
from subsurf.camera import ThinLensCamera

camera = ThinLensCamera(width=640, height=480, fov=45.0, lens_radius=0.05, focal_distance=5.0)
ray, weight = camera.sample_ray((320.0, 240.0), (0.5, 0.5))
print(ray.o, ray.d, ray.mint, ray.maxt)
```

### Caching subsurface radiance

```python
from subsurf.radiance_cache import RadianceCache

cache = RadianceCache(threshold=0.5, max_radiance=10.0, far_threshold=0.5)
cache.add_mesh("bunny", [((0.0, 0.0, 0.0), (1.0, 0.5, 0.25))])
print("bunny" in cache, len(cache))
print(cache.lookup("bunny", (0.1, 0.0, 0.0), (-1.0, 0.0, 0.0)))
```

## What this package does not do

It provides components only. It has no scene description or loader, no
meshes, emitters or ray-scene intersection, no integrator that traces paths,
and no image output or command-line renderer. To fill a `RadianceCache`, you
sample surface points and evaluate the material yourself, then pass the
`(point, radiance)` pairs to `add_mesh`.