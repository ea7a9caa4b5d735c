[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "subsurf"
version = "0.1.0"
description = "Sampling warps, reflectance models, a subsurface-scattering BSSRDF, a thin-lens camera and a k-d tree radiance cache for ray tracing"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "ray tracing",
    "rendering",
    "subsurface scattering",
    "bssrdf",
    "monte carlo",
    "importance sampling",
    "kd-tree",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["subsurf"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
