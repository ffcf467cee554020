[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshscan"
version = "0.1.0"
description = "Mesh and laser-profile scanning utilities: STL reading, k-d trees, plane fitting, rotations, trajectory I/O and raw image files"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["stl", "mesh", "kd-tree", "laser scanner", "trajectory", "plane fitting", "b-spline", "quaternion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["meshscan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
