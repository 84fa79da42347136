[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flocksim"
version = "0.2.17"
description = "Boids flocking simulation on a wrapping square world with blue-noise initial placement"
requires-python = ">=3.10"
dependencies = []
keywords = ["boids", "flocking", "simulation", "poisson-disk", "blue-noise", "artificial-life"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flocksim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
