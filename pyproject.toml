[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kuiper"
version = "0.1.0"
description = "Building blocks for a small inference engine: allocators, buffers, tensors and layers"
requires-python = ">=3.10"
dependencies = []
keywords = ["inference", "tensor", "allocator", "buffer", "layer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kuiper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
