[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vuengine"
version = "0.1.0"
description = "Rendering-engine building blocks: simulated memory allocators, camera math, transforms, simple physics and mesh utilities"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["rendering", "camera", "allocator", "mesh", "obj", "3d", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vuengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
