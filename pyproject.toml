[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arenalloc"
version = "1.0.0"
description = "A block-based arena allocator with alignment, temporary checkpoints and usage reporting"
requires-python = ">=3.10"
dependencies = []
keywords = ["arena", "allocator", "memory", "region", "bump allocator"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
arenalloc-example = "arenalloc.example:main"

[tool.hatch.build.targets.wheel]
packages = ["arenalloc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
