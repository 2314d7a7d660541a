[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ranklab"
version = "0.1.0"
description = "Message passing between ranked worker threads: point-to-point sends, broadcast, reduce and a parallel trapezoidal rule"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "message passing",
    "parallel",
    "ranks",
    "broadcast",
    "reduce",
    "trapezoidal rule",
    "numerical integration",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ranklab-examples = "ranklab.examples:main"
ranklab-trap = "ranklab.trapezoid:main"

[tool.hatch.build.targets.wheel]
packages = ["ranklab"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
