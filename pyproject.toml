[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nri"
version = "0.1.0"
description = "Node Resource Interface data model, plugin ownership tracking and connection multiplexing for container runtimes"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "containers",
    "container-runtime",
    "nri",
    "oci",
    "cgroups",
    "multiplexing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels :: Linux",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nri"]

[tool.hatch.build.targets.sdist]
include = ["nri", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
