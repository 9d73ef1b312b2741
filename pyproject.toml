[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "capicore"
version = "0.1.0"
description = "Core pieces for inter-process service interfaces: typed values, serialization streams, stubs, INI configuration and a factory-based runtime."
requires-python = ">=3.10"
dependencies = []
keywords = ["ipc", "middleware", "proxy", "stub", "serialization", "runtime", "configuration"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["capicore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
