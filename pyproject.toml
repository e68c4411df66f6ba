[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wfsdk"
version = "1.0.0"
description = "Workflow client, worker and authoring helpers for a durable task workflow engine"
requires-python = ">=3.10"
keywords = ["workflow", "durable", "orchestration", "activities", "distributed"]
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
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
wfsdk-check-lint-version = "wfsdk.lintcheck:main"

[tool.hatch.build.targets.wheel]
packages = ["wfsdk"]

[tool.hatch.build.targets.sdist]
include = ["wfsdk", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
