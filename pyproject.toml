[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fykamed"
version = "0.1.0"
description = "Terminal system for managing a clinic's doctors, patients, care queue and daily reports stored in CSV files"
requires-python = ">=3.10"
keywords = ["clinic", "hospital", "patients", "doctors", "triage", "csv", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Healthcare Industry",
    "Natural Language :: Portuguese (Brazilian)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fykamed = "fykamed.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fykamed"]

[tool.pytest.ini_options]
addopts = "-ra"
