[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pxcli"
version = "0.1.0"
description = "Client-side helpers for a storage cluster: alerts, volumes, nodes, pods, roles and output formatting"
requires-python = ">=3.11"
keywords = ["storage", "volumes", "alerts", "replication", "roles", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pxcli"]

[tool.pytest.ini_options]
addopts = "-ra"
