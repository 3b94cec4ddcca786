[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cwcontracts"
version = "0.1.0"
description = "Queue, query-queue and IBC reflect contract logic, reflect and IBC reflect-send message and state types, and an in-memory contract runtime"
requires-python = ">=3.10"
dependencies = []
keywords = ["smart-contracts", "ibc", "reflect", "queue", "blockchain", "simulation"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cwcontracts"]

[tool.pytest.ini_options]
addopts = "-ra"
