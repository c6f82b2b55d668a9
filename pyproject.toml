[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "samodcore"
version = "0.3.1"
description = "Identifiers, storage keys, IO task descriptions, ephemeral session tracking and the CBOR wire protocol for automerge-repo style document sync"
requires-python = ">=3.10"
dependencies = [
    "cbor2",
]
keywords = ["automerge", "crdt", "sync", "cbor", "wire-protocol", "local-first"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["samodcore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
