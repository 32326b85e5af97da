[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "banking"
version = "0.1.0"
description = "In-memory banking service with a JSON HTTP API for accounts, deposits, withdrawals and transfers"
requires-python = ">=3.10"
keywords = ["banking", "accounts", "transfers", "flask", "rest", "in-memory"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business :: Financial :: Accounting",
]
dependencies = [
    "flask",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
banking-server = "banking.app:main"
invert-tree = "banking.invert_tree:main"

[tool.hatch.build.targets.wheel]
packages = ["banking"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
