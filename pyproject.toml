[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tsnservice"
version = "0.1.0"
description = "TSN configuration: gate control list schedules, MSTP table updates and a key/value configuration store"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["tsn", "time-sensitive networking", "gnmi", "mstp", "gate control list"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Telecommunications Industry",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tsnservice"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
