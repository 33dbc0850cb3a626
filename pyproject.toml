[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shootdns"
version = "0.1.0"
description = "Admission logic for a shoot DNS service extension: provider config types, validation, mutation and error classification"
requires-python = ">=3.10"
dependencies = []
keywords = ["dns", "admission", "webhook", "validation", "mutation", "shoot"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shootdns"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
