[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "addresskit"
version = "1.15.4"
description = "Request building and response parsing for US street, ZIP code, extract, reverse geocoding and autocomplete address APIs."
requires-python = ">=3.10"
dependencies = []
keywords = ["address", "verification", "geocoding", "zipcode", "autocomplete", "api-client"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["addresskit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
