[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyjsondom"
version = "0.1.0"
description = "A small JSON document model with memory-accounting buffers, a lenient parser and compact or indented output."
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "parser", "serializer", "dom", "embedded"]
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
packages = ["tinyjsondom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
