[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reqlog"
version = "0.1.0"
description = "A small WSGI application with structured, single-line JSON request logging"
requires-python = ">=3.10"
dependencies = []
keywords = ["wsgi", "logging", "json", "middleware", "request-log"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
reqlog = "reqlog.server:main"

[tool.hatch.build.targets.wheel]
packages = ["reqlog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
