[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apigen"
version = "0.1.0"
description = "Mock HTTP API server: register canned JSON responses on any port at runtime"
requires-python = ">=3.10"
keywords = ["mock", "http", "api", "stub", "testing", "aiohttp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing :: Mocking",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "aiohttp>=3.9",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.23",
]

[project.scripts]
apigen = "apigen.app:main"

[tool.hatch.build.targets.wheel]
packages = ["apigen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
