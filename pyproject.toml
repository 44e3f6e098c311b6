[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kocha"
version = "0.1.0"
description = "Building blocks for web applications: flash messages, background events, unit fallbacks, MIME formats and a command launcher"
requires-python = ">=3.10"
dependencies = []
keywords = ["web", "framework", "events", "flash", "launcher"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kocha = "kocha.cli:main"
kocha-generate = "kocha.cli:generate_main"

[tool.hatch.build.targets.wheel]
packages = ["kocha"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
