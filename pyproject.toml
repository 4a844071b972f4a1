[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vibes"
version = "0.1.0"
description = "A WSGI web framework that carries response status as emojis, logs with feelings and routes with vibey HTTP methods"
requires-python = ">=3.10"
keywords = ["wsgi", "web", "framework", "emoji", "middleware", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "werkzeug",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
vibes-examples = "vibes.examples:main"
vibes-upload-docs = "vibes.uploader:main"

[tool.hatch.build.targets.wheel]
packages = ["vibes"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
