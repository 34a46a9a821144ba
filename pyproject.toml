[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sedekahje"
version = "0.1.0"
description = "HTTP API serving a directory of mosques, surau and other institutions with their donation QR codes"
requires-python = ">=3.10"
keywords = ["donation", "qr", "mosque", "institutions", "rest-api", "mongodb", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
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
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "flask>=2.3",
    "pymongo>=4.6",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
sedekahje-server = "sedekahje.app:main"
sedekahje-seed = "sedekahje.seed:main"

[tool.hatch.build.targets.wheel]
packages = ["sedekahje"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
