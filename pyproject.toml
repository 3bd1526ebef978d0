[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuzzdist"
version = "0.1.0"
description = "String distance and similarity metrics: Levenshtein, Hamming and Jaro, with edit operations"
requires-python = ">=3.10"
dependencies = []
keywords = ["levenshtein", "hamming", "jaro", "edit distance", "string similarity", "fuzzy matching"]
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
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["fuzzdist"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
