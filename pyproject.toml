[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treceval"
version = "0.1.0"
description = "Information retrieval evaluation measures for TREC-style rankings, relevance judgments and preferences"
requires-python = ">=3.10"
dependencies = []
keywords = ["information retrieval", "evaluation", "trec", "map", "ndcg", "bpref", "precision"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["treceval"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
