[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "topology"
version = "0.1.0"
description = "Content topology, classification and deduplication library: SimHash, MinHash, LSH, TF-IDF/BM25, clustering, topic discovery and an SQLite artifact cache"
requires-python = ">=3.10"
dependencies = [
    "regex",
]
keywords = [
    "simhash",
    "minhash",
    "lsh",
    "deduplication",
    "tf-idf",
    "bm25",
    "clustering",
    "taxonomy",
    "nmf",
    "topic-modeling",
    "url-normalization",
    "string-similarity",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
    "Topic :: Text Processing :: Linguistic",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["topology"]

[tool.hatch.build.targets.sdist]
include = [
    "topology",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
