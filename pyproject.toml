[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raftrack"
version = "0.1.0"
description = "Follower progress and in-flight message tracking for Raft leaders"
requires-python = ">=3.10"
dependencies = []
keywords = ["raft", "consensus", "replication", "flow-control", "distributed"]
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
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["raftrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
