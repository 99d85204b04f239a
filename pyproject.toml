[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cyphertools"
version = "0.1.0"
description = "Tool handlers for running Cypher queries, inspecting graph schemas and listing GDS procedures"
requires-python = ">=3.10"
dependencies = []
keywords = ["cypher", "graph", "neo4j", "schema", "tools", "gds"]
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
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cyphertools"]

[tool.pytest.ini_options]
addopts = "-ra"
