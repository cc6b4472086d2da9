[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xmrexplorer"
version = "0.1.0"
description = "Building blocks for a Monero blockchain explorer: command-line options, emission monitor, transaction JSON summaries, seed heights and formatting helpers."
requires-python = ">=3.10"
keywords = ["monero", "blockchain", "explorer", "emission", "randomx"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["xmrexplorer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
