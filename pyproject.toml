[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "buddyround"
version = "1.0.0"
description = "Terminal simulator of Round Robin scheduling over a Buddy System memory allocator"
requires-python = ">=3.10"
dependencies = []
keywords = ["buddy-system", "round-robin", "scheduling", "operating-systems", "simulation", "education"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
buddyround = "buddyround.menus:main"

[tool.setuptools.packages.find]
include = ["buddyround*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
