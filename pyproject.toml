[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labtools"
version = "0.1.0"
description = "Console utilities: a login shell with request limits, file copy/xor/mask/search tools, and a long-format directory lister"
requires-python = ">=3.10"
dependencies = []
keywords = ["cli", "utilities", "xor", "ls", "login", "file-tools"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Russian",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
labtools-shell = "labtools.shell:main"
labtools-fileops = "labtools.fileops_cli:main"
labtools-ls = "labtools.ls_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["labtools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
