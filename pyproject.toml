[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vgmck"
version = "0.1.0"
description = "Building blocks for compiling MML music into VGM files, and a reader that turns VGM files back into plain data"
requires-python = ">=3.10"
dependencies = []
keywords = ["vgm", "mml", "chiptune", "music", "sound chip", "gd3"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vgmck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
