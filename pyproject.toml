[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "willow88"
version = "0.1.0"
description = "Assembler and emulator for the Willow88 8-bit fantasy computer"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "assembler", "8-bit", "fantasy-console", "virtual-machine"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
w88 = "willow88.machine:main"
w88-asm = "willow88.assembler:main"

[tool.hatch.build.targets.wheel]
packages = ["willow88"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
