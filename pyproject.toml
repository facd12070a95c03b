[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "embeddedio"
version = "0.1.0"
description = "Hardware-independent I/O service abstractions: tick timer scheduling, communication and CAN dispatch, byte FIFOs and CRC-32"
requires-python = ">=3.10"
dependencies = []
keywords = ["embedded", "timer", "scheduler", "can", "fifo", "crc32", "gpio", "pwm"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["embeddedio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
