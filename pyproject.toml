[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minkit"
version = "0.1.0"
description = "Small message-driven objects for timing, lists, dictionaries, audio buffers, host facts, text buffers and autolinking"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "signal", "timer", "convolution", "autolink", "buffer"]
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
    "Topic :: Multimedia",
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["minkit"]

[tool.pytest.ini_options]
addopts = "-ra"
