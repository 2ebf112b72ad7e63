[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gbvms"
version = "0.1.0"
description = "GB/T 28181 video platform helpers: configuration, device records, media-server webhook payloads and playback addresses"
requires-python = ">=3.10"
dependencies = []
keywords = ["gb28181", "sip", "video", "surveillance", "zlmediakit", "webhook", "rtmp", "rtsp"]
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
    "Topic :: Multimedia :: Video",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gbvms"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
