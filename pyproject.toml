[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corolib"
version = "0.1.0"
description = "Coroutine primitives without an event loop: tasks, sync_wait, a thread pool, events, latches, mutexes and ring buffers."
requires-python = ">=3.10"
dependencies = []
keywords = ["coroutine", "async", "thread-pool", "event", "latch", "mutex", "ring-buffer"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["corolib"]

[tool.pytest.ini_options]
addopts = "-ra"
