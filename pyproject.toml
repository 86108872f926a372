[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtosal"
version = "1.0.0"
description = "RTOS-style threads, semaphores, mutexes, message queues and mailboxes with millisecond timeouts"
requires-python = ">=3.10"
dependencies = []
keywords = ["rtos", "osal", "threads", "semaphore", "mutex", "message-queue", "mailbox"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rtosal-demo = "rtosal.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["rtosal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
