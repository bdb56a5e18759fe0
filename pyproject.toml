[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kaiki"
version = "0.0.1"
description = "Visual regression testing toolkit: comparison results, storage key layout, git-based key generation and GitHub/Slack notifications"
requires-python = ">=3.10"
keywords = ["visual-regression", "testing", "image-diff", "reg-suit"]
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
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Testing",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["kaiki"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
