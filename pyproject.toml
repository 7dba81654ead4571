[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "soundthemed"
version = "0.1.0"
description = "Freedesktop sound theme daemon that plays event sounds for USB, charger, battery, volume and compositor events"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["sound", "freedesktop", "sound-theme", "daemon", "pipewire", "desktop"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Desktop Environment",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
soundthemed = "soundthemed.daemon:main"

[tool.hatch.build.targets.wheel]
packages = ["soundthemed"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
