[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swervecan"
version = "0.1.0"
description = "CAN frame encoding for a four-wheel swerve drive and twist estimation from wheel feedback"
requires-python = ">=3.10"
dependencies = []
keywords = ["can", "swerve", "robotics", "kinematics", "twist"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["swervecan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
