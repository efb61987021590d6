[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mazewalk"
version = "1.0.0"
description = "A first-person 3D maze walker with a generated maze, collisions, a day cycle and moving lights"
requires-python = ">=3.10"
keywords = ["maze", "opengl", "game", "3d", "procedural-generation", "recursive-division"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
    "pyglet",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mazewalk = "mazewalk.app:main"

[tool.hatch.build.targets.wheel]
packages = ["mazewalk"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
