[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixcrumb"
version = "0.1.0"
description = "Experimental bitplane compression for paletted images using 2x2 pixel crumbs, delta coding, literal runs and exp-Golomb zero runs"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["image", "compression", "bitplane", "rle", "exp-golomb", "paletted", "png"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.scripts]
pixcrumb = "pixcrumb.cli:main"
pixcrumb-crumbhist = "pixcrumb.crumbhist:main"

[tool.hatch.build.targets.wheel]
packages = ["pixcrumb"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
