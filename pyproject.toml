[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "transitplanner"
version = "0.1.0"
description = "Multi-modal route planning over OpenStreetMap data and CSV bus systems, with KML export"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "openstreetmap",
    "routing",
    "dijkstra",
    "transit",
    "bus",
    "kml",
    "dsv",
    "csv",
    "xml",
]
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
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kmlout = "transitplanner.kmlout:main"

[tool.hatch.build.targets.wheel]
packages = ["transitplanner"]

[tool.pytest.ini_options]
addopts = "-ra"
