[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gigscraper"
version = "0.1.0"
description = "Walk a freelance marketplace's category menu in a running Chrome and log the details of unscraped gigs"
requires-python = ">=3.10"
keywords = ["scraper", "chrome", "devtools", "gigs", "marketplace", "postgresql"]
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
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "pyyaml>=6.0",
    "sqlalchemy>=2.0",
    "websocket-client>=1.6",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
gigscraper = "gigscraper.app:main"

[tool.hatch.build.targets.wheel]
packages = ["gigscraper"]

[tool.hatch.build.targets.sdist]
include = ["gigscraper", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
