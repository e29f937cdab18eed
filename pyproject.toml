[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "routable"
version = "0.2.0"
description = "Declarative route sets with href generation and typed path and query parameters"
requires-python = ">=3.10"
dependencies = []
keywords = ["routing", "router", "href", "url", "path-parameters", "query-parameters", "web"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
routable-demo-flat = "routable.demo_flat:main"
routable-demo-nested = "routable.demo_nested:main"

[tool.hatch.build.targets.wheel]
packages = ["routable"]

[tool.hatch.build.targets.sdist]
include = ["routable", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
