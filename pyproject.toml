[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ddnsutil"
version = "0.1.0"
description = "Helpers for dynamic DNS clients: cloud API request signing, IP caching, address checks, DNS lookups, version comparison and self-update."
requires-python = ">=3.10"
keywords = [
    "ddns",
    "dns",
    "dynamic-dns",
    "signature",
    "aliyun",
    "huawei",
    "tencent",
    "baidu",
    "volcengine",
    "self-update",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "requests>=2.28",
    "bcrypt>=4.0",
    "dnspython>=2.3",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["ddnsutil"]

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
ignore_missing_imports = true
