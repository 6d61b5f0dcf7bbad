[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "secpk1"
version = "0.1.0"
description = "Pure-Python secp256k1 curve arithmetic, public keys and ECDSA signatures with RFC 6979 nonces"
requires-python = ">=3.10"
dependencies = []
keywords = ["secp256k1", "ecdsa", "elliptic-curve", "rfc6979", "hmac", "sha256", "cryptography"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["secpk1"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
