[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aeadmodes"
version = "0.1.0"
description = "Authenticated encryption modes (EAX, online EAX, MGM, XSalsa20Poly1305) and the Deoxys-BC tweakable block cipher"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["aead", "eax", "mgm", "xsalsa20poly1305", "deoxys-bc", "authenticated-encryption"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["aeadmodes"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
