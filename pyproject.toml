[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ikev2kit"
version = "0.1.0"
description = "IKEv2 payload encoding and key derivation: security associations, traffic selectors, Diffie-Hellman, PRF, integrity and encryption transforms"
requires-python = ">=3.10"
keywords = ["ikev2", "ipsec", "ike", "key-exchange", "diffie-hellman", "prf", "aes-cbc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Networking",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ikev2kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
