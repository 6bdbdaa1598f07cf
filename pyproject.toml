[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "rpcpatterns"
version = "0.1.0"
description = "The four gRPC call patterns (unary, server streaming, client streaming, bidirectional) as small working servers and clients"
requires-python = ">=3.10"
dependencies = [
    "grpcio",
]
keywords = ["grpc", "rpc", "streaming", "protobuf", "examples"]
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
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rpcpatterns = "rpcpatterns.cli:main"

[tool.setuptools.packages.find]
include = ["rpcpatterns*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
