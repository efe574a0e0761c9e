"""
Version information for the ENS profile SDK.

Installed distributions report their metadata version; a source checkout
reads ``[project].version`` from the repository's pyproject.toml.
"""
import importlib.metadata
import pathlib

import tomli

DEFAULT_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).parent.parent / "pyproject.toml"

try:
    __version__ = importlib.metadata.version("ensprofile-sdk")
except importlib.metadata.PackageNotFoundError:
    try:
        with PYPROJECT_PATH.open("rb") as f:
            __version__ = tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        __version__ = DEFAULT_VERSION
