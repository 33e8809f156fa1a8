from __future__ import annotations

import importlib.metadata

UNKNOWN_VERSION = "0.0.0+unknown"


def get_version() -> str:
    try:
        return importlib.metadata.version("kestrel")
    except importlib.metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


def get_version_string() -> str:
    return f"kestrel v{get_version()}"
