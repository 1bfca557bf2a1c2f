"""Version lookup for the running backend."""

import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PACKAGE_NAME = "ward-aqi"


def get_version() -> str:
    """Get the application version.

    Checks the /app/VERSION file (mounted in containers), then the
    APP_VERSION environment variable, then the installed package metadata.
    Returns 'unknown' if none is available.
    """
    version_file = Path("/app/VERSION")
    if version_file.exists():
        try:
            file_version = version_file.read_text().strip()
            if file_version:
                return file_version
        except OSError:
            pass

    env_version = os.environ.get("APP_VERSION")
    if env_version:
        return env_version

    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"
