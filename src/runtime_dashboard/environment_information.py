"""
Information about the environment the dashboard is running in.

Supplies the release version, build revision and host timezone that the
dashboard reports to its clients.
"""
import os
import time
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Optional

import yaml

from .logging_config import get_logger

logger = get_logger(__name__, component="EnvironmentInformation")

DISTRIBUTION_NAME = "runtime-dashboard"
UNKNOWN = "<unknown>"

BUILD_INFO_FILE = Path(__file__).parent / "build_info.yaml"


@dataclass(frozen=True)
class RevisionInformation:
    """Source-control identifiers of the build that produced this package."""

    commit_id: str
    commit_date: str

    def __str__(self) -> str:
        return f"{self.commit_id} @ {self.commit_date}"


@dataclass(frozen=True)
class TimeZoneInfo:
    """Host default timezone: standard-time name and raw UTC offset."""

    name: str
    raw_offset_millis: int


def get_version() -> str:
    """Return the installed version of the dashboard, or "<unknown>"."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        logger.debug(f"Distribution '{DISTRIBUTION_NAME}' not installed", method="get_version")
        return UNKNOWN


def get_build_info_path() -> Path:
    """Get the build metadata file path from environment or default."""
    return Path(os.environ.get("RUNTIME_DASHBOARD_BUILD_INFO", BUILD_INFO_FILE))


def get_revision_information() -> Optional[RevisionInformation]:
    """
    Read build revision metadata.

    The build writes a YAML file with ``commit_id`` and ``commit_date`` keys.
    Returns None when the file does not exist or either value is missing.

    Raises:
        yaml.YAMLError: If the file exists but is not valid YAML
    """
    path = get_build_info_path()
    try:
        with open(path, 'r') as f:
            # BaseLoader keeps every scalar a string, as written
            build_info = yaml.load(f, Loader=yaml.BaseLoader) or {}
    except FileNotFoundError:
        logger.debug(f"No build info at {path}", method="get_revision_information")
        return None

    if not isinstance(build_info, dict):
        raise ValueError(f"Build info in {path} must be a mapping.")

    commit_id = build_info.get("commit_id")
    commit_date = build_info.get("commit_date")
    if not commit_id or not commit_date:
        return None
    if not isinstance(commit_id, str) or not isinstance(commit_date, str):
        raise ValueError(f"commit_id and commit_date in {path} must be plain values.")

    return RevisionInformation(commit_id=commit_id, commit_date=commit_date)


def get_default_timezone() -> TimeZoneInfo:
    """
    Return the process default timezone.

    The name is the standard-time abbreviation reported by the C library
    (e.g. "EST"), not a long display name such as "Eastern Standard Time".
    The offset is the standard (non-daylight-saving) offset east of UTC.
    """
    # time.timezone is seconds *west* of UTC
    return TimeZoneInfo(name=time.tzname[0], raw_offset_millis=-time.timezone * 1000)
