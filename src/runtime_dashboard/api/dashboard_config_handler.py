"""Dashboard configuration endpoint."""
import json
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .. import environment_information
from ..environment_information import RevisionInformation
from ..logging_config import get_logger
from .json_responder import AsyncJsonResponder

logger = get_logger(__name__, component="DashboardConfig")

DASHBOARD_CONFIG_REST_PATH = "/config"


class ConfigSerializationError(RuntimeError):
    """The dashboard configuration could not be built at startup."""


@dataclass(frozen=True)
class ConfigPayload:
    """Parameters that tell dashboard clients how to poll and render."""

    refresh_interval: int
    timezone_offset: int
    timezone_name: str
    version: str
    revision: Optional[RevisionInformation] = None

    def to_json(self) -> str:
        fields = {
            "refresh-interval": self.refresh_interval,
            "timezone-offset": self.timezone_offset,
            "timezone-name": self.timezone_name,
            "flink-version": self.version,
        }
        # Omitted entirely when unknown, never null
        if self.revision is not None:
            fields["flink-revision"] = str(self.revision)
        return json.dumps(fields, separators=(",", ":"))


def create_config_json(refresh_interval: int) -> str:
    """
    Build the configuration document from the current environment.

    Args:
        refresh_interval: Suggested client polling interval in milliseconds

    Returns:
        JSON object with refresh-interval, timezone-offset, timezone-name,
        flink-version and, when build metadata is available, flink-revision
    """
    timezone = environment_information.get_default_timezone()
    payload = ConfigPayload(
        refresh_interval=refresh_interval,
        timezone_offset=timezone.raw_offset_millis,
        timezone_name=timezone.name,
        version=environment_information.get_version(),
        revision=environment_information.get_revision_information(),
    )
    return payload.to_json()


class DashboardConfigHandler(AsyncJsonResponder):
    """
    Responder that returns the parameters that define how the asynchronous
    requests against the dashboard should behave: the refresh interval, the
    timezone of server timestamps and the build that is running.

    The document is computed once at construction and served unchanged.
    """

    def __init__(self, executor: Executor, refresh_interval: int):
        """
        Args:
            executor: Executor required by the responder contract (unused)
            refresh_interval: Client polling interval in milliseconds, >= 0

        Raises:
            ValueError: If refresh_interval is not a non-negative integer
            ConfigSerializationError: If the document cannot be built
        """
        super().__init__(executor)

        if isinstance(refresh_interval, bool) or not isinstance(refresh_interval, int):
            raise ValueError(f"refresh_interval must be an integer, got {refresh_interval!r}")
        if refresh_interval < 0:
            raise ValueError(f"refresh_interval must be non-negative, got {refresh_interval}")

        try:
            self._config_string = create_config_json(refresh_interval)
        except Exception as e:
            logger.critical(f"Failed to build dashboard config: {e}", method="__init__")
            raise ConfigSerializationError(str(e)) from e

        logger.info(f"Dashboard config ready: {self._config_string}", method="__init__")

    @property
    def config_string(self) -> str:
        return self._config_string

    def get_paths(self) -> set[str]:
        return {DASHBOARD_CONFIG_REST_PATH}

    def handle(
        self,
        path_params: Mapping[str, str],
        query_params: Mapping[str, str],
        gateway: Any,
    ) -> "Future[str]":
        return self.completed(self._config_string)
