"""
Base contract for dashboard JSON responders.

A responder declares the URL paths it serves and produces a JSON string for
each request as a future, so the web layer can dispatch by path without
knowing how a given responder computes its answer.
"""
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future
from typing import Any, Mapping


class AsyncJsonResponder(ABC):
    """
    Handles JSON requests for one or more URL paths.

    Implementations that need to do blocking work should submit it to
    ``self.executor`` rather than run it on the request-handling thread.
    """

    def __init__(self, executor: Executor):
        """
        Args:
            executor: Executor for blocking work done on behalf of requests
        """
        self.executor = executor

    @abstractmethod
    def get_paths(self) -> set[str]:
        """Return the URL paths this responder serves."""

    @abstractmethod
    def handle(
        self,
        path_params: Mapping[str, str],
        query_params: Mapping[str, str],
        gateway: Any,
    ) -> "Future[str]":
        """
        Produce the JSON response for a request.

        Args:
            path_params: Values captured from the URL path
            query_params: Query string arguments
            gateway: Handle to the cluster leader

        Returns:
            Future that resolves to the JSON-encoded response body. Callers
            must not assume it is done when this method returns.
        """

    @staticmethod
    def completed(value: str) -> "Future[str]":
        """Wrap an available value in an already resolved future."""
        future = Future()
        future.set_result(value)
        return future
