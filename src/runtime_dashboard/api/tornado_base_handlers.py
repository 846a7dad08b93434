"""
Base Tornado handlers for the dashboard API.

Provides JSON error formatting, CORS headers, and the adapter that serves
an AsyncJsonResponder through Tornado routing.
"""
import asyncio
import json
import traceback

import tornado.web

from ..logging_config import get_logger

logger = get_logger(__name__, component="APIHandler")


class BaseAPIHandler(tornado.web.RequestHandler):
    """Base handler for JSON API endpoints with common functionality."""

    def set_default_headers(self):
        """Set CORS and content-type headers."""
        self.set_header("Content-Type", "application/json")
        self.set_header("Access-Control-Allow-Origin", "*")
        self.set_header("Access-Control-Allow-Methods", "GET, OPTIONS")
        self.set_header("Access-Control-Allow-Headers", "Content-Type")

    def options(self, *args, **kwargs):
        """Handle CORS preflight requests."""
        self.set_status(204)
        self.finish()

    def write_json(self, data, status_code=200):
        """Write JSON response with proper status code."""
        self.set_status(status_code)
        self.finish(json.dumps(data, indent=2, default=str))

    def write_error(self, status_code, **kwargs):
        """Custom error response in JSON format."""
        error_data = {
            "error": {
                "code": status_code,
                "message": self._reason or "Unknown error"
            }
        }

        # Include exception details in debug mode
        if self.settings.get("serve_traceback") and "exc_info" in kwargs:
            error_data["error"]["traceback"] = "".join(
                traceback.format_exception(*kwargs["exc_info"])
            )

        self.set_header("Content-Type", "application/json")
        self.finish(json.dumps(error_data, indent=2))


class HealthCheckHandler(BaseAPIHandler):
    """Simple health check endpoint."""

    async def get(self):
        """Return health status."""
        self.write_json({
            "status": "ok",
            "service": "runtime-dashboard"
        })


class JsonResponderHandler(BaseAPIHandler):
    """
    Serves GET requests by delegating to an AsyncJsonResponder.

    The responder's JSON string is written verbatim as the response body.
    """

    def initialize(self, responder, gateway=None):
        """Store the responder and the gateway passed to every call."""
        self.responder = responder
        self.gateway = gateway

    async def get(self, *args, **kwargs):
        """Collect path and query parameters and write the responder's answer."""
        path_params = {key: value for key, value in kwargs.items() if value is not None}
        # Last value wins; undecodable bytes are replaced rather than rejected
        query_params = {
            name: values[-1].decode("utf-8", errors="replace")
            for name, values in self.request.query_arguments.items()
            if values
        }

        future = self.responder.handle(path_params, query_params, self.gateway)
        try:
            body = await asyncio.wrap_future(future)
        except Exception as e:
            logger.error(
                f"Responder failed: {e}",
                method="get",
                exc_info=True,
                responder=type(self.responder).__name__,
                path=self.request.path
            )
            raise tornado.web.HTTPError(500, reason="Internal server error") from e

        self.set_status(200)
        self.finish(body)
