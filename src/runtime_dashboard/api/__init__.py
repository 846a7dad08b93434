"""
API package initialization.

Exports all API handlers and responders for easy importing.
"""
from .json_responder import AsyncJsonResponder
from .dashboard_config_handler import (
    ConfigPayload,
    ConfigSerializationError,
    DashboardConfigHandler,
    create_config_json
)
from .tornado_base_handlers import (
    BaseAPIHandler,
    HealthCheckHandler,
    JsonResponderHandler
)

__all__ = [
    'AsyncJsonResponder',
    'ConfigPayload',
    'ConfigSerializationError',
    'DashboardConfigHandler',
    'create_config_json',
    'BaseAPIHandler',
    'HealthCheckHandler',
    'JsonResponderHandler',
]
