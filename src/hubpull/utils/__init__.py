"""Utility modules for hubpull."""

from hubpull.utils.config import HubPullConfig, get_config, load_config, set_config
from hubpull.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    EngineError,
    HubPullError,
    InvalidReferenceError,
    SelectionOutOfRangeError,
    SessionError,
)
from hubpull.utils.logging import configure_logging, get_logger, get_logger_with_context
from hubpull.utils.tracing import CallTracer, get_tracer, set_tracer

__all__ = [
    "HubPullConfig",
    "get_config",
    "load_config",
    "set_config",
    "AuthenticationError",
    "ConfigurationError",
    "EngineError",
    "HubPullError",
    "InvalidReferenceError",
    "SelectionOutOfRangeError",
    "SessionError",
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    "CallTracer",
    "get_tracer",
    "set_tracer",
]
