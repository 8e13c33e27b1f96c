"""
Integration clients for external services.

Includes clients for:
- filess.io REST API
"""

from .exceptions import (
    FilessAPIError,
    FilessConfigurationError,
    FilessError,
    FilessSerializationError,
    FilessTransportError,
)
from .filess_client import APIResponse, FilessClient

__all__ = [
    "APIResponse",
    "FilessClient",
    "FilessError",
    "FilessAPIError",
    "FilessConfigurationError",
    "FilessSerializationError",
    "FilessTransportError",
]
