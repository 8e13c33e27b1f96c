"""Pydantic schemas for the filess.io provider."""

from .database import (
    BillableItem,
    DatabaseConfig,
    DatabasePlan,
    DatabaseState,
    resource_schema,
)
from .provider import DEFAULT_API_URL, ProviderSettings

__all__ = [
    "BillableItem",
    "DatabaseConfig",
    "DatabasePlan",
    "DatabaseState",
    "resource_schema",
    "ProviderSettings",
    "DEFAULT_API_URL",
]
