"""Utility modules for the filess.io provider."""

from .async_utils import with_deadline
from .json_value import JsonKind, JsonValue
from .terminal import format_payment_banner, notify_payment_required, write_to_tty

__all__ = [
    "with_deadline",
    "JsonKind",
    "JsonValue",
    "format_payment_banner",
    "notify_payment_required",
    "write_to_tty",
]
