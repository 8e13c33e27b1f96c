"""
Provisioning services for filess.io resources.

This package provides the resource lifecycle interface and the
filess_database controller, including the wait loop that blocks creation
until the backend has issued connection credentials.
"""

from .base import (
    BaseResource,
    Diagnostic,
    InvalidResponseError,
    OperationResult,
    ProvisionerException,
    ProvisioningTimeoutError,
    UnexpectedStateError,
)
from .database import DatabaseResource
from .waiter import StateChangeWaiter, WaitConfig

__all__ = [
    'BaseResource',
    'DatabaseResource',
    'Diagnostic',
    'InvalidResponseError',
    'OperationResult',
    'ProvisionerException',
    'ProvisioningTimeoutError',
    'StateChangeWaiter',
    'UnexpectedStateError',
    'WaitConfig',
]
