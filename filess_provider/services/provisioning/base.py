"""
Base resource abstract class for filess.io resource lifecycle controllers.

This module defines the interface every managed resource implements, the
diagnostics returned alongside resource state, and the exceptions raised
when provisioning fails after the API calls themselves succeeded.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from ...models.enums import DiagnosticSeverity

StateT = TypeVar("StateT")
ConfigT = TypeVar("ConfigT")


@dataclass(frozen=True)
class Diagnostic:
    """
    Non-fatal message attached to an operation result.

    Attributes:
        severity: Diagnostic severity
        summary: Short summary line
        detail: Longer explanation shown to the operator
    """
    severity: DiagnosticSeverity
    summary: str
    detail: str = ""

    @classmethod
    def warning(cls, summary: str, detail: str = "") -> "Diagnostic":
        return cls(DiagnosticSeverity.WARNING, summary, detail)


@dataclass
class OperationResult(Generic[StateT]):
    """
    Outcome of a resource lifecycle operation.

    Attributes:
        state: Resource state after the operation. An empty id means the
            resource no longer exists.
        diagnostics: Warnings collected during the operation
    """
    state: StateT
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is DiagnosticSeverity.WARNING]


class ProvisionerException(Exception):
    """
    Base exception for resource lifecycle errors.

    Attributes:
        message: Error message
        resource_type: Resource type where error occurred
        resource_id: Resource ID if applicable
        original_error: Original exception if wrapped
        resource_state: State of a resource that exists remotely even
            though the operation failed, or None
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
        resource_state: Any = None,
    ):
        self.message = message
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.original_error = original_error
        self.resource_state = resource_state
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.resource_type:
            parts.append(f"Resource type: {self.resource_type}")
        if self.resource_id:
            parts.append(f"Resource: {self.resource_id}")
        if self.original_error:
            parts.append(f"Original error: {str(self.original_error)}")
        return " | ".join(parts)


class InvalidResponseError(ProvisionerException):
    """Raised when an API response lacks the shape the operation needs."""


class UnexpectedStateError(ProvisionerException):
    """Raised when the wait loop observes a state that is neither pending nor a target."""

    def __init__(self, state: str, targets: List[str], **kwargs: Any):
        self.state = state
        self.targets = list(targets)
        super().__init__(
            f"unexpected state '{state}', wanted target '{', '.join(self.targets)}'",
            **kwargs,
        )


class ProvisioningTimeoutError(ProvisionerException):
    """
    Raised when provisioning does not finish within the timeout.

    Attributes:
        last_state: Last state observed before giving up ("" if none)
        timeout: Timeout in seconds
    """

    def __init__(self, timeout: float, last_state: str = "", **kwargs: Any):
        self.timeout = timeout
        self.last_state = last_state
        message = f"timeout while waiting for state to become ready (timeout: {timeout:g}s"
        if last_state:
            message += f", last state: '{last_state}'"
        message += ")"
        super().__init__(message, **kwargs)


class BaseResource(ABC, Generic[ConfigT, StateT]):
    """
    Abstract base class for resource lifecycle controllers.

    Implementations translate desired configuration into API calls and map
    API responses back into resource state. Every operation returns an
    OperationResult; failures raise.
    """

    #: Resource type name as exposed by the provider
    type_name: str = ""

    @classmethod
    def from_config(cls, client: Any, config_class=None, **kwargs: Any) -> "BaseResource":
        """Build a controller bound to an API session; config_class may tune timing."""
        return cls(client, **kwargs)

    @classmethod
    @abstractmethod
    def schema(cls) -> Dict[str, Dict[str, Any]]:
        """Attribute metadata for this resource type."""
        pass

    @abstractmethod
    async def create(self, config: ConfigT) -> OperationResult[StateT]:
        """
        Create the resource and wait until it is usable.

        Raises:
            FilessError: If an API call fails
            ProvisionerException: If provisioning fails or times out
        """
        pass

    @abstractmethod
    async def read(self, state: StateT) -> OperationResult[StateT]:
        """
        Refresh state from the backend.

        A resource that no longer exists is returned with an empty id.
        """
        pass

    @abstractmethod
    async def update(self, state: StateT, config: ConfigT) -> OperationResult[StateT]:
        """Apply in-place changes and return the refreshed state."""
        pass

    @abstractmethod
    async def delete(self, state: StateT) -> OperationResult[StateT]:
        """Delete the resource. Deleting an absent resource is not an error."""
        pass
