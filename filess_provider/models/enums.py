"""filess.io provider enumeration types"""

from enum import Enum


class DatabaseStatus(Enum):
    """Database provisioning status as reported by the backend"""
    CREATING = "creating"
    DEPLOYING = "deploying"
    WAITING_CREDENTIALS = "waiting_credentials"
    BILLING_PENDING = "billing_pending"
    DEPLOYED = "deployed"

    @classmethod
    def pending(cls) -> tuple:
        """Statuses that mean provisioning is still in progress"""
        return (
            cls.CREATING.value,
            cls.DEPLOYING.value,
            cls.WAITING_CREDENTIALS.value,
            cls.BILLING_PENDING.value,
        )

    @classmethod
    def target(cls) -> tuple:
        """Statuses that mean provisioning finished"""
        return (cls.DEPLOYED.value,)


class DiagnosticSeverity(Enum):
    """Severity of an operation diagnostic"""
    WARNING = "warning"
