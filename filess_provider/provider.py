"""
Provider configuration step and resource registry.

Builds the shared API session from provider settings and hands it to
resource controllers. One Provider (and one session) is created per
invocation; controllers built from it may run concurrently.
"""

import logging
from typing import Any, Dict, Optional, Type

import httpx

from .config import get_config
from .integrations.exceptions import FilessConfigurationError
from .integrations.filess_client import FilessClient
from .schemas.provider import ProviderSettings
from .services.provisioning.base import BaseResource, ProvisionerException
from .services.provisioning.database import DatabaseResource

logger = logging.getLogger(__name__)


def configure_provider(
    settings: Optional[ProviderSettings] = None,
    config_class=None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FilessClient:
    """
    Validate provider settings and build the API session.

    Args:
        settings: Provider block; defaults are read from the environment
        config_class: Config class supplying HTTP timing settings
        transport: Optional httpx transport (used by tests)

    Returns:
        Configured FilessClient

    Raises:
        FilessConfigurationError: If the API token or URL is empty
    """
    settings = settings or ProviderSettings()
    cfg = config_class or get_config()

    api_token = settings.api_token.get_secret_value()
    if not api_token:
        raise FilessConfigurationError("api_token cannot be empty")

    if not settings.api_url:
        raise FilessConfigurationError("api_url cannot be empty")

    logger.debug(f"Configuring filess.io provider for {settings.api_url}")
    return FilessClient(
        settings.api_url,
        api_token,
        timeout=settings.timeout or cfg.HTTP_TIMEOUT,
        max_attempts=cfg.HTTP_MAX_ATTEMPTS,
        retry_delay=cfg.HTTP_RETRY_DELAY,
        transport=transport,
    )


class Provider:
    """The filess.io provider: one API session plus the resources it serves."""

    resources: Dict[str, Type[BaseResource]] = {
        DatabaseResource.type_name: DatabaseResource,
    }

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        config_class=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config_class = config_class or get_config()
        self.client = configure_provider(settings, self.config_class, transport)

    async def __aenter__(self) -> "Provider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def resource(self, type_name: str, **kwargs: Any) -> BaseResource:
        """
        Instantiate the controller for a resource type.

        Args:
            type_name: Resource type name (e.g. "filess_database")
            **kwargs: Extra controller arguments (sleep, clock, notifier)

        Raises:
            ProvisionerException: If the resource type is unknown
        """
        resource_class = self.resources.get(type_name)
        if resource_class is None:
            raise ProvisionerException(
                f"Unknown resource type: {type_name}",
                resource_type=type_name,
            )
        return resource_class.from_config(self.client, self.config_class, **kwargs)
