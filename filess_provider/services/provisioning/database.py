"""
filess_database resource controller.

Implements create/read/update/delete for filess.io managed databases:
- Create posts the database and waits until connection credentials exist
- Read maps the backend representation into resource state
- Update re-reads (the API has no update endpoint)
- Delete removes the database; a missing database counts as deleted
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional

from ...config import get_config
from ...integrations.exceptions import FilessAPIError, FilessError
from ...integrations.filess_client import FilessClient
from ...models.enums import DatabaseStatus
from ...schemas.database import DatabaseConfig, DatabaseState, resource_schema
from ...utils.json_value import JsonValue
from ...utils.terminal import notify_payment_required
from .base import (
    BaseResource,
    Diagnostic,
    InvalidResponseError,
    OperationResult,
    ProvisionerException,
)
from .fields import (
    HOSTNAME_KEY,
    SERVICE_PORT_KEY,
    credentials_are_ready,
    extract_stripe_checkout_url,
    id_to_string,
    map_database_params,
    select_database_user,
)
from .waiter import ClockFunc, SleepFunc, StateChangeWaiter, WaitConfig

logger = logging.getLogger(__name__)

# Called synchronously; returns whether the operator was reached
Notifier = Callable[[str], bool]


def default_wait_config() -> WaitConfig:
    return WaitConfig(
        pending=DatabaseStatus.pending(),
        target=DatabaseStatus.target(),
    )


class DatabaseResource(BaseResource[DatabaseConfig, DatabaseState]):
    """Lifecycle controller for the filess_database resource."""

    type_name = "filess_database"
    COLLECTION_PATH = "/api/v1/databases"

    def __init__(
        self,
        client: FilessClient,
        wait_config: Optional[WaitConfig] = None,
        notifier: Optional[Notifier] = None,
        sleep: Optional[SleepFunc] = None,
        clock: Optional[ClockFunc] = None,
    ):
        """
        Initialize the controller.

        Args:
            client: Shared API session
            wait_config: Provisioning wait timing (default 5s delay, 5s
                minimum interval, 30 minute timeout)
            notifier: Synchronous callable given the Stripe checkout URL when
                payment is required; defaults to the terminal banner. It is
                not awaited, so it must not be a coroutine function.
            sleep: Optional sleep coroutine for the wait loop
            clock: Optional monotonic clock for the wait loop
        """
        self.client = client
        self.wait_config = wait_config or default_wait_config()
        self.notifier = notifier or notify_payment_required
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(cls, client: FilessClient, config_class=None, **kwargs: Any) -> "DatabaseResource":
        """Build a controller using timing settings from a Config class."""
        cfg = config_class or get_config()
        wait_config = WaitConfig(
            pending=DatabaseStatus.pending(),
            target=DatabaseStatus.target(),
            delay=cfg.POLL_DELAY,
            min_interval=cfg.POLL_MIN_INTERVAL,
            max_interval=cfg.POLL_MAX_INTERVAL,
            timeout=cfg.PROVISION_TIMEOUT,
        )
        kwargs.setdefault("notifier", functools.partial(notify_payment_required, tty_path=cfg.TTY_PATH))
        return cls(client, wait_config=wait_config, **kwargs)

    @classmethod
    def schema(cls) -> Dict[str, Dict[str, Any]]:
        return resource_schema()

    def _item_path(self, database_id: str) -> str:
        return f"{self.COLLECTION_PATH}/{database_id}"

    async def create(self, config: DatabaseConfig) -> OperationResult[DatabaseState]:
        """
        Create the database and wait until its credentials are available.

        Raises:
            FilessError, ProvisionerException: On failure. When the database
                was already created, ``resource_state`` on the exception holds
                its state so the id is not lost.
        """
        diagnostics = []

        logger.info(
            f"Creating database '{config.name}' in "
            f"{config.organization_slug}/{config.namespace_slug}"
        )
        response = await self.client.post(self.COLLECTION_PATH, config.to_create_payload())

        data = response.data
        raw_id = data.lookup("database", "id")
        if raw_id is None or raw_id.is_null:
            raise InvalidResponseError(
                "Invalid filess.io API response: missing database id",
                resource_type=self.type_name,
            )

        database_id = id_to_string(raw_id)
        state = DatabaseState.from_config(config, database_id)
        logger.info(f"Created database {database_id}")

        url = extract_stripe_checkout_url(data)
        if url:
            state.stripe_checkout_url = url
            diagnostics.append(
                Diagnostic.warning(
                    "Payment required",
                    f"Open the checkout URL to complete billing and resume provisioning: {url}",
                )
            )

        # The database exists from here on; failures must not lose its id
        try:
            if url:
                self.notifier(url)
                logger.info(
                    f"Database {database_id} provisioning blocked until Stripe checkout completes: {url}"
                )

            await self.wait_for_credentials(database_id)

            result = await self.read(state)
        except (FilessError, ProvisionerException) as e:
            logger.error(f"Database {database_id} was created but provisioning failed: {e}")
            e.resource_state = state
            raise
        except Exception as e:
            logger.error(f"Database {database_id} was created but provisioning failed: {e}")
            raise ProvisionerException(
                "database created but provisioning failed",
                resource_type=self.type_name,
                resource_id=database_id,
                original_error=e,
                resource_state=state,
            ) from e

        diagnostics.extend(result.diagnostics)
        return OperationResult(result.state, diagnostics)

    async def read(self, state: DatabaseState) -> OperationResult[DatabaseState]:
        if not state.exists:
            return OperationResult(state)

        try:
            response = await self.client.get(self._item_path(state.id))
        except FilessAPIError as e:
            if e.is_not_found:
                logger.warning(f"Database {state.id} not found, removing it from state")
                gone = state.model_copy(deep=True)
                gone.clear_id()
                return OperationResult(gone)
            raise

        data = response.data
        if data.as_object() is None:
            raise InvalidResponseError(
                "unexpected database response format",
                resource_type=self.type_name,
                resource_id=state.id,
            )

        refreshed = state.model_copy(deep=True)
        self._apply_response(refreshed, data)
        return OperationResult(refreshed)

    async def update(self, state: DatabaseState, config: DatabaseConfig) -> OperationResult[DatabaseState]:
        # No update endpoint yet: keep the new configuration and refresh
        logger.debug(f"Database {state.id} has no server-side update, refreshing state")
        updated = DatabaseState.from_config(config, state.id)
        for name in DatabaseState.model_fields:
            extra = DatabaseState.model_fields[name].json_schema_extra
            if isinstance(extra, dict) and extra.get("computed"):
                setattr(updated, name, getattr(state, name))
        return await self.read(updated)

    async def delete(self, state: DatabaseState) -> OperationResult[DatabaseState]:
        deleted = state.model_copy(deep=True)
        if not state.exists:
            return OperationResult(deleted)

        try:
            await self.client.delete(self._item_path(state.id))
        except FilessAPIError as e:
            if not e.is_not_found:
                raise
            logger.warning(f"Database {state.id} already deleted")
        else:
            logger.info(f"Deleted database {state.id}")

        deleted.clear_id()
        return OperationResult(deleted)

    async def wait_for_credentials(self, database_id: str) -> JsonValue:
        """
        Wait until the database reports usable connection credentials.

        The backend status alone is not trusted: until hostname, port,
        username and password are all present the poll reports
        ``waiting_credentials``.

        Args:
            database_id: Database to poll

        Returns:
            The database payload from the final poll

        Raises:
            ProvisioningTimeoutError: If credentials do not appear in time
            UnexpectedStateError: If credentials appear alongside an unknown status
            FilessError: If a poll request fails
        """
        path = self._item_path(database_id)

        async def refresh():
            response = await self.client.get(path)
            data = response.data
            if data.as_object() is None:
                raise InvalidResponseError(
                    "unexpected database response format",
                    resource_type=self.type_name,
                    resource_id=database_id,
                )

            status = data.get_str("status")
            url = extract_stripe_checkout_url(data)
            if url:
                logger.warning(
                    f"Waiting for user to complete Stripe checkout for database {database_id}: {url}"
                )

            if credentials_are_ready(data):
                return data, status
            return data, DatabaseStatus.WAITING_CREDENTIALS.value

        waiter = StateChangeWaiter(
            refresh,
            self.wait_config,
            sleep=self._sleep,
            clock=self._clock,
            resource_type=self.type_name,
            resource_id=database_id,
        )
        data = await waiter.wait()
        logger.info(f"Database {database_id} is ready (status: {waiter.last_state})")
        return data

    @staticmethod
    def _apply_response(state: DatabaseState, data: JsonValue) -> None:
        state.name = data.get_str("name")
        state.description = data.get_str("description")
        state.status = data.get_str("status")
        state.engine_id = id_to_string(data.get("engineId"))
        state.region_id = id_to_string(data.get("regionId"))

        created_at = data.get("createdAt")
        if created_at is not None:
            state.created_at = id_to_string(created_at)

        state.stripe_checkout_url = extract_stripe_checkout_url(data)

        params = map_database_params(data.get("databaseParams"))
        state.database_hostname = params[HOSTNAME_KEY]
        state.database_service_port = params[SERVICE_PORT_KEY]

        username, password = select_database_user(data.get("databaseUsers"))
        state.database_username = username
        state.database_password = password
