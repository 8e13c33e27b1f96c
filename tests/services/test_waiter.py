"""Tests for the provisioning state-change waiter."""

import pytest

from filess_provider.services.provisioning.base import (
    ProvisioningTimeoutError,
    UnexpectedStateError,
)
from filess_provider.services.provisioning.waiter import StateChangeWaiter, WaitConfig

PENDING = ("creating", "deploying", "waiting_credentials", "billing_pending")
TARGET = ("deployed",)


def scripted_refresh(states):
    """Refresh coroutine reporting the given states in order (last one repeats)."""
    calls = []

    async def refresh():
        index = min(len(calls), len(states) - 1)
        calls.append(states[index])
        state = states[index]
        if isinstance(state, Exception):
            raise state
        return {"poll": len(calls)}, state

    refresh.calls = calls
    return refresh


def make_waiter(refresh, clock, **overrides):
    config = WaitConfig(pending=PENDING, target=TARGET, **overrides)
    return StateChangeWaiter(refresh, config, sleep=clock.sleep, clock=clock)


class TestStateChangeWaiter:

    async def test_returns_result_of_target_state(self, clock):
        refresh = scripted_refresh(["creating", "waiting_credentials", "deployed"])
        waiter = make_waiter(refresh, clock)

        result = await waiter.wait()

        assert result == {"poll": 3}
        assert waiter.last_state == "deployed"
        assert waiter.polls == 3

    async def test_delay_then_backoff_schedule(self, clock):
        refresh = scripted_refresh(["creating"] * 4 + ["deployed"])
        waiter = make_waiter(refresh, clock)

        await waiter.wait()

        # initial delay, then 5s doubling up to the 10s ceiling
        assert clock.sleeps == [5.0, 5.0, 10.0, 10.0, 10.0]

    async def test_timeout(self, clock):
        refresh = scripted_refresh(["billing_pending"])
        waiter = make_waiter(refresh, clock, timeout=60.0)

        with pytest.raises(ProvisioningTimeoutError) as exc_info:
            await waiter.wait()

        assert exc_info.value.last_state == "billing_pending"
        assert exc_info.value.timeout == 60.0
        assert sum(clock.sleeps) == pytest.approx(60.0)

    async def test_thirty_minute_default_timeout(self, clock):
        refresh = scripted_refresh(["waiting_credentials"])
        waiter = make_waiter(refresh, clock)
        start = clock()

        with pytest.raises(ProvisioningTimeoutError):
            await waiter.wait()

        assert clock() - start == pytest.approx(1800.0)

    async def test_unexpected_state(self, clock):
        refresh = scripted_refresh(["creating", "failed"])
        waiter = make_waiter(refresh, clock)

        with pytest.raises(UnexpectedStateError) as exc_info:
            await waiter.wait()

        assert exc_info.value.state == "failed"
        assert "wanted target 'deployed'" in str(exc_info.value)

    async def test_refresh_error_aborts_without_retry(self, clock):
        refresh = scripted_refresh(["creating", RuntimeError("API down"), "deployed"])
        waiter = make_waiter(refresh, clock)

        with pytest.raises(RuntimeError, match="API down"):
            await waiter.wait()

        assert len(refresh.calls) == 2

    async def test_no_delay(self, clock):
        refresh = scripted_refresh(["deployed"])
        waiter = make_waiter(refresh, clock, delay=0.0)

        await waiter.wait()

        assert clock.sleeps == []
