"""Tests for resource configuration and state models."""

import pytest
from pydantic import ValidationError

from filess_provider.schemas.database import DatabaseConfig, DatabasePlan, DatabaseState


@pytest.fixture
def config():
    return DatabaseConfig(
        organization_slug="acme",
        namespace_slug="production",
        name="orders",
        engine_id="1",
        region_id="3",
        database_plan={"billable_items": [{"billable_item_id": "bi1", "quantity": 2}]},
    )


def test_billable_items_have_set_semantics():
    plan = DatabasePlan(billable_items=[
        {"billable_item_id": "bi1", "quantity": 2},
        {"billable_item_id": "bi1", "quantity": 2},
        {"billable_item_id": "bi2", "quantity": 1},
    ])
    assert [item.billable_item_id for item in plan.billable_items] == ["bi1", "bi2"]


def test_required_fields(config):
    with pytest.raises(ValidationError):
        DatabaseConfig(name="orders")


def test_optional_fields_omitted_from_payload(config):
    payload = config.to_create_payload()

    assert "ipWhitelistIds" not in payload
    assert "sshKeyIds" not in payload
    assert "tailscaleConfigId" not in payload
    assert payload["details"] == {"name": "orders", "description": ""}


def test_requires_replacement(config):
    changed = config.model_copy(update={"engine_id": "2", "name": "renamed"})

    assert config.requires_replacement(changed) == ["engine_id"]
    assert config.requires_replacement(config) == []


def test_state_from_config(config):
    state = DatabaseState.from_config(config, "501")

    assert state.exists
    assert state.organization_slug == "acme"
    assert state.database_plan == config.database_plan
    assert state.status == ""


def test_password_masked_in_export(config):
    state = DatabaseState.from_config(config, "501")
    state.database_password = "s3cret"

    assert state.export()["database_password"] != "s3cret"
    assert "s3cret" not in repr(state)
    assert state.export(show_secrets=True)["database_password"] == "s3cret"


def test_clear_id(config):
    state = DatabaseState.from_config(config, "501")
    state.clear_id()
    assert not state.exists
