"""Tests for the operator CLI."""

import json
from unittest.mock import patch

import pytest

from conftest import ScriptedTransport, database_payload, envelope, json_response
from filess_provider import cli
from filess_provider import config as provider_config
from filess_provider.provider import Provider


@pytest.fixture
def state_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"id": "501", "name": "orders"}))
    return path


def run_cli(argv, steps):
    transport = ScriptedTransport(steps)

    def provider_factory(settings, config_class=None):
        return Provider(settings, config_class, transport=transport)

    with patch.object(cli, "get_config", return_value=provider_config.TestingConfig), \
            patch.object(cli, "Provider", side_effect=provider_factory):
        code = cli.main(argv + ["--api-token", "t", "--api-url", "http://filess.test"])
    return code, transport


def test_read_prints_state(state_file, capsys):
    code, _ = run_cli(["read", "--state", str(state_file)], [envelope(database_payload(501))])

    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["status"] == "deployed"
    assert out["database_password"] != "s3cret"


def test_show_secrets(state_file, capsys):
    code, _ = run_cli(
        ["read", "--state", str(state_file), "--show-secrets"],
        [envelope(database_payload(501))],
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out)["database_password"] == "s3cret"


def test_delete_not_found(state_file, capsys):
    code, transport = run_cli(["delete", "--state", str(state_file)], [json_response(404, {"error": "gone"})])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["id"] == ""
    assert transport.requests[0].method == "DELETE"


def test_api_error_exits_nonzero(state_file, capsys):
    code, _ = run_cli(["read", "--state", str(state_file)], [json_response(500, {"error": "boom"})])

    assert code == 1
    assert "API error (status 500): boom" in capsys.readouterr().err


def test_create_requires_config(capsys):
    code, _ = run_cli(["create"], [])

    assert code == 1
    assert "create requires --config" in capsys.readouterr().err


def test_failed_create_prints_created_state(tmp_path, capsys):
    config_file = tmp_path / "database.json"
    config_file.write_text(json.dumps({
        "organization_slug": "acme",
        "namespace_slug": "production",
        "name": "orders",
        "description": "Orders database",
        "engine_id": "1",
        "region_id": "3",
        "database_plan": {"billable_items": [{"billable_item_id": "bi1", "quantity": 2}]},
    }))

    code, transport = run_cli(
        ["create", "--config", str(config_file)],
        [envelope({"database": {"id": 501}}), json_response(500, {"error": "internal"})],
    )

    captured = capsys.readouterr()
    assert code == 1
    assert "API error (status 500): internal" in captured.err
    assert json.loads(captured.out)["id"] == "501"
    assert [r.method for r in transport.requests] == ["POST", "GET"]
