import logging
from unittest.mock import patch

import pytest

from banking.app import create_app, main
from banking.config import Config, ServerConfig, SwaggerConfig


@pytest.fixture
def quiet_logging():
    yield
    base = logging.getLogger("banking")
    for handler in list(base.handlers):
        base.removeHandler(handler)
        handler.close()
    base.addHandler(logging.NullHandler())


@pytest.fixture
def client():
    return create_app(Config()).test_client()


def test_ping(client):
    resp = client.get("/ping")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "pong"}


def test_account_routes_mounted(client):
    resp = client.post("/v1/account", json={"name": "A", "initial_balance": "12.5"})
    assert resp.status_code == 200
    account_id = resp.get_json()["data"]["id"]
    got = client.get(f"/v1/account/{account_id}").get_json()["data"]
    assert got["balance"] == "12.50"
    assert got["name"] == "A"


def test_trace_id_reaches_transactions(client):
    account_id = client.post("/v1/account", json={"name": "A"}).get_json()["data"]["id"]
    client.post(
        f"/v1/account/{account_id}/deposit",
        json={"amount": "10"},
        headers={"Trace-Id": "trace-123"},
    )
    txs = client.get(f"/v1/account/{account_id}/transactions").get_json()["data"]
    assert len(txs) == 1
    assert txs[0]["trace_id"] == "trace-123"
    assert txs[0]["type"] == "deposit"


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        create_app(Config(server=ServerConfig(mode="bogus")))


def test_static_api_files(tmp_path, monkeypatch):
    (tmp_path / "api").mkdir()
    (tmp_path / "api" / "api.yaml").write_text("openapi: 3.0.0\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    client = create_app(Config()).test_client()
    resp = client.get("/api/api.yaml")
    assert resp.status_code == 200
    assert resp.data == b"openapi: 3.0.0\n"
    resp.close()


def test_swagger_page_names_spec():
    config = Config(swagger=SwaggerConfig(api_path="/api/api.yaml"))
    client = create_app(config).test_client()
    resp = client.get("/swagger/index.html")
    assert resp.status_code == 200
    assert "/api/api.yaml" in resp.get_data(as_text=True)
    redirect = client.get("/swagger/")
    assert redirect.status_code in (301, 302)
    assert redirect.headers["Location"].endswith("/swagger/index.html")


def test_main_runs_server_with_config(tmp_path, capsys, quiet_logging):
    log_dir = tmp_path / "logs"
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "server:\n  mode: release\n  port: 9090\n"
        f"logger:\n  level: info\n  format: json\n  dir: {log_dir}\n",
        encoding="utf-8",
    )
    with patch("flask.Flask.run") as run:
        status = main(["-c", str(config_file)])
    assert status == 0
    run.assert_called_once_with(host="0.0.0.0", port=9090)
    assert log_dir.is_dir()
    assert capsys.readouterr().out.startswith(f"configname  {config_file}")


def test_main_uses_default_port_without_file(tmp_path, monkeypatch, quiet_logging):
    monkeypatch.chdir(tmp_path)
    with patch("flask.Flask.run") as run:
        status = main([])
    assert status == 0
    assert run.call_args.kwargs["port"] == 8080


def test_main_rejects_bad_port(tmp_path, quiet_logging):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("server:\n  port: abc\n", encoding="utf-8")
    with patch("flask.Flask.run") as run:
        status = main(["-c", str(config_file)])
    assert status == 1
    run.assert_not_called()