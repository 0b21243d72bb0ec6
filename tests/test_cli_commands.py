import json
import sys

import pytest
from loguru import logger
from typer.testing import CliRunner

import wpxmlrpc.dispatcher as dispatcher_module
from wpxmlrpc import __version__
from wpxmlrpc.cli.command_groups import config_commands
from wpxmlrpc.cli.commands import app
from wpxmlrpc.cli.shared import logging_utils

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_loguru():
    yield
    # The CLI callback swaps loguru's stderr sink for the runner's stream.
    sink_id = logging_utils._SINK_IDS.pop("stderr", None)
    if sink_id is not None:
        logger.remove(sink_id)
        logger.add(sys.stderr)


@pytest.fixture
def cli(tmp_path, monkeypatch, stub_transport):
    """Invoke the app against the stub transport with an empty config file location."""
    for key in ("WPXMLRPC_ENDPOINT", "WPXMLRPC_USERNAME", "WPXMLRPC_PASSWORD", "WPXMLRPC_TRANSPORT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(dispatcher_module, "make_transport", lambda name="httpx": stub_transport)
    config_path = tmp_path / "config.json"

    def invoke(*args: str, with_credentials: bool = True):
        base = ["--config", str(config_path)]
        if with_credentials:
            base += ["--endpoint", "example.com/xmlrpc.php", "--username", "bob", "--password", "pw"]
        return runner.invoke(app, [*base, *args])

    return invoke


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"wpxmlrpc v{__version__}" in result.output


def test_call_prints_decoded_result(cli, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.success(envelopes.post_229))

    result = cli("call", "wp.getPost", '[1, "bob", "pw", 229]')

    assert result.exit_code == 0, result.output
    assert "Penthouse sea view" in result.output
    assert "2014-03-20T10:30:00" in result.output
    assert stub_transport.last_call() == ("wp.getPost", (1, "bob", "pw", 229))
    assert stub_transport.sent[0][1].url == "http://example.com/xmlrpc.php"


def test_call_rejects_invalid_params_json(cli, stub_transport) -> None:
    result = cli("call", "wp.getPost", "[1, ")
    assert result.exit_code == 1
    assert "Invalid params JSON" in result.output
    assert stub_transport.sent == []


def test_call_without_endpoint_reports_config_error(cli, stub_transport) -> None:
    result = cli("call", "wp.getPost", "[]", with_credentials=False)
    assert result.exit_code == 1
    assert "invalid endpoint" in result.output
    assert "CONFIG_ERROR" in result.output
    assert stub_transport.sent == []


def test_fault_exits_with_last_error(cli, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.fault(403, "You do not have permission to upload files."))

    result = cli("media", "get", "42")

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "permission" in result.output
    assert "(403)" in result.output


def test_post_get_passes_fields(cli, stub_transport, envelopes) -> None:
    stub_transport.responses.append(envelopes.success({"post_title": "Hi"}))

    result = cli("post", "get", "229", "-f", "post_title")

    assert result.exit_code == 0, result.output
    assert stub_transport.last_call() == ("wp.getPost", (1, "bob", "pw", 229, ["post_title"]))


def test_post_list_rejects_bad_filter(cli, stub_transport) -> None:
    result = cli("post", "list", "--filter", "{number")
    assert result.exit_code == 1
    assert "Invalid --filter JSON" in result.output


def test_media_upload_guesses_mime(cli, stub_transport, envelopes, tmp_path) -> None:
    image = tmp_path / "a.png"
    image.write_bytes(b"\x89PNG\r\n")
    stub_transport.responses.append(envelopes.success({"id": "77"}))

    result = cli("media", "upload", str(image), "--post-id", "12")

    assert result.exit_code == 0, result.output
    method, params = stub_transport.last_call()
    assert method == "wp.uploadFile"
    struct = params[3]
    assert struct["name"] == "a.png"
    assert struct["type"] == "image/png"
    assert struct["bits"].data == b"\x89PNG\r\n"
    assert struct["post_id"] == 12
    assert "overwrite" not in struct


def test_invalid_transport_option(cli) -> None:
    result = cli("--transport", "curl", "options")
    assert result.exit_code == 1
    assert "Invalid option" in result.output


def test_config_show_masks_password(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("WPXMLRPC_PASSWORD", raising=False)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"endpoint": "https://example.com/xmlrpc.php", "password": "pw-secret"}))

    result = runner.invoke(app, ["--config", str(path), "config", "show"])

    assert result.exit_code == 0, result.output
    assert "***" in result.output
    assert "pw-secret" not in result.output


def test_config_show_reports_broken_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{broken")

    result = runner.invoke(app, ["--config", str(path), "config", "show"])

    assert result.exit_code == 1
    assert "Failed to load config" in result.output


def test_config_init_writes_file_once(tmp_path, monkeypatch) -> None:
    path = tmp_path / "home" / "config.json"
    monkeypatch.setattr(config_commands, "get_config_path", lambda: path)
    args = ["config", "init", "--endpoint", "example.com/xmlrpc.php", "--username", "bob", "--password", "pw"]

    first = runner.invoke(app, args)
    assert first.exit_code == 0, first.output
    assert json.loads(path.read_text())["endpoint"] == "example.com/xmlrpc.php"

    second = runner.invoke(app, args)
    assert second.exit_code == 1
    assert "already exists" in second.output


def test_malformed_endpoint_is_invalid_configuration(tmp_path, stub_transport, monkeypatch) -> None:
    monkeypatch.setattr(dispatcher_module, "make_transport", lambda name="httpx": stub_transport)
    args = ["--config", str(tmp_path / "config.json"), "--endpoint", "example.com:abc/xmlrpc.php", "options"]

    result = runner.invoke(app, args)

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert stub_transport.sent == []
