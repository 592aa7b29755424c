"""
Tests for the command line interface.
"""

import httpx
import pytest
from pydantic import SecretStr
from typer.testing import CliRunner

from multiversus import cli
from multiversus.api import MultiVersusClient, StaticTicketProvider
from multiversus.config import HydraSettings, Settings, SteamSettings

runner = CliRunner()

SEARCH = "/profiles/search_queries/get-by-username/run"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        hydra=HydraSettings(api_key=SecretStr("key"), client_id="cid"),
        steam=SteamSettings(ticket=SecretStr("14ab")),
        _env_file=None,
    )


@pytest.fixture
def cli_backend(monkeypatch, backend, settings):
    def build_client(settings: Settings) -> MultiVersusClient:
        return MultiVersusClient.from_settings(
            settings,
            StaticTicketProvider(settings.steam.ticket.get_secret_value()),
            transport=httpx.MockTransport(backend.handler),
        )

    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    monkeypatch.setattr(cli, "build_client", build_client)
    return backend


def test_profile(cli_backend):
    cli_backend.add("GET", "/profiles/abc", httpx.Response(200, json={"id": "abc"}))

    result = runner.invoke(cli.app, ["profile", "abc"])

    assert result.exit_code == 0
    assert '"abc"' in result.output
    assert len(cli_backend.calls("POST", "/access")) == 1


def test_matches_page(cli_backend):
    cli_backend.add("GET", "/matches/all/abc", httpx.Response(200, json={"matches": []}))

    result = runner.invoke(cli.app, ["matches", "abc", "--page", "2"])

    assert result.exit_code == 0
    (request,) = cli_backend.calls("GET", "/matches/all/abc")
    assert request.url.params["page"] == "2"


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None))
    monkeypatch.delenv("HYDRA_API_KEY", raising=False)

    result = runner.invoke(cli.app, ["profile", "abc"])

    assert result.exit_code == 1
    assert "Missing credentials" in result.output


def test_api_error_exits(cli_backend):
    result = runner.invoke(cli.app, ["leaderboard", "3v3"])

    assert result.exit_code == 1
    assert "Leaderboard type must be 1v1 or 2v2." in result.output


def test_leaderboard_character_alias(cli_backend):
    path = "/leaderboards/character_jake_2v2/score-and-rank/abc"
    cli_backend.add("GET", path, httpx.Response(200, json={"rank": 12}))

    result = runner.invoke(
        cli.app, ["leaderboard", "2v2", "--user", "abc", "--character", "jake"]
    )

    assert result.exit_code == 0
    assert len(cli_backend.calls("GET", path)) == 1


def test_leaderboard_unknown_character(cli_backend):
    result = runner.invoke(
        cli.app, ["leaderboard", "1v1", "--user", "abc", "--character", "Mario"]
    )

    assert result.exit_code == 1
    assert "Unknown character" in result.output
    assert cli_backend.requests == []


def test_find_not_found(cli_backend):
    cli_backend.add("GET", SEARCH, httpx.Response(200, json={"results": [], "cursor": ""}))

    result = runner.invoke(cli.app, ["find", "nobody"])

    assert result.exit_code == 1
    assert "No account named nobody" in result.output


def test_search_table(cli_backend):
    item = {
        "result": {
            "account": {
                "id": "acc-1",
                "identity": {"alternate": {"steam": [{"username": "bobcat"}]}},
            }
        }
    }
    cli_backend.add("GET", SEARCH, httpx.Response(200, json={"results": [item], "cursor": "c2"}))

    result = runner.invoke(cli.app, ["search", "bob"])

    assert result.exit_code == 0
    assert "acc-1" in result.output
    assert "bobcat" in result.output
    assert "c2" in result.output
