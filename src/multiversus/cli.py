"""
MultiVersus Command Line Interface.

Built with Typer for a modern, type-safe CLI experience.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from .api import MultiVersusAPIError, MultiVersusClient, StaticTicketProvider
from .api.search import platform_usernames
from .config import Settings, get_settings
from .data import find_character

app = typer.Typer(
    name="multiversus",
    help="Query the MultiVersus backend: profiles, matches, leaderboards",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()


def build_client(settings: Settings) -> MultiVersusClient:
    """Create a client authenticated with the configured ticket."""
    provider = StaticTicketProvider(
        settings.steam.ticket.get_secret_value(),
        name=settings.steam.provider,
    )
    return MultiVersusClient.from_settings(settings, provider)


def run_with_client(call: Callable[[MultiVersusClient], Awaitable[Any]]) -> Any:
    """Authenticate, run `call` and exit with an error message on failure."""
    settings = get_settings()
    if not settings.validate_credentials():
        console.print(
            "[red]Missing credentials. Set HYDRA_API_KEY, HYDRA_CLIENT_ID "
            "and STEAM_TICKET.[/red]"
        )
        raise typer.Exit(1)

    async def _run() -> Any:
        async with build_client(settings) as client:
            await client.authenticate()
            return await call(client)

    try:
        return asyncio.run(_run())
    except (MultiVersusAPIError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main_callback() -> None:
    """
    MultiVersus - look up players, matches and leaderboards.

    Credentials are read from the environment or a .env file.
    """
    logging.basicConfig(
        level=get_settings().app.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Username prefix"),
    limit: int = typer.Option(25, "--limit", "-l", help="Page size"),
    platform: str | None = typer.Option(
        None, "--platform", "-p", help="Filter on this platform's username"
    ),
    cursor: str | None = typer.Option(None, "--cursor", help="Continue from a cursor"),
) -> None:
    """
    Search usernames by prefix.

    Shows one page; use --cursor to fetch the next one.
    """
    page = run_with_client(
        lambda client: client.search_by_prefix(query, limit, cursor, platform)
    )

    table = Table(title=f"Search: {query}")
    table.add_column("Account ID", style="cyan")
    table.add_column("Usernames", style="green")

    for entry in page.results:
        result = entry.get("result") or {}
        account = result.get("account") or {}
        table.add_row(
            str(account.get("id", "")),
            ", ".join(platform_usernames(entry, platform)),
        )

    console.print(table)
    if page.has_more:
        console.print(f"\nNext cursor: [bold]{page.cursor}[/bold]")


@app.command()
def find(
    username: str = typer.Argument(..., help="Exact username"),
    platform: str | None = typer.Option(
        None, "--platform", "-p", help="Only match this platform's username"
    ),
) -> None:
    """Find the account with exactly this username."""
    entry = run_with_client(lambda client: client.search_exact(username, platform=platform))

    if entry is None:
        console.print(f"[yellow]No account named {username}[/yellow]")
        raise typer.Exit(1)

    console.print_json(data=entry)


@app.command()
def profile(user_id: str = typer.Argument(..., help="Account ID")) -> None:
    """Show a player's profile."""
    console.print_json(data=run_with_client(lambda client: client.get_profile(user_id)))


@app.command()
def match(match_id: str = typer.Argument(..., help="Match ID")) -> None:
    """Show a single match."""
    console.print_json(data=run_with_client(lambda client: client.get_match(match_id)))


@app.command()
def matches(
    user_id: str = typer.Argument(..., help="Account ID"),
    page: int = typer.Option(1, "--page", help="History page"),
) -> None:
    """Show a player's match history."""
    console.print_json(
        data=run_with_client(lambda client: client.get_matches(user_id, page))
    )


@app.command()
def leaderboard(
    leaderboard_type: str = typer.Argument(..., help="1v1 or 2v2"),
    user_id: str | None = typer.Option(None, "--user", "-u", help="Show this player's rank"),
    character: str | None = typer.Option(
        None, "--character", "-c", help="Character name, alias or id"
    ),
) -> None:
    """Show a leaderboard, or a player's rank on it."""
    if character and not user_id:
        console.print("[red]--character requires --user[/red]")
        raise typer.Exit(1)

    if user_id and character:
        resolved = find_character(character)
        if resolved is None:
            console.print(f"[red]Unknown character: {character}[/red]")
            raise typer.Exit(1)
        data = run_with_client(
            lambda client: client.get_profile_leaderboard_for_character(
                user_id, leaderboard_type, resolved
            )
        )
    elif user_id:
        data = run_with_client(
            lambda client: client.get_profile_leaderboard(user_id, leaderboard_type)
        )
    else:
        data = run_with_client(lambda client: client.get_leaderboard(leaderboard_type))

    console.print_json(data=data)


if __name__ == "__main__":
    app()
