"""CLI entry point for the livesport VSV scraper."""
import json
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from .config import HOST, LEAGUES, ODDS_WORKERS, PORT, get_league, setup_logging
from .pipeline import run_scrape

console = Console()

setup_logging(console)
logger = logging.getLogger(__name__)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """Livesport football VSV scraper CLI."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.option("--host", default=HOST, show_default=True, help="Interface to bind")
@click.option("--port", "-p", default=PORT, show_default=True, help="Port to listen on")
def serve(host, port):
    """Run the HTTP API."""
    import uvicorn

    console.print(f"[bold]Server running on port {port}[/bold]")
    uvicorn.run("vsv_scraper.api:app", host=host, port=port)


@cli.command()
@click.option("--leagues", "-l", multiple=True, help="Specific league ids to scrape")
@click.option("--no-headless", is_flag=True, help="Show browser window")
@click.option("--workers", "-w", default=ODDS_WORKERS, show_default=True,
              help="Browsers fetching odds pages in parallel")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the JSON response to a file")
@click.option("--limit", "-n", default=20, help="Number of teams to show")
def scrape(leagues, no_headless, workers, output, limit):
    """Scrape results and odds, then rank teams by VSV."""
    try:
        selected = [get_league(league_id) for league_id in leagues] if leagues else None
    except KeyError as e:
        console.print(f"[red]Error: {e.args[0]}[/red]")
        sys.exit(1)

    console.print("[bold]Scraping livesport.cz...[/bold]")
    if selected:
        console.print(f"Leagues: {', '.join(league.name for league in selected)}")

    try:
        result = run_scrape(selected, headless=not no_headless, odds_workers=workers)
    except Exception as e:
        logger.debug("Scrape failed", exc_info=True)
        console.print(f"[red]Scraping error: {e}[/red]")
        sys.exit(1)

    if output:
        with open(output, "w", encoding="utf-8") as handle:
            json.dump(result.to_dict(), handle, indent=2, ensure_ascii=False)
        console.print(f"[green]Saved {len(result.teams)} teams to {output}[/green]")

    if not result.teams:
        console.print("[yellow]No teams with odds found.[/yellow]")
        return

    table = Table(title="Teams by VSV")
    table.add_column("#", justify="right")
    table.add_column("Team", style="cyan")
    table.add_column("League")
    table.add_column("VSV %", justify="right")
    table.add_column("Stakes", justify="right")
    table.add_column("Returns", justify="right")
    table.add_column("Fav/Out", justify="center")

    for position, team in enumerate(result.teams[:limit], start=1):
        vsv_color = "green" if team.vsv > 0 else "red" if team.vsv < 0 else "white"
        table.add_row(
            str(position),
            team.name[:25],
            team.league,
            f"[{vsv_color}]{team.vsv:.1f}[/{vsv_color}]",
            f"{team.total_stakes:g}",
            f"{team.total_returns:.2f}",
            f"{team.favorite_count}/{team.outsider_count}",
        )

    console.print(table)


@cli.command("list-leagues")
def list_leagues():
    """List configured leagues."""
    table = Table(title="Leagues")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Results URL")

    for league in LEAGUES:
        table.add_row(league.id, league.name, league.results_url)

    console.print(table)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
