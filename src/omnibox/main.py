import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from omnibox.application.omnibox import Omnibox, OmniboxOptions
from omnibox.application.similarity import SimilarityScorer, raw_similarity
from omnibox.config import OmniboxConfig, load_config
from omnibox.domain.types import AutocompleteMatch, InputType
from omnibox.infrastructure.search import GoogleSuggestClient
from omnibox.infrastructure.stores import InMemoryHistoryStore, InMemoryTabStore, load_history, load_tabs
from omnibox.logger import get_logger, setup_logger

load_dotenv()

logger = get_logger("main")
console = Console()

cli = typer.Typer(
    name="omnibox",
    help="Address bar autocomplete engine: run queries against tab and history snapshots",
    epilog="""
    Examples:
    $ omnibox query git --tabs tabs.json
    $ omnibox query "" --focus --tabs tabs.json --history history.json
    """,
    add_completion=False,
)


def _render(matches: list[AutocompleteMatch], title: str) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Relevance", justify="right")
    table.add_column("Type")
    table.add_column("Contents")
    table.add_column("Destination")
    table.add_column("Provider")
    for index, match in enumerate(matches, start=1):
        table.add_row(
            str(index),
            str(match.relevance),
            match.type.value,
            match.contents,
            match.destination_url,
            match.provider_name,
        )
    console.print(table)


async def run_query(
    text: str,
    event_type: InputType,
    config: OmniboxConfig,
    tab_store: InMemoryTabStore,
    history_store: InMemoryHistoryStore,
    options: OmniboxOptions,
    use_remote_suggestions: bool = False,
) -> list[AutocompleteMatch]:
    """Run one query until providers settle and return the final snapshot."""
    snapshots: list[list[AutocompleteMatch]] = []
    suggest_client = (
        GoogleSuggestClient(config.suggest_url, timeout=config.suggest_timeout) if use_remote_suggestions else None
    )

    try:
        async with Omnibox(
            snapshots.append,
            tab_store,
            history_store,
            config=config,
            options=options,
            suggest_client=suggest_client,
        ) as omnibox:
            omnibox.handle_input(text, event_type)
            await omnibox.controller.settle(timeout=config.provider_timeout)
            final = omnibox.controller.top_matches()
    finally:
        if suggest_client is not None:
            await suggest_client.shutdown()

    logger.info(f"Query '{text}' produced {len(snapshots)} snapshot(s), {len(final)} final match(es)")
    return final


@cli.command()
def query(
    text: str = typer.Argument(..., help="Text typed into the address bar"),
    focus: bool = typer.Option(False, "--focus", help="Treat the query as a focus event"),
    tabs: Optional[Path] = typer.Option(None, "--tabs", help="JSON snapshot of open tabs"),
    history: Optional[Path] = typer.Option(None, "--history", help="JSON list of history entries"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON configuration file"),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Number of suggestions to show"),
    search: bool = typer.Option(True, "--search/--no-search", help="Include the verbatim search provider"),
    remote: bool = typer.Option(False, "--remote", help="Fetch remote search suggestions"),
    debug: bool = typer.Option(os.getenv("DEBUG", "false").lower() == "true", "--debug", help="Enable debug mode"),
):
    """Run a single autocomplete query and print the ranked suggestions."""
    setup_logger(log_level="DEBUG" if debug else "INFO", console_output=debug)

    config = OmniboxConfig.from_env(load_config(config_path))
    if limit is not None:
        config = config.model_copy(update={"max_results": limit})

    tab_store = load_tabs(tabs) if tabs else InMemoryTabStore()
    history_store = load_history(history) if history else InMemoryHistoryStore()
    options = OmniboxOptions(has_search=search)
    event_type = InputType.FOCUS if focus else InputType.KEYSTROKE

    matches = asyncio.run(run_query(text, event_type, config, tab_store, history_store, options, remote))
    if not matches:
        console.print("[dim]No suggestions[/]")
        return
    _render(matches, title=f"Suggestions for '{text}'")


@cli.command()
def similarity(
    first: str = typer.Argument(..., help="First string"),
    second: str = typer.Argument(..., help="Second string"),
    threshold: float = typer.Option(0.4, "--threshold", min=0.0, max=1.0, help="Similarity floor"),
):
    """Print the floored and raw similarity of two strings."""
    scorer = SimilarityScorer(threshold)
    console.print(f"similarity: {scorer(first, second):.4f}")
    console.print(f"raw:        {raw_similarity(first, second):.4f}")


@cli.command()
def pedals(
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON configuration file"),
):
    """List the configured pedals."""
    config = load_config(config_path)
    table = Table(title="Pedals")
    table.add_column("Action")
    table.add_column("Description")
    table.add_column("Triggers")
    for pedal in config.pedals:
        table.add_row(pedal.action, pedal.description, ", ".join(pedal.triggers))
    console.print(table)


if __name__ == "__main__":
    cli()
