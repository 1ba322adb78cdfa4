"""Command line interface for the mihetofilms scraper."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import httpx
import typer

from backend.crawler import CrawlerConfig, EmptyCatalogError, ScrapePipeline

from .client import create_client


DEFAULT_API_BASE = "http://localhost:4000"

app = typer.Typer(help="Scrape mihetofilms.web.app and inspect the stored results.")


def _api_base_option() -> typer.Option:
    return typer.Option(
        DEFAULT_API_BASE,
        "--api-base",
        help="Base URL for the scraper API service.",
        show_default=True,
        envvar="MIHETOFILMS_API_BASE",
    )


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        payload = response.json()
    except ValueError:
        payload = None
    detail = payload.get("detail", response.text) if isinstance(payload, dict) else response.text
    typer.echo(f"Request failed with HTTP {response.status_code}: {detail}", err=True)
    raise typer.Exit(code=1)


@app.command()
def health(api_base: str = _api_base_option()) -> None:
    """Call the /health endpoint and pretty-print the response."""

    with create_client(api_base) as client:
        response = client.get("/health")
        _raise_for_status(response)
        _echo_json(response.json())


@app.command()
def scrape(
    pages: Optional[int] = typer.Option(None, "--pages", min=1, help="Listing page budget for this run."),
    api_base: str = _api_base_option(),
) -> None:
    """Trigger a full scrape through the API and print the reported counts."""

    params = {"pages": pages} if pages is not None else None
    with create_client(api_base, timeout=None) as client:
        response = client.get("/api/scrape", params=params)
        _raise_for_status(response)
        _echo_json(response.json())


@app.command()
def catalog(
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Show at most this many entries."),
    api_base: str = _api_base_option(),
) -> None:
    """List persisted catalog entries."""

    params = {"limit": limit} if limit is not None else None
    with create_client(api_base) as client:
        response = client.get("/api/catalog", params=params)
        _raise_for_status(response)
        entries = response.json()

    if not entries:
        typer.echo("Catalog is empty.")
        return

    for entry in entries:
        typer.echo(f"{entry.get('id', 'N/A')}\t{entry.get('title', 'N/A')}\t{entry.get('uploadedTime', '')}")


@app.command()
def details(
    title_id: str = typer.Argument(..., help="Identifier of the title to show."),
    api_base: str = _api_base_option(),
) -> None:
    """Show the stored detail record for a single title."""

    with create_client(api_base) as client:
        response = client.get(f"/api/details/{title_id}")
        _raise_for_status(response)
        _echo_json(response.json())


@app.command()
def crawl(
    pages: int = typer.Option(50, "--pages", min=1, help="Listing page budget.", show_default=True),
    catalog_only: bool = typer.Option(
        False,
        "--catalog-only/--with-details",
        help="Stop after updating the catalog.",
        show_default=True,
    ),
    headless: bool = typer.Option(
        True,
        "--headless/--no-headless",
        help="Run Chromium without a visible window.",
        show_default=True,
    ),
    catalog_path: Path = typer.Option(Path("data/catalog.json"), help="Catalog JSON file."),
    details_path: Path = typer.Option(Path("data/details.json"), help="Detail records JSON file."),
) -> None:
    """Run the scrape in this process, without the API."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = CrawlerConfig(
        max_pages=pages,
        headless=headless,
        catalog_path=catalog_path,
        details_path=details_path,
    )
    pipeline = ScrapePipeline(config)

    if catalog_only:
        entries = pipeline.run_catalog(pages)
        _echo_json({"catalogSize": len(entries)})
        return

    try:
        result = pipeline.run(pages)
    except EmptyCatalogError as exc:
        typer.echo(f"Scraping failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    _echo_json(
        {
            "totalProcessed": result.total_processed,
            "totalSaved": result.total_saved,
            "newEntries": result.new_entries,
            "catalogSize": result.catalog_size,
        }
    )
