"""Typer CLI for the mihetofilms scraper."""
