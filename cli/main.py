"""CLI entry point — Typer app for filing-rag commands.

Usage:
    filing-rag ingest AAPL --form 10-K --limit 3
    filing-rag ingest-file aapl_10k.txt --symbol AAPL --form 10-K --date 2024-11-01 --accession 0000320193-24-000123
    filing-rag search "supply chain" --symbol AAPL
    filing-rag section "Risk Factors" --symbol AAPL
    filing-rag filings AAPL
    filing-rag status
"""

from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="filing-rag",
    help="SEC filing search — ingest, chunk, and search filings.",
    no_args_is_help=True,
)

console = Console()

_FILE_PATH = typer.Argument(..., help="Path to a plain-text or HTML filing document")
_DB_OPTION = typer.Option(None, "--db", help="SQLite database path (overrides settings)")


def _open(db: Path | None):
    """Load settings and open the store and search engine."""
    from filing_rag.config import load_settings
    from filing_rag.retrieval.search import SearchEngine
    from filing_rag.store.filing_store import FilingStore

    settings = load_settings()
    if db is not None:
        settings.store.path = str(db)
    store = FilingStore.from_settings(settings)
    return settings, store, SearchEngine(store, settings.search)


def _preview(content: str, width: int = 160) -> str:
    flat = " ".join(content.split())
    return flat if len(flat) <= width else flat[: width - 1] + "…"


def _results_table(title: str, results, show_score: bool) -> Table:
    table = Table(title=title)
    table.add_column("Symbol", style="cyan")
    table.add_column("Form")
    table.add_column("Filed")
    table.add_column("Section")
    table.add_column("#", justify="right")
    if show_score:
        table.add_column("Score", justify="right")
    table.add_column("Text")

    for r in results:
        row = [r.symbol, r.form, r.filing_date.isoformat(), r.section_name, str(r.chunk_index)]
        if show_score:
            row.append(f"{r.score:.2f}")
        row.append(_preview(r.content))
        table.add_row(*row)
    return table


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at INFO level"),
) -> None:
    level = "INFO" if verbose else os.getenv("LOG_LEVEL", "WARNING")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def ingest(
    symbol: str = typer.Argument(..., help="Issuer ticker"),
    form: list[str] | None = typer.Option(
        None, "--form", "-f", help="Form type to include (repeatable)",
    ),
    limit: int = typer.Option(5, "--limit", "-n", help="Maximum filings to fetch"),
    force: bool = typer.Option(False, "--force", help="Re-index filings already indexed"),
    db: Path | None = _DB_OPTION,
) -> None:
    """Fetch recent filings from EDGAR and index them."""
    from filing_rag.chunking.filing_chunker import FilingChunker
    from filing_rag.edgar.client import EdgarClient, EdgarError
    from filing_rag.pipeline.ingest import IngestPipeline

    settings, store, _ = _open(db)
    form_types = form or settings.edgar.form_types
    pipeline = IngestPipeline(store, FilingChunker.from_settings(settings.chunking))

    try:
        with EdgarClient.from_settings(settings.edgar) as client:
            result = pipeline.ingest_recent(
                symbol, client, form_types=form_types, limit=limit, skip_processed=not force,
            )
    except EdgarError as exc:
        console.print(f"[bold red]EDGAR error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"\n[bold green]Ingested:[/] {result.symbol}")
    console.print(f"  Filings indexed: {len(result.ingested)}")
    console.print(f"  Skipped: {len(result.skipped)}")
    console.print(f"  Chunks: {result.chunk_count}")
    for failure in result.failed:
        console.print(f"  [yellow]Failed:[/] {failure.accession_number}: {failure.error}")


@app.command("ingest-file")
def ingest_file(
    path: Annotated[Path, _FILE_PATH],
    symbol: str = typer.Option(..., "--symbol", "-s", help="Issuer ticker"),
    form: str = typer.Option("10-K", "--form", "-f", help="Form type"),
    filing_date: str = typer.Option(..., "--date", help="Filing date (YYYY-MM-DD)"),
    accession: str = typer.Option(..., "--accession", "-a", help="Accession number"),
    url: str = typer.Option("", "--url", help="Source URL of the filing"),
    db: Path | None = _DB_OPTION,
) -> None:
    """Index a filing document from disk."""
    from filing_rag.chunking.filing_chunker import FilingChunker
    from filing_rag.documents.sanitize import clean_filing_text
    from filing_rag.documents.schemas import FilingMetadata
    from filing_rag.pipeline.ingest import IngestPipeline

    settings, store, _ = _open(db)
    metadata = FilingMetadata(
        symbol=symbol,
        form=form,
        filing_date=date.fromisoformat(filing_date),
        accession_number=accession,
        file_url=url or path.resolve().as_uri(),
    )
    raw_text = clean_filing_text(path.read_text(encoding="utf-8", errors="replace"))
    pipeline = IngestPipeline(store, FilingChunker.from_settings(settings.chunking))
    result = pipeline.ingest(metadata, raw_text)

    console.print(f"\n[bold green]Ingested:[/] {path.name}")
    console.print(f"  Filing id: {result.filing_id}")
    console.print(f"  Chunks: {result.chunk_count}")
    console.print(f"  Sections: {', '.join(result.sections) or '-'}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search terms (any may match)"),
    symbol: str | None = typer.Option(None, "--symbol", "-s", help="Filter by ticker"),
    form: str | None = typer.Option(None, "--form", "-f", help="Filter by form type"),
    section: str | None = typer.Option(None, "--section", help="Filter by section name"),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of results"),
    offset: int = typer.Option(0, "--offset", help="Results to skip"),
    db: Path | None = _DB_OPTION,
) -> None:
    """Full-text search over indexed chunks, most relevant first."""
    from filing_rag.retrieval.schemas import SearchOptions

    _, _, engine = _open(db)
    options = SearchOptions(symbol=symbol, form=form, section=section, limit=limit, offset=offset)
    results = engine.search_text(query, options)

    if not results:
        console.print("[yellow]No matches.[/]")
        return
    console.print(_results_table(f"Results for {query!r}", results, show_score=True))


@app.command()
def section(
    name: str = typer.Argument(..., help="Section name, e.g. 'Risk Factors'"),
    symbol: str | None = typer.Option(None, "--symbol", "-s", help="Filter by ticker"),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of chunks"),
    db: Path | None = _DB_OPTION,
) -> None:
    """Show chunks of a section across filings, newest filing first."""
    _, _, engine = _open(db)
    results = engine.search_section(name, symbol=symbol, limit=limit)

    if not results:
        console.print("[yellow]No matching sections.[/]")
        return
    console.print(_results_table(f"Section {name!r}", results, show_score=False))


@app.command()
def filings(
    symbol: str = typer.Argument(..., help="Issuer ticker"),
    db: Path | None = _DB_OPTION,
) -> None:
    """List indexed filings for an issuer."""
    _, _, engine = _open(db)
    rows = engine.get_processed_filings(symbol)

    table = Table(title=f"Indexed filings for {symbol.upper()}")
    table.add_column("Id", justify="right")
    table.add_column("Accession", style="cyan")
    table.add_column("Form")
    table.add_column("Filed")
    table.add_column("Chunks", justify="right")
    for f in rows:
        table.add_row(
            str(f.id), f.accession_number, f.form, f.filing_date.isoformat(), str(f.chunk_count),
        )
    console.print(table)


@app.command()
def reindex(db: Path | None = _DB_OPTION) -> None:
    """Rebuild the full-text index from stored chunks."""
    from filing_rag.store.database import rebuild_fts_index

    _, store, _ = _open(db)
    rebuild_fts_index(store.engine)
    console.print("[bold green]Full-text index rebuilt.[/]")


@app.command()
def status(db: Path | None = _DB_OPTION) -> None:
    """Show corpus statistics and configuration."""
    from filing_rag.documents.sec_parser import section_names

    settings, _, engine = _open(db)
    stats = engine.get_stats()

    console.print("\n[bold green]filing-rag[/] v0.1.0\n")

    table = Table(title="Corpus")
    table.add_column("Item", style="cyan")
    table.add_column("Value")

    table.add_row("Database", settings.store.path)
    table.add_row("Indexed filings", str(stats.filing_count))
    table.add_row("Chunks", str(stats.chunk_count))
    table.add_row("Symbols", str(stats.symbol_count))
    table.add_row(
        "Chunk sizing",
        f"target {settings.chunking.target_tokens} / max {settings.chunking.max_tokens} / "
        f"min {settings.chunking.min_tokens} / overlap {settings.chunking.overlap_tokens}",
    )
    table.add_row("Sections", ", ".join(section_names()))

    console.print(table)


if __name__ == "__main__":
    app()
