import json
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from src.exceptions import StarwarsSearchException
from src.services.pipeline import IngestionPipeline, make_ingestion_pipeline

app = typer.Typer(help="Download Star Wars characters and import them into OpenSearch.")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log debug output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
):
    setup_logging(verbose=verbose, quiet=quiet)


def _fail(e: StarwarsSearchException) -> None:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


@contextmanager
def _open_pipeline(index_name: Optional[str]) -> Iterator[IngestionPipeline]:
    """Build the pipeline, turn package errors into exit code 1 and always close it."""
    try:
        pipeline = make_ingestion_pipeline(index_name=index_name)
    except StarwarsSearchException as e:
        _fail(e)
    try:
        yield pipeline
    except StarwarsSearchException as e:
        _fail(e)
    finally:
        pipeline.close()


@app.command()
def ingest(
    index: Optional[str] = typer.Option(None, help="Target index name"),
    url: Optional[str] = typer.Option(None, help="Source page URL"),
    force: bool = typer.Option(False, help="Drop and recreate the index"),
    fetch: bool = typer.Option(True, "--fetch/--no-fetch", help="Scrape the source page or reuse the existing corpus"),
):
    """Run the full ingestion pipeline."""
    with _open_pipeline(index) as pipeline:
        results = pipeline.run(url=url, fetch=fetch, force=force)
    typer.echo(json.dumps(results, indent=2))


@app.command()
def init(
    index: Optional[str] = typer.Option(None, help="Target index name"),
    force: bool = typer.Option(False, help="Drop and recreate the index"),
):
    """Create the index from the settings file."""
    with _open_pipeline(index) as pipeline:
        created = pipeline.initialize(force=force)
    typer.echo(f"Index '{pipeline.index_name}' {'created' if created else 'already exists'}")


@app.command()
def search(
    text: str = typer.Argument(..., help="Free-text query"),
    index: Optional[str] = typer.Option(None, help="Index to search"),
):
    """Search the index and print the raw result."""
    with _open_pipeline(index) as pipeline:
        result = pipeline.search(text)
    typer.echo(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
