"""vecdb CLI application with Typer."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from vecdb import __version__
from vecdb.app import SearchHit, SimilarityStore
from vecdb.bootstrap import open_store
from vecdb.config import get_settings, set_settings
from vecdb.errors import VecDBError
from vecdb.utils.logfmt import LogfmtFormatter
from vecdb.utils.vector_math import add, subtract

app = typer.Typer(
    name="vecdb",
    help="Embed text into a local vector database and search it by similarity",
    add_completion=False,
    no_args_is_help=True,
)

EXAMPLE_WORDS = ("king", "man", "woman", "queen", "duck")
EMBEDDERS = ("hashing", "sbert")

DBPathArg = Annotated[
    Path | None,
    typer.Argument(help="Optional location of the vector database"),
]
TextOption = Annotated[
    str | None,
    typer.Option("--text", "-t", help="Input text (reads all of stdin when omitted)"),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"vecdb version {__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    logging.basicConfig(level=level.upper(), handlers=[handler])


def read_input_text(text: str | None) -> str:
    """Return ``text`` or, when omitted, everything on stdin."""
    if text is None:
        text = sys.stdin.read()
    if not text:
        typer.secho("Error: no input text (pass --text or pipe stdin)", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    return text


@contextmanager
def _opened(db_path: Path | None) -> Iterator[SimilarityStore]:
    """Open the store and map domain errors to a non-zero exit."""
    try:
        with open_store(db_path) as store:
            yield store
    except VecDBError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _print_hits(store: SimilarityStore, hits: list[SearchHit]) -> None:
    rows = sorted(
        ((store.lookup_id(hit.id).text, hit.distance) for hit in hits),
        key=lambda row: row[1],
    )
    for text, distance in rows:
        typer.echo(f"{distance:.6f}\t{text}")


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Print verbose logs"),
    ] = False,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Directory for stores opened without a path"),
    ] = None,
    embedder: Annotated[
        str | None,
        typer.Option("--embedder", help="Embedding backend (hashing or sbert)"),
    ] = None,
) -> None:
    """vecdb - local embedding-backed similarity store."""
    settings = get_settings()
    if data_dir:
        settings.data_dir = data_dir
    if embedder:
        if embedder not in EMBEDDERS:
            raise typer.BadParameter(f"must be one of: {', '.join(EMBEDDERS)}", param_hint="--embedder")
        settings.embedder = embedder  # type: ignore[assignment]
    set_settings(settings)
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command("store")
def store_command(db_path: DBPathArg = None, text: TextOption = None) -> None:
    """Embed and store the input text, printing its id."""
    input_text = read_input_text(text)
    with _opened(db_path) as store:
        key = store.insert(input_text)
    typer.echo(str(key))


@app.command("lookup")
def lookup_command(db_path: DBPathArg = None, text: TextOption = None) -> None:
    """Print the stored embedding of the input text, if found."""
    input_text = read_input_text(text)
    with _opened(db_path) as store:
        record = store.lookup(input_text)
    typer.echo(f"{record.id}\t{record.text}")
    typer.echo(", ".join(repr(value) for value in record.vector))


@app.command("search")
def search_command(
    db_path: DBPathArg = None,
    text: TextOption = None,
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="Number of results")] = 10,
) -> None:
    """Print the stored texts closest to the input text."""
    input_text = read_input_text(text)
    with _opened(db_path) as store:
        hits = store.search(input_text, count)
        _print_hits(store, hits)


@app.command("example")
def example_command(
    db_path: DBPathArg = None,
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="Number of results")] = 10,
) -> None:
    """Store a few words, then search for king - man + woman."""
    with _opened(db_path) as store:
        for word in EXAMPLE_WORDS:
            store.insert(word)

        king = store.lookup("king").vector
        man = store.lookup("man").vector
        woman = store.lookup("woman").vector
        hits = store.search(add(subtract(king, man), woman), count)
        _print_hits(store, hits)


@app.command("reconcile")
def reconcile_command(db_path: DBPathArg = None) -> None:
    """Re-add stored records missing from the index snapshot."""
    with _opened(db_path) as store:
        added = store.reconcile()
    if added:
        typer.secho(f"Re-indexed {len(added)} records", fg=typer.colors.YELLOW)
    else:
        typer.secho("Index is in sync with records", fg=typer.colors.GREEN)


@app.command("stats")
def stats_command(db_path: DBPathArg = None) -> None:
    """Print record and index counts for the store."""
    with _opened(db_path) as store:
        stats = store.stats()
    for key, value in stats.items():
        typer.echo(f"{key}: {value}")


if __name__ == "__main__":
    app()
