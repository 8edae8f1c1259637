import json

from typer import Typer, Option, Argument, Exit
from typing import Annotated
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import SearchConfig
from .errors import HybridSearchError
from .factory import open_engine
from .logging import configure_logging
from .models import QueryScope, ResultPage, SearchOptions

app = Typer(help="Hybrid lexical + semantic search over an indexed corpus.")


def render_page(console: Console, query: str, page: ResultPage) -> None:
    table = Table(title=f"Results for {escape(repr(query))}", title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Document")
    table.add_column("Hybrid", justify="right", style="bold green")
    table.add_column("Semantic", justify="right")
    table.add_column("Lexical", justify="right")

    for rank, item in enumerate(page.items, start=page.offset + 1):
        table.add_row(
            str(rank),
            escape(item.document_id),
            f"{item.hybrid_score:.4f}",
            f"{item.semantic_score:.4f}",
            f"{item.lexical_score:.2f}",
        )

    console.print(table)
    summary = f"Page {page.page}/{max(page.page_count, 1)} · {page.total} ranked"
    if page.excluded_count:
        summary += f" · [yellow]{page.excluded_count} excluded[/]"
    console.print(summary)


@app.command()
def search(
    query: Annotated[str, Argument(help="Free-text query.")],
    weight: Annotated[
        float | None,
        Option("--weight", "-w", help="Semantic share of the hybrid score, in [0, 1]."),
    ] = None,
    page: Annotated[int, Option("--page", "-p", help="1-indexed result page.")] = 1,
    per_page: Annotated[
        int | None, Option("--per-page", "-n", help="Results per page.")
    ] = None,
    corpus: Annotated[
        str | None, Option("--corpus", "-c", help="Restrict to one corpus id.")
    ] = None,
    db_path: Annotated[
        str | None, Option("--db-path", help="DuckDB index path.")
    ] = None,
    as_json: Annotated[bool, Option("--json", help="Emit the page as JSON.")] = False,
) -> None:
    """Rank indexed documents for QUERY and print one page of results."""
    console = Console()
    try:
        config = SearchConfig.from_env(db_path=db_path)
        configure_logging(config.log_level, config.log_format)
        options = SearchOptions(
            weight=weight,
            page=page,
            per_page=config.per_page if per_page is None else per_page,
        )
        engine, cleanup = open_engine(config)
    except (HybridSearchError, ValueError, FileNotFoundError) as exc:
        console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise Exit(code=1)

    try:
        result = engine.search(query, options, scope=QueryScope(corpus_id=corpus))
    except HybridSearchError as exc:
        console.print(f"[bold red]Search failed:[/] {escape(str(exc))}")
        raise Exit(code=1)
    finally:
        cleanup()

    if as_json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        render_page(console, query, result)


@app.command()
def serve(
    host: Annotated[str, Option("--host", help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, Option("--port", help="Bind port.")] = 8000,
) -> None:
    """Serve the search API over HTTP."""
    from .server import run_server

    config = SearchConfig.from_env()
    configure_logging(config.log_level, config.log_format)
    run_server(host=host, port=port)
