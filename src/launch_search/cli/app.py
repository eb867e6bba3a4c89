"""Main CLI application for launch-search."""

import asyncio

import typer
from rich.console import Console

from launch_search import __version__
from launch_search.cli.context import (
    create_catalog,
    create_formatter,
    create_search_context,
    create_store,
)
from launch_search.cli.options import (
    AppsFileOption,
    CategoryChoice,
    CategoryOption,
    FormatOption,
    MaxResultsOption,
    VerboseOption,
)
from launch_search.config import LaunchSearchConfig, get_config
from launch_search.engine.controller import QueryController
from launch_search.exceptions import InvalidArgumentError, LaunchSearchError
from launch_search.search.learning import LearningStore
from launch_search.search.results import ResultsView
from launch_search.search.synonyms import SynonymIndex
from launch_search.utils.logging import setup_logging

app = typer.Typer(
    name="launch-search",
    help="Launcher-style search over applications, settings and documents",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"launch-search version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Launcher-style search over applications, settings and documents."""
    pass


def _load_config(verbose: bool = False) -> LaunchSearchConfig:
    try:
        config = get_config()
    except LaunchSearchError as e:
        raise _fail(e) from None
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.output.color,
    )
    return config


def _fail(error: LaunchSearchError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {error.user_message}")
    return typer.Exit(error.exit_code)


async def _run_query(controller: QueryController, text: str, category: CategoryChoice) -> ResultsView:
    controller.open()
    controller.set_category(category.value)
    controller.set_query(text)
    await controller.wait_idle()
    if controller.view is None:
        raise InvalidArgumentError("Query produced no display pass")
    return controller.view


@app.command()
def query(
    text: str = typer.Argument(..., help="Search text."),
    category: CategoryOption = CategoryChoice.ALL,
    format: FormatOption = None,
    max_results: MaxResultsOption = None,
    no_documents: bool = typer.Option(False, "--no-documents", help="Skip document search."),
    content: bool = typer.Option(False, "--content", help="Also search plain-text file contents."),
    apps: AppsFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Search applications, settings panels and documents."""
    if not text.strip():
        raise _fail(InvalidArgumentError(user_message="Search text must not be empty"))

    config = _load_config(verbose)
    store = None
    try:
        store = create_store(config)
        context = create_search_context(
            config=config.model_copy(deep=True),
            catalog=create_catalog(apps),
            store=store,
        )

        if max_results is not None:
            context.settings.set("search.max_results", max_results)
        if no_documents:
            context.settings.set("documents.enabled", False)
        if content:
            context.settings.set("documents.content_search", True)

        controller = QueryController(context)
        view = asyncio.run(_run_query(controller, text, category))
        controller.shutdown()

        create_formatter(format, verbose, config).print_view(view)
    except LaunchSearchError as e:
        raise _fail(e) from None
    finally:
        if store is not None:
            store.close()


@app.command()
def select(
    text: str = typer.Argument(..., help="Query the result was chosen for."),
    app_id: str = typer.Argument(..., help="Application id that was chosen."),
) -> None:
    """Record that an application was chosen for a query."""
    if len(text.strip()) < 2:
        raise _fail(InvalidArgumentError(user_message="Query must be at least 2 characters"))

    config = _load_config()
    try:
        store = create_store(config)
    except LaunchSearchError as e:
        raise _fail(e) from None

    try:
        learning = LearningStore(store)
        learning.load()
        learning.record(text.strip(), app_id)
        console.print(
            f"Recorded [cyan]{app_id}[/cyan] for [bold]{text.strip().lower()}[/bold] "
            f"(boost {learning.score(text, app_id):.1f})"
        )
    finally:
        store.close()


learning_app = typer.Typer(help="Inspect or reset selection learning.")
app.add_typer(learning_app, name="learning")


@learning_app.command("show")
def learning_show(
    text: str | None = typer.Argument(None, help="Only show one query."),
    format: FormatOption = None,
) -> None:
    """Show learned query/result weights."""
    config = _load_config()
    try:
        store = create_store(config)
    except LaunchSearchError as e:
        raise _fail(e) from None

    try:
        learning = LearningStore(store)
        learning.load()
        rows = [
            {
                "query": q,
                "result": result_id,
                "weight": weight,
                "boost": round(learning.score(q, result_id), 1),
            }
            for q, result_id, weight in learning.entries(text)
        ]
    finally:
        store.close()

    formatter = create_formatter(format, config=config)
    if not rows:
        console.print("[dim]No learning data[/dim]")
        return
    formatter.print_table(rows, ["query", "result", "weight", "boost"], title="Learned selections")


@learning_app.command("clear")
def learning_clear(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Forget all recorded selections."""
    config = _load_config()

    if not force:
        confirm = typer.confirm("Clear all learning data?")
        if not confirm:
            console.print("[dim]Cancelled[/dim]")
            return

    try:
        store = create_store(config)
    except LaunchSearchError as e:
        raise _fail(e) from None

    try:
        learning = LearningStore(store)
        learning.load()
        queries = len(learning.table)
        learning.clear()
    finally:
        store.close()
    console.print(f"Cleared learning data for {queries} queries")


@app.command()
def synonyms(
    term: str | None = typer.Argument(None, help="Show what one query expands to."),
    format: FormatOption = None,
) -> None:
    """Show the synonym table."""
    config = _load_config()
    index = SynonymIndex()
    index.load(config.synonyms.table)
    formatter = create_formatter(format, config=config)

    if term is None:
        rows = [
            {"term": t, "applications": ", ".join(sorted(names))}
            for t, names in sorted(index.forward.items())
        ]
        formatter.print_table(rows, ["term", "applications"], title="Synonyms")
        return

    matches = index.matches(term)
    if not matches:
        console.print(f"[dim]No synonyms for '{term}'[/dim]")
        return
    formatter.print_table(
        [{"application": name} for name in sorted(matches)],
        ["application"],
        title=f"Synonym matches for '{term.strip().lower()}'",
    )


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        "-p",
        help="Show config file path.",
    ),
) -> None:
    """Show current configuration."""
    from launch_search.config.defaults import get_config_path, get_state_db_path

    if show_path:
        console.print(str(get_config_path()))
        return

    config = _load_config()
    console.print("[bold]launch-search configuration[/bold]\n")
    console.print(f"Config file: {get_config_path()}")
    console.print(f"State database: {get_state_db_path(config.learning.db_path)}")
    console.print(f"Max results: {config.search.max_results}")
    console.print(f"Debounce: {config.search.debounce_ms} ms")
    console.print(f"Output format: {config.output.default_format.value}")

    console.print("\n[bold]Categories:[/bold]")
    for name, enabled in config.categories.model_dump().items():
        console.print(f"  {name}: {'enabled' if enabled else 'disabled'}")

    docs = config.documents
    console.print("\n[bold]Documents:[/bold]")
    console.print(f"  Enabled: {docs.enabled}")
    console.print(f"  Folders: {', '.join(docs.folders) or '(none)'}")
    console.print(f"  Content search: {docs.content_search} (max {docs.max_content_bytes} bytes)")

    console.print("\n[bold]Learning:[/bold]")
    console.print(f"  Enabled: {config.learning.enabled}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
