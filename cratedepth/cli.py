import logging

import typer
from rich.console import Console
from rich.markup import escape

from cratedepth.__version__ import __version__
from cratedepth.core.registry import CratesIoClient, RegistryError
from cratedepth.core.render import render_tree, to_dot
from cratedepth.core.walker import DEFAULT_DEPTH, fetch_dependency_tree

app = typer.Typer(add_completion=False, help="Visualize crates.io dependencies as a tree.")
err_console = Console(stderr=True, soft_wrap=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cratedepth {__version__}")
        raise typer.Exit()


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            filename="debug.log",
            level=logging.DEBUG,
            filemode="w",
            format="%(asctime)s - %(levelname)s - %(message)s",
            force=True,
        )
    elif not logging.getLogger().handlers:
        # errors reach the user through err_console, tracebacks only through debug.log
        logging.getLogger().addHandler(logging.NullHandler())


@app.command()
def main(
    crate: str = typer.Option(..., "--crate", "-c", help="Sets the package to display"),
    levels: int = typer.Option(DEFAULT_DEPTH, "--levels", "-l", min=0, help="Sets the levels to display"),
    optional: bool = typer.Option(False, "--optional", "-o", help="Follow optional dependencies only"),
    dot: bool = typer.Option(False, "--dot", help="Print a Graphviz DOT graph instead of the tree"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Browse the tree in a terminal UI"),
    debug: bool = typer.Option(False, "--debug", help="Write a debug.log in the current directory"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    _configure_logging(debug)

    try:
        with CratesIoClient() as client:
            root = fetch_dependency_tree(client, crate, levels, optional=optional)
    except RegistryError as e:
        logging.exception("Fatal error while fetching the dependency tree:")
        err_console.print(f"[bold red]Error:[/] {escape(str(e))}")
        raise typer.Exit(code=1)

    if interactive:
        from cratedepth.app import DepthApp

        DepthApp(root).run()
        return

    if dot:
        typer.echo(to_dot(root))
        return

    typer.echo(f"Dependencies for package '{crate}':")
    typer.echo(render_tree(root))
