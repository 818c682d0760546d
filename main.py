import logging
from typing import Optional

import typer
import uvicorn
from rich import box
from rich.console import Console
from rich.table import Table

from config import settings
from database import StoreUnavailableError, connect_store
from library import Library, StoreError

APP_NAME = "Bookshelf CLI"

app = typer.Typer(help=f"{APP_NAME}: run the web app and inspect the catalog.")
console = Console()


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default: API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Start the web app under uvicorn. Exits if MongoDB is unreachable."""
    configure_logging()
    host = host or settings.api_host
    port = port or settings.api_port
    console.print(f"Server is running on http://{host}:{port}")
    uvicorn.run("api:app", host=host, port=port, reload=reload, log_level=settings.log_level.lower())


@app.command("ping")
def cli_ping():
    """Check that MongoDB is reachable."""
    configure_logging()
    try:
        store = connect_store(settings)
    except StoreUnavailableError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1)
    store.close()
    console.print(f"[green]MongoDB is reachable[/] at {settings.mongodb_uri} (database: {settings.mongodb_database})")


@app.command("books")
def cli_books():
    """List every book in the catalog."""
    configure_logging()
    try:
        store = connect_store(settings)
    except StoreUnavailableError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1)
    try:
        books = Library(store).list_books()
    except StoreError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1)
    finally:
        store.close()

    if not books:
        console.print("No books in the catalog.")
        return

    table = Table(title="Books", box=box.SIMPLE)
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Author")
    table.add_column("Cost", justify="right")
    for book in books:
        table.add_row(book.id_str, book.name, book.author, f"{book.cost:.2f}")
    console.print(table)


if __name__ == "__main__":
    app()
