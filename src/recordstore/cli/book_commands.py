"""Book management CLI commands."""

from typing import NoReturn, Optional

import typer
from rich.table import Table

from recordstore.core.errors import StoreError
from recordstore.entities.book import Book, BookRepository

from .utils import console, open_database

book_app = typer.Typer(help="📚 Book management commands", no_args_is_help=True)


def _fail(message: str, error: Exception) -> NoReturn:
    console.print(f"[red]❌ {message}: {error}[/red]")
    raise typer.Exit(code=1) from error


@book_app.command("add")
def add_book(
    ctx: typer.Context,
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Book title"),
    price: Optional[float] = typer.Option(None, "--price", "-p", help="Price"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Description (at most 2000 characters)"
    ),
    isbn: Optional[str] = typer.Option(None, "--isbn", help="ISBN"),
    pages: Optional[int] = typer.Option(None, "--pages", help="Number of pages"),
    illustrations: Optional[bool] = typer.Option(
        None, "--illustrations/--no-illustrations", help="Whether the book is illustrated"
    ),
) -> None:
    """Add a book and commit it."""
    book = Book(
        title=title,
        price=price,
        description=description,
        isbn=isbn,
        page_count=pages,
        has_illustrations=illustrations,
    )
    db = open_database(ctx)
    try:
        with db.transaction() as txn:
            BookRepository(txn).create(book)
    except StoreError as e:
        _fail("Failed to add book", e)
    finally:
        db.dispose()

    console.print(f"[green]✓[/green] Created book {book.id}: {book.title}")


@book_app.command("list")
def list_books(
    ctx: typer.Context,
    order_by: Optional[str] = typer.Option(None, "--order-by", "-o", help="Field to sort by"),
    descending: bool = typer.Option(False, "--desc", help="Sort in descending order"),
) -> None:
    """List all books."""
    db = open_database(ctx)
    try:
        with db.transaction() as txn:
            books = BookRepository(txn).list_all(order_by=order_by, descending=descending)
    except StoreError as e:
        _fail("Failed to list books", e)
    finally:
        db.dispose()

    if not books:
        console.print("[yellow]No books found[/yellow]")
        return

    table = Table(title="Books")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Price", style="magenta")
    table.add_column("ISBN", style="blue")
    table.add_column("Pages", style="magenta")
    table.add_column("Illustrated", style="yellow")

    for book in books:
        table.add_row(
            str(book.id),
            book.title or "",
            "" if book.price is None else f"{book.price:.2f}",
            book.isbn or "",
            "" if book.page_count is None else str(book.page_count),
            "" if book.has_illustrations is None else ("✅" if book.has_illustrations else "❌"),
        )

    console.print(table)
    console.print(f"\n[green]Found {len(books)} books[/green]")


@book_app.command("clear")
def clear_books(ctx: typer.Context) -> None:
    """Delete every book."""
    db = open_database(ctx)
    try:
        with db.transaction() as txn:
            deleted = BookRepository(txn).clear()
    except StoreError as e:
        _fail("Failed to delete books", e)
    finally:
        db.dispose()

    console.print(f"[green]✓[/green] Deleted {deleted} books")
