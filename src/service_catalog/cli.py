"""Typer CLI for Service Catalog."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(name="catalog", help="Service Catalog: browse services and their versions")
console = Console()


def _run_with_service(fn):
    """Open the configured database, run ``fn(service)`` and close it again."""
    from service_catalog.catalog.service import CatalogService
    from service_catalog.catalog.store import SqlServiceStore
    from service_catalog.common.config import get_settings
    from service_catalog.common.database import DatabaseManager

    async def runner():
        settings = get_settings()
        db = DatabaseManager(settings)
        await db.init()
        try:
            await db.create_all()
            async with db.get_session() as session:
                return await fn(CatalogService(SqlServiceStore(session), settings))
        finally:
            await db.close()

    return asyncio.run(runner())


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the Service Catalog API server."""
    import uvicorn
    from service_catalog.app import create_app

    console.print(f"[bold green]Starting Service Catalog on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command()
def seed():
    """Insert the bootstrap services into an empty database."""
    from service_catalog.catalog.seed import seed_services
    from service_catalog.common.config import get_settings
    from service_catalog.common.database import DatabaseManager

    async def runner() -> int:
        db = DatabaseManager(get_settings())
        await db.init()
        try:
            await db.create_all()
            async with db.get_session() as session:
                return await seed_services(session)
        finally:
            await db.close()

    added = asyncio.run(runner())
    if added:
        console.print(f"[bold green]Seeded {added} services[/bold green]")
    else:
        console.print("[yellow]Catalog already populated, nothing to do[/yellow]")


@app.command("list")
def list_cmd(
    search: str = typer.Option("", help="Substring to match in name or description"),
    sort_by: str = typer.Option("name", help="name, created_at or updated_at"),
    sort_dir: str = typer.Option("asc", help="asc or desc"),
    page: int = typer.Option(1, help="Page number"),
    page_size: Optional[int] = typer.Option(
        None, help="Services per page (defaults to CATALOG_DEFAULT_PAGE_SIZE)",
    ),
):
    """Print one page of services."""
    from service_catalog.catalog.domain import ListQuery
    from service_catalog.common.config import get_settings

    if page_size is None:
        page_size = get_settings().default_page_size
    query = ListQuery(
        search=search, sort_by=sort_by, sort_dir=sort_dir,
        page=page, page_size=page_size,
    )
    result = _run_with_service(lambda svc: svc.list_services(query))

    table = Table(title=f"Services — page {result.page}/{result.total_pages} ({result.total} total)")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Latest")
    table.add_column("Versions", justify="right")
    for item in result.items:
        latest = item.versions[0].version if item.versions else "-"
        table.add_row(
            str(item.service.id), item.service.name, latest, str(len(item.versions)),
        )
    console.print(table)


@app.command()
def show(
    service_id: int = typer.Argument(..., help="Service ID"),
):
    """Show a single service with all of its versions."""
    from service_catalog.common.exceptions import CatalogError

    try:
        item = _run_with_service(lambda svc: svc.get_service_by_id(service_id))
    except CatalogError as e:
        console.print(f"[bold red]{e.code}[/bold red] — {e.message}")
        raise typer.Exit(1)

    console.print(f"[bold]{item.service.name}[/bold] (id {item.service.id})")
    console.print(item.service.description)
    for version in item.versions:
        console.print(f"  {version.version}  {version.created_at:%Y-%m-%d %H:%M}")


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check Service Catalog server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] — v{data['version']}")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
