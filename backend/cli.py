"""
Karat Master CLI.

Command-line interface for common operations.
"""

import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

from shared.utils.exceptions import AppException

app = typer.Typer(
    name="karat-master",
    help="Karat Master data CLI",
    add_completion=False,
)
console = Console()

CLI_EMAIL = "cli@karat-master.local"


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create all database tables."""
    from shared.infrastructure.db import engine
    from rest_api.models import Base

    console.print("[blue]Creating tables...[/blue]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created/verified[/green]")


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed divisions and standard karats."""
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context
    from rest_api.seed import seed as run_seed

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        divisions, created = run_seed(db)

    console.print(f"[green]✓ {divisions} division(s), {created} karat(s) created[/green]")


# =============================================================================
# Karat Commands
# =============================================================================

@app.command()
def list_karats(
    division_id: int = typer.Argument(..., help="Division ID"),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Include inactive and soft-deleted karats"
    ),
):
    """List the karats of a division."""
    from shared.infrastructure.db import get_db_context
    from rest_api.models import KaratMaster
    from rest_api.services.domain import KaratService

    with get_db_context() as db:
        service = KaratService(db)
        if show_all:
            karats = service.list_by_division_all(
                division_id, include_deleted=True, order_by=KaratMaster.code
            )
        else:
            karats = service.list_by_division(division_id)

    if not karats:
        console.print("[yellow]No karats found[/yellow]")
        return

    table = Table(title=f"Karats of division {division_id}")
    table.add_column("ID", style="dim")
    table.add_column("Code", style="cyan")
    table.add_column("Description")
    table.add_column("Purity", justify="right", style="green")
    table.add_column("Range", justify="right")
    table.add_column("Status")

    for karat in karats:
        status = karat.status if karat.is_active else f"{karat.status} (deleted)"
        table.add_row(
            str(karat.id),
            karat.code,
            karat.description,
            f"{karat.standard_purity:g}",
            f"{karat.minimum:g} - {karat.maximum:g}",
            status,
        )

    console.print(table)


@app.command()
def bulk_status(
    status: str = typer.Argument(..., help="active or inactive"),
    ids: list[str] = typer.Argument(..., help="Karat IDs"),
):
    """Set the status of several karats."""
    from shared.infrastructure.db import get_db_context
    from rest_api.services.domain import KaratBulkService

    try:
        with get_db_context() as db:
            result = KaratBulkService(db).bulk_update_status(ids, status, None, CLI_EMAIL)
    except AppException as e:
        console.print(f"[red]✗ {e.detail}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]✓ matched {result.matched_count}, modified {result.modified_count}[/green]"
    )


@app.command()
def version():
    """Show version information."""
    table = Table(title="Karat Master Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("CLI", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
