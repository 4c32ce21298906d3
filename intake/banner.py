"""
Banner and UI components for Outreach Intake
"""

from typing import Dict, Iterable, List, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from core import __version__
from core.models import ColumnMapping, RawTable, SKIP

# Global console instance
console = Console()


TAGLINE = "Turn provider exports into outreach organizations and leads"


def show_banner():
    """Display banner"""
    panel = Panel(
        f"[bold cyan]OUTREACH INTAKE[/bold cyan]\n\n[dim]{TAGLINE}[/dim]\n[dim]v{__version__}[/dim]",
        border_style="cyan",
        padding=(1, 3),
    )
    console.print(panel)


def show_step(step: int, title: str, description: str = ""):
    """Show a step header"""
    console.print()
    header = f"[bold cyan]Step {step}: {title}[/bold cyan]"
    if description:
        console.print(f"{header}\n[dim]{description}[/dim]")
    else:
        console.print(header)


def show_success(message: str):
    console.print(f"☉ [green]{message}[/green]")


def show_error(message: str):
    console.print(f"☿ [red]{message}[/red]")


def show_warning(message: str):
    console.print(f"▲ [yellow]{message}[/yellow]")


def show_info(message: str):
    console.print(f"◈ [blue]{message}[/blue]")


def show_mapping_table(table: RawTable, mapping: ColumnMapping, sample_limit: int = 1):
    """Display column -> field assignments with a sample value per column"""
    view = Table(show_header=True, header_style="bold cyan")
    view.add_column("#", justify="right", style="dim")
    view.add_column("Column", overflow="fold")
    view.add_column("Field")
    view.add_column("Sample", overflow="fold")

    duplicates = mapping.duplicate_targets()
    for index, field_key in mapping:
        samples = table.column_samples(index, sample_limit)
        if field_key == SKIP:
            target = "[dim]skip[/dim]"
        elif field_key in duplicates:
            target = f"[yellow]{field_key}[/yellow]"
        else:
            target = f"[green]{field_key}[/green]"
        view.add_row(str(index), table.headers[index][:40], target, (samples[0] if samples else "")[:30])

    console.print(view)


def show_catalog(title: str, rows: Iterable[Sequence[str]]):
    """Display a field catalog (key, label, category, required, kind)"""
    view = Table(title=title, show_header=True, header_style="bold cyan")
    view.add_column("Key", style="cyan")
    view.add_column("Label")
    view.add_column("Category", style="dim")
    view.add_column("Required", justify="center")
    view.add_column("Type", style="dim")

    for row in rows:
        view.add_row(*row)

    console.print(view)


def show_outcome_summary(counters: Dict[str, int], title: str = "Import Complete!"):
    """Show final outcome counters"""
    labels = {
        'created': 'Created',
        'contacts_created': 'Contacts created',
        'companies_created': 'Organizations created',
        'duplicates': 'Duplicates',
        'errors': 'Errors',
        'suppressed': 'Suppressed',
        'skipped_incomplete': 'Skipped (incomplete)',
    }
    lines = [f"[bold green]{title}[/bold green]\n"]
    for key, value in counters.items():
        colour = 'red' if key == 'errors' and value else 'white'
        lines.append(f"{labels.get(key, key)}: [{colour}]{value}[/{colour}]")

    panel = Panel("\n".join(lines), border_style="green", padding=(1, 2))
    console.print(panel)


def show_config_status(status: Dict[str, Dict]):
    view = Table(show_header=False, box=None)
    view.add_column(style="cyan")
    view.add_column()
    for section, values in status.items():
        for key, value in values.items():
            view.add_row(f"{section}.{key}", str(value))
    console.print(view)


def show_issues(issues: List, limit: int = 10):
    """Show the first few per-row issues"""
    if not issues:
        return
    view = Table(show_header=True, header_style="bold yellow")
    view.add_column("Row", justify="right")
    view.add_column("Key")
    view.add_column("Reason", overflow="fold")
    for issue in sorted(issues, key=lambda i: i.row)[:limit]:
        view.add_row(str(issue.row), issue.key, issue.reason)
    console.print(view)
    if len(issues) > limit:
        console.print(f"[dim]... and {len(issues) - limit} more[/dim]")


def create_progress() -> Progress:
    """Create a Rich progress bar"""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console
    )
