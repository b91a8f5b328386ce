"""Rich UI components for terminal interface"""

from typing import Iterable, List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from .models import MonitorSettings, TickResult, TrackerPhase


console = Console()


def print_error(message: str):
    """Print error message"""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str):
    """Print success message"""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_info(message: str):
    """Print info message"""
    console.print(f"[cyan]ℹ[/cyan] {message}")


def print_warning(message: str):
    """Print warning message"""
    console.print(f"[yellow]⚠[/yellow] {message}")


def display_lines(title: str, lines: Iterable[str]):
    """Print a heading followed by indented lines"""
    console.print(f"[bold]{title}[/bold]")
    for line in lines:
        console.print(f"  {line}", markup=False, highlight=False)


def display_settings(settings: MonitorSettings):
    """Show the effective settings (always shown, even when not verbose)"""
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Process", settings.describe_screen_saver())
    table.add_row("Time", f"{settings.screen_time_ms // 1000} seconds")
    table.add_row("Idle", f"{settings.idle_time_ms // 1000} seconds")
    table.add_row("Verbose", str(settings.verbose))
    table.add_row("Sample", f"{settings.sample_period_ms // 1000} seconds")

    console.print(table)


def display_preflight(problems: List[str]):
    """Show preflight results"""
    if not problems:
        print_success("Ready to query powercfg")
        return

    print_error("Problem invoking powercfg")
    for problem in problems:
        console.print(f"  • {problem}")


def create_status_display(result: TickResult, settings: MonitorSettings) -> Panel:
    """Create the per-sample status panel shown in verbose mode"""
    state = result.state

    if result.phase == TrackerPhase.IDLE:
        status = "[dim]Screen saver is not running[/dim]"
    elif result.fire_sleep:
        status = "[bold yellow]Putting the computer to sleep[/bold yellow]"
    elif result.phase == TrackerPhase.BELOW_THRESHOLD:
        status = "[green]Screen saver running[/green]"
    elif result.active_requests:
        status = f"[red]{len(result.active_requests)} SYSTEM request(s) keeping the computer awake[/red]"
    else:
        status = "[yellow]No SYSTEM requests, waiting for idle time[/yellow]"

    lines = [
        status,
        "",
        f"Screen saver run time: {state.screen_saver_elapsed_ms // 1000}s "
        f"[dim](requests checked from {settings.threshold_ms // 1000}s)[/dim]",
        f"Time without requests: {state.idle_without_request_elapsed_ms // 1000}s "
        f"[dim](sleep at {settings.idle_time_ms // 1000}s)[/dim]",
    ]

    return Panel(
        "\n".join(lines),
        box=box.ROUNDED,
        border_style="cyan",
        title="Sleeping Pill",
        title_align="left"
    )


def display_status(result: TickResult, settings: MonitorSettings):
    """Print the status panel"""
    console.print(create_status_display(result, settings))


def display_report(content: str):
    """Display a report"""
    console.print("\n")
    console.print(Panel(content, box=box.ROUNDED, border_style="cyan"))
