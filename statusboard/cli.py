import asyncio

import typer
from rich.console import Console
from rich.table import Table

from statusboard.config import settings

console = Console()
cli_app = typer.Typer(name="status-admin", help="Status page administrative CLI")

_STATUS_STYLE = {
    "operational": "green",
    "degraded": "yellow",
    "outage": "red",
    "unknown": "dim",
    "investigating": "red",
    "identified": "yellow",
    "monitoring": "blue",
    "resolved": "green",
}


def _run_async(coro):
    """Run async code from sync CLI context."""
    return asyncio.run(coro)


def _styled(status: str) -> str:
    style = _STATUS_STYLE.get(status, "white")
    return f"[{style}]{status}[/{style}]"


async def _uptime_store():
    from statusboard.core import database
    from statusboard.services.uptime import UptimeStore

    await database.init_db()
    return UptimeStore(database.async_session, retention_days=settings.status_retention_days)


async def _probe_cycle(record: bool):
    from statusboard.main import new_http_client
    from statusboard.services.aggregator import check_all_services
    from statusboard.services.monitor import is_up
    from statusboard.services.registry import build_registry

    services = build_registry(settings)
    async with new_http_client(settings.status_probe_timeout) as client:
        status = await check_all_services(services, client, settings.status_probe_timeout)

    recorded = None
    if record:
        up = is_up(status.overall)
        if up is not None:
            store = await _uptime_store()
            recorded = await store.record_check(up)
    return status, recorded


def _print_status(status) -> None:
    table = Table(title=f"Overall: {status.overall}")
    table.add_column("Service", style="cyan")
    table.add_column("Group")
    table.add_column("Status")
    table.add_column("Latency", justify="right")
    table.add_column("Error", style="dim")

    for h in status.services:
        latency = f"{h.latency} ms" if h.latency is not None else "-"
        table.add_row(h.name, h.group, _styled(h.status), latency, h.error or "")

    console.print(table)
    console.print(f"  Operational now: {status.uptime_percentage}%\n")


@cli_app.command("check")
def check():
    """Probe every configured service once and print the results."""
    status, _ = _run_async(_probe_cycle(record=False))
    _print_status(status)
    if status.overall != "operational":
        raise typer.Exit(code=1)


@cli_app.command("record")
def record():
    """Run one probe cycle and record it as an uptime check."""
    status, recorded = _run_async(_probe_cycle(record=True))
    _print_status(status)
    if recorded is None:
        console.print("[yellow]Check not recorded (store not configured, or status unknown).[/yellow]")
        return
    console.print(
        f"[bold green]Recorded.[/bold green] {recorded.date}: "
        f"{recorded.checks} checks, {recorded.failures} failures ({recorded.uptime:.2f}%)"
    )


@cli_app.command("uptime")
def uptime(
    days: int = typer.Option(30, "--days", help="Window in days (1-365)"),
):
    """Print daily uptime history and the total over the window."""
    from statusboard.services.uptime import uptime_summary

    async def _history():
        store = await _uptime_store()
        return await uptime_summary(store, days)

    summary = _run_async(_history())

    table = Table(title=f"Uptime, last {summary.period} days")
    table.add_column("Date", style="cyan")
    table.add_column("Checks", justify="right")
    table.add_column("Failures", justify="right")
    table.add_column("Uptime", justify="right")

    for day in summary.days:
        table.add_row(day.date, str(day.checks), str(day.failures), f"{day.uptime:.2f}%")

    console.print(table)
    console.print(f"  Total: [bold]{summary.total_uptime}%[/bold]\n")


@cli_app.command("incidents")
def incidents(
    limit: int = typer.Option(10, "--limit", help="Number of incidents to show"),
):
    """List the most recent incidents and maintenance windows."""
    from statusboard.services.incidents.repository import IncidentRepository
    from statusboard.services.incidents.sources import FilesystemIncidentSource

    repository = IncidentRepository(FilesystemIncidentSource(settings.status_incidents_dir))
    recent = _run_async(repository.get_recent_incidents(limit))

    if not recent:
        console.print("[dim]No incidents found.[/dim]")
        return

    table = Table(title="Recent Incidents")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Type")
    table.add_column("Severity")
    table.add_column("Status")
    table.add_column("Updates", justify="right")

    for i in recent:
        table.add_row(i.id, i.title, i.type, i.severity, _styled(i.status), str(len(i.updates)))

    console.print(table)


@cli_app.command("services")
def services():
    """List the configured services by group."""
    from statusboard.services.registry import build_registry, services_by_group

    table = Table(title="Monitored Services")
    table.add_column("Group", style="green")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Health URL", style="dim")

    for group in services_by_group(build_registry(settings)):
        for svc in group.services:
            table.add_row(group.name, svc.id, svc.name, svc.health_url)

    console.print(table)


def main():
    cli_app()


if __name__ == "__main__":
    main()
