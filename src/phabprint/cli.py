"""PhabPrint CLI - Phabricator to thermal printer."""

import json
import logging
import sys

import click

from .adapters.file_cache import FilePrintCache
from .adapters.phabricator_api import FetchError, PhabricatorAdapter
from .config import CONFIG_FILE, load_config
from .core.tasks import column_names, select_sprint_tasks
from .core.tickets import format_task
from .workflows import build_dispatcher, build_scheduler, log_config_summary

BANNER = """
+-------------------------------------------+
|   PhabPrint - Physical Kanban Printer     |
|   Phabricator -> Thermal Printer          |
+-------------------------------------------+
"""


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )


def _require_valid(config) -> None:
    errors = config.validate()
    if errors:
        click.echo("Configuration errors:", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        click.echo(f"\nPlease check {CONFIG_FILE} or your environment", err=True)
        sys.exit(1)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """PhabPrint - print Phabricator sprint tasks as kanban tickets."""
    setup_logging(debug)


@main.command()
@click.option("--once", is_flag=True, help="Run one poll and exit")
@click.option("--dry-run", is_flag=True, help="Preview tickets instead of printing")
def run(once: bool, dry_run: bool):
    """Poll for sprint tasks and print new ones."""
    config = load_config()
    _require_valid(config)

    click.echo(BANNER)
    log_config_summary(config)

    scheduler = build_scheduler(config, dry_run=dry_run)
    scheduler.install_signal_handlers()
    if not once:
        click.echo("Press Ctrl+C to stop")
    scheduler.start(once=once)


@main.command("clear-cache")
def clear_cache():
    """Forget printed tasks so everything prints again."""
    config = load_config()
    FilePrintCache(config.cache_file).clear()
    click.echo("Cache cleared. Run again to print all sprint tasks.")


@main.command("test-print")
@click.option("--dry-run", is_flag=True, help="Preview the test ticket instead of printing")
def test_print(dry_run: bool):
    """Print a test ticket."""
    config = load_config()
    dispatcher = build_dispatcher(config, dry_run=dry_run)

    click.echo("[TEST] Printing test ticket...")
    try:
        dispatcher.print_test()
    except Exception as e:
        click.echo(f"[TEST] Failed: {e}", err=True)
        sys.exit(1)
    click.echo("[TEST] Test ticket printed successfully!")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(as_json: bool):
    """List sprint tasks without printing."""
    config = load_config()
    _require_valid(config)

    try:
        all_tasks = PhabricatorAdapter.from_config(config).fetch_assigned_tasks()
    except FetchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    sprint_tasks = select_sprint_tasks(all_tasks, config.sprint_columns)
    tickets = [format_task(t, config.phab_url) for t in sprint_tasks]

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": t.id,
                        "title": t.title,
                        "priority": t.priority,
                        "points": t.points,
                        "status": t.status,
                        "columns": list(t.columns),
                        "url": t.url,
                    }
                    for t in tickets
                ],
                indent=2,
            )
        )
        return

    if not tickets:
        click.echo(f"No sprint tasks ({len(all_tasks)} assigned).")
        return

    for task, ticket in zip(sprint_tasks, tickets):
        click.echo(f"{ticket.id:8} {ticket.title}  [{', '.join(column_names(task))}]")


@main.command("config")
def show_config():
    """Show the effective configuration."""
    config = load_config()

    token = config.phab_api_token
    masked = f"{token[:4]}...{token[-4:]}" if len(token) > 8 else ("(set)" if token else "(not set)")

    click.echo(f"Config file:     {CONFIG_FILE}")
    click.echo(f"Phabricator URL: {config.phab_url or '(not set)'}")
    click.echo(f"API token:       {masked}")
    click.echo(f"User PHID:       {config.user_phid or '(not set)'}")
    click.echo(f"Poll interval:   {config.poll_interval_ms} ms")
    click.echo(f"Print delay:     {config.print_delay_ms} ms")
    click.echo(f"Sprint columns:  {', '.join(config.sprint_columns)}")
    click.echo(f"Task statuses:   {', '.join(config.task_statuses)}")
    if config.printer_type == "network":
        click.echo(f"Printer:         network {config.printer_host}:{config.printer_port}")
    else:
        click.echo(f"Printer:         {config.printer_type}")
    click.echo(f"Paper width:     {config.paper_width} mm")
    click.echo(f"Cache file:      {config.cache_file}")

    errors = config.validate()
    if errors:
        click.echo("\nProblems:")
        for error in errors:
            click.echo(f"  - {error}")


if __name__ == "__main__":
    main()
