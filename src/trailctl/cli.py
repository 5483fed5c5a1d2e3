from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from trailctl import __version__
from trailctl.core.actions import Action
from trailctl.core.config import ClientConfig, ReconcileOptions
from trailctl.core.errors import TrailctlError
from trailctl.orchestration.orchestrator import ReconcileResult, reconcile

console = Console()

_ACTION_VERBS = {
    Action.CREATE: "created",
    Action.DELETE: "deleted",
    Action.OBTAIN: "obtained",
}


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, markup=False)],
        force=True,
    )
    # request-level chatter from httpx is only useful with -v
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_result(result: ReconcileResult) -> None:
    if not result.items:
        return
    console.print(f"The {_ACTION_VERBS[result.action]} items are the following")
    for item in result.items:
        console.print(f"- {item.kind.value} with ID {item.id} and name '{item.name}'", markup=False, highlight=False)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, "--version")
@click.option("-g", "--group-name", default="my-log-group", show_default=True, help="Group defined or to be defined in papertrail")
@click.option("-w", "--system-wildcard", default="*", show_default=True, help="Wildcard applied on the systems; entries separated by ', '")
@click.option("-p", "--destination-port", type=int, default=0, show_default=True, help="Destination port for sending the logs of the system/s")
@click.option("-I", "--destination-id", type=int, default=0, show_default=True, help="Destination id for sending the logs of the system/s")
@click.option("-i", "--ip-address", default="", help="Source ip address of the system/s sending the logs")
@click.option("-t", "--system-type", default="hostname", show_default=True, help="Type of system: h/hostname or i/ip-address")
@click.option("-S", "--search", default="default search", show_default=True, help="Saved search to run on the logs or to create in the group")
@click.option("-q", "--query", default="*", show_default=True, help="Query of the saved search")
@click.option("-a", "--action", default="c", show_default=True, help="c/create, o/obtain or d/delete")
@click.option("-d", "--delete-all-searches", is_flag=True, default=False, help="On delete, remove the whole group with all its searches")
@click.option("--delete-all-systems", is_flag=True, default=False, help="On delete, also remove the systems named by the wildcard")
@click.option("--delete-only-systems", is_flag=True, default=False, help="On delete, remove the systems only, leaving group and searches")
@click.option("--start-date", default="", help="Start of the log window, 'MM/DD/YYYY HH:MM:SS' UTC (default: 24h ago)")
@click.option("--end-date", default="", help="End of the log window, 'MM/DD/YYYY HH:MM:SS' UTC (default: now)")
@click.option(
    "--path",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory where retrieved logs are saved",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging")
def cli(
    group_name: str,
    system_wildcard: str,
    destination_port: int,
    destination_id: int,
    ip_address: str,
    system_type: str,
    search: str,
    query: str,
    action: str,
    delete_all_searches: bool,
    delete_all_systems: bool,
    delete_only_systems: bool,
    start_date: str,
    end_date: str,
    path: Path,
    verbose: bool,
) -> None:
    """trailctl: create, delete and query Papertrail systems, groups and saved searches."""
    setup_logging(verbose)

    options = ReconcileOptions(
        group_name=group_name,
        system_wildcard=system_wildcard,
        destination_port=destination_port,
        destination_id=destination_id,
        ip_address=ip_address,
        system_type=system_type,
        search=search,
        query=query,
        action=action,
        delete_all_searches=delete_all_searches,
        delete_all_systems=delete_all_systems,
        delete_only_systems=delete_only_systems,
        start_date=start_date,
        end_date=end_date,
        path=path,
    )

    try:
        result = reconcile(options, client_config=ClientConfig.from_env())
    except TrailctlError as e:
        raise click.ClickException(str(e)) from e

    print_result(result)
    if result.error is not None:
        raise click.ClickException(str(result.error)) from result.error


if __name__ == "__main__":
    cli()
