"""Dependency orchestrator: systems -> group -> search -> events.

This module provides two layers:

1) `Orchestrator.run(...)`:
   - Depends ONLY on the `IRemoteAPI` interface.
   - Validates the options, then walks the phase machine
     IDLE -> SYSTEMS -> GROUP -> SEARCH -> (EVENTS) -> DONE, entering FAILED
     from whichever phase raised.
   - Returns a `ReconcileResult` holding every item accumulated before a
     failure together with the error (partial results are never dropped).

2) `reconcile(...)` (convenience wrapper):
   - Builds a `PapertrailClient` from the environment for CLI / script usage
     and closes it afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from trailctl.clients.papertrail import PapertrailClient
from trailctl.core.actions import Action, ValidatedRun, validate, wildcard_entries
from trailctl.core.config import ClientConfig, ReconcileOptions
from trailctl.core.errors import TrailctlError
from trailctl.core.interfaces import IRemoteAPI
from trailctl.core.models import Item
from trailctl.events.search import EventsRetriever
from trailctl.orchestration.ledger import ResultLedger
from trailctl.reconcile import GroupReconciler, SearchReconciler, SystemReconciler, system_request

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    SYSTEMS = "systems"
    GROUP = "group"
    SEARCH = "search"
    EVENTS = "events"
    DONE = "done"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class ReconcileResult:
    """Outcome of one run.

    `items` holds only created/deleted resources and retrieval summaries.
    On failure `error` is set, `failed_phase` names the phase that raised and
    `items` still holds whatever earlier phases produced.
    """

    action: Action
    items: list[Item] = field(default_factory=list)
    phases: list[Phase] = field(default_factory=list)
    failed_phase: Phase | None = None
    error: TrailctlError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def phase(self) -> Phase:
        return self.phases[-1] if self.phases else Phase.IDLE


def systems_phase_enabled(run: ValidatedRun) -> bool:
    """Whether the systems phase has anything to do for this run."""
    if run.skip_systems_wildcard or run.action is Action.OBTAIN:
        return False
    if run.action is Action.DELETE:
        return run.options.delete_all_systems or run.options.delete_only_systems
    return True


class Orchestrator:
    """Sequence the reconcilers in ownership order against one API."""

    def __init__(self, api: IRemoteAPI) -> None:
        self.api = api
        self.systems = SystemReconciler(api)
        self.groups = GroupReconciler(api)
        self.searches = SearchReconciler(api)
        self.events = EventsRetriever(api)

    def run(self, options: ReconcileOptions) -> ReconcileResult:
        """Validate `options` and reconcile remote state.

        Validation errors are raised before any remote call. Errors from a
        phase are captured in the returned result.
        """
        run = validate(options)
        logger.info(
            "Checking conditions for %s in papertrail params: "
            "[group-name %s] [system-wildcard %s] [search %s] [query %s]",
            run.action.value,
            options.group_name,
            options.system_wildcard,
            options.search,
            options.query,
        )

        result = ReconcileResult(action=run.action, phases=[Phase.IDLE])
        ledger = ResultLedger(items=result.items)
        try:
            self._run_phases(run, result, ledger)
        except TrailctlError as e:
            result.failed_phase = result.phase
            result.error = e
            result.phases.append(Phase.FAILED)
            logger.error("Phase %s failed: %s", result.failed_phase.value, e)
            return result
        result.phases.append(Phase.DONE)
        return result

    def _run_phases(self, run: ValidatedRun, result: ReconcileResult, ledger: ResultLedger) -> None:
        options = run.options
        action = run.action

        if systems_phase_enabled(run):
            result.phases.append(Phase.SYSTEMS)
            for entry in wildcard_entries(options.system_wildcard):
                request = system_request(
                    entry,
                    run.system_type,
                    destination_port=options.destination_port,
                    destination_id=options.destination_id,
                    ip_address=options.ip_address,
                )
                ledger.add(self.systems.reconcile(action, request))

        if action is Action.DELETE and options.delete_only_systems:
            return

        result.phases.append(Phase.GROUP)
        if action is Action.DELETE and options.delete_all_searches:
            # searches go with their group
            ledger.add(self.groups.reconcile(Action.DELETE, options.group_name))
            return
        if action is Action.DELETE:
            group = self.groups.reconcile(Action.OBTAIN, options.group_name)
        else:
            group = self.groups.reconcile(action, options.group_name, options.system_wildcard)
        ledger.add(group)

        result.phases.append(Phase.SEARCH)
        ledger.add(self.searches.reconcile(action, options.search, options.query, group.id))

        if action is Action.OBTAIN:
            result.phases.append(Phase.EVENTS)
            ledger.add(
                self.events.run(
                    group_id=group.id,
                    group_name=options.group_name,
                    search_name=options.search,
                    query=options.query,
                    window=run.window,
                    path=options.path,
                )
            )


def reconcile(
    options: ReconcileOptions,
    *,
    api: IRemoteAPI | None = None,
    client_config: ClientConfig | None = None,
) -> ReconcileResult:
    """Run the orchestrator, wiring a `PapertrailClient` when no API is given.

    The client configuration (and therefore the token) is resolved before
    anything is sent over the network.
    """
    if api is not None:
        return Orchestrator(api).run(options)
    config = client_config or ClientConfig.from_env()
    with PapertrailClient(config) as client:
        return Orchestrator(client).run(options)
