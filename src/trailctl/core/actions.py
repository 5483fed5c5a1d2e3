"""Action classification and up-front validation of a run.

Every check here runs before the first remote call; any failure aborts the
whole invocation with a `ValidationError` subclass.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from trailctl.constants import UNIVERSAL_WILDCARD, WILDCARD_SEPARATOR
from trailctl.core.config import ReconcileOptions
from trailctl.core.errors import (
    AmbiguousDestination,
    InvalidAction,
    InvalidIPAddress,
    InvalidSystemType,
    MissingDestination,
)
from trailctl.core.models import TimeWindow
from trailctl.core.timeutils import default_window_dates, time_window

_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
IPV4_RE = re.compile(rf"{_OCTET}(\.{_OCTET}){{3}}")


class Action(str, Enum):
    CREATE = "create"
    OBTAIN = "obtain"
    DELETE = "delete"


class SystemType(str, Enum):
    HOSTNAME = "hostname"
    IP_ADDRESS = "ip-address"


_ACTION_ALIASES: dict[str, Action] = {
    "c": Action.CREATE,
    "create": Action.CREATE,
    "o": Action.OBTAIN,
    "obtain": Action.OBTAIN,
    "d": Action.DELETE,
    "delete": Action.DELETE,
}

_SYSTEM_TYPE_ALIASES: dict[str, SystemType] = {
    "h": SystemType.HOSTNAME,
    "hostname": SystemType.HOSTNAME,
    "i": SystemType.IP_ADDRESS,
    "ip-address": SystemType.IP_ADDRESS,
}


def classify(token: str) -> Action:
    """Map an action token (short or long alias) to an `Action`."""
    try:
        return _ACTION_ALIASES[token]
    except KeyError:
        raise InvalidAction(token) from None


def classify_system_type(token: str) -> SystemType:
    try:
        return _SYSTEM_TYPE_ALIASES[token]
    except KeyError:
        raise InvalidSystemType(token) from None


def is_ipv4(address: str) -> bool:
    return IPV4_RE.fullmatch(address) is not None


def wildcard_entries(system_wildcard: str) -> list[str]:
    """Split the wildcard on the fixed separator; repeated entries are kept."""
    return system_wildcard.split(WILDCARD_SEPARATOR)


def system_addresses(options: ReconcileOptions) -> list[str]:
    """Addresses of the ip-address systems named by a run, one per wildcard entry.

    An explicit `ip_address` wins over the entry itself.
    """
    return [options.ip_address or entry for entry in wildcard_entries(options.system_wildcard)]


def check_destination(destination_port: int, destination_id: int) -> None:
    if destination_port != 0 and destination_id != 0:
        raise AmbiguousDestination()
    if destination_port == 0 and destination_id == 0:
        raise MissingDestination()


@dataclass(frozen=True)
class ValidatedRun:
    """Options resolved into typed values once validation has passed."""

    options: ReconcileOptions
    action: Action
    system_type: SystemType
    window: TimeWindow

    @property
    def skip_systems_wildcard(self) -> bool:
        return self.options.system_wildcard == UNIVERSAL_WILDCARD


def validate(options: ReconcileOptions) -> ValidatedRun:
    """Check a run's options before any remote call.

    The time window is checked first so a reversed window fails the same way
    whatever the other options are.
    """
    if options.start_date and options.end_date:
        start_date, end_date = options.start_date, options.end_date
    else:
        default_start, default_end = default_window_dates()
        start_date = options.start_date or default_start
        end_date = options.end_date or default_end
    window = time_window(start_date, end_date)

    action = classify(options.action)
    system_type = classify_system_type(options.system_type)
    if action is not Action.DELETE:
        if system_type is SystemType.HOSTNAME:
            check_destination(options.destination_port, options.destination_id)
        else:
            for address in system_addresses(options):
                if not is_ipv4(address):
                    raise InvalidIPAddress(address)
    return ValidatedRun(options=options, action=action, system_type=system_type, window=window)
