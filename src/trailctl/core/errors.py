"""Exception hierarchy shared by the client, reconcilers and orchestrator.

- `ConfigError`: missing API token, raised before any network access.
- `ValidationError` (and subclasses): bad input, raised before any remote call.
- `NotFoundError` (and subclasses): a resource the action expected to exist is absent.
- `RemoteOperationFailed`: any non-200 response, carries the numeric status code.
- `TransportError`: network or payload decoding failure, message kept verbatim.
- `OutputError`: the retrieved events could not be written locally.
"""

from __future__ import annotations


class TrailctlError(Exception):
    """Base class for every error raised by trailctl."""


class ConfigError(TrailctlError):
    pass


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationError(TrailctlError):
    pass


class InvalidAction(ValidationError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(
            f"Not valid option provided for action to perform ({token!r}), the only valid values are:\n"
            "\t'c' or 'create': create new system/s, group and/or search\n"
            "\t'd' or 'delete': delete system/s, group and/or search\n"
            "\t'o' or 'obtain': obtain logs in base of parameters provided"
        )


class InvalidSystemType(ValidationError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(
            f"Not valid option provided for system ({token!r}), the only valid values are:\n"
            "\t'h' or 'hostname': system based in hostname\n"
            "\t'i' or 'ip-address': system based in ip-address"
        )


class AmbiguousDestination(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "If the system is a hostname-type system, only destination id or destination port can be specified"
        )


class MissingDestination(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "It's necessary to provide a value distinct from default (0) to destination id or destination port"
        )


class InvalidIPAddress(ValidationError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"The IP Address provided, {address!r}, is not a valid IP Address")


class InvalidDate(ValidationError):
    def __init__(self, label: str, value: str, pattern: str) -> None:
        self.label = label
        self.value = value
        super().__init__(f"cannot parse {label} {value!r}, expected format {pattern!r}")


class InvalidTimeWindow(ValidationError):
    def __init__(self, start_unix: int, end_unix: int) -> None:
        self.start_unix = start_unix
        self.end_unix = end_unix
        super().__init__("startdate > enddate - please set proper data boundaries")


# ---------------------------------------------------------------------------
# Remote state
# ---------------------------------------------------------------------------


class NotFoundError(TrailctlError):
    """A named remote resource does not exist."""

    kind = "Resource"

    def __init__(self, name: str | int | None = None, *, kind: str | None = None) -> None:
        self.name = name
        if kind is not None:
            self.kind = kind
        label = f"{self.kind} {name!r}" if name is not None else self.kind
        super().__init__(f"Error: {label} not found")


class GroupNotFound(NotFoundError):
    kind = "Group"


class SearchNotFound(NotFoundError):
    kind = "Search"


class DestinationNotFound(NotFoundError):
    kind = "Destination"


class RemoteOperationFailed(TrailctlError):
    def __init__(self, status_code: int, resource: str, operation: str) -> None:
        self.status_code = status_code
        self.resource = resource
        self.operation = operation
        super().__init__(f"Error: {operation} {resource} Status Code {status_code} received")


class TransportError(TrailctlError):
    pass


def error_for_status(status_code: int, resource: str, operation: str) -> TrailctlError:
    """Translate a non-200 status code into the matching exception."""
    if status_code == 404:
        return NotFoundError(kind=resource)
    return RemoteOperationFailed(status_code, resource, operation)


class OutputError(TrailctlError):
    def __init__(self, path: object, reason: OSError) -> None:
        self.path = path
        super().__init__(f"Error: cannot write events to {str(path)!r}: {reason.strerror or reason}")
