from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class ApiResponse:
    """Status code and decoded JSON body of one API call."""

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


# ---------------------------------------------------------------------------
# IRemoteAPI
# ---------------------------------------------------------------------------

@runtime_checkable
class IRemoteAPI(Protocol):
    """
    Abstract access to the log-management service.

    Domain expectations:
    - `path` is relative to the service's API root (e.g. "groups.json").
    - Every call blocks until the service answers or the transport fails.
    - Non-200 answers are returned, not raised; callers translate them.
    - Transport and decoding failures raise `TransportError`.
    """

    def request(self, method: str, path: str, body: Any = None) -> ApiResponse:
        """
        Issue one call and return its status code and decoded body.

        Implementations:
        - `PapertrailClient` (httpx)
        - In-memory fake service for testing
        """
        ...
