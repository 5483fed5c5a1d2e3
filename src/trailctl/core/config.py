from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from trailctl.constants import API_BASE_URL, TOKEN_ENV_VAR, URL_ENV_VAR
from trailctl.core.errors import ConfigError


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the Papertrail API client."""

    token: str
    base_url: str = API_BASE_URL
    timeout_s: float = 20.0

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigError(
                f"Error getting value of {TOKEN_ENV_VAR}, "
                "it's necessary to define this variable with your papertrail's API token"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, timeout_s: float = 20.0) -> ClientConfig:
        env = os.environ if environ is None else environ
        return cls(
            token=env.get(TOKEN_ENV_VAR, ""),
            base_url=env.get(URL_ENV_VAR) or API_BASE_URL,
            timeout_s=timeout_s,
        )


@dataclass(frozen=True)
class ReconcileOptions:
    """Everything a single run needs, as given on the command line."""

    group_name: str = "my-log-group"
    system_wildcard: str = "*"
    destination_port: int = 0
    destination_id: int = 0
    ip_address: str = ""
    system_type: str = "hostname"
    search: str = "default search"
    query: str = "*"
    action: str = "c"
    delete_all_searches: bool = False
    # on delete, also remove the systems named by the wildcard
    delete_all_systems: bool = False
    # on delete, touch systems only (no group/search)
    delete_only_systems: bool = False
    start_date: str = ""
    end_date: str = ""
    path: Path = Path(".")
