from __future__ import annotations

# Papertrail API
API_BASE_URL = "https://papertrailapp.com/api/v1/"
TOKEN_HEADER = "X-Papertrail-Token"
TOKEN_ENV_VAR = "PAPERTRAIL_API_TOKEN"
URL_ENV_VAR = "PAPERTRAIL_API_URL"

# resource collections (relative to API_BASE_URL)
SYSTEMS_PATH = "systems"
GROUPS_PATH = "groups"
SEARCHES_PATH = "searches"
DESTINATIONS_PATH = "destinations"
EVENTS_SEARCH_PATH = "events/search.json"

# separator between entries of --system-wildcard
WILDCARD_SEPARATOR = ", "
UNIVERSAL_WILDCARD = "*"
