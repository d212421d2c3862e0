"""Shared client constants.

This module centralizes the API base URL and the default pagination and
retry settings so the transport and the pagination engine agree on them.
"""

from __future__ import annotations

# REST base URL of the v3 resource API
BASE_URL = "https://www.sima-land.ru/api/v3/"

# Total timeout (seconds) of a single HTTP request
DEFAULT_TIMEOUT = 30.0

# Pagination: number of concurrent lanes and the query parameter holding
# each lane's page number
DEFAULT_COUNT_LANES = 5
DEFAULT_CURSOR_KEY = "p"

# Retry: attempts per fetch round and the fixed wait between attempts
DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_DELAY_SECONDS = 30.0

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}
