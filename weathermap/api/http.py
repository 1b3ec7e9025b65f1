# weathermap/api/http.py
import logging
from typing import Any

import requests
from requests.exceptions import RequestException

from weathermap.config import HTTP_TIMEOUT_S
from weathermap.errors import FetchError
from weathermap.utils import report_error

logger = logging.getLogger("weathermap")

USER_AGENT = "WeatherMap/1.0 (+region temperature dashboard)"


def http_get_json(
    url: str,
    params: dict[str, Any] | None = None,
    timeout: float | None = HTTP_TIMEOUT_S,
) -> dict:
    """GET a JSON document. One attempt only; any failure becomes FetchError."""
    headers = {"User-Agent": USER_AGENT}
    try:
        resp = requests.get(url, params=params, timeout=timeout, headers=headers)
        resp.raise_for_status()
        return resp.json()
    except RequestException as e:
        report_error(f"http_get_json: {url}", e)
        raise FetchError(f"HTTP request failed: {e}") from e
    except ValueError as e:
        # JSON decode errors
        report_error(f"http_get_json: {url}", e)
        raise FetchError(f"Invalid JSON from {url}") from e
