# zkoracle/http.py
"""
HTTP client for upstream providers.

Retries a bounded number of times on 500/503; every other outcome is
final. A transport failure or an exhausted retry budget is reported as
a single non-success result, never raised into the pipeline.
"""

import logging
import time

import httpx

log = logging.getLogger("zkoracle.http")

SUCCESS_STATUSES = (200, 201, 202, 204)
RETRY_STATUSES = (500, 503)


class RetryingClient:
    def __init__(self, retries: int = 1, timeout: float = 10.0, retry_delay: float = 0.0,
                 client: httpx.Client | None = None):
        self.retries = retries
        self.retry_delay = retry_delay
        self._client = client or httpx.Client(timeout=timeout)

    def close(self):
        self._client.close()

    def request(self, method: str, url: str, **kwargs) -> httpx.Response | None:
        """Send a request, retrying on 500/503.

        Returns the final response, or None if the transport failed.
        """
        attempt = 0
        while True:
            try:
                resp = self._client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                log.warning(f"{method} {_strip_query(url)} transport error: {e}")
                return None

            if resp.status_code not in RETRY_STATUSES or attempt >= self.retries:
                return resp

            attempt += 1
            log.info(f"{method} {_strip_query(url)} -> {resp.status_code}, retry {attempt}/{self.retries}")
            if self.retry_delay:
                time.sleep(self.retry_delay)

    def get(self, url: str, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self.request("POST", url, **kwargs)


def is_success(resp: httpx.Response | None) -> bool:
    return resp is not None and resp.status_code in SUCCESS_STATUSES


def json_body(resp: httpx.Response | None):
    """Parsed JSON object of a successful response, else None."""
    if not is_success(resp) or not resp.content:
        return None
    try:
        data = resp.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) and data else None


def _strip_query(url: str) -> str:
    return url.split("?", 1)[0]
