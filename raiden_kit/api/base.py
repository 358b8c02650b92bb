from typing import Any, Dict, Optional

import requests
import structlog

from raiden_kit.api.session import RaidenAPISession
from raiden_kit.constants import RAIDEN_API_PREFIX

log = structlog.get_logger(__name__)


class APIResource:
    """Base class for the wrappers of a Raiden node's REST API endpoints.

    :param host: The Raiden node's API, e.g. ``http://127.0.0.1:5001``.
    :param session: The session to send requests with. Wrappers of the same
        node share one session.
    """

    def __init__(self, host: str, session: Optional[requests.Session] = None):
        self.host = host.rstrip("/")
        self.session = session or RaidenAPISession()

    def url(self, path: str) -> str:
        return f"{self.host}{RAIDEN_API_PREFIX}{path}"

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request to the node and return the decoded response.

        JSON responses are decoded; any other response body is returned as text.

        :raises RaidenAPIError: if the node cannot be reached or answers with an error status.
        """
        response = self.session.request(method, self.url(path), json=payload, params=params)
        try:
            return response.json()
        except ValueError:
            log.debug("Response is not JSON", url=response.url, status=response.status_code)
            return response.text

    @staticmethod
    def block_params(block: Optional[int]) -> Optional[Dict[str, int]]:
        if block is None:
            return None
        return {"from_block": block}

    def __repr__(self):
        return f"<{self.__class__.__qualname__} {self.host}>"
