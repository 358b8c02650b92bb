"""HTTP session used to talk to a Raiden node's REST API."""
import requests
import structlog
from requests.adapters import HTTPAdapter

from raiden_kit.constants import API_TIMEOUT
from raiden_kit.exceptions.api import (
    RaidenAPIStatusError,
    RaidenAPITimeout,
    RaidenAPIUnreachable,
    RaidenNodeError,
)

log = structlog.get_logger(__name__)


class RaidenAPIAdapter(HTTPAdapter):
    """Error handling and a default timeout for requests to a Raiden node.

    Converts :mod:`requests` exceptions and non-2xx responses into
    :exc:`RaidenAPIError` subclasses before other code gets the chance to
    see them, so the API wrappers do not have to deal with them.
    """

    def __init__(self, *args, **kwargs):
        self.timeout = kwargs.pop("timeout", API_TIMEOUT)
        super(RaidenAPIAdapter, self).__init__(*args, **kwargs)

    @staticmethod
    def handle_connection_error(exc):
        """Raise RaidenAPIConnectionError subclasses."""
        if isinstance(exc, requests.exceptions.ReadTimeout):
            raise RaidenAPITimeout(str(exc)) from exc
        elif isinstance(exc, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
            raise RaidenAPIUnreachable(str(exc)) from exc

    @staticmethod
    def handle_http_error(exc):
        """Raise RaidenAPIStatusError subclasses, depending on the response's status code."""
        if exc.response.status_code >= 500:
            raise RaidenNodeError(exc.response.text) from exc
        raise RaidenAPIStatusError(f"{exc.response.status_code}: {exc.response.text}") from exc

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        timeout = timeout or self.timeout
        log.debug("Sending request", method=request.method, url=request.url)
        try:
            resp = super(RaidenAPIAdapter, self).send(
                request, stream, timeout, verify, cert, proxies
            )
        except (requests.Timeout, requests.ConnectionError) as e:
            self.handle_connection_error(e)
            raise
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            self.handle_http_error(e)
        return resp


class RaidenAPISession(requests.Session):
    def __init__(self, timeout: int = API_TIMEOUT, auth: str = None):
        super(RaidenAPISession, self).__init__()
        if auth:
            user, _, password = auth.partition(":")
            self.auth = (user, password)
        self.headers.update({"Content-Type": "application/json"})
        self.mount("http://", RaidenAPIAdapter(timeout=timeout))
        self.mount("https://", RaidenAPIAdapter(timeout=timeout))
