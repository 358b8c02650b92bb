import requests


class RaidenAPIError(ConnectionError):
    """There was an error while sending a request to/receiving a response from a Raiden node.

    When this is raised from a :exc:`requests.RequestException`, the original
    exception is available as `__cause__`, and the request and response (if any)
    can be accessed via :attr:`.request` and :attr:`.response`.
    """

    def __init__(self, reason=None):
        message = f"Error communicating with the Raiden node! {reason or ''}"
        super(RaidenAPIError, self).__init__(message.strip())

    @property
    def response(self):
        if isinstance(self.__cause__, requests.RequestException):
            return self.__cause__.response

    @property
    def request(self):
        if isinstance(self.__cause__, requests.RequestException):
            return self.__cause__.request


class RaidenAPIConnectionError(RaidenAPIError):
    """An error occurred while trying to connect to the node's API endpoint.

    This exception is raised from:

        * :exc:`requests.ConnectionError`
        * :exc:`requests.Timeout`
    """


class RaidenAPIUnreachable(RaidenAPIConnectionError):
    """The node's API could not be reached at all.

    Raised from:

        * :exc:`requests.ConnectionError`
        * :exc:`requests.ConnectTimeout`
    """


class RaidenAPITimeout(RaidenAPIConnectionError):
    """The node was too slow when responding."""


class RaidenAPIStatusError(RaidenAPIError):
    """We received a response from the node, but its status code is not in the 2xx range."""


class RaidenNodeError(RaidenAPIStatusError):
    """The node answered with a 5xx status code.

    This indicates a problem with the Raiden node itself, not with our request.
    """
