from typing import Any, Dict, Optional

import requests

from raiden_kit.api.base import APIResource
from raiden_kit.api.channels import Channels
from raiden_kit.api.events import Events
from raiden_kit.api.tokens import Tokens


class RaidenAPI(APIResource):
    """Client for a Raiden node's REST API.

    Usage::

        raiden = RaidenAPI("http://127.0.0.1:5001")
        raiden.address()
        raiden.channels.list()
        raiden.transfer(token, target, 10)

    The endpoint groups share the client's session.
    """

    def __init__(self, host: str, session: Optional[requests.Session] = None):
        super(RaidenAPI, self).__init__(host, session)
        self.channels = Channels(self.host, self.session)
        self.tokens = Tokens(self.host, self.session)
        self.events = Events(self.host, self.session)

    def address(self) -> Dict[str, Any]:
        """The Ethereum address of the node."""
        return self.request("GET", "/address")

    def transfer(self, token: str, target: str, amount: int) -> Dict[str, Any]:
        """Transfer `amount` of `token` to `target`."""
        return self.request("POST", f"/transfers/{token}/{target}", {"amount": amount})
