from typing import Any, Dict, List, Optional

from raiden_kit.api.base import APIResource


class Events(APIResource):
    """Event endpoints of the Raiden API.

    All methods accept an optional `block` number to list only events
    starting from that block.
    """

    def network(self, block: Optional[int] = None) -> List[Dict[str, Any]]:
        return self.request("GET", "/events/network", params=self.block_params(block))

    def token(self, token: str, block: Optional[int] = None) -> List[Dict[str, Any]]:
        return self.request("GET", f"/events/tokens/{token}", params=self.block_params(block))

    def channel(self, channel: str, block: Optional[int] = None) -> List[Dict[str, Any]]:
        return self.request(
            "GET", f"/events/channels/{channel}", params=self.block_params(block)
        )
