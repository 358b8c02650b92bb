from typing import Any, Dict, List

from raiden_kit.api.base import APIResource


class Channels(APIResource):
    """Channel endpoints of the Raiden API.

    Channels are identified by the address of their netting contract.
    """

    # Read-only methods

    def list(self) -> List[Dict[str, Any]]:
        """List all non-settled channels."""
        return self.request("GET", "/channels")

    def info(self, channel: str) -> Dict[str, Any]:
        """Get information about a specific channel."""
        return self.request("GET", f"/channels/{channel}")

    def balance(self, channel: str) -> int:
        """Get our current balance in a specific channel."""
        return self.info(channel)["balance"]

    # State-changing methods

    def open(self, partner: str, token: str, balance: int, settle_timeout: int) -> Dict[str, Any]:
        """Open a channel with `partner` for `token`, depositing `balance`.

        `settle_timeout` is given in blocks.
        """
        return self.request(
            "PUT",
            "/channels",
            {
                "partner_address": partner,
                "token_address": token,
                "balance": balance,
                "settle_timeout": settle_timeout,
            },
        )

    def close(self, channel: str) -> Dict[str, Any]:
        return self.request("PATCH", f"/channels/{channel}", {"state": "closed"})

    def settle(self, channel: str) -> Dict[str, Any]:
        return self.request("PATCH", f"/channels/{channel}", {"state": "settled"})

    def deposit(self, channel: str, amount: int) -> Dict[str, Any]:
        """Deposit `amount` additional tokens into the channel."""
        return self.request("PATCH", f"/channels/{channel}", {"balance": amount})
