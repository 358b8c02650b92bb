from typing import Any, List

from raiden_kit.api.base import APIResource


class Tokens(APIResource):
    def list(self) -> List[str]:
        """List the addresses of all registered tokens."""
        return self.request("GET", "/tokens")

    def add(self, token: str) -> Any:
        """Register the token contract at `token`."""
        return self.request("PUT", f"/tokens/{token}")
