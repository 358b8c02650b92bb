from raiden_kit.api.channels import Channels
from raiden_kit.api.client import RaidenAPI
from raiden_kit.api.events import Events
from raiden_kit.api.session import RaidenAPISession
from raiden_kit.api.tokens import Tokens

__all__ = ["Channels", "Events", "RaidenAPI", "RaidenAPISession", "Tokens"]
