from typing import Tuple

#: Pre-created accounts. Keystore files for these are in ./keystore, the password
#: is "password" (Raiden cannot cope with password-less accounts).
DEFAULT_ACCOUNTS: Tuple[str, ...] = (
    "0x19E7E376E7C213B7E7e7e46cc70A5dD086DAff2A",
    "0x1563915e194D8CfBA1943570603F7606A3115508",
    "0x5CbDd86a2FA8Dc4bDdd8a8f69dBa48572EeC07FB",
    "0x7564105E977516C53bE337314c7E53838967bDaC",
)

DEFAULT_ETH_RPC_ENDPOINT = "http://localhost:8545"
DEFAULT_SOLC = "/usr/local/bin/solc"
DEFAULT_RAIDEN_CONTRACTS_DIR = "raiden/raiden/smart_contracts/"
DEFAULT_TOKEN_CONTRACTS_DIR = "."
DEFAULT_ABI_DIR = "./abis/"
DEFAULT_ENV_FILE = "env.sh"

DEFAULT_FUNDING_ETHER = 1000
DEPLOY_GAS = 3_000_000
TRANSFER_GAS = 21_000
TIMEOUT = 120  # seconds

DEFAULT_RAIDEN_API_HOST = "http://127.0.0.1:5001"
RAIDEN_API_PREFIX = "/api/1"
API_TIMEOUT = 30  # seconds

#: Raiden contracts, in deployment order. Libraries must be deployed before
#: the contracts linking against them are compiled.
CONTRACT_DISCOVERY = "EndpointRegistry"
CONTRACT_NETTING_CHANNEL_LIBRARY = "NettingChannelLibrary"
CONTRACT_CHANNEL_MANAGER_LIBRARY = "ChannelManagerLibrary"
CONTRACT_REGISTRY = "Registry"
CONTRACT_CHANNEL_MANAGER = "ChannelManagerContract"
CONTRACT_NETTING_CHANNEL = "NettingChannelContract"
CONTRACT_TOKEN = "Token"

ENV_VAR_PREFIX = "RDN_"
