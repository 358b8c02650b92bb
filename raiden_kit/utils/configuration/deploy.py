import pathlib
from typing import IO, Any, Dict, Optional, Tuple

import structlog
import yaml
from eth_utils import is_address, to_checksum_address

from raiden_kit.constants import (
    DEFAULT_ABI_DIR,
    DEFAULT_ACCOUNTS,
    DEFAULT_ENV_FILE,
    DEFAULT_ETH_RPC_ENDPOINT,
    DEFAULT_FUNDING_ETHER,
    DEFAULT_RAIDEN_CONTRACTS_DIR,
    DEFAULT_SOLC,
    DEFAULT_TOKEN_CONTRACTS_DIR,
    DEPLOY_GAS,
    TIMEOUT,
    TRANSFER_GAS,
)
from raiden_kit.exceptions.config import DeployConfigurationError
from raiden_kit.utils.configuration.base import ConfigMapping

log = structlog.get_logger(__name__)


class DeployConfig(ConfigMapping):
    """Settings for deploying the Raiden contracts and funding the test accounts.

    Example configuration file::

        >deploy.yaml
        eth_rpc_endpoint: http://localhost:8545
        solc: /usr/local/bin/solc
        raiden_contracts_dir: raiden/raiden/smart_contracts/
        token_contracts_dir: .
        abi_dir: ./abis/
        env_file: env.sh
        accounts:
          - "0x19E7E376E7C213B7E7e7e46cc70A5dD086DAff2A"
          - "0x1563915e194D8CfBA1943570603F7606A3115508"
        funding_ether: 1000
        deploy_gas: 3000000
        transfer_gas: 21000
        timeout: 120

    All keys are optional.
    """

    CONFIGURATION_ERROR = DeployConfigurationError

    def __init__(self, loaded_yaml: Optional[Dict[str, Any]] = None):
        super(DeployConfig, self).__init__(loaded_yaml)
        self.validate()

    def validate(self):
        self.assert_option(
            isinstance(self.dict.get("accounts") or [], (list, tuple)),
            "'accounts' must be a list of addresses!",
        )
        for account in self.dict.get("accounts") or []:
            self.assert_option(is_address(account), f"Invalid account address: {account!r}")
        self.assert_option(self.funding_ether >= 0, "'funding_ether' must not be negative!")
        self.assert_option(self.deploy_gas > 0, "'deploy_gas' must be positive!")
        self.assert_option(self.transfer_gas > 0, "'transfer_gas' must be positive!")
        self.assert_option(self.timeout > 0, "'timeout' must be positive!")

    @property
    def eth_rpc_endpoint(self) -> str:
        return self.option("eth_rpc_endpoint", DEFAULT_ETH_RPC_ENDPOINT, str)

    @property
    def solc(self) -> str:
        """Path to the Solidity compiler."""
        return self.option("solc", DEFAULT_SOLC, str)

    @property
    def raiden_contracts_dir(self) -> pathlib.Path:
        """Directory holding the Raiden smart contract sources."""
        return self.option("raiden_contracts_dir", DEFAULT_RAIDEN_CONTRACTS_DIR, pathlib.Path)

    @property
    def token_contracts_dir(self) -> pathlib.Path:
        """Directory holding the `Token.sol` source."""
        return self.option("token_contracts_dir", DEFAULT_TOKEN_CONTRACTS_DIR, pathlib.Path)

    @property
    def abi_dir(self) -> pathlib.Path:
        """Directory the ABIs of compiled contracts are written to."""
        return self.option("abi_dir", DEFAULT_ABI_DIR, pathlib.Path)

    @property
    def env_file(self) -> pathlib.Path:
        return self.option("env_file", DEFAULT_ENV_FILE, pathlib.Path)

    @property
    def accounts(self) -> Tuple[str, ...]:
        """The accounts to fund, as checksum addresses."""
        accounts = self.dict.get("accounts") or DEFAULT_ACCOUNTS
        return tuple(to_checksum_address(account) for account in accounts)

    @property
    def funding_ether(self) -> int:
        """Amount of Ether transferred to each account."""
        return self.option("funding_ether", DEFAULT_FUNDING_ETHER, int)

    @property
    def deploy_gas(self) -> int:
        return self.option("deploy_gas", DEPLOY_GAS, int)

    @property
    def transfer_gas(self) -> int:
        return self.option("transfer_gas", TRANSFER_GAS, int)

    @property
    def timeout(self) -> int:
        """Seconds to wait for a transaction to be mined."""
        return self.option("timeout", TIMEOUT, int)

    def with_overrides(self, **overrides: Any) -> "DeployConfig":
        """Return a copy of this config, with all `overrides` which are not `None` applied."""
        updated = dict(self.dict)
        updated.update({key: value for key, value in overrides.items() if value is not None})
        return DeployConfig(updated)


def load_deploy_config(config_file: Optional[IO] = None) -> DeployConfig:
    """Load the deployment configuration from an open YAML file.

    Without a file, the defaults are used.

    :raises DeployConfigurationError: if the file is not valid YAML, or does not contain a mapping.
    """
    if config_file is None:
        return DeployConfig()

    try:
        loaded = yaml.safe_load(config_file)
    except yaml.YAMLError as e:
        raise DeployConfigurationError("Configuration file is not valid YAML!") from e

    if loaded is not None and not isinstance(loaded, dict):
        raise DeployConfigurationError("Configuration file must contain a mapping!")

    log.debug("Loaded deployment configuration", config=loaded)
    return DeployConfig(loaded)
