import io
import pathlib

import pytest
from eth_utils import to_checksum_address

from raiden_kit.constants import (
    DEFAULT_ABI_DIR,
    DEFAULT_ACCOUNTS,
    DEFAULT_ETH_RPC_ENDPOINT,
    DEFAULT_FUNDING_ETHER,
    DEPLOY_GAS,
    TIMEOUT,
    TRANSFER_GAS,
)
from raiden_kit.exceptions.config import ConfigurationError, DeployConfigurationError
from raiden_kit.utils.configuration.deploy import DeployConfig, load_deploy_config

ACCOUNT = "0x1563915e194d8cfba1943570603f7606a3115508"


class TestDeployConfig:
    def test_defaults(self):
        config = DeployConfig()

        assert config.eth_rpc_endpoint == DEFAULT_ETH_RPC_ENDPOINT
        assert config.abi_dir == pathlib.Path(DEFAULT_ABI_DIR)
        assert config.accounts == tuple(to_checksum_address(a) for a in DEFAULT_ACCOUNTS)
        assert config.funding_ether == DEFAULT_FUNDING_ETHER
        assert config.deploy_gas == DEPLOY_GAS
        assert config.transfer_gas == TRANSFER_GAS
        assert config.timeout == TIMEOUT

    def test_accounts_are_checksummed(self):
        assert DeployConfig({"accounts": [ACCOUNT]}).accounts == (to_checksum_address(ACCOUNT),)

    def test_empty_account_list_falls_back_to_defaults(self):
        assert len(DeployConfig({"accounts": []}).accounts) == len(DEFAULT_ACCOUNTS)

    def test_paths(self):
        config = DeployConfig({"raiden_contracts_dir": "contracts", "env_file": "/tmp/env.sh"})
        assert config.raiden_contracts_dir == pathlib.Path("contracts")
        assert config.env_file == pathlib.Path("/tmp/env.sh")

    @pytest.mark.parametrize(
        "options",
        argvalues=[
            {"accounts": ACCOUNT},
            {"accounts": ["0xnot-an-address"]},
            {"funding_ether": -1},
            {"deploy_gas": 0},
            {"transfer_gas": -21000},
            {"timeout": 0},
            {"deploy_gas": "lots"},
        ],
        ids=[
            "accounts not a list",
            "invalid account",
            "negative funding",
            "zero deploy gas",
            "negative transfer gas",
            "zero timeout",
            "non-numeric gas",
        ],
    )
    def test_invalid_options_raise_deploy_configuration_error(self, options):
        with pytest.raises(DeployConfigurationError) as exc_info:
            DeployConfig(options)
        assert isinstance(exc_info.value, ConfigurationError)

    def test_overrides_ignore_none(self):
        config = DeployConfig({"solc": "/opt/solc", "abi_dir": "abis"})

        updated = config.with_overrides(solc=None, abi_dir="out", eth_rpc_endpoint="http://geth")

        assert updated.solc == "/opt/solc"
        assert updated.abi_dir == pathlib.Path("out")
        assert updated.eth_rpc_endpoint == "http://geth"
        assert config.abi_dir == pathlib.Path("abis")

    def test_overrides_are_validated(self):
        with pytest.raises(DeployConfigurationError):
            DeployConfig().with_overrides(timeout=-1)


class TestLoadDeployConfig:
    def test_without_file_uses_defaults(self):
        assert load_deploy_config(None) == {}

    def test_loads_yaml(self):
        config = load_deploy_config(
            io.StringIO(f"eth_rpc_endpoint: http://geth:8545\naccounts:\n  - '{ACCOUNT}'\n")
        )
        assert config.eth_rpc_endpoint == "http://geth:8545"
        assert config.accounts == (to_checksum_address(ACCOUNT),)

    def test_empty_file_uses_defaults(self):
        assert load_deploy_config(io.StringIO("")).solc == DeployConfig().solc

    @pytest.mark.parametrize(
        "contents", argvalues=["- a\n- list\n", "key: [unclosed\n"], ids=["list", "invalid yaml"]
    )
    def test_invalid_files_raise(self, contents):
        with pytest.raises(DeployConfigurationError):
            load_deploy_config(io.StringIO(contents))
