import pathlib
from typing import Dict, Union

import structlog

from raiden_kit.constants import (
    CONTRACT_CHANNEL_MANAGER,
    CONTRACT_DISCOVERY,
    CONTRACT_NETTING_CHANNEL,
    CONTRACT_REGISTRY,
    CONTRACT_TOKEN,
    DEFAULT_ABI_DIR,
)
from raiden_kit.contracts.constructor import ContractConstructor
from raiden_kit.rpc.client import ChainConnection

log = structlog.get_logger(__name__)

#: Maps the attribute names of :class:`RaidenContracts` to the contract whose ABI they use.
RAIDEN_CONTRACTS: Dict[str, str] = {
    "Token": CONTRACT_TOKEN,
    "Discovery": CONTRACT_DISCOVERY,
    "Registry": CONTRACT_REGISTRY,
    "ChannelManager": CONTRACT_CHANNEL_MANAGER,
    "NettingChannel": CONTRACT_NETTING_CHANNEL,
}


class RaidenContracts:
    """Interfaces for the read-only functions of all Raiden contracts.

    The ABIs are read from the files written by the deployment step::

        contracts = RaidenContracts(ChainConnection.from_url("http://127.0.0.1:8545"))
        token = contracts.Token("0x02cAf13e4b645b3dBf27f6Ae1647356A2410210F")
        token.name().get()

    Constructors are loaded on first access, so contracts whose ABI has not
    been written yet only fail when actually used.
    """

    def __init__(
        self, connection: ChainConnection, abi_dir: Union[str, pathlib.Path] = DEFAULT_ABI_DIR
    ):
        self.connection = connection
        self.abi_dir = pathlib.Path(abi_dir)
        self._constructors: Dict[str, ContractConstructor] = {}

    def abi_file(self, contract_name: str) -> pathlib.Path:
        return self.abi_dir.joinpath(f"{contract_name}.json")

    def constructor(self, contract_name: str) -> ContractConstructor:
        """Return the constructor for `contract_name`, loading its ABI if necessary.

        :raises ABIFileMissing: if no ABI file exists for the contract.
        """
        try:
            return self._constructors[contract_name]
        except KeyError:
            log.debug("Loading contract ABI", contract=contract_name, abi_dir=str(self.abi_dir))
            constructor = ContractConstructor.from_file(
                self.abi_file(contract_name), self.connection
            )
            self._constructors[contract_name] = constructor
            return constructor

    def __getattr__(self, item: str) -> ContractConstructor:
        if item not in RAIDEN_CONTRACTS:
            raise AttributeError(item)
        return self.constructor(RAIDEN_CONTRACTS[item])
