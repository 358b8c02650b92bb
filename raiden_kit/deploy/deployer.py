"""Deploy the Raiden contracts to a development chain and fund the test accounts.

The node is expected to have one pre-funded, unlocked account (as ``geth --dev``
provides). That account pays for all deployments and funds the configured
accounts with Ether and with tokens of the freshly deployed token contract.
"""
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

import gevent
import structlog

from raiden_kit.constants import (
    CONTRACT_CHANNEL_MANAGER,
    CONTRACT_CHANNEL_MANAGER_LIBRARY,
    CONTRACT_DISCOVERY,
    CONTRACT_NETTING_CHANNEL,
    CONTRACT_NETTING_CHANNEL_LIBRARY,
    CONTRACT_REGISTRY,
    CONTRACT_TOKEN,
)
from raiden_kit.contracts.constructor import ContractInterface
from raiden_kit.contracts.registry import RaidenContracts
from raiden_kit.deploy.compiler import compile_contract
from raiden_kit.deploy.envfile import write_env_file
from raiden_kit.exceptions.deploy import DeploymentError, FundingError
from raiden_kit.rpc.client import ChainConnection
from raiden_kit.utils.configuration.deploy import DeployConfig
from raiden_kit.utils.logs import LOG_BYTECODE, LOG_RECEIPTS

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DeploymentResult:
    account: str
    accounts: Tuple[str, ...]
    discovery: str
    registry: str
    token: str

    @property
    def raiden_flags(self) -> str:
        return (
            f"--registry-contract-address {self.registry} "
            f"--discovery-contract-address {self.discovery}"
        )


class Deployer:
    def __init__(
        self,
        connection: ChainConnection,
        config: DeployConfig,
        debug_level: int = 0,
        compiler: Callable[..., str] = compile_contract,
    ):
        self.connection = connection
        self.config = config
        self.debug_level = debug_level
        self.compiler = compiler
        self.contracts = RaidenContracts(connection, config.abi_dir)
        #: Deployed library contracts, as `(name, address)`. Later compilations link against these.
        self.libraries: List[Tuple[str, str]] = []

    def get_account(self) -> str:
        """Return the first account of the node, pre-funded and unlocked by ``geth --dev``.

        :raises DeploymentError: if the node has no accounts.
        """
        accounts = self.connection.accounts()
        if not accounts:
            raise DeploymentError("The Ethereum node has no (unlocked) accounts!")
        account = accounts[0]
        log.info("Using account", account=account, balance=self.connection.balance(account))
        return account

    def compile(self, directory, name: str, libraries: Sequence[Tuple[str, str]] = ()) -> str:
        return self.compiler(
            directory,
            name,
            libraries=libraries,
            solc=self.config.solc,
            abi_dir=self.config.abi_dir,
            debug_level=self.debug_level,
        )

    def deploy_code(self, account: str, binary: str) -> str:
        """Deploy the contract bytecode `binary` from `account` and return its address."""
        if self.debug_level >= LOG_BYTECODE:
            log.debug("Deploying bytecode", binary=binary)

        receipt = self.connection.send_transaction(
            {"from": account, "data": f"0x{binary}", "gas": self.config.deploy_gas}
        )
        if self.debug_level >= LOG_RECEIPTS:
            log.debug("Deployment receipt", receipt=dict(receipt))

        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise DeploymentError("Deployment receipt does not contain a contract address!")
        return contract_address

    def transfer_ether(self, sender: str, target: str, amount: int):
        """Transfer `amount` Wei from `sender` to `target`."""
        log.debug(
            "Transferring Ether",
            sender=sender,
            target=target,
            amount_eth=self.connection.from_wei(amount),
        )
        return self.connection.send_transaction(
            {"from": sender, "to": target, "gas": self.config.transfer_gas, "value": amount}
        )

    @staticmethod
    def join_transfers(greenlets: List[gevent.Greenlet], message: str) -> None:
        """Wait for all transfers. On the first failure, kill the rest and raise `FundingError`."""
        try:
            gevent.joinall(greenlets, raise_error=True)
        except Exception as e:
            gevent.killall(greenlets)
            raise FundingError(message) from e

    def fund_accounts(self, account: str) -> None:
        """Transfer the configured amount of Ether to every account, concurrently."""
        wei = self.connection.to_wei(self.config.funding_ether)
        greenlets = [
            gevent.spawn(self.transfer_ether, account, target, wei)
            for target in self.config.accounts
        ]
        self.join_transfers(greenlets, "Value transfers failed!")

        log.info("Value transfers succeeded.", accounts=len(greenlets))
        if self.debug_level >= LOG_RECEIPTS:
            log.debug("Value transfer receipts", receipts=[dict(g.value) for g in greenlets])

    def deploy_raiden_contracts(self, account: str) -> Tuple[str, str]:
        """Deploy the Raiden contracts and libraries.

        Returns the addresses of the Discovery (`EndpointRegistry`) and
        `Registry` contracts. The ABIs of the channel contracts, which are
        created by the registry on-chain, are written as well.
        """
        directory = self.config.raiden_contracts_dir
        self.libraries = []

        discovery = self.deploy_code(
            account, self.compile(directory, CONTRACT_DISCOVERY, self.libraries)
        )
        log.info("Discovery contract deployed", address=discovery)

        for library in (CONTRACT_NETTING_CHANNEL_LIBRARY, CONTRACT_CHANNEL_MANAGER_LIBRARY):
            address = self.deploy_code(account, self.compile(directory, library, self.libraries))
            self.libraries.append((library, address))
            log.info("Library deployed", library=library, libraries=self.libraries)

        registry = self.deploy_code(
            account, self.compile(directory, CONTRACT_REGISTRY, self.libraries)
        )
        log.info("Registry contract deployed", address=registry)

        # Compiled for their ABIs only.
        self.compile(directory, CONTRACT_CHANNEL_MANAGER, self.libraries)
        self.compile(directory, CONTRACT_NETTING_CHANNEL, self.libraries)

        return discovery, registry

    def deploy_token(self, account: str) -> str:
        token = self.deploy_code(
            account, self.compile(self.config.token_contracts_dir, CONTRACT_TOKEN)
        )
        log.info("Token contract deployed", address=token)
        return token

    def distribute_tokens(self, account: str, token: ContractInterface) -> None:
        """Split the total token supply evenly between the configured accounts."""
        total_supply = token.totalSupply().get()
        log.info("Token supply", total_supply=total_supply)

        targets = self.config.accounts
        share = total_supply // len(targets)
        greenlets = [
            gevent.spawn(
                self.connection.transact, token.contract, "transfer", target, share, sender=account
            )
            for target in targets
        ]
        self.join_transfers(greenlets, "Token transfers failed!")

        log.info("Token transfers succeeded.", share=share, accounts=len(targets))
        if self.debug_level >= LOG_RECEIPTS:
            log.debug("Token transfer receipts", receipts=[dict(g.value) for g in greenlets])

    def summarize(self, result: DeploymentResult) -> List[str]:
        """Human readable summary of the deployment, including current balances."""
        token = self.contracts.Token(result.token)
        lines = [f"Deployment account: {result.account}"]
        for index, account in enumerate(result.accounts, start=1):
            tokens = token.balanceOf(account)
            lines += [
                f"Account_{index}: {account}",
                f"  balance: {self.connection.balance(account)}",
                f"  tokens:  {tokens.get()}",
            ]
        lines += [
            f"Discovery contract: {result.discovery}",
            f"Registry contract:  {result.registry}",
            f"Token contract:     {result.token}",
            f"Raiden flags: {result.raiden_flags}",
        ]
        return lines

    def run(self) -> DeploymentResult:
        """Run the complete deployment and write the environment file."""
        account = self.get_account()
        self.fund_accounts(account)

        discovery, registry = self.deploy_raiden_contracts(account)
        token_address = self.deploy_token(account)
        self.distribute_tokens(account, self.contracts.Token(token_address))

        result = DeploymentResult(
            account=account,
            accounts=self.config.accounts,
            discovery=discovery,
            registry=registry,
            token=token_address,
        )
        write_env_file(
            self.config.env_file,
            result.accounts,
            discovery=discovery,
            registry=registry,
            token=token_address,
        )
        return result
