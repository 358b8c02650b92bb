from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Sequence

import structlog
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from web3 import HTTPProvider, Web3
from web3.contract import Contract
from web3.types import TxParams, TxReceipt

from raiden_kit.constants import TIMEOUT
from raiden_kit.exceptions.deploy import TransactionFailed

if TYPE_CHECKING:
    from raiden_kit.contracts.abi import ABIFunction

log = structlog.get_logger(__name__)


class ChainConnection:
    """Access to an Ethereum node, shared by everything talking to the chain.

    Read-only contract calls go through :meth:`.call`, which only ever
    issues an `eth_call`. State-changing operations go through
    :meth:`.send_transaction` and :meth:`.transact`, which wait for the
    transaction to be mined.

    The connection does not lock anything; the underlying provider is assumed
    to be safe for concurrent requests.
    """

    def __init__(self, web3: Web3, timeout: int = TIMEOUT):
        if web3 is None:
            raise ValueError("Web3 instance must not be None")
        self.web3 = web3
        self.timeout = timeout

    @classmethod
    def from_url(cls, chain_url: str, timeout: int = TIMEOUT) -> "ChainConnection":
        log.debug("Connecting to Ethereum node", chain_url=chain_url)
        return cls(Web3(HTTPProvider(chain_url)), timeout=timeout)

    def contract(self, abi: Iterable[Dict[str, Any]], address: str) -> Contract:
        """Bind the raw `abi` to the contract at `address`."""
        return self.web3.eth.contract(address=to_checksum_address(address), abi=list(abi))

    def call(self, contract: Contract, function: "ABIFunction", args: Sequence[Any]) -> Any:
        """Evaluate a read-only `function` of `contract` without sending a transaction.

        The exact overload is selected by the function's signature.
        """
        contract_function = contract.get_function_by_signature(function.signature)
        return contract_function(*args).call()

    def accounts(self) -> List[ChecksumAddress]:
        return list(self.web3.eth.accounts)

    def balance(self, address: str) -> int:
        return self.web3.eth.get_balance(to_checksum_address(address))

    def to_wei(self, amount, unit: str = "ether") -> int:
        return Web3.to_wei(amount, unit)

    def from_wei(self, amount: int, unit: str = "ether"):
        return Web3.from_wei(amount, unit)

    def wait_for_receipt(self, tx_hash) -> TxReceipt:
        receipt = self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.timeout)
        if receipt.get("status") == 0:
            raise TransactionFailed(f"Transaction {Web3.to_hex(tx_hash)} failed.")
        return receipt

    def send_transaction(self, transaction: TxParams) -> TxReceipt:
        """Send `transaction` from an account unlocked at the node and wait for its receipt."""
        tx_hash = self.web3.eth.send_transaction(transaction)
        log.debug("Transaction sent", tx_hash=Web3.to_hex(tx_hash))
        return self.wait_for_receipt(tx_hash)

    def transact(
        self, contract: Contract, function_name: str, *args: Any, sender: str, gas: int = None
    ) -> TxReceipt:
        """Call the state-changing `function_name` of `contract` in a transaction."""
        transaction: Dict[str, Any] = {"from": to_checksum_address(sender)}
        if gas is not None:
            transaction["gas"] = gas
        contract_function = getattr(contract.functions, function_name)
        tx_hash = contract_function(*args).transact(transaction)
        log.debug(
            "Contract transaction sent", function=function_name, tx_hash=Web3.to_hex(tx_hash)
        )
        return self.wait_for_receipt(tx_hash)
