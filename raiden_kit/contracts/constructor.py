"""Build contract interfaces from ABI descriptions.

Usage::

    connection = ChainConnection.from_url("http://127.0.0.1:8545")
    Token = ContractConstructor.from_file("abis/Token.json", connection)
    token = Token("0x02cAf13e4b645b3dBf27f6Ae1647356A2410210F")
    print(token.name().get())

Only read-only ("constant") functions are exposed. State-changing functions
must be sent as transactions via :meth:`ChainConnection.transact`.
"""
import functools
import pathlib
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Union

import gevent
import structlog
from gevent import Greenlet

from raiden_kit.contracts.abi import ABIFunction, ContractABI
from raiden_kit.rpc.client import ChainConnection

log = structlog.get_logger(__name__)


def build_dispatch_table(abi: ContractABI) -> Dict[str, ABIFunction]:
    """Map the name of every read-only function in `abi` to its descriptor.

    Overloaded functions share a single slot: the one declared last wins.
    """
    table: Dict[str, ABIFunction] = {}
    for function in abi.constant_functions:
        if function.name in table:
            log.debug(
                "Overloaded function shadowed",
                function=function.name,
                shadowed=table[function.name].signature,
                by=function.signature,
            )
        table[function.name] = function
    return table


class ContractInterface:
    """Read-only interface to a single deployed contract.

    Each read-only function of the ABI is available as a method of the same
    name, returning a :class:`gevent.Greenlet`. The result of the call is
    retrieved with :meth:`gevent.Greenlet.get`, which re-raises any error
    that occurred during the call.
    """

    def __init__(
        self,
        address: str,
        abi: ContractABI,
        functions: Mapping[str, ABIFunction],
        connection: ChainConnection,
    ):
        self.address = address
        self.functions = functions
        self.connection = connection
        self.contract = connection.contract(abi.entries, address)

    def invoke(self, name: str, *args: Any) -> Greenlet:
        """Call the read-only function `name` with positional `args`.

        :raises AttributeError: if the contract has no read-only function `name`.
        :raises TypeError: if the number of `args` does not match the ABI.
        """
        try:
            function = self.functions[name]
        except KeyError:
            raise AttributeError(
                f"{self.__class__.__qualname__} at {self.address} has no read-only function "
                f"'{name}'"
            ) from None

        if len(args) != function.arity:
            raise TypeError(
                f"{function.signature} takes {function.arity} positional argument(s) "
                f"but {len(args)} were given"
            )

        return gevent.spawn(self.connection.call, self.contract, function, args)

    def __getattr__(self, name: str):
        # Only reached for names which are not regular attributes.
        functions = self.__dict__.get("functions", {})
        if name not in functions:
            raise AttributeError(name)
        return functools.partial(self.invoke, name)

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self.functions))

    def __repr__(self):
        return f"<{self.__class__.__qualname__} {self.address}: {sorted(self.functions)}>"


class ContractConstructor:
    """Factory for :class:`ContractInterface` objects sharing one ABI and connection.

    The dispatch table is built once, here. Calling the constructor with an
    address yields an interface bound to that address.
    """

    def __init__(
        self,
        abi: Union[ContractABI, List[Dict[str, Any]]],
        connection: ChainConnection,
        name: str = None,
    ):
        if not isinstance(abi, ContractABI):
            abi = ContractABI(abi)
        self.abi = abi
        self.connection = connection
        self.name = name
        self.functions: Mapping[str, ABIFunction] = MappingProxyType(build_dispatch_table(abi))

    @classmethod
    def from_file(
        cls, abi_file: Union[str, pathlib.Path], connection: ChainConnection
    ) -> "ContractConstructor":
        return cls(ContractABI.from_file(abi_file), connection, name=pathlib.Path(abi_file).stem)

    def __call__(self, address: str) -> ContractInterface:
        return ContractInterface(address, self.abi, self.functions, self.connection)

    def __repr__(self):
        return f"<{self.__class__.__qualname__} {self.name or ''}: {sorted(self.functions)}>"
