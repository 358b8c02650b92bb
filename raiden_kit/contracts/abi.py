"""Parsing of contract ABI descriptions.

Only the parts of the ABI needed to expose read-only functions are modelled.
The raw entries are kept as well, since the chain connection needs the complete
ABI (including events, constructor, ...) to bind a contract handle.
"""
import json
import pathlib
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

import structlog

from raiden_kit.exceptions.contracts import ABIFileMissing, ABIFormatError

log = structlog.get_logger(__name__)

#: `stateMutability` values of functions which do not alter on-chain state.
READ_ONLY_MUTABILITY = frozenset(["view", "pure"])


class ABIParameter(NamedTuple):
    type: str
    name: Optional[str] = None
    components: Tuple["ABIParameter", ...] = ()

    @property
    def canonical_type(self) -> str:
        """The type as used in function signatures, with tuples expanded."""
        if not self.type.startswith("tuple"):
            return self.type
        inner = ",".join(component.canonical_type for component in self.components)
        return f"({inner}){self.type[len('tuple'):]}"


class ABIFunction(NamedTuple):
    name: str
    constant: bool
    inputs: Tuple[ABIParameter, ...]

    @property
    def arity(self) -> int:
        return len(self.inputs)

    @property
    def signature(self) -> str:
        """The canonical signature, e.g. ``balanceOf(address)``."""
        types = ",".join(parameter.canonical_type for parameter in self.inputs)
        return f"{self.name}({types})"


def parse_parameter(entry: Any) -> ABIParameter:
    if not isinstance(entry, dict) or "type" not in entry:
        raise ABIFormatError(f"ABI parameter must be an object with a 'type' key: {entry!r}")
    components = tuple(parse_parameter(component) for component in entry.get("components", ()))
    return ABIParameter(type=entry["type"], name=entry.get("name") or None, components=components)


def is_read_only(entry: Dict[str, Any]) -> bool:
    """Whether the entry describes a function which can be evaluated via `eth_call`.

    Legacy compilers mark these with ``"constant": true``, current ones only
    emit ``stateMutability``.
    """
    if entry.get("constant") is True:
        return True
    return entry.get("stateMutability") in READ_ONLY_MUTABILITY


def parse_function(entry: Dict[str, Any]) -> ABIFunction:
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ABIFormatError(f"ABI function entry is missing its name: {entry!r}")

    inputs = entry.get("inputs", [])
    if not isinstance(inputs, list):
        raise ABIFormatError(f"'inputs' of ABI function {name} must be a list!")

    return ABIFunction(
        name=name,
        constant=is_read_only(entry),
        inputs=tuple(parse_parameter(parameter) for parameter in inputs),
    )


class ContractABI(Sequence):
    """An immutable sequence of the function descriptors of a contract ABI.

    Iterating yields :class:`ABIFunction` objects in declaration order. The raw
    JSON entries are available via :attr:`.entries`.
    """

    def __init__(self, entries: List[Dict[str, Any]]):
        if not isinstance(entries, list):
            raise ABIFormatError(f"ABI must be a list of entries, not {type(entries).__name__}!")
        for entry in entries:
            if not isinstance(entry, dict):
                raise ABIFormatError(f"ABI entries must be objects: {entry!r}")

        self.entries: Tuple[Dict[str, Any], ...] = tuple(entries)
        self._functions: Tuple[ABIFunction, ...] = tuple(
            parse_function(entry)
            for entry in self.entries
            if entry.get("type", "function") == "function"
        )

    def __getitem__(self, index):
        return self._functions[index]

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[ABIFunction]:
        return iter(self._functions)

    def __repr__(self):
        return f"{self.__class__.__qualname__}({[f.signature for f in self._functions]})"

    @property
    def constant_functions(self) -> Tuple[ABIFunction, ...]:
        return tuple(function for function in self._functions if function.constant)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "ContractABI":
        try:
            entries = json.loads(text)
        except json.JSONDecodeError as e:
            raise ABIFormatError("ABI is not valid JSON!") from e
        return cls(entries)

    @classmethod
    def from_file(cls, abi_file: Union[str, pathlib.Path]) -> "ContractABI":
        """Load an ABI from a JSON file on disk.

        :raises ABIFileMissing: if no file exists at `abi_file`.
        :raises ABIFormatError: if its contents are not a valid ABI.
        """
        path = pathlib.Path(abi_file)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ABIFileMissing(f"ABI file {path} does not exist!") from e
        log.debug("Loaded ABI file", abi_file=str(path))
        return cls.from_json(text)
