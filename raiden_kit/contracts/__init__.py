from raiden_kit.contracts.abi import ABIFunction, ABIParameter, ContractABI
from raiden_kit.contracts.constructor import ContractConstructor, ContractInterface
from raiden_kit.contracts.registry import RaidenContracts

__all__ = [
    "ABIFunction",
    "ABIParameter",
    "ContractABI",
    "ContractConstructor",
    "ContractInterface",
    "RaidenContracts",
]
