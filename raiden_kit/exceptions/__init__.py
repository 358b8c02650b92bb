from raiden_kit.exceptions.api import (
    RaidenAPIConnectionError,
    RaidenAPIError,
    RaidenAPIStatusError,
    RaidenAPITimeout,
    RaidenAPIUnreachable,
    RaidenNodeError,
)
from raiden_kit.exceptions.config import ConfigurationError, DeployConfigurationError
from raiden_kit.exceptions.contracts import ABIError, ABIFileMissing, ABIFormatError
from raiden_kit.exceptions.deploy import (
    CompilationError,
    DeploymentError,
    FundingError,
    TransactionFailed,
)

__all__ = [
    "ABIError",
    "ABIFileMissing",
    "ABIFormatError",
    "CompilationError",
    "ConfigurationError",
    "DeployConfigurationError",
    "DeploymentError",
    "FundingError",
    "RaidenAPIConnectionError",
    "RaidenAPIError",
    "RaidenAPIStatusError",
    "RaidenAPITimeout",
    "RaidenAPIUnreachable",
    "RaidenNodeError",
    "TransactionFailed",
]
