class DeploymentError(Exception):
    """Generic error raised while deploying contracts or funding accounts."""


class CompilationError(DeploymentError):
    """`solc` could not be run, failed, or did not produce the requested contract."""


class TransactionFailed(DeploymentError):
    """A transaction was mined, but its receipt reports a failed execution."""


class FundingError(DeploymentError):
    """Transferring Ether or tokens to one of the test accounts failed."""
