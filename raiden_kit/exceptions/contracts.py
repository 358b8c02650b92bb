class ABIError(ValueError):
    """There was a problem with a contract ABI description."""


class ABIFormatError(ABIError):
    """The ABI could not be parsed, or an entry is missing a required key."""


class ABIFileMissing(ABIError):
    """We tried loading an ABI from disk, but no file exists for it.

    This typically means the contract has not been compiled by ``raiden-kit deploy`` yet.
    """
