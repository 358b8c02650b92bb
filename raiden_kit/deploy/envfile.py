import pathlib
from typing import Sequence, Union

import structlog

from raiden_kit.constants import ENV_VAR_PREFIX

log = structlog.get_logger(__name__)


def env_file_contents(
    accounts: Sequence[str], discovery: str, registry: str, token: str
) -> str:
    """Shell `export` statements for the deployed addresses and funded accounts."""
    lines = [
        f"export {ENV_VAR_PREFIX}ACCT{index}={account}"
        for index, account in enumerate(accounts, start=1)
    ]
    lines += [
        f"export {ENV_VAR_PREFIX}DISCOVERY={discovery}",
        f"export {ENV_VAR_PREFIX}REGISTRY={registry}",
        f"export {ENV_VAR_PREFIX}TOKEN={token}",
        # For convenience within the docker-compose file.
        "export UID",
    ]
    return "\n".join(lines) + "\n"


def write_env_file(
    env_file: Union[str, pathlib.Path],
    accounts: Sequence[str],
    discovery: str,
    registry: str,
    token: str,
) -> pathlib.Path:
    path = pathlib.Path(env_file)
    path.write_text(env_file_contents(accounts, discovery, registry, token))
    log.info("Environment variables written", env_file=str(path))
    return path
