"""Compile Solidity contracts by shelling out to `solc`."""
import json
import pathlib
import subprocess
from typing import Any, Dict, List, Sequence, Tuple, Union

import structlog

from raiden_kit.constants import DEFAULT_ABI_DIR, DEFAULT_SOLC
from raiden_kit.exceptions.deploy import CompilationError
from raiden_kit.utils.logs import LOG_BYTECODE

log = structlog.get_logger(__name__)

PathLike = Union[str, pathlib.Path]


def library_string(libraries: Sequence[Tuple[str, str]]) -> str:
    """Format `(name, address)` pairs the way `solc --libraries` expects them."""
    return " ".join(f"{name}:{address}" for name, address in libraries)


def solc_command(
    name: str, libraries: Sequence[Tuple[str, str]] = (), solc: str = DEFAULT_SOLC
) -> List[str]:
    command = [solc, "--combined-json", "bin,abi"]
    if libraries:
        command.extend(["--libraries", library_string(libraries)])
    command.append(f"{name}.sol")
    return command


def find_contract_output(combined: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Pick the output for contract `name` from solc's combined JSON.

    The key is ``<Name>.sol:<Name>``; newer compilers may prefix the source
    path, so any key ending in ``:<Name>`` is accepted as fallback.
    """
    contracts = combined.get("contracts", {})
    key = f"{name}.sol:{name}"
    if key in contracts:
        return contracts[key]
    for candidate, output in contracts.items():
        if candidate.endswith(f":{name}"):
            return output
    raise CompilationError(f"solc output does not contain contract {name}!")


def write_abi(abi_dir: PathLike, name: str, abi: Union[str, List[Dict[str, Any]]]) -> pathlib.Path:
    """Write `abi` to ``<abi_dir>/<name>.json``.

    Legacy compilers emit the ABI as a JSON encoded string; it is decoded first.
    """
    if isinstance(abi, str):
        abi = json.loads(abi)
    abi_dir = pathlib.Path(abi_dir)
    abi_dir.mkdir(parents=True, exist_ok=True)
    abi_file = abi_dir.joinpath(f"{name}.json")
    abi_file.write_text(json.dumps(abi))
    log.info("ABI written", contract=f"{name}.sol", abi_file=str(abi_file))
    return abi_file


def compile_contract(
    directory: PathLike,
    name: str,
    libraries: Sequence[Tuple[str, str]] = (),
    solc: str = DEFAULT_SOLC,
    abi_dir: PathLike = DEFAULT_ABI_DIR,
    debug_level: int = 0,
) -> str:
    """Compile `<name>.sol` in `directory`, linking against the deployed `libraries`.

    Writes the contract's ABI to `abi_dir` as a side effect and returns the
    hex encoded bytecode (without ``0x`` prefix).

    :raises CompilationError:
        if `solc` cannot be run or fails, or its output does not contain the contract.
    """
    command = solc_command(name, libraries, solc)
    log.debug("Compiling contract", contract=name, directory=str(directory), command=command)

    try:
        process = subprocess.run(
            command, cwd=str(directory), check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE
        )
    except FileNotFoundError as e:
        raise CompilationError(f"Could not run solc at {solc}!") from e
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace") if e.stderr else ""
        raise CompilationError(f"Compiling {name}.sol failed: {stderr}") from e

    if debug_level >= LOG_BYTECODE:
        log.debug("Compilation output", contract=name, output=process.stdout)

    try:
        combined = json.loads(process.stdout)
    except json.JSONDecodeError as e:
        raise CompilationError(f"solc produced invalid JSON for {name}.sol!") from e

    output = find_contract_output(combined, name)
    try:
        abi, binary = output["abi"], output["bin"]
    except KeyError as e:
        raise CompilationError(f"solc output for {name} is missing {e}!") from e

    write_abi(abi_dir, name, abi)
    return binary
