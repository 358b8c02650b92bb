from gevent import monkey  # isort:skip # noqa
monkey.patch_all()  # isort:skip # noqa

import functools
import json
import sys
from typing import Any

import click
import gevent
import requests
import structlog
from web3.exceptions import Web3Exception

from raiden_kit import __version__
from raiden_kit.api import RaidenAPI, RaidenAPISession
from raiden_kit.constants import DEFAULT_ABI_DIR, DEFAULT_ETH_RPC_ENDPOINT, DEFAULT_RAIDEN_API_HOST
from raiden_kit.contracts.registry import RAIDEN_CONTRACTS, RaidenContracts
from raiden_kit.deploy.deployer import Deployer
from raiden_kit.exceptions import ABIError, ConfigurationError, DeploymentError, RaidenAPIError
from raiden_kit.rpc.client import ChainConnection
from raiden_kit.utils.configuration.deploy import load_deploy_config
from raiden_kit.utils.logs import configure_logging

log = structlog.get_logger(__name__)


class DummyStream:
    def write(self, content):
        pass


def handle_errors(func):
    """Turn the errors we expect into a message and a non-zero exit code."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (ABIError, ConfigurationError, DeploymentError, RaidenAPIError) as e:
            log.debug("Command failed", exc_info=True)
            click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(1)
        except (Web3Exception, requests.ConnectionError, requests.Timeout) as e:
            log.debug("Ethereum node request failed", exc_info=True)
            click.secho(f"Error: Request to the Ethereum node failed! {e}", fg="red", err=True)
            sys.exit(1)

    return wrapper


def debug_level_option(func):
    """Decorator for adding '--debug-level' to subcommands."""

    @click.option(
        "--debug-level",
        envvar="DEBUG",
        type=click.IntRange(min=0),
        default=0,
        show_default=True,
        help="0 logs progress only, 1 adds debug output, 2 adds receipts, 3 adds bytecode.",
    )
    @functools.wraps(func)
    def wrapper(*args, debug_level: int, **kwargs):
        configure_logging(debug_level, colorize=sys.stderr.isatty())
        return func(*args, debug_level=debug_level, **kwargs)

    return wrapper


def echo_json(data: Any):
    if isinstance(data, str):
        click.echo(data)
    else:
        click.echo(json.dumps(data, indent=2, default=str))


@click.group(context_settings={"max_content_width": 120})
@click.version_option(__version__)
def main():
    # Failed greenlets are reported via exceptions, not via the hub's stderr output.
    gevent.get_hub().exception_stream = DummyStream()


@main.command(name="deploy")
@click.option("--config", "config_file", type=click.File(), default=None)
@click.option("--eth-rpc-endpoint", default=None, help="Overrides the configuration file.")
@click.option("--solc", default=None, help="Path to the Solidity compiler.")
@click.option("--abi-dir", default=None, help="Directory to write the contract ABIs to.")
@click.option("--env-file", default=None, help="File to write the environment variables to.")
@debug_level_option
@handle_errors
def deploy(config_file, eth_rpc_endpoint, solc, abi_dir, env_file, debug_level):
    """Deploy the Raiden contracts and a token, and fund the test accounts."""
    config = load_deploy_config(config_file).with_overrides(
        eth_rpc_endpoint=eth_rpc_endpoint, solc=solc, abi_dir=abi_dir, env_file=env_file
    )
    connection = ChainConnection.from_url(config.eth_rpc_endpoint, timeout=config.timeout)
    deployer = Deployer(connection, config, debug_level=debug_level)

    result = deployer.run()

    for line in deployer.summarize(result):
        click.echo(line)
    click.secho(f"Environment variables written to {config.env_file}", fg="green")


@main.command(name="call")
@click.argument("contract", type=click.Choice(sorted(RAIDEN_CONTRACTS)))
@click.argument("address")
@click.argument("function")
@click.argument("args", nargs=-1)
@click.option("--eth-rpc-endpoint", default=DEFAULT_ETH_RPC_ENDPOINT, show_default=True)
@click.option("--abi-dir", default=DEFAULT_ABI_DIR, show_default=True)
@debug_level_option
@handle_errors
def call(contract, address, function, args, eth_rpc_endpoint, abi_dir, debug_level):
    """Call the read-only FUNCTION of the Raiden CONTRACT deployed at ADDRESS.

    Arguments are passed on as strings, except for decimal numbers, which are
    passed as integers.
    """
    contracts = RaidenContracts(ChainConnection.from_url(eth_rpc_endpoint), abi_dir)
    interface = getattr(contracts, contract)(address)
    if function not in interface.functions:
        raise click.BadParameter(
            f"must be one of {', '.join(sorted(interface.functions))}", param_hint="FUNCTION"
        )

    parsed_args = [int(arg) if arg.isdecimal() else arg for arg in args]
    try:
        pending = interface.invoke(function, *parsed_args)
    except TypeError as e:
        raise click.UsageError(str(e)) from e
    echo_json(pending.get())


@main.group(name="api")
@click.option("--host", default=DEFAULT_RAIDEN_API_HOST, show_default=True)
@click.option("--auth", default="", help="'user:password' for the node's API.")
@click.pass_context
def api(ctx, host, auth):
    """Query a Raiden node's REST API."""
    ctx.obj = RaidenAPI(host, RaidenAPISession(auth=auth))


@api.command(name="address")
@click.pass_obj
@handle_errors
def api_address(raiden: RaidenAPI):
    """Show the Ethereum address of the node."""
    echo_json(raiden.address())


@api.command(name="tokens")
@click.pass_obj
@handle_errors
def api_tokens(raiden: RaidenAPI):
    """List the registered tokens."""
    echo_json(raiden.tokens.list())


@api.command(name="channels")
@click.argument("channel", required=False)
@click.pass_obj
@handle_errors
def api_channels(raiden: RaidenAPI, channel):
    """List all channels, or show details of a single CHANNEL."""
    if channel:
        echo_json(raiden.channels.info(channel))
    else:
        echo_json(raiden.channels.list())


@api.command(name="events")
@click.option("--token", default=None, help="Only list events of this token.")
@click.option("--channel", default=None, help="Only list events of this channel.")
@click.option("--from-block", type=int, default=None)
@click.pass_obj
@handle_errors
def api_events(raiden: RaidenAPI, token, channel, from_block):
    """List network, token or channel events."""
    if token and channel:
        raise click.UsageError("--token and --channel are mutually exclusive.")
    if token:
        echo_json(raiden.events.token(token, from_block))
    elif channel:
        echo_json(raiden.events.channel(channel, from_block))
    else:
        echo_json(raiden.events.network(from_block))


@api.command(name="transfer")
@click.argument("token")
@click.argument("target")
@click.argument("amount", type=click.IntRange(min=1))
@click.pass_obj
@handle_errors
def api_transfer(raiden: RaidenAPI, token, target, amount):
    """Transfer AMOUNT of TOKEN to TARGET."""
    echo_json(raiden.transfer(token, target, amount))


if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
