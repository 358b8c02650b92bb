from gevent import monkey  # isort:skip # noqa
monkey.patch_all()  # isort:skip # noqa

from unittest.mock import MagicMock

import pytest
import responses

from raiden_kit.rpc.client import ChainConnection


def abi_function(name, inputs=(), constant=True, outputs=("uint256",)):
    """Build a legacy (`constant` flagged) ABI function entry.

    `inputs` are `(name, type)` pairs.
    """
    return {
        "constant": constant,
        "inputs": [{"name": input_name, "type": input_type} for input_name, input_type in inputs],
        "name": name,
        "outputs": [{"name": "", "type": output_type} for output_type in outputs],
        "type": "function",
    }


@pytest.fixture
def make_abi_function():
    return abi_function


@pytest.fixture
def token_address():
    return "0x02cAf13e4b645b3dBf27f6Ae1647356A2410210F"


@pytest.fixture
def other_token_address():
    return "0x5A0b54D5dc17e0AadC383d2db43B0a0D3E029c4c"


@pytest.fixture
def owner_address():
    return "0x19E7E376E7C213B7E7e7e46cc70A5dD086DAff2A"


@pytest.fixture
def token_abi():
    """An ERC20 ABI with constant and state-changing functions, an event and a constructor."""
    return [
        abi_function("name", outputs=("string",)),
        abi_function("totalSupply"),
        abi_function("balanceOf", [("_owner", "address")]),
        abi_function("allowance", [("_owner", "address"), ("_spender", "address")]),
        abi_function("transfer", [("_to", "address"), ("_value", "uint256")], constant=False),
        abi_function("approve", [("_spender", "address"), ("_value", "uint256")], constant=False),
        {"inputs": [{"name": "_initialAmount", "type": "uint256"}], "type": "constructor"},
        {
            "anonymous": False,
            "inputs": [
                {"indexed": True, "name": "_from", "type": "address"},
                {"indexed": True, "name": "_to", "type": "address"},
                {"indexed": False, "name": "_value", "type": "uint256"},
            ],
            "name": "Transfer",
            "type": "event",
        },
    ]


@pytest.fixture
def connection():
    """A mocked chain connection, which binds contract handles to their address."""
    mocked_connection = MagicMock(spec=ChainConnection)
    mocked_connection.contract.side_effect = lambda abi, address: address
    return mocked_connection


@pytest.fixture
def mocked_responses():
    with responses.RequestsMock() as requests_mock:
        yield requests_mock
