import json

import gevent
import pytest
from gevent import Greenlet

from raiden_kit.contracts.abi import ContractABI
from raiden_kit.contracts.constructor import (
    ContractConstructor,
    ContractInterface,
    build_dispatch_table,
)


class Sentinel(Exception):
    """Simulated network failure."""


@pytest.fixture
def constructor(token_abi, connection):
    return ContractConstructor(token_abi, connection)


@pytest.fixture
def token(constructor, token_address):
    return constructor(token_address)


class TestDispatchTable:
    def test_only_constant_functions_are_exposed(self, constructor, token):
        expected = {"name", "totalSupply", "balanceOf", "allowance"}
        assert set(constructor.functions) == expected

        for name in expected:
            assert callable(getattr(token, name))

    @pytest.mark.parametrize("name", argvalues=["transfer", "approve", "Transfer", "missing"])
    def test_non_constant_functions_and_other_entries_are_not_exposed(self, token, name):
        assert not hasattr(token, name)
        with pytest.raises(AttributeError):
            token.invoke(name)

    def test_state_mutability_marks_read_only_functions(self, make_abi_function, connection):
        abi = [
            dict(make_abi_function("viewed"), constant=None, stateMutability="view"),
            dict(make_abi_function("pured"), constant=None, stateMutability="pure"),
            dict(make_abi_function("paid"), constant=None, stateMutability="payable"),
            dict(make_abi_function("changed"), constant=None, stateMutability="nonpayable"),
        ]
        assert set(ContractConstructor(abi, connection).functions) == {"viewed", "pured"}

    def test_last_declared_overload_wins(self, make_abi_function, connection, token_address):
        abi = [
            make_abi_function("balanceOf", [("_owner", "address")]),
            make_abi_function("balanceOf", [("_owner", "address"), ("_id", "uint256")]),
        ]
        table = build_dispatch_table(ContractABI(abi))

        assert list(table) == ["balanceOf"]
        assert table["balanceOf"].signature == "balanceOf(address,uint256)"

        interface = ContractConstructor(abi, connection)(token_address)
        interface.balanceOf("0x01", 2).get()
        _, function, args = connection.call.call_args[0]
        assert function.arity == 2
        assert args == ("0x01", 2)

        with pytest.raises(TypeError):
            interface.balanceOf("0x01")

    def test_dispatch_table_cannot_be_modified(self, constructor):
        with pytest.raises(TypeError):
            constructor.functions["transfer"] = constructor.functions["name"]

    def test_functions_named_like_interface_attributes_are_reachable_through_invoke(
        self, make_abi_function, connection, token_address
    ):
        abi = [make_abi_function("address", outputs=("address",)), make_abi_function("invoke")]
        interface = ContractConstructor(abi, connection)(token_address)
        connection.call.side_effect = lambda contract, function, args: function.name

        assert set(interface.functions) == {"address", "invoke"}
        assert interface.address == token_address
        assert callable(interface.invoke)
        assert interface.invoke("address").get() == "address"
        assert interface.invoke("invoke").get() == "invoke"

    def test_dir_lists_functions(self, token):
        assert {"name", "totalSupply", "balanceOf", "allowance"}.issubset(dir(token))


class TestInvocation:
    def test_call_is_forwarded_once_with_positional_args(self, token, connection, owner_address):
        token.balanceOf(owner_address).get()

        connection.call.assert_called_once()
        contract, function, args = connection.call.call_args[0]
        assert function.name == "balanceOf"
        assert args == (owner_address,)

    def test_read_only_call_never_transacts(self, token, connection, owner_address):
        token.balanceOf(owner_address).get()
        token.allowance(owner_address, owner_address).get()

        connection.transact.assert_not_called()
        connection.send_transaction.assert_not_called()

    def test_invoke_returns_pending_result_resolving_to_call_result(self, token, connection):
        connection.call.return_value = 1_000

        pending = token.totalSupply()

        assert isinstance(pending, Greenlet)
        assert pending.get() == 1_000

    def test_generic_invoke_matches_attribute_access(self, token, connection):
        connection.call.return_value = "TKN"
        assert token.invoke("name").get() == token.name().get() == "TKN"

    @pytest.mark.parametrize(
        "function, args",
        argvalues=[("totalSupply", (1,)), ("balanceOf", ()), ("allowance", ("0x01",))],
        ids=["too many args", "too few args", "one of two args"],
    )
    def test_wrong_number_of_arguments_raises_type_error(self, token, connection, function, args):
        with pytest.raises(TypeError):
            token.invoke(function, *args)
        connection.call.assert_not_called()

    def test_failed_call_fails_the_pending_result_only(
        self, constructor, connection, token_address, other_token_address
    ):
        def call(contract, function, args):
            if contract == token_address:
                raise Sentinel
            gevent.sleep(0.01)
            return 42

        connection.call.side_effect = call

        failing = constructor(token_address).totalSupply()
        succeeding = constructor(other_token_address).totalSupply()

        gevent.joinall([failing, succeeding])
        assert isinstance(failing.exception, Sentinel)
        assert succeeding.successful()
        assert succeeding.value == 42

        with pytest.raises(Sentinel):
            failing.get()


class TestConstructor:
    def test_interfaces_are_bound_to_their_own_address(
        self, constructor, connection, token_address, other_token_address
    ):
        first, second = constructor(token_address), constructor(other_token_address)

        assert first is not second
        assert isinstance(first, ContractInterface)
        assert (first.address, second.address) == (token_address, other_token_address)
        assert first.contract == token_address
        assert second.contract == other_token_address

    def test_interfaces_share_the_connection(self, constructor, connection, token_address):
        assert constructor(token_address).connection is connection

    def test_concurrent_calls_resolve_independently(
        self, constructor, connection, token_address, other_token_address
    ):
        balances = {token_address: 1, other_token_address: 2}

        def call(contract, function, args):
            gevent.sleep(0.01 * balances[contract])
            return balances[contract]

        connection.call.side_effect = call

        first = constructor(token_address).totalSupply()
        second = constructor(other_token_address).totalSupply()

        assert (second.get(), first.get()) == (2, 1)

    def test_contract_handle_receives_raw_abi(self, token_abi, connection, token_address):
        ContractConstructor(token_abi, connection)(token_address)
        abi, address = connection.contract.call_args[0]
        assert list(abi) == token_abi
        assert address == token_address

    def test_from_file(self, tmp_path, token_abi, connection):
        abi_file = tmp_path.joinpath("Token.json")
        abi_file.write_text(json.dumps(token_abi))

        constructor = ContractConstructor.from_file(abi_file, connection)

        assert constructor.name == "Token"
        assert "balanceOf" in constructor.functions
