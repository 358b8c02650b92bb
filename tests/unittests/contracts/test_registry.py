import json
from unittest.mock import patch

import pytest

from raiden_kit.contracts.constructor import ContractConstructor
from raiden_kit.contracts.registry import RAIDEN_CONTRACTS, RaidenContracts
from raiden_kit.exceptions.contracts import ABIFileMissing


@pytest.fixture
def abi_dir(tmp_path, token_abi):
    tmp_path.joinpath("Token.json").write_text(json.dumps(token_abi))
    return tmp_path


@pytest.fixture
def contracts(connection, abi_dir):
    return RaidenContracts(connection, abi_dir)


class TestRaidenContracts:
    def test_constructor_is_loaded_from_abi_dir(self, contracts, abi_dir):
        constructor = contracts.Token

        assert isinstance(constructor, ContractConstructor)
        assert constructor.name == "Token"
        assert contracts.abi_file("Token") == abi_dir.joinpath("Token.json")

    def test_constructors_are_cached(self, contracts):
        with patch.object(
            ContractConstructor, "from_file", wraps=ContractConstructor.from_file
        ) as from_file:
            first, second = contracts.Token, contracts.constructor("Token")

        assert first is second
        from_file.assert_called_once()

    def test_interfaces_share_the_connection(self, contracts, connection, token_address):
        assert contracts.Token(token_address).connection is connection

    def test_missing_abi_fails_on_access_only(self, connection, tmp_path):
        contracts = RaidenContracts(connection, tmp_path)
        with pytest.raises(ABIFileMissing):
            contracts.Registry

    def test_unknown_attribute_raises_attribute_error(self, contracts):
        assert not hasattr(contracts, "Unknown")

    @pytest.mark.parametrize("attribute", argvalues=sorted(RAIDEN_CONTRACTS))
    def test_attributes_map_to_contract_abis(self, connection, tmp_path, token_abi, attribute):
        contract_name = RAIDEN_CONTRACTS[attribute]
        tmp_path.joinpath(f"{contract_name}.json").write_text(json.dumps(token_abi))

        constructor = getattr(RaidenContracts(connection, tmp_path), attribute)

        assert constructor.name == contract_name
