import pytest

from cwcontracts.reflect.msg import SpecialCapitalized, SpecialPing, SpecialResponse
from cwcontracts.reflect.testing import custom_query_execute, mock_dependencies_with_custom_querier
from cwcontracts.runtime import (
    MOCK_CONTRACT_ADDR, ParseError, coins, from_binary, to_binary,
)


def test_custom_query_execute_ping():
    res = custom_query_execute(SpecialPing())
    assert SpecialResponse.from_json(from_binary(res)).msg == "pong"


def test_custom_query_execute_capitalize():
    res = custom_query_execute(SpecialCapitalized("fOObaR"))
    assert SpecialResponse.from_json(from_binary(res)).msg == "FOOBAR"


def test_custom_querier():
    deps = mock_dependencies_with_custom_querier()
    response = deps.querier.query({"custom": SpecialCapitalized("food")})
    assert SpecialResponse.from_json(response).msg == "FOOD"


def test_custom_querier_raw_ping():
    deps = mock_dependencies_with_custom_querier()
    raw = deps.querier.raw_query(to_binary({"custom": {"ping": {}}}))
    assert from_binary(raw) == {"msg": "pong"}


def test_contract_balance_is_set():
    deps = mock_dependencies_with_custom_querier(coins(123, "ucosm"))
    assert deps.querier.query_all_balances(MOCK_CONTRACT_ADDR) == coins(123, "ucosm")


def test_bank_query_still_works():
    deps = mock_dependencies_with_custom_querier(coins(123, "ucosm"))
    res = deps.querier.query({"bank": {"all_balances": {"address": MOCK_CONTRACT_ADDR}}})
    assert res == {"amount": [{"denom": "ucosm", "amount": "123"}]}


def test_unknown_custom_query_rejected():
    deps = mock_dependencies_with_custom_querier()
    with pytest.raises(ParseError):
        deps.querier.query({"custom": {"shout": {}}})