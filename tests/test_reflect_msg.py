import pytest

from cwcontracts.reflect.msg import (
    CapitalizedQuery, ChainQuery, ChainResponse, ChangeOwner, CustomDebug, CustomRaw,
    OwnerResponse, RawQuery, RawResponse, ReflectMsg, ReflectSubMsg, SpecialCapitalized,
    SpecialPing, SpecialResponse, SubMsgResultQuery, special_query_from_json,
    special_query_to_json,
)
from cwcontracts.runtime import (
    BankSend, ParseError, SubMsg, coins, cosmos_msg_from_json, cosmos_msg_to_json,
    from_binary, to_binary,
)


def test_reflect_msg_wire_format():
    msg = ReflectMsg([BankSend("friend", coins(1, "token"))])
    assert msg.to_json() == {"reflect_msg": {"msgs": [
        {"bank": {"send": {"to_address": "friend", "amount": [{"denom": "token", "amount": "1"}]}}}
    ]}}


def test_custom_debug_is_wrapped():
    assert cosmos_msg_to_json(CustomDebug("Hi, Dad!")) == {"custom": {"debug": "Hi, Dad!"}}


def test_custom_raw_round_trip():
    original = CustomRaw(b'{"foo":123}')
    body = cosmos_msg_from_json(to_binary(cosmos_msg_to_json(original)))
    assert CustomRaw.from_json(body) == original


def test_custom_debug_round_trip():
    body = cosmos_msg_from_json(cosmos_msg_to_json(CustomDebug("Hi, Dad!")))
    assert CustomDebug.from_json(body) == CustomDebug("Hi, Dad!")


def test_reflect_sub_msg_carries_id_and_reply_on():
    sub = SubMsg.reply_always(BankSend("friend", coins(1, "token")), 123)
    body = ReflectSubMsg([sub]).to_json()["reflect_sub_msg"]["msgs"][0]
    assert body["id"] == 123
    assert body["reply_on"] == "always"


def test_simple_query_messages():
    assert ChangeOwner("friend").to_json() == {"change_owner": {"owner": "friend"}}
    assert CapitalizedQuery("demo one").to_json() == {"capitalized": {"text": "demo one"}}
    assert SubMsgResultQuery(123).to_json() == {"sub_msg_result": {"id": 123}}


def test_chain_query_with_custom_request():
    assert ChainQuery({"custom": SpecialPing()}).to_json() == {
        "chain": {"request": {"custom": {"ping": {}}}}
    }


def test_raw_query_key_is_base64():
    body = from_binary(to_binary(RawQuery("contract", b"\x00\x01k")))["raw"]
    assert body["contract"] == "contract"
    assert RawResponse.from_json({"data": body["key"]}) == RawResponse(b"\x00\x01k")


@pytest.mark.parametrize("response", [
    ChainResponse(b"\x00\xff data"),
    RawResponse(b""),
    OwnerResponse("creator"),
    SpecialResponse("pong"),
])
def test_response_round_trip(response):
    assert type(response).from_json(from_binary(to_binary(response))) == response


@pytest.mark.parametrize("query", [SpecialPing(), SpecialCapitalized("fOObaR")])
def test_special_query_round_trip(query):
    assert special_query_from_json(to_binary(special_query_to_json(query))) == query


def test_special_query_unknown_variant():
    with pytest.raises(ParseError):
        special_query_from_json({"shout": {}})


def test_special_query_missing_text():
    with pytest.raises(ParseError):
        special_query_from_json({"capitalized": {}})