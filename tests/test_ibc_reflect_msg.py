import pytest

from cwcontracts.ibc_reflect.msg import (
    AccountInfo, AccountResponse, Balances, BalancesResponse, Dispatch, InstantiateMsg,
    ListAccountsResponse, ReflectExecuteMsg, WhoAmI, WhoAmIResponse, parse_packet_msg,
)
from cwcontracts.runtime import BankSend, ParseError, coins, from_binary, to_binary


def _roundtrip(value):
    return from_binary(to_binary(value))


@pytest.mark.parametrize(
    "packet",
    [
        Dispatch([BankSend("my-friend", coins(123456789, "uatom"))]),
        WhoAmI(),
        Balances(),
    ],
)
def test_packet_round_trip(packet):
    assert parse_packet_msg(to_binary(packet)) == packet


def test_who_am_i_wire_form():
    assert to_binary(WhoAmI()) == b'{"who_am_i":{}}'


def test_unknown_packet_variant():
    bad = to_binary(InstantiateMsg(12345))
    with pytest.raises(ParseError) as exc:
        parse_packet_msg(bad)
    assert str(exc.value) == (
        "Error parsing into type ibc_reflect::msg::PacketMsg: unknown variant "
        "`reflect_code_id`, expected one of `dispatch`, `who_am_i`, `balances`"
    )


def test_packet_must_be_single_variant():
    with pytest.raises(ParseError):
        parse_packet_msg(b"[1, 2]")
    with pytest.raises(ParseError):
        parse_packet_msg(b"not json")


def test_reflect_execute_msg_round_trip():
    msg = ReflectExecuteMsg([BankSend("my-friend", coins(123456789, "uatom"))])
    assert ReflectExecuteMsg.from_json(to_binary(msg)) == msg


def test_instantiate_round_trip():
    assert InstantiateMsg.from_json(_roundtrip(InstantiateMsg(101))) == InstantiateMsg(101)


def test_account_responses_round_trip():
    listed = ListAccountsResponse([AccountInfo("reflect-acct-1", "channel-1234")])
    assert ListAccountsResponse.from_json(_roundtrip(listed)) == listed
    assert AccountResponse.from_json(_roundtrip(AccountResponse(None))).account is None
    assert AccountResponse.from_json(_roundtrip(AccountResponse("acct-123"))).account == "acct-123"


def test_ack_payloads_round_trip():
    who = WhoAmIResponse("acct-123")
    assert WhoAmIResponse.from_json(_roundtrip(who)) == who
    bal = BalancesResponse("acct-123", coins(123456, "uatom"))
    assert BalancesResponse.from_json(_roundtrip(bal)) == bal


def test_missing_field_raises():
    with pytest.raises(ParseError):
        WhoAmIResponse.from_json({})