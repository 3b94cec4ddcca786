import pytest

from cwcontracts.ibc_reflect_send.msg import (
    AccountInfo,
    AccountResponse,
    AdminResponse,
    ListAccountsResponse,
    SendFunds,
)
from cwcontracts.ibc_reflect_send.state import AccountData
from cwcontracts.runtime import ParseError, Timestamp, coins, from_binary, to_binary


def _data():
    return AccountData(Timestamp(1_571_797_419_879_305_533), "account-789", coins(12344, "utrgd"))


def test_account_info_convert():
    info = AccountInfo.convert("channel-1234", _data())
    assert info.channel_id == "channel-1234"
    assert info.remote_addr == "account-789"
    assert info.remote_balance == coins(12344, "utrgd")
    assert info.last_update_time == _data().last_update_time


def test_account_response_from_account_data():
    resp = AccountResponse.from_account_data(_data())
    assert resp == AccountResponse(_data().last_update_time, "account-789", coins(12344, "utrgd"))


def test_account_response_round_trip():
    resp = AccountResponse.from_account_data(_data())
    assert AccountResponse.from_json(from_binary(to_binary(resp))) == resp


def test_empty_account_response_round_trip():
    resp = AccountResponse.from_account_data(AccountData())
    back = AccountResponse.from_json(from_binary(to_binary(resp)))
    assert back.remote_addr is None
    assert back.remote_balance == []
    assert back.last_update_time.nanos == 0


def test_list_accounts_round_trip():
    resp = ListAccountsResponse([
        AccountInfo.convert("channel-1", AccountData()),
        AccountInfo.convert("channel-2", _data()),
    ])
    assert ListAccountsResponse.from_json(from_binary(to_binary(resp))) == resp


def test_admin_response_round_trip():
    assert AdminResponse.from_json(from_binary(to_binary(AdminResponse("creator")))) == AdminResponse("creator")


def test_send_funds_wire_fields():
    body = from_binary(to_binary(SendFunds("channel-1234", "transfer-2")))["send_funds"]
    assert body == {"reflect_channel_id": "channel-1234", "transfer_channel_id": "transfer-2"}


def test_bad_account_response_rejected():
    with pytest.raises(ParseError):
        AccountResponse.from_json({"remote_addr": None})