import pytest

from cwcontracts.ibc_reflect_send.state import AccountData, Config, accounts, config
from cwcontracts.runtime import NotFound, Order, Storage, Timestamp, coins


def test_config_round_trip():
    storage = Storage()
    config(storage).save(Config("creator"))
    assert config(storage).load() == Config("creator")


def test_config_missing():
    with pytest.raises(NotFound):
        config(Storage()).load()


def test_default_account_data_round_trip():
    storage = Storage()
    accounts(storage).save(b"channel-1234", AccountData())
    loaded = accounts(storage).load(b"channel-1234")
    assert loaded == AccountData()
    assert loaded.remote_addr is None
    assert loaded.remote_balance == []
    assert loaded.last_update_time.nanos == 0


def test_full_account_data_round_trip():
    storage = Storage()
    data = AccountData(Timestamp(1_571_797_419_879_305_533), "account-789", coins(12344, "utrgd"))
    accounts(storage).save(b"channel-1234", data)
    assert accounts(storage).load(b"channel-1234") == data


def test_missing_account():
    with pytest.raises(NotFound):
        accounts(Storage()).load(b"random-channel")


def test_range_and_remove():
    storage = Storage()
    bucket = accounts(storage)
    bucket.save(b"channel-2", AccountData(remote_addr="b-account"))
    bucket.save(b"channel-1", AccountData(remote_addr="a-account"))
    keys = [k for k, _ in bucket.range(None, None, Order.ASCENDING)]
    assert keys == [b"channel-1", b"channel-2"]
    bucket.remove(b"channel-1")
    assert bucket.may_load(b"channel-1") is None
    assert [k for k, _ in bucket.range(None, None, Order.ASCENDING)] == [b"channel-2"]


def test_config_and_accounts_do_not_collide():
    storage = Storage()
    config(storage).save(Config("creator"))
    accounts(storage).save(b"config", AccountData())
    assert config(storage).load().admin == "creator"
    assert accounts(storage).load(b"config") == AccountData()