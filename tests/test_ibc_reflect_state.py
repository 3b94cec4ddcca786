import pytest

from cwcontracts.ibc_reflect.state import Config, accounts, config, pending_channel
from cwcontracts.runtime import NotFound, Order, Storage


def test_config_save_and_load():
    storage = Storage()
    config(storage).save(Config(101))
    assert config(storage).load() == Config(101)


def test_config_missing():
    with pytest.raises(NotFound):
        config(Storage()).load()


def test_accounts_missing_message():
    with pytest.raises(NotFound) as exc:
        accounts(Storage()).load(b"channel-123")
    assert str(exc.value) == "cosmwasm_std::addresses::Addr not found"


def test_accounts_range_is_sorted_and_isolated():
    storage = Storage()
    config(storage).save(Config(7))
    pending_channel(storage).save("channel-9")
    accounts(storage).save(b"channel-2", "acct-2")
    accounts(storage).save(b"channel-1", "acct-1")
    items = list(accounts(storage).range(None, None, Order.ASCENDING))
    assert items == [(b"channel-1", "acct-1"), (b"channel-2", "acct-2")]


def test_accounts_remove():
    storage = Storage()
    accounts(storage).save(b"channel-1", "acct-1")
    accounts(storage).remove(b"channel-1")
    assert accounts(storage).may_load(b"channel-1") is None
    assert list(accounts(storage).range(None, None, Order.ASCENDING)) == []


def test_accounts_update_only_when_empty():
    storage = Storage()

    def register(existing):
        if existing is not None:
            raise ValueError("occupied")
        return "acct-1"

    accounts(storage).update(b"channel-1", register)
    assert accounts(storage).load(b"channel-1") == "acct-1"
    with pytest.raises(ValueError):
        accounts(storage).update(b"channel-1", register)


def test_pending_channel_lifecycle():
    storage = Storage()
    pending_channel(storage).save("channel-1234")
    assert pending_channel(storage).load() == "channel-1234"
    pending_channel(storage).remove()
    assert pending_channel(storage).may_load() is None
    with pytest.raises(NotFound):
        pending_channel(storage).load()