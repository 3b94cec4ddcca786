import pytest

from cwcontracts.reflect.state import State, config, replies
from cwcontracts.runtime import Event, NotFound, Reply, Storage, SubMsgResponse


def test_config_round_trip():
    storage = Storage()
    config(storage).save(State("creator"))
    assert config(storage).load() == State("creator")


def test_config_missing():
    with pytest.raises(NotFound):
        config(Storage()).load()


def test_config_update():
    storage = Storage()
    config(storage).save(State("creator"))
    config(storage).update(lambda s: State("friend"))
    assert config(storage).load() == State("friend")


def test_replies_round_trip():
    storage = Storage()
    reply = Reply(123, SubMsgResponse([Event("message").add_attribute("signer", "caller-addr")], b"foobar"))
    key = (123).to_bytes(8, "big")
    replies(storage).save(key, reply)
    assert replies(storage).load(key) == reply


def test_error_reply_round_trip():
    storage = Storage()
    reply = Reply(7, "out of gas")
    replies(storage).save(b"k", reply)
    assert replies(storage).load(b"k") == reply


def test_missing_reply():
    storage = Storage()
    replies(storage).save((123).to_bytes(8, "big"), Reply(123, "boom"))
    with pytest.raises(NotFound):
        replies(storage).load((65432).to_bytes(8, "big"))


def test_config_and_replies_do_not_collide():
    storage = Storage()
    config(storage).save(State("creator"))
    replies(storage).save(b"config", Reply(1, "err"))
    assert config(storage).load() == State("creator")
    assert [k for k, _ in replies(storage).range()] == [b"config"]