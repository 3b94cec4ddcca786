import pytest

from cwcontracts.queue.msg import (
    Count, Dequeue, Enqueue, Item, ListIds, ListResponse, OpenIterators, Reducer,
    ReducerResponse, Sum, parse_execute_msg, parse_query_msg,
)
from cwcontracts.runtime import ParseError, from_binary, to_binary


@pytest.mark.parametrize("msg", [Enqueue(25), Dequeue()])
def test_execute_round_trip(msg):
    assert parse_execute_msg(to_binary(msg)) == msg


@pytest.mark.parametrize("msg", [Count(), Sum(), Reducer(), ListIds(), OpenIterators(321)])
def test_query_round_trip(msg):
    assert parse_query_msg(to_binary(msg)) == msg


def test_wire_format():
    assert to_binary(Enqueue(25)) == b'{"enqueue":{"value":25}}'
    assert to_binary(Item(25)) == b'{"value":25}'


def test_unknown_variant():
    with pytest.raises(ParseError, match="unknown variant `push`"):
        parse_execute_msg({"push": {}})


def test_bad_body():
    with pytest.raises(ParseError):
        parse_query_msg({"open_iterators": {}})


def test_item_parse_error():
    with pytest.raises(ParseError):
        Item.from_json({"other": 1})


def test_response_round_trips():
    r = ReducerResponse([(40, 85), (-10, 140)])
    assert ReducerResponse.from_json(from_binary(to_binary(r))) == r
    lst = ListResponse([], [0x19], [0x20])
    assert ListResponse.from_json(from_binary(to_binary(lst))) == lst