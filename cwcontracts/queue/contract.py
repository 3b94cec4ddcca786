"""A FIFO queue of integers kept under 4-byte big-endian keys."""

from __future__ import annotations

from cwcontracts.queue.msg import (
    Count, CountResponse, Dequeue, Enqueue, InstantiateMsg, Item, ListIds, ListResponse,
    MigrateMsg, OpenIterators, Reducer, ReducerResponse, Sum, SumResponse,
)
from cwcontracts.runtime import (
    Deps, Env, MessageInfo, Order, Response, StdError, Storage, from_binary, to_binary,
)

FIRST_KEY = bytes(4)
_THRESHOLD = bytes([0x00, 0x00, 0x00, 0x20])


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: InstantiateMsg) -> Response:
    return Response()


def execute(deps: Deps, env: Env, info: MessageInfo, msg) -> Response:
    match msg:
        case Enqueue(value=value):
            enqueue(deps.storage, value)
            return Response()
        case Dequeue():
            return _dequeue(deps)
    raise StdError(f"Unsupported execute message: {msg!r}")


def enqueue(storage: Storage, value: int) -> None:
    """Append a value after the current last key."""
    last = next(storage.range(None, None, Order.DESCENDING), None)
    key = FIRST_KEY if last is None else (int.from_bytes(last[0], "big") + 1).to_bytes(4, "big")
    storage.set(key, to_binary(Item(value)))


def _dequeue(deps: Deps) -> Response:
    res = Response()
    first = next(deps.storage.range(None, None, Order.ASCENDING), None)
    if first is not None:
        key, value = first
        deps.storage.remove(key)
        res.data = value
    return res


def migrate(deps: Deps, env: Env, msg: MigrateMsg) -> Response:
    """Clear the queue and refill it with 100, 101, 102."""
    for key, _ in deps.storage.range(None, None, Order.ASCENDING):
        deps.storage.remove(key)
    for value in (100, 101, 102):
        enqueue(deps.storage, value)
    return Response()


def query(deps: Deps, env: Env, msg) -> bytes:
    match msg:
        case Count():
            return to_binary(query_count(deps))
        case Sum():
            return to_binary(query_sum(deps))
        case Reducer():
            return to_binary(query_reducer(deps))
        case ListIds():
            return to_binary(query_list(deps))
        case OpenIterators(count=count):
            return to_binary(query_open_iterators(deps, count))
    raise StdError(f"Unsupported query message: {msg!r}")


def _values(deps: Deps):
    for _, raw in deps.storage.range(None, None, Order.ASCENDING):
        yield Item.from_json(from_binary(raw)).value


def query_count(deps: Deps) -> CountResponse:
    return CountResponse(sum(1 for _ in deps.storage.range(None, None, Order.ASCENDING)))


def query_sum(deps: Deps) -> SumResponse:
    return SumResponse(sum(_values(deps)))


def query_reducer(deps: Deps) -> ReducerResponse:
    counters = [
        (mine, sum(v for v in _values(deps) if v > mine))
        for mine in _values(deps)
    ]
    return ReducerResponse(counters)


def query_list(deps: Deps) -> ListResponse:
    """Range queries below, at and above the 0x20 threshold."""

    def ids(start, end):
        return [int.from_bytes(k, "big") for k, _ in deps.storage.range(start, end, Order.ASCENDING)]

    return ListResponse(
        empty=ids(_THRESHOLD, _THRESHOLD),
        early=ids(None, _THRESHOLD),
        late=ids(_THRESHOLD, None),
    )


def query_open_iterators(deps: Deps, count: int) -> dict:
    for _ in range(count):
        deps.storage.range(None, None, Order.ASCENDING)
    return {}