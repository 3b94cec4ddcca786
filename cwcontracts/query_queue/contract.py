"""Forwards queries to a queue contract whose address it stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from cwcontracts.runtime import (
    Deps, Env, MessageInfo, NotFound, ParseError, Response, StdError, Storage,
    from_binary, to_binary,
)

CONFIG_KEY = b"config"


def _parse(type_name: str, build: Callable[[], Any]) -> Any:
    try:
        return build()
    except (KeyError, TypeError, ValueError) as exc:
        raise ParseError(f"Error parsing into type {type_name}: {exc}") from exc


@dataclass
class InstantiateMsg:
    queue_address: str

    def to_json(self) -> dict:
        return {"queue_address": self.queue_address}


@dataclass
class ChangeAddress:
    queue_address: str

    def to_json(self) -> dict:
        return {"change_address": {"queue_address": self.queue_address}}


@dataclass
class RawQuery:
    key: int

    def to_json(self) -> dict:
        return {"raw": {"key": self.key}}


@dataclass
class CountQuery:
    def to_json(self) -> dict:
        return {"count": {}}


@dataclass
class SumQuery:
    def to_json(self) -> dict:
        return {"sum": {}}


@dataclass
class ReducerQuery:
    def to_json(self) -> dict:
        return {"reducer": {}}


@dataclass
class ListQuery:
    def to_json(self) -> dict:
        return {"list": {}}


@dataclass
class RawResponse:
    response: str

    def to_json(self) -> dict:
        return {"response": self.response}

    @classmethod
    def from_json(cls, data: Any) -> "RawResponse":
        return _parse("RawResponse", lambda: cls(str(data["response"])))


@dataclass
class CountResponse:
    count: int

    def to_json(self) -> dict:
        return {"count": self.count}

    @classmethod
    def from_json(cls, data: Any) -> "CountResponse":
        return _parse("CountResponse", lambda: cls(int(data["count"])))


@dataclass
class SumResponse:
    sum: int

    def to_json(self) -> dict:
        return {"sum": self.sum}

    @classmethod
    def from_json(cls, data: Any) -> "SumResponse":
        return _parse("SumResponse", lambda: cls(int(data["sum"])))


@dataclass
class ReducerResponse:
    """Pairs of (item value, sum of all values greater than it)."""

    counters: list[tuple[int, int]] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"counters": [list(c) for c in self.counters]}

    @classmethod
    def from_json(cls, data: Any) -> "ReducerResponse":
        return _parse("ReducerResponse", lambda: cls([(int(a), int(b)) for a, b in data["counters"]]))


@dataclass
class ListResponse:
    empty: list[int] = field(default_factory=list)
    early: list[int] = field(default_factory=list)
    late: list[int] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"empty": self.empty, "early": self.early, "late": self.late}

    @classmethod
    def from_json(cls, data: Any) -> "ListResponse":
        return _parse(
            "ListResponse",
            lambda: cls(list(data["empty"]), list(data["early"]), list(data["late"])),
        )


def _write_queue_address(storage: Storage, address: str) -> None:
    storage.set(CONFIG_KEY, to_binary({"queue_address": address}))


def read_queue_address(storage: Storage) -> str:
    """Return the stored queue address."""
    raw = storage.get(CONFIG_KEY)
    if raw is None:
        raise NotFound("query_queue::contract::Config")
    return _parse("Config", lambda: str(from_binary(raw)["queue_address"]))


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: InstantiateMsg) -> Response:
    _write_queue_address(deps.storage, msg.queue_address)
    return Response()


def execute(deps: Deps, env: Env, info: MessageInfo, msg) -> Response:
    match msg:
        case ChangeAddress(queue_address=address):
            _write_queue_address(deps.storage, address)
            return Response()
    raise StdError(f"Unsupported execute message: {msg!r}")


def query(deps: Deps, env: Env, msg) -> bytes:
    match msg:
        case RawQuery(key=key):
            return to_binary(query_raw(deps, key))
        case CountQuery():
            return to_binary(query_count(deps, msg))
        case SumQuery():
            return to_binary(query_sum(deps, msg))
        case ReducerQuery():
            return to_binary(query_reducer(deps, msg))
        case ListQuery():
            return to_binary(query_list(deps, msg))
    raise StdError(f"Unsupported query message: {msg!r}")


def query_raw(deps: Deps, key: int) -> RawResponse:
    """Read one single-byte key from the queue's raw storage as text."""
    address = read_queue_address(deps.storage)
    raw = deps.querier.query_wasm_raw(address, bytes([key]))
    try:
        text = (raw or b"").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StdError(f"Cannot decode UTF8 bytes into string: {exc}") from exc
    return RawResponse(text)


def _smart(deps: Deps, msg) -> Any:
    return deps.querier.query_wasm_smart(read_queue_address(deps.storage), msg)


def query_count(deps: Deps, msg) -> CountResponse:
    return CountResponse.from_json(_smart(deps, msg))


def query_sum(deps: Deps, msg) -> SumResponse:
    return SumResponse.from_json(_smart(deps, msg))


def query_reducer(deps: Deps, msg) -> ReducerResponse:
    return ReducerResponse.from_json(_smart(deps, msg))


def query_list(deps: Deps, msg) -> ListResponse:
    return ListResponse.from_json(_smart(deps, msg))