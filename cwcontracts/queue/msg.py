"""Messages, responses and stored item of the queue contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cwcontracts.runtime import ParseError, from_binary


@dataclass
class Item:
    """One stored queue entry."""

    value: int

    def to_json(self) -> dict:
        return {"value": self.value}

    @classmethod
    def from_json(cls, data: Any) -> "Item":
        try:
            return cls(int(data["value"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"Error parsing into type Item: {exc}") from exc


@dataclass
class InstantiateMsg:
    def to_json(self) -> dict:
        return {}


@dataclass
class MigrateMsg:
    def to_json(self) -> dict:
        return {}


@dataclass
class Enqueue:
    value: int

    def to_json(self) -> dict:
        return {"enqueue": {"value": self.value}}


@dataclass
class Dequeue:
    def to_json(self) -> dict:
        return {"dequeue": {}}


@dataclass
class Count:
    def to_json(self) -> dict:
        return {"count": {}}


@dataclass
class Sum:
    def to_json(self) -> dict:
        return {"sum": {}}


@dataclass
class Reducer:
    def to_json(self) -> dict:
        return {"reducer": {}}


@dataclass
class ListIds:
    def to_json(self) -> dict:
        return {"list": {}}


@dataclass
class OpenIterators:
    count: int

    def to_json(self) -> dict:
        return {"open_iterators": {"count": self.count}}


@dataclass
class CountResponse:
    count: int

    def to_json(self) -> dict:
        return {"count": self.count}

    @classmethod
    def from_json(cls, data: dict) -> "CountResponse":
        return cls(data["count"])


@dataclass
class SumResponse:
    sum: int

    def to_json(self) -> dict:
        return {"sum": self.sum}

    @classmethod
    def from_json(cls, data: dict) -> "SumResponse":
        return cls(data["sum"])


@dataclass
class ReducerResponse:
    """Pairs of (item value, sum of all values greater than it)."""

    counters: list[tuple[int, int]] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"counters": [list(c) for c in self.counters]}

    @classmethod
    def from_json(cls, data: dict) -> "ReducerResponse":
        return cls([(a, b) for a, b in data["counters"]])


@dataclass
class ListResponse:
    empty: list[int] = field(default_factory=list)
    early: list[int] = field(default_factory=list)
    late: list[int] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"empty": self.empty, "early": self.early, "late": self.late}

    @classmethod
    def from_json(cls, data: dict) -> "ListResponse":
        return cls(list(data["empty"]), list(data["early"]), list(data["late"]))


def _variant(data: Any, type_name: str, expected: tuple[str, ...]) -> tuple[str, dict]:
    if isinstance(data, (bytes, bytearray)):
        data = from_binary(data)
    if not isinstance(data, dict) or len(data) != 1:
        raise ParseError(f"Error parsing into type {type_name}: expected a single variant")
    ((name, body),) = data.items()
    if name not in expected:
        names = ", ".join(f"`{e}`" for e in expected)
        raise ParseError(f"Error parsing into type {type_name}: unknown variant `{name}`, expected one of {names}")
    if not isinstance(body, dict):
        raise ParseError(f"Error parsing into type {type_name}: invalid body for `{name}`")
    return name, body


def parse_execute_msg(data: Any) -> Enqueue | Dequeue:
    name, body = _variant(data, "ExecuteMsg", ("enqueue", "dequeue"))
    try:
        return Enqueue(int(body["value"])) if name == "enqueue" else Dequeue()
    except (KeyError, ValueError, TypeError) as exc:
        raise ParseError(f"Error parsing into type ExecuteMsg: {exc}") from exc


def parse_query_msg(data: Any):
    name, body = _variant(data, "QueryMsg", ("count", "sum", "reducer", "list", "open_iterators"))
    match name:
        case "count":
            return Count()
        case "sum":
            return Sum()
        case "reducer":
            return Reducer()
        case "list":
            return ListIds()
    try:
        return OpenIterators(int(body["count"]))
    except (KeyError, ValueError, TypeError) as exc:
        raise ParseError(f"Error parsing into type QueryMsg: {exc}") from exc