"""Messages, packets and responses of the IBC reflect contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from cwcontracts.runtime import (
    Coin, ParseError, cosmos_msg_from_json, cosmos_msg_to_json, from_binary,
)

_PACKET_TYPE = "ibc_reflect::msg::PacketMsg"


def _parse(type_name: str, build: Callable[[], Any]) -> Any:
    try:
        return build()
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ParseError(f"Error parsing into type {type_name}: {exc}") from exc


@dataclass
class InstantiateMsg:
    """Code id of the reflect contract used to spawn sub-accounts."""

    reflect_code_id: int

    def to_json(self) -> dict:
        return {"reflect_code_id": self.reflect_code_id}

    @classmethod
    def from_json(cls, data: Any) -> "InstantiateMsg":
        return _parse("InstantiateMsg", lambda: cls(int(data["reflect_code_id"])))


@dataclass
class AccountQuery:
    """Returns the reflect account attached to a channel."""

    channel_id: str

    def to_json(self) -> dict:
        return {"account": {"channel_id": self.channel_id}}


@dataclass
class ListAccountsQuery:
    """Returns all (channel, reflect account) pairs."""

    def to_json(self) -> dict:
        return {"list_accounts": {}}


@dataclass
class AccountResponse:
    account: str | None = None

    def to_json(self) -> dict:
        return {"account": self.account}

    @classmethod
    def from_json(cls, data: Any) -> "AccountResponse":
        return _parse("AccountResponse", lambda: cls(data.get("account")))


@dataclass
class AccountInfo:
    account: str
    channel_id: str

    def to_json(self) -> dict:
        return {"account": self.account, "channel_id": self.channel_id}

    @classmethod
    def from_json(cls, data: Any) -> "AccountInfo":
        return _parse("AccountInfo", lambda: cls(data["account"], data["channel_id"]))


@dataclass
class ListAccountsResponse:
    accounts: list[AccountInfo] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"accounts": [a.to_json() for a in self.accounts]}

    @classmethod
    def from_json(cls, data: Any) -> "ListAccountsResponse":
        return _parse(
            "ListAccountsResponse",
            lambda: cls([AccountInfo.from_json(a) for a in data["accounts"]]),
        )


@dataclass
class ReflectExecuteMsg:
    """Execute message understood by the reflect contract."""

    msgs: list = field(default_factory=list)

    def to_json(self) -> dict:
        return {"reflect_msg": {"msgs": [cosmos_msg_to_json(m) for m in self.msgs]}}

    @classmethod
    def from_json(cls, data: Any) -> "ReflectExecuteMsg":
        if isinstance(data, (bytes, bytearray)):
            data = from_binary(data)
        return _parse(
            "ReflectExecuteMsg",
            lambda: cls([cosmos_msg_from_json(m) for m in data["reflect_msg"]["msgs"]]),
        )


@dataclass
class Dispatch:
    msgs: list = field(default_factory=list)

    def to_json(self) -> dict:
        return {"dispatch": {"msgs": [cosmos_msg_to_json(m) for m in self.msgs]}}


@dataclass
class WhoAmI:
    def to_json(self) -> dict:
        return {"who_am_i": {}}


@dataclass
class Balances:
    def to_json(self) -> dict:
        return {"balances": {}}


@dataclass
class WhoAmIResponse:
    """The caller's account address on this chain."""

    account: str

    def to_json(self) -> dict:
        return {"account": self.account}

    @classmethod
    def from_json(cls, data: Any) -> "WhoAmIResponse":
        return _parse("WhoAmIResponse", lambda: cls(data["account"]))


@dataclass
class BalancesResponse:
    account: str
    balances: list[Coin] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"account": self.account, "balances": [c.to_json() for c in self.balances]}

    @classmethod
    def from_json(cls, data: Any) -> "BalancesResponse":
        return _parse(
            "BalancesResponse",
            lambda: cls(data["account"], [Coin.from_json(c) for c in data["balances"]]),
        )


def parse_packet_msg(data: Any) -> Dispatch | WhoAmI | Balances:
    """Parse a packet from its JSON form or bytes."""
    if isinstance(data, (bytes, bytearray)):
        data = from_binary(data)
    if not isinstance(data, dict) or len(data) != 1:
        raise ParseError(f"Error parsing into type {_PACKET_TYPE}: expected a single variant")
    ((name, body),) = data.items()
    match name:
        case "dispatch":
            return _parse(_PACKET_TYPE, lambda: Dispatch([cosmos_msg_from_json(m) for m in body["msgs"]]))
        case "who_am_i":
            return WhoAmI()
        case "balances":
            return Balances()
    raise ParseError(
        f"Error parsing into type {_PACKET_TYPE}: unknown variant `{name}`, "
        "expected one of `dispatch`, `who_am_i`, `balances`"
    )