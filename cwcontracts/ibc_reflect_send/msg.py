"""Execute and query messages and responses of the IBC reflect-send contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from cwcontracts.ibc_reflect_send.state import AccountData
from cwcontracts.runtime import Coin, ParseError, Timestamp, cosmos_msg_to_json


def _parse(type_name: str, build: Callable[[], Any]) -> Any:
    try:
        return build()
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ParseError(f"Error parsing into type {type_name}: {exc}") from exc


@dataclass
class InstantiateMsg:
    """Needs no data: the sender becomes the admin."""

    def to_json(self) -> dict:
        return {}


@dataclass
class UpdateAdmin:
    admin: str

    def to_json(self) -> dict:
        return {"update_admin": {"admin": self.admin}}


@dataclass
class SendMsgs:
    channel_id: str
    msgs: list = field(default_factory=list)

    def to_json(self) -> dict:
        return {"send_msgs": {"channel_id": self.channel_id,
                              "msgs": [cosmos_msg_to_json(m) for m in self.msgs]}}


@dataclass
class CheckRemoteBalance:
    channel_id: str

    def to_json(self) -> dict:
        return {"check_remote_balance": {"channel_id": self.channel_id}}


@dataclass
class SendFunds:
    """Transfer the attached funds to the remote account of a reflect channel."""

    reflect_channel_id: str
    transfer_channel_id: str

    def to_json(self) -> dict:
        return {"send_funds": {"reflect_channel_id": self.reflect_channel_id,
                               "transfer_channel_id": self.transfer_channel_id}}


@dataclass
class AdminQuery:
    def to_json(self) -> dict:
        return {"admin": {}}


@dataclass
class ListAccountsQuery:
    def to_json(self) -> dict:
        return {"list_accounts": {}}


@dataclass
class AccountQuery:
    channel_id: str

    def to_json(self) -> dict:
        return {"account": {"channel_id": self.channel_id}}


@dataclass
class AdminResponse:
    admin: str

    def to_json(self) -> dict:
        return {"admin": self.admin}

    @classmethod
    def from_json(cls, data: Any) -> "AdminResponse":
        return _parse("AdminResponse", lambda: cls(str(data["admin"])))


def _account_fields(data: Any) -> tuple[Timestamp, str | None, list[Coin]]:
    return (
        Timestamp.from_json(data["last_update_time"]),
        data.get("remote_addr"),
        [Coin.from_json(c) for c in data["remote_balance"]],
    )


@dataclass
class AccountInfo:
    channel_id: str
    last_update_time: Timestamp = field(default_factory=Timestamp)
    remote_addr: str | None = None
    remote_balance: list[Coin] = field(default_factory=list)

    @classmethod
    def convert(cls, channel_id: str, data: AccountData) -> "AccountInfo":
        return cls(channel_id, data.last_update_time, data.remote_addr, list(data.remote_balance))

    def to_json(self) -> dict:
        return {
            "channel_id": self.channel_id,
            "last_update_time": self.last_update_time.to_json(),
            "remote_addr": self.remote_addr,
            "remote_balance": [c.to_json() for c in self.remote_balance],
        }

    @classmethod
    def from_json(cls, data: Any) -> "AccountInfo":
        return _parse("AccountInfo", lambda: cls(str(data["channel_id"]), *_account_fields(data)))


@dataclass
class ListAccountsResponse:
    accounts: list[AccountInfo] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"accounts": [a.to_json() for a in self.accounts]}

    @classmethod
    def from_json(cls, data: Any) -> "ListAccountsResponse":
        return _parse("ListAccountsResponse",
                      lambda: cls([AccountInfo.from_json(a) for a in data["accounts"]]))


@dataclass
class AccountResponse:
    last_update_time: Timestamp = field(default_factory=Timestamp)
    remote_addr: str | None = None
    remote_balance: list[Coin] = field(default_factory=list)

    @classmethod
    def from_account_data(cls, data: AccountData) -> "AccountResponse":
        return cls(data.last_update_time, data.remote_addr, list(data.remote_balance))

    def to_json(self) -> dict:
        return {
            "last_update_time": self.last_update_time.to_json(),
            "remote_addr": self.remote_addr,
            "remote_balance": [c.to_json() for c in self.remote_balance],
        }

    @classmethod
    def from_json(cls, data: Any) -> "AccountResponse":
        return _parse("AccountResponse", lambda: cls(*_account_fields(data)))