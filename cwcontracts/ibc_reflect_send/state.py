"""Stored state of the IBC reflect-send contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cwcontracts.runtime import Bucket, Coin, ParseError, Singleton, Storage, Timestamp

KEY_CONFIG = b"config"
PREFIX_ACCOUNTS = b"accounts"


@dataclass
class Config:
    admin: str

    def to_json(self) -> dict:
        return {"admin": self.admin}

    @classmethod
    def from_json(cls, data: Any) -> "Config":
        try:
            return cls(str(data["admin"]))
        except (KeyError, TypeError) as exc:
            raise ParseError(f"Error parsing into type Config: {exc}") from exc


@dataclass
class AccountData:
    """What we know about the remote account behind a channel."""

    # last block balance was updated (0 is never)
    last_update_time: Timestamp = field(default_factory=Timestamp)
    # unset between binding the channel and the WhoAmI acknowledgement
    remote_addr: str | None = None
    remote_balance: list[Coin] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "last_update_time": self.last_update_time.to_json(),
            "remote_addr": self.remote_addr,
            "remote_balance": [c.to_json() for c in self.remote_balance],
        }

    @classmethod
    def from_json(cls, data: Any) -> "AccountData":
        try:
            return cls(
                Timestamp.from_json(data["last_update_time"]),
                data.get("remote_addr"),
                [Coin.from_json(c) for c in data["remote_balance"]],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ParseError(f"Error parsing into type AccountData: {exc}") from exc


def accounts(storage: Storage) -> Bucket:
    """Lookup of channel id to remote account data."""
    return Bucket(storage, PREFIX_ACCOUNTS, AccountData.from_json,
                  "ibc_reflect_send::state::AccountData")


def config(storage: Storage) -> Singleton:
    return Singleton(storage, KEY_CONFIG, Config.from_json, "ibc_reflect_send::state::Config")