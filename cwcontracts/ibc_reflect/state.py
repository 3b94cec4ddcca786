"""Stored state of the IBC reflect contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cwcontracts.runtime import Bucket, ParseError, Singleton, Storage

KEY_CONFIG = b"config"
KEY_PENDING_CHANNEL = b"pending"
PREFIX_ACCOUNTS = b"accounts"


@dataclass
class Config:
    reflect_code_id: int

    def to_json(self) -> dict:
        return {"reflect_code_id": self.reflect_code_id}

    @classmethod
    def from_json(cls, data: Any) -> "Config":
        try:
            return cls(int(data["reflect_code_id"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"Error parsing into type Config: {exc}") from exc


def _string(data: Any) -> str:
    if not isinstance(data, str):
        raise ParseError("Error parsing into type String: expected a string")
    return data


def config(storage: Storage) -> Singleton:
    return Singleton(storage, KEY_CONFIG, Config.from_json, "ibc_reflect::state::Config")


def accounts(storage: Storage) -> Bucket:
    """Lookup of channel id to reflect contract address."""
    return Bucket(storage, PREFIX_ACCOUNTS, _string, "cosmwasm_std::addresses::Addr")


def pending_channel(storage: Storage) -> Singleton:
    """Channel id handed from channel connect to the reply handler."""
    return Singleton(storage, KEY_PENDING_CHANNEL, _string, "alloc::string::String")