"""Stored state of the reflect contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cwcontracts.runtime import Bucket, ParseError, Reply, Singleton, Storage

CONFIG_KEY = b"config"
RESULT_PREFIX = b"result"


@dataclass
class State:
    owner: str

    def to_json(self) -> dict:
        return {"owner": self.owner}

    @classmethod
    def from_json(cls, data: Any) -> "State":
        try:
            return cls(data["owner"])
        except (KeyError, TypeError) as exc:
            raise ParseError(f"Error parsing into type State: {exc}") from exc


def _reply(data: Any) -> Reply:
    try:
        return Reply.from_json(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise ParseError(f"Error parsing into type Reply: {exc}") from exc


def config(storage: Storage) -> Singleton:
    return Singleton(storage, CONFIG_KEY, State.from_json, "reflect::state::State")


def replies(storage: Storage) -> Bucket:
    """Replies of submessages, keyed by the big-endian id."""
    return Bucket(storage, RESULT_PREFIX, _reply, "cosmwasm_std::results::submessages::Reply")