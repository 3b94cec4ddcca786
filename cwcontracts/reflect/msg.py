"""Messages, queries and responses of the reflect contract."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

from cwcontracts.runtime import ParseError, SubMsg, cosmos_msg_to_json, from_binary, to_binary


def _b64e(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode()


def _b64d(text: Any) -> bytes:
    try:
        return base64.b64decode(text) if text else b""
    except (ValueError, TypeError) as exc:
        raise ParseError(f"Invalid base64: {exc}") from exc


def _field(data: Any, type_name: str, key: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as exc:
        raise ParseError(f"Error parsing into type {type_name}: missing field `{key}`") from exc


@dataclass
class InstantiateMsg:
    def to_json(self) -> dict:
        return {}


@dataclass
class ReflectMsg:
    msgs: list = field(default_factory=list)

    def to_json(self) -> dict:
        return {"reflect_msg": {"msgs": [cosmos_msg_to_json(m) for m in self.msgs]}}


@dataclass
class ReflectSubMsg:
    msgs: list[SubMsg] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"reflect_sub_msg": {"msgs": [m.to_json() for m in self.msgs]}}


@dataclass
class ChangeOwner:
    owner: str

    def to_json(self) -> dict:
        return {"change_owner": {"owner": self.owner}}


@dataclass
class OwnerQuery:
    def to_json(self) -> dict:
        return {"owner": {}}


@dataclass
class CapitalizedQuery:
    """Calls out to the chain's capitalizing custom query."""

    text: str

    def to_json(self) -> dict:
        return {"capitalized": {"text": self.text}}


@dataclass
class ChainQuery:
    """Queries the chain and returns the result untouched."""

    request: Any

    def to_json(self) -> dict:
        return {"chain": {"request": from_binary(to_binary(self.request))}}


@dataclass
class RawQuery:
    """Reads a raw key of another contract."""

    contract: str
    key: bytes

    def to_json(self) -> dict:
        return {"raw": {"contract": self.contract, "key": _b64e(self.key)}}


@dataclass
class SubMsgResultQuery:
    """Returns the stored reply for a submessage id."""

    id: int

    def to_json(self) -> dict:
        return {"sub_msg_result": {"id": self.id}}


@dataclass
class OwnerResponse:
    owner: str

    def to_json(self) -> dict:
        return {"owner": self.owner}

    @classmethod
    def from_json(cls, data: Any) -> "OwnerResponse":
        return cls(_field(data, "OwnerResponse", "owner"))


@dataclass
class CapitalizedResponse:
    text: str

    def to_json(self) -> dict:
        return {"text": self.text}

    @classmethod
    def from_json(cls, data: Any) -> "CapitalizedResponse":
        return cls(_field(data, "CapitalizedResponse", "text"))


@dataclass
class ChainResponse:
    data: bytes

    def to_json(self) -> dict:
        return {"data": _b64e(self.data)}

    @classmethod
    def from_json(cls, data: Any) -> "ChainResponse":
        return cls(_b64d(_field(data, "ChainResponse", "data")))


@dataclass
class RawResponse:
    """Raw value; empty for a missing key or an empty value alike."""

    data: bytes

    def to_json(self) -> dict:
        return {"data": _b64e(self.data)}

    @classmethod
    def from_json(cls, data: Any) -> "RawResponse":
        return cls(_b64d(_field(data, "RawResponse", "data")))


@dataclass
class CustomDebug:
    """Custom chain message carrying a debug string."""

    text: str

    def to_json(self) -> dict:
        return {"debug": self.text}

    @classmethod
    def from_json(cls, data: Any) -> "CustomDebug":
        return cls(_field(data, "CustomMsg", "debug"))


@dataclass
class CustomRaw:
    """Custom chain message carrying raw bytes."""

    data: bytes

    def to_json(self) -> dict:
        return {"raw": _b64e(self.data)}

    @classmethod
    def from_json(cls, data: Any) -> "CustomRaw":
        return cls(_b64d(_field(data, "CustomMsg", "raw")))


@dataclass
class SpecialPing:
    def to_json(self) -> dict:
        return {"ping": {}}


@dataclass
class SpecialCapitalized:
    text: str

    def to_json(self) -> dict:
        return {"capitalized": {"text": self.text}}


@dataclass
class SpecialResponse:
    """Response data for every special query."""

    msg: str

    def to_json(self) -> dict:
        return {"msg": self.msg}

    @classmethod
    def from_json(cls, data: Any) -> "SpecialResponse":
        return cls(_field(data, "SpecialResponse", "msg"))


def special_query_to_json(query: SpecialPing | SpecialCapitalized) -> dict:
    return query.to_json()


def special_query_from_json(data: Any) -> SpecialPing | SpecialCapitalized:
    """Parse a special query from its JSON form or bytes."""
    if isinstance(data, (bytes, bytearray)):
        data = from_binary(data)
    if not isinstance(data, dict) or len(data) != 1:
        raise ParseError("Error parsing into type SpecialQuery: expected a single variant")
    ((name, body),) = data.items()
    if name == "ping":
        return SpecialPing()
    if name == "capitalized":
        return SpecialCapitalized(_field(body, "SpecialQuery", "text"))
    raise ParseError(
        f"Error parsing into type SpecialQuery: unknown variant `{name}`, "
        "expected one of `ping`, `capitalized`"
    )