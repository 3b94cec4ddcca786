"""Contract execution environment: storage, messages, responses and mocks."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator

MOCK_CONTRACT_ADDR = "cosmos2contract"


class StdError(Exception):
    """Generic contract error."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class NotFound(StdError):
    """A value of the given kind is missing from storage."""

    def __init__(self, kind: str):
        super().__init__(f"{kind} not found")
        self.kind = kind


class ParseError(StdError):
    """Data could not be parsed into the expected type."""


class SystemError(StdError):  # noqa: A001
    """The querier could not process a request."""


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_json"):
        return value.to_json()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def to_binary(value: Any) -> bytes:
    """Serialise a value to compact JSON bytes."""
    return json.dumps(_jsonable(value), separators=(",", ":")).encode()


def from_binary(data: bytes) -> Any:
    """Decode JSON bytes, raising ParseError on malformed input."""
    try:
        return json.loads(bytes(data).decode())
    except (ValueError, UnicodeDecodeError) as exc:
        raise ParseError(f"Error parsing JSON: {exc}") from exc


def _b64(data: str | None) -> bytes:
    return base64.b64decode(data) if data else b""


@dataclass(frozen=True)
class Coin:
    amount: int
    denom: str

    def to_json(self) -> dict:
        return {"denom": self.denom, "amount": str(self.amount)}

    @classmethod
    def from_json(cls, data: dict) -> "Coin":
        return cls(int(data["amount"]), data["denom"])


def coin(amount: int, denom: str) -> Coin:
    return Coin(amount, denom)


def coins(amount: int, denom: str) -> list[Coin]:
    return [Coin(amount, denom)]


@dataclass(frozen=True, order=True)
class Timestamp:
    nanos: int = 0

    @property
    def seconds(self) -> int:
        return self.nanos // 1_000_000_000

    def plus_seconds(self, seconds: int) -> "Timestamp":
        return Timestamp(self.nanos + seconds * 1_000_000_000)

    def to_json(self) -> str:
        return str(self.nanos)

    @classmethod
    def from_json(cls, data: str) -> "Timestamp":
        return cls(int(data))


class Order(Enum):
    ASCENDING = 1
    DESCENDING = 2


class Storage:
    """Ordered in-memory key/value store of bytes."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def remove(self, key: bytes) -> None:
        self._data.pop(bytes(key), None)

    def range(
        self,
        start: bytes | None = None,
        end: bytes | None = None,
        order: Order = Order.ASCENDING,
    ) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over keys in [start, end), snapshotted at call time."""
        keys = sorted(
            k
            for k in self._data
            if (start is None or k >= start) and (end is None or k < end)
        )
        if order is Order.DESCENDING:
            keys.reverse()
        items = [(k, self._data[k]) for k in keys]
        return iter(items)


def _identity(value: Any) -> Any:
    return value


class Singleton:
    """A single typed value stored under one key."""

    def __init__(self, storage: Storage, key: bytes, decode: Callable = _identity, kind: str = "value"):
        self.storage = storage
        self.key = len(key).to_bytes(2, "big") + key
        self.decode = decode
        self.kind = kind

    def may_load(self) -> Any:
        raw = self.storage.get(self.key)
        return None if raw is None else self.decode(from_binary(raw))

    def load(self) -> Any:
        value = self.may_load()
        if value is None:
            raise NotFound(self.kind)
        return value

    def save(self, value: Any) -> None:
        self.storage.set(self.key, to_binary(value))

    def remove(self) -> None:
        self.storage.remove(self.key)

    def update(self, action: Callable[[Any], Any]) -> Any:
        value = action(self.load())
        self.save(value)
        return value


class Bucket:
    """Typed values keyed under a namespace prefix."""

    def __init__(self, storage: Storage, namespace: bytes, decode: Callable = _identity, kind: str = "value"):
        self.storage = storage
        self.prefix = len(namespace).to_bytes(2, "big") + namespace
        self.decode = decode
        self.kind = kind

    def may_load(self, key: bytes) -> Any:
        raw = self.storage.get(self.prefix + bytes(key))
        return None if raw is None else self.decode(from_binary(raw))

    def load(self, key: bytes) -> Any:
        value = self.may_load(key)
        if value is None:
            raise NotFound(self.kind)
        return value

    def save(self, key: bytes, value: Any) -> None:
        self.storage.set(self.prefix + bytes(key), to_binary(value))

    def remove(self, key: bytes) -> None:
        self.storage.remove(self.prefix + bytes(key))

    def update(self, key: bytes, action: Callable[[Any], Any]) -> Any:
        value = action(self.may_load(key))
        self.save(key, value)
        return value

    def range(
        self,
        start: bytes | None = None,
        end: bytes | None = None,
        order: Order = Order.ASCENDING,
    ) -> Iterator[tuple[bytes, Any]]:
        lo = self.prefix + (start or b"")
        hi = self.prefix + end if end is not None else self.prefix[:-1] + bytes([self.prefix[-1] + 1]) if self.prefix[-1] < 255 else None
        n = len(self.prefix)
        for k, v in self.storage.range(lo, hi, order):
            if k.startswith(self.prefix):
                yield k[n:], self.decode(from_binary(v))


@dataclass
class Attribute:
    key: str
    value: str

    def to_json(self) -> dict:
        return {"key": self.key, "value": self.value}


@dataclass
class Event:
    ty: str
    attributes: list[Attribute] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any) -> "Event":
        self.attributes.append(Attribute(key, str(value)))
        return self

    def to_json(self) -> dict:
        return {"type": self.ty, "attributes": [a.to_json() for a in self.attributes]}

    @classmethod
    def from_json(cls, data: dict) -> "Event":
        return cls(data["type"], [Attribute(a["key"], a["value"]) for a in data["attributes"]])


@dataclass
class BankSend:
    to_address: str
    amount: list[Coin]

    def to_json(self) -> dict:
        return {"bank": {"send": {"to_address": self.to_address, "amount": _jsonable(self.amount)}}}


@dataclass
class StakingDelegate:
    validator: str
    amount: Coin

    def to_json(self) -> dict:
        return {"staking": {"delegate": {"validator": self.validator, "amount": self.amount.to_json()}}}


@dataclass
class WasmExecute:
    contract_addr: str
    msg: bytes
    funds: list[Coin] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"wasm": {"execute": {"contract_addr": self.contract_addr, "msg": _jsonable(self.msg), "funds": _jsonable(self.funds)}}}


@dataclass
class WasmInstantiate:
    admin: str | None
    code_id: int
    msg: bytes
    funds: list[Coin]
    label: str

    def to_json(self) -> dict:
        return {"wasm": {"instantiate": {
            "admin": self.admin, "code_id": self.code_id, "msg": _jsonable(self.msg),
            "funds": _jsonable(self.funds), "label": self.label,
        }}}


@dataclass
class IbcTimeout:
    block: dict | None = None
    timestamp: Timestamp | None = None

    def to_json(self) -> dict:
        return {"block": self.block, "timestamp": None if self.timestamp is None else self.timestamp.to_json()}

    @classmethod
    def from_json(cls, data: dict) -> "IbcTimeout":
        ts = data.get("timestamp")
        return cls(data.get("block"), None if ts is None else Timestamp.from_json(ts))


@dataclass
class IbcSendPacket:
    channel_id: str
    data: bytes
    timeout: IbcTimeout

    def to_json(self) -> dict:
        return {"ibc": {"send_packet": {"channel_id": self.channel_id, "data": _jsonable(self.data), "timeout": self.timeout.to_json()}}}


@dataclass
class IbcTransfer:
    channel_id: str
    to_address: str
    amount: Coin
    timeout: IbcTimeout

    def to_json(self) -> dict:
        return {"ibc": {"transfer": {
            "channel_id": self.channel_id, "to_address": self.to_address,
            "amount": self.amount.to_json(), "timeout": self.timeout.to_json(),
        }}}


_KNOWN_MSGS = (BankSend, StakingDelegate, WasmExecute, WasmInstantiate, IbcSendPacket, IbcTransfer)


def cosmos_msg_to_json(msg: Any) -> dict:
    """JSON form of a message; unknown kinds are wrapped as custom."""
    if isinstance(msg, _KNOWN_MSGS):
        return msg.to_json()
    return {"custom": _jsonable(msg)}


def cosmos_msg_from_json(data: Any) -> Any:
    """Build a message from its JSON form; custom payloads are returned as decoded JSON."""
    if isinstance(data, (bytes, bytearray)):
        data = from_binary(data)
    try:
        ((kind, body),) = data.items()
        if kind == "custom":
            return body
        ((variant, v),) = body.items()
        match kind, variant:
            case "bank", "send":
                return BankSend(v["to_address"], [Coin.from_json(c) for c in v["amount"]])
            case "staking", "delegate":
                return StakingDelegate(v["validator"], Coin.from_json(v["amount"]))
            case "wasm", "execute":
                return WasmExecute(v["contract_addr"], _b64(v["msg"]), [Coin.from_json(c) for c in v["funds"]])
            case "wasm", "instantiate":
                return WasmInstantiate(v["admin"], v["code_id"], _b64(v["msg"]),
                                       [Coin.from_json(c) for c in v["funds"]], v["label"])
            case "ibc", "send_packet":
                return IbcSendPacket(v["channel_id"], _b64(v["data"]), IbcTimeout.from_json(v["timeout"]))
            case "ibc", "transfer":
                return IbcTransfer(v["channel_id"], v["to_address"], Coin.from_json(v["amount"]),
                                   IbcTimeout.from_json(v["timeout"]))
    except (AttributeError, ValueError, KeyError, TypeError) as exc:
        raise ParseError(f"Error parsing into type CosmosMsg: {exc}") from exc
    raise ParseError(f"Error parsing into type CosmosMsg: unknown variant `{kind}`")


class ReplyOn(Enum):
    ALWAYS = "always"
    ERROR = "error"
    SUCCESS = "success"
    NEVER = "never"


@dataclass
class SubMsg:
    msg: Any
    id: int = 0
    reply_on: ReplyOn = ReplyOn.NEVER
    gas_limit: int | None = None

    @classmethod
    def reply_on_success(cls, msg: Any, id: int) -> "SubMsg":
        return cls(msg, id, ReplyOn.SUCCESS)

    @classmethod
    def reply_on_error(cls, msg: Any, id: int) -> "SubMsg":
        return cls(msg, id, ReplyOn.ERROR)

    @classmethod
    def reply_always(cls, msg: Any, id: int) -> "SubMsg":
        return cls(msg, id, ReplyOn.ALWAYS)

    def to_json(self) -> dict:
        return {"id": self.id, "msg": cosmos_msg_to_json(self.msg),
                "gas_limit": self.gas_limit, "reply_on": self.reply_on.value}


@dataclass
class SubMsgResponse:
    events: list[Event] = field(default_factory=list)
    data: bytes | None = None

    def to_json(self) -> dict:
        return {"events": [e.to_json() for e in self.events],
                "data": None if self.data is None else _jsonable(self.data)}

    @classmethod
    def from_json(cls, data: dict) -> "SubMsgResponse":
        raw = data.get("data")
        return cls([Event.from_json(e) for e in data.get("events", [])],
                   None if raw is None else _b64(raw))


@dataclass
class Reply:
    """Result of a submessage: a SubMsgResponse on success, an error string otherwise."""

    id: int
    result: SubMsgResponse | str

    def to_json(self) -> dict:
        if isinstance(self.result, SubMsgResponse):
            return {"id": self.id, "result": {"ok": self.result.to_json()}}
        return {"id": self.id, "result": {"error": self.result}}

    @classmethod
    def from_json(cls, data: dict) -> "Reply":
        res = data["result"]
        if "ok" in res:
            return cls(data["id"], SubMsgResponse.from_json(res["ok"]))
        return cls(data["id"], res["error"])


@dataclass
class Response:
    messages: list[SubMsg] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    data: bytes | None = None

    def add_attribute(self, key: str, value: Any) -> "Response":
        self.attributes.append(Attribute(key, str(value)))
        return self

    def add_message(self, msg: Any) -> "Response":
        self.messages.append(SubMsg(msg))
        return self

    def add_messages(self, msgs) -> "Response":
        for msg in msgs:
            self.add_message(msg)
        return self

    def add_submessage(self, msg: SubMsg) -> "Response":
        self.messages.append(msg)
        return self

    def add_submessages(self, msgs) -> "Response":
        self.messages.extend(msgs)
        return self

    def add_event(self, event: Event) -> "Response":
        self.events.append(event)
        return self

    def set_data(self, data: bytes) -> "Response":
        self.data = bytes(data)
        return self


@dataclass
class IbcReceiveResponse(Response):
    acknowledgement: bytes = b""

    def set_ack(self, ack: bytes) -> "IbcReceiveResponse":
        self.acknowledgement = bytes(ack)
        return self


def ack_ok(value: Any) -> bytes:
    return to_binary({"ok": value})


def ack_error(message: str) -> bytes:
    return to_binary({"error": message})


def parse_ack(data: bytes) -> dict:
    """Decode an acknowledgement into a dict holding exactly one of "ok" or "error"."""
    value = from_binary(data)
    if not isinstance(value, dict) or len(value) != 1 or not ({"ok", "error"} & value.keys()):
        raise ParseError("Error parsing into type ContractResult: expected `ok` or `error`")
    return value


class IbcOrder(Enum):
    UNORDERED = "ORDER_UNORDERED"
    ORDERED = "ORDER_ORDERED"


@dataclass
class IbcEndpoint:
    port_id: str
    channel_id: str


@dataclass
class IbcChannel:
    endpoint: IbcEndpoint
    counterparty_endpoint: IbcEndpoint
    order: IbcOrder
    version: str
    connection_id: str


@dataclass
class IbcPacket:
    data: bytes
    src: IbcEndpoint
    dest: IbcEndpoint
    sequence: int
    timeout: IbcTimeout


@dataclass
class IbcChannelOpenMsg:
    channel: IbcChannel
    counterparty_version: str | None = None


@dataclass
class IbcChannelConnectMsg:
    channel: IbcChannel
    counterparty_version: str | None = None


@dataclass
class IbcChannelCloseMsg:
    channel: IbcChannel


@dataclass
class IbcPacketReceiveMsg:
    packet: IbcPacket


@dataclass
class IbcPacketAckMsg:
    acknowledgement: bytes
    original_packet: IbcPacket


@dataclass
class IbcPacketTimeoutMsg:
    packet: IbcPacket


def _mock_channel(channel_id: str, order: IbcOrder, version: str) -> IbcChannel:
    return IbcChannel(
        IbcEndpoint("my_port", channel_id),
        IbcEndpoint("their_port", "channel-7"),
        order,
        version,
        "connection-2",
    )


def mock_ibc_channel_open_init(channel_id: str, order: IbcOrder, version: str) -> IbcChannelOpenMsg:
    return IbcChannelOpenMsg(_mock_channel(channel_id, order, version))


def mock_ibc_channel_open_try(channel_id: str, order: IbcOrder, version: str) -> IbcChannelOpenMsg:
    return IbcChannelOpenMsg(_mock_channel(channel_id, order, version), version)


def mock_ibc_channel_connect_ack(channel_id: str, order: IbcOrder, version: str) -> IbcChannelConnectMsg:
    return IbcChannelConnectMsg(_mock_channel(channel_id, order, version), version)


def mock_ibc_channel_close_init(channel_id: str, order: IbcOrder, version: str) -> IbcChannelCloseMsg:
    return IbcChannelCloseMsg(_mock_channel(channel_id, order, version))


def _mock_timeout() -> IbcTimeout:
    return IbcTimeout(block={"revision": 1, "height": 12345678})


def mock_ibc_packet_recv(channel_id: str, data: Any) -> IbcPacketReceiveMsg:
    return IbcPacketReceiveMsg(IbcPacket(
        to_binary(data),
        IbcEndpoint("their-port", "channel-1234"),
        IbcEndpoint("our-port", channel_id),
        27,
        _mock_timeout(),
    ))


def mock_ibc_packet_ack(channel_id: str, data: Any, ack: bytes) -> IbcPacketAckMsg:
    return IbcPacketAckMsg(bytes(ack), IbcPacket(
        to_binary(data),
        IbcEndpoint("their-port", channel_id),
        IbcEndpoint("our-port", "channel-1234"),
        29,
        _mock_timeout(),
    ))


@dataclass
class BlockInfo:
    height: int
    time: Timestamp
    chain_id: str


@dataclass
class Env:
    block: BlockInfo
    contract_address: str


@dataclass
class MessageInfo:
    sender: str
    funds: list[Coin] = field(default_factory=list)


def mock_env() -> Env:
    return Env(
        BlockInfo(12_345, Timestamp(1_571_797_419_879_305_533), "cosmos-testnet-14002"),
        MOCK_CONTRACT_ADDR,
    )


def mock_info(sender: str, funds=()) -> MessageInfo:
    return MessageInfo(sender, list(funds))


class MockApi:
    """Address validation with the length rules of the mock chain."""

    MIN_LENGTH = 3
    MAX_LENGTH = 54

    def addr_validate(self, human: str) -> str:
        if len(human) < self.MIN_LENGTH:
            raise StdError("Invalid input: human address too short")
        if len(human) > self.MAX_LENGTH:
            raise StdError("Invalid input: human address too long")
        if human.lower() != human:
            raise StdError("Invalid input: address not normalized")
        return human


class MockQuerier:
    """Answers bank, wasm and custom queries from in-memory state."""

    def __init__(self, balances: dict[str, list[Coin]] | None = None,
                 custom_handler: Callable[[Any], bytes] | None = None):
        self.balances = {k: list(v) for k, v in (balances or {}).items()}
        self.wasm_handler: Callable[[dict], Any] | None = None
        self.custom_handler = custom_handler

    def update_balance(self, address: str, balance) -> None:
        self.balances[address] = list(balance)

    def update_wasm(self, handler: Callable[[dict], Any]) -> None:
        """Handler gets {"smart": {...}} or {"raw": {...}} and returns bytes (or None for raw)."""
        self.wasm_handler = handler

    def query_all_balances(self, address: str) -> list[Coin]:
        return list(self.balances.get(address, []))

    def _wasm(self, request: dict) -> Any:
        if self.wasm_handler is None:
            raise SystemError("No such contract")
        return self.wasm_handler(request)

    def query_wasm_raw(self, contract: str, key: bytes) -> bytes | None:
        return self._wasm({"raw": {"contract_addr": contract, "key": bytes(key)}})

    def query_wasm_smart(self, contract: str, msg: Any) -> Any:
        return from_binary(self._wasm({"smart": {"contract_addr": contract, "msg": to_binary(msg)}}))

    def raw_query(self, request: bytes) -> bytes:
        req = from_binary(request)
        if not isinstance(req, dict) or len(req) != 1:
            raise SystemError("Error parsing into type QueryRequest")
        ((kind, body),) = req.items()
        if kind == "bank":
            if "all_balances" in body:
                return to_binary({"amount": self.query_all_balances(body["all_balances"]["address"])})
            if "balance" in body:
                b = body["balance"]
                found = next((c for c in self.balances.get(b["address"], []) if c.denom == b["denom"]),
                             Coin(0, b["denom"]))
                return to_binary({"amount": found})
        elif kind == "wasm":
            if "smart" in body:
                s = body["smart"]
                return self._wasm({"smart": {"contract_addr": s["contract_addr"], "msg": _b64(s["msg"])}})
            if "raw" in body:
                r = body["raw"]
                return to_binary(self.query_wasm_raw(r["contract_addr"], _b64(r["key"])) or b"")
        elif kind == "custom":
            if self.custom_handler is None:
                raise SystemError("Unsupported query type: custom")
            return self.custom_handler(body)
        raise SystemError(f"Unsupported query type: {kind}")

    def query(self, request: Any) -> Any:
        return from_binary(self.raw_query(to_binary(request)))


@dataclass
class Deps:
    storage: Storage
    api: MockApi
    querier: MockQuerier


def mock_dependencies(contract_balance=()) -> Deps:
    return Deps(Storage(), MockApi(), MockQuerier({MOCK_CONTRACT_ADDR: list(contract_balance)}))