"""IBC reflect contract: creates a reflect account per channel and relays packets to it."""

from __future__ import annotations

from typing import Any

from cwcontracts.ibc_reflect.msg import (
    AccountInfo, AccountQuery, AccountResponse, Balances, BalancesResponse, Dispatch,
    InstantiateMsg, ListAccountsQuery, ListAccountsResponse, ReflectExecuteMsg, WhoAmI,
    WhoAmIResponse, parse_packet_msg,
)
from cwcontracts.ibc_reflect.state import Config, accounts, config, pending_channel
from cwcontracts.runtime import (
    BankSend, Deps, Env, Event, IbcChannelCloseMsg, IbcChannelConnectMsg, IbcChannelOpenMsg,
    IbcOrder, IbcPacketAckMsg, IbcPacketReceiveMsg, IbcPacketTimeoutMsg, IbcReceiveResponse,
    MessageInfo, Order, Reply, Response, StdError, SubMsg, SubMsgResponse, WasmExecute,
    WasmInstantiate, ack_error, ack_ok, to_binary,
)

IBC_APP_VERSION = "ibc-reflect-v1"
RECEIVE_DISPATCH_ID = 1234
INIT_CALLBACK_ID = 7890


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: InstantiateMsg) -> Response:
    config(deps.storage).save(Config(msg.reflect_code_id))
    return Response().add_attribute("action", "instantiate")


def reply(deps: Deps, env: Env, reply: Reply) -> Response:
    """Handle dispatch failures and reflect contract creation callbacks."""
    if reply.id == RECEIVE_DISPATCH_ID and isinstance(reply.result, str):
        return Response().set_data(_encode_ibc_error(reply.result))
    if reply.id == INIT_CALLBACK_ID and isinstance(reply.result, SubMsgResponse):
        return handle_init_callback(deps, reply.result)
    raise StdError("invalid reply id or result")


def _parse_contract_from_events(events: list[Event]) -> str | None:
    event = next((e for e in events if e.ty == "instantiate"), None)
    if event is None:
        return None
    attr = next((a for a in event.attributes if a.key == "_contract_address"), None)
    return None if attr is None else attr.value


def handle_init_callback(deps: Deps, response: SubMsgResponse) -> Response:
    """Register the newly created reflect contract for the pending channel."""
    channel_id = pending_channel(deps.storage).load()
    pending_channel(deps.storage).remove()

    found = _parse_contract_from_events(response.events)
    if found is None:
        raise StdError("No _contract_address found in callback events")
    contract_addr = deps.api.addr_validate(found)

    def register(existing: Any) -> str:
        if existing is not None:
            raise StdError("Cannot register over an existing channel")
        return contract_addr

    accounts(deps.storage).update(channel_id.encode(), register)
    return Response().add_attribute("action", "execute_init_callback")


def query(deps: Deps, env: Env, msg) -> bytes:
    match msg:
        case AccountQuery(channel_id=channel_id):
            return to_binary(query_account(deps, channel_id))
        case ListAccountsQuery():
            return to_binary(query_list_accounts(deps))
    raise StdError(f"Unsupported query message: {msg!r}")


def query_account(deps: Deps, channel_id: str) -> AccountResponse:
    return AccountResponse(accounts(deps.storage).load(channel_id.encode()))


def query_list_accounts(deps: Deps) -> ListAccountsResponse:
    items = []
    for key, account in accounts(deps.storage).range(None, None, Order.ASCENDING):
        try:
            channel_id = key.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StdError(f"Cannot decode UTF8 bytes into string: {exc}") from exc
        items.append(AccountInfo(account=account, channel_id=channel_id))
    return ListAccountsResponse(items)


def ibc_channel_open(deps: Deps, env: Env, msg: IbcChannelOpenMsg) -> dict:
    """Enforce channel ordering and the counterparty's version; return our version."""
    if msg.channel.order is not IbcOrder.ORDERED:
        raise StdError("Only supports ordered channels")
    if msg.counterparty_version is not None and msg.counterparty_version != IBC_APP_VERSION:
        raise StdError(f"Counterparty version must be `{IBC_APP_VERSION}`")
    return {"version": IBC_APP_VERSION}


def ibc_channel_connect(deps: Deps, env: Env, msg: IbcChannelConnectMsg) -> Response:
    """Once connected, create a reflect contract for the channel."""
    cfg = config(deps.storage).load()
    chan_id = msg.channel.endpoint.channel_id

    instantiate_msg = WasmInstantiate(
        admin=None,
        code_id=cfg.reflect_code_id,
        msg=b"{}",
        funds=[],
        label=f"ibc-reflect-{chan_id}",
    )
    sub = SubMsg.reply_on_success(instantiate_msg, INIT_CALLBACK_ID)

    pending_channel(deps.storage).save(chan_id)

    return (
        Response()
        .add_submessage(sub)
        .add_attribute("action", "ibc_connect")
        .add_attribute("channel_id", chan_id)
        .add_event(Event("ibc").add_attribute("channel", "connect"))
    )


def ibc_channel_close(deps: Deps, env: Env, msg: IbcChannelCloseMsg) -> Response:
    """Pull all funds out of the channel's reflect contract and forget the channel."""
    channel_id = msg.channel.endpoint.channel_id
    key = channel_id.encode()
    reflect_addr = accounts(deps.storage).load(key)
    accounts(deps.storage).remove(key)

    amount = deps.querier.query_all_balances(reflect_addr)
    messages = []
    if amount:
        bank_msg = BankSend(to_address=env.contract_address, amount=amount)
        reflect_msg = ReflectExecuteMsg([bank_msg])
        messages.append(SubMsg(WasmExecute(reflect_addr, to_binary(reflect_msg), [])))
    steal_funds = "true" if messages else "false"

    return (
        Response()
        .add_submessages(messages)
        .add_attribute("action", "ibc_close")
        .add_attribute("channel_id", channel_id)
        .add_attribute("steal_funds", steal_funds)
    )


def migrate(deps: Deps, env: Env, msg: Any) -> Response:
    return Response()


def _encode_ibc_error(message: str) -> bytes:
    return ack_error(str(message))


def ibc_packet_receive(deps: Deps, env: Env, msg: IbcPacketReceiveMsg) -> IbcReceiveResponse:
    """Relay a packet to the channel's reflect contract; errors become error acks."""
    try:
        packet = msg.packet
        caller = packet.dest.channel_id
        match parse_packet_msg(packet.data):
            case Dispatch(msgs=msgs):
                return _receive_dispatch(deps, caller, msgs)
            case WhoAmI():
                return _receive_who_am_i(deps, caller)
            case Balances():
                return _receive_balances(deps, caller)
    except StdError as exc:
        return (
            IbcReceiveResponse()
            .set_ack(_encode_ibc_error(f"invalid packet: {exc}"))
            .add_event(Event("ibc").add_attribute("packet", "receive"))
        )
    raise StdError("unreachable packet variant")


def _receive_who_am_i(deps: Deps, caller: str) -> IbcReceiveResponse:
    account = accounts(deps.storage).load(caller.encode())
    ack = ack_ok(WhoAmIResponse(account))
    return IbcReceiveResponse().set_ack(ack).add_attribute("action", "receive_who_am_i")


def _receive_balances(deps: Deps, caller: str) -> IbcReceiveResponse:
    account = accounts(deps.storage).load(caller.encode())
    balances = deps.querier.query_all_balances(account)
    ack = ack_ok(BalancesResponse(account, balances))
    return IbcReceiveResponse().set_ack(ack).add_attribute("action", "receive_balances")


def _receive_dispatch(deps: Deps, caller: str, msgs: list) -> IbcReceiveResponse:
    reflect_addr = accounts(deps.storage).load(caller.encode())
    ack = ack_ok(None)
    wasm_msg = WasmExecute(reflect_addr, to_binary(ReflectExecuteMsg(list(msgs))), [])
    sub = SubMsg.reply_on_error(wasm_msg, RECEIVE_DISPATCH_ID)
    return (
        IbcReceiveResponse()
        .set_ack(ack)
        .add_submessage(sub)
        .add_attribute("action", "receive_dispatch")
    )


def ibc_packet_ack(deps: Deps, env: Env, msg: IbcPacketAckMsg) -> Response:
    return Response().add_attribute("action", "ibc_packet_ack")


def ibc_packet_timeout(deps: Deps, env: Env, msg: IbcPacketTimeoutMsg) -> Response:
    return Response().add_attribute("action", "ibc_packet_timeout")