# cwcontracts

Logic for a set of small blockchain contracts. The package also includes an
in-memory runtime, `cwcontracts.runtime`, for running that logic in plain
Python.

## The runtime

`cwcontracts.runtime` provides the following:

- `Storage`: an ordered byte key/value store. `Storage.range(start, end, order)`
  iterates over the half-open range `[start, end)`, ascending or descending.
- `Singleton` and `Bucket`: typed views on storage. Each has
  `load`, `may_load`, `save`, `remove` and `update`. `Bucket` also has `range`.
- Message types. `BankSend`, `StakingDelegate`, `WasmExecute`,
  `WasmInstantiate`, `IbcSendPacket` and `IbcTransfer` are converted to and
  from JSON with `cosmos_msg_to_json` and `cosmos_msg_from_json`.
- `SubMsg`, which has `reply_on_success`, `reply_on_error` and `reply_always`.
  Also `Reply`, `SubMsgResponse`, `Event` and `Attribute`.
- `Response` and `IbcReceiveResponse`, built with chained `add_*` calls.
  Acknowledgements are encoded with `ack_ok` and `ack_error` and decoded with
  `parse_ack`.
- IBC channel and packet types, with mock builders:
  `mock_ibc_channel_open_init`, `mock_ibc_channel_open_try`,
  `mock_ibc_channel_connect_ack`, `mock_ibc_channel_close_init`,
  `mock_ibc_packet_recv` and `mock_ibc_packet_ack`.
- `mock_env`, `mock_info` and `mock_dependencies`. These give you a `Deps`
  holding a `Storage`, a `MockApi` for address validation and a `MockQuerier`
  for bank, wasm and custom queries.
- `to_binary` and `from_binary` for compact JSON.

Every failure is raised as `StdError` or one of its subclasses: `NotFound`,
`ParseError` or `SystemError`.

## Contracts

- `cwcontracts.queue`: a FIFO queue of integers. `queue.msg` holds the
  messages and responses. `queue.contract` handles enqueue and dequeue. It
  answers count, sum, reducer, list and open-iterators queries. Its `migrate`
  resets the queue to 100, 101, 102.
- `cwcontracts.query_queue`: stores the address of a queue contract. It
  forwards raw queries to that address, and count, sum, reducer and list
  queries too.
- `cwcontracts.ibc_reflect`: the receiving side of the IBC reflect protocol.
  - `ibc_channel_connect` creates a reflect account for each channel.
  - `reply` registers that account once it has been created.
  - `ibc_packet_receive` relays dispatch, who-am-i and balances packets.
    Failures come back as error acknowledgements.
  - `ibc_channel_close` takes back the account's funds.
- `cwcontracts.reflect`: the reflect contract's pieces. `reflect.msg` holds
  its messages, queries and responses. `reflect.state` holds its stored state.
  `reflect.testing` provides `mock_dependencies_with_custom_querier`, whose
  querier answers `SpecialPing` and `SpecialCapitalized` queries.
- `cwcontracts.ibc_reflect_send`: the sending side's pieces. `msg` holds its
  execute and query messages and responses. `state` holds its config and its
  per-channel `AccountData`.

## What is not included

- The reflect contract has messages, state and test dependencies, but no entry
  points. There is nothing that executes a reflect message, changes the owner
  or stores replies.
- The IBC reflect-send side has message and state types only. No contract
  entry points are included, and no IBC channel or packet handlers. Channels
  cannot be opened and no packets can be sent with it.
- Storage exists only in memory, for the lifetime of a `Deps` object.

## Installation

```
pip install .
```

## Example

```python
from cwcontracts.runtime import mock_dependencies, mock_env, mock_info, from_binary
from cwcontracts.queue import contract
from cwcontracts.queue.msg import InstantiateMsg, Enqueue, Dequeue, Sum

deps = mock_dependencies([])
info = mock_info("creator", [])
contract.instantiate(deps, mock_env(), info, InstantiateMsg())
contract.execute(deps, mock_env(), info, Enqueue(value=25))
contract.execute(deps, mock_env(), info, Enqueue(value=17))
contract.execute(deps, mock_env(), info, Dequeue())

print(from_binary(contract.query(deps, mock_env(), Sum())))  # {'sum': 17}
```

## Running the tests

```
pip install .[test]
pytest
```