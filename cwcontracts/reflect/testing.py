"""Test dependencies whose querier answers the reflect contract's special queries."""

from __future__ import annotations

from cwcontracts.reflect.msg import (
    SpecialCapitalized, SpecialPing, SpecialResponse, special_query_from_json,
)
from cwcontracts.runtime import (
    MOCK_CONTRACT_ADDR, Deps, MockApi, MockQuerier, StdError, Storage, to_binary,
)


def custom_query_execute(query: SpecialPing | SpecialCapitalized) -> bytes:
    """Answer a special query with an encoded SpecialResponse."""
    match query:
        case SpecialPing():
            text = "pong"
        case SpecialCapitalized(text=original):
            text = original.upper()
        case _:
            raise StdError(f"Unsupported special query: {query!r}")
    return to_binary(SpecialResponse(text))


def mock_dependencies_with_custom_querier(contract_balance=()) -> Deps:
    """Mock dependencies whose querier handles special custom queries."""
    querier = MockQuerier(
        {MOCK_CONTRACT_ADDR: list(contract_balance)},
        custom_handler=lambda body: custom_query_execute(special_query_from_json(body)),
    )
    return Deps(Storage(), MockApi(), querier)