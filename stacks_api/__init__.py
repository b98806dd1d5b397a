"""
Stacks API Package - Read-only access to Stacks contracts and accounts.

Quick Start:
    from stacks_api import Network, StacksApiClient, encode_uint

    async def proposal_count():
        async with StacksApiClient() as api:
            return await api.call_read_only(
                "SP000000000000000000002Q6VF78",
                "my-dao",
                "get-proposal-count",
                [],
                "SP000000000000000000002Q6VF78",
                Network.MAINNET,
            )

Results are decoded Clarity values: ``None`` when absent, ``str`` for
strings, ``TaggedValue`` for typed scalars, ``dict`` for tuples and ``list``
for lists.
"""

from stacks_api.address import (
    ContractAddress,
    StandardPrincipal,
    c32_address,
    c32_address_decode,
    is_valid_address,
    is_valid_contract_name,
    parse_contract_address,
    parse_principal,
)
from stacks_api.base import BaseStacksApi
from stacks_api.clarity import (
    ClarityValue,
    TaggedValue,
    decode_hex,
    encode_bool,
    encode_int,
    encode_principal,
    encode_string_ascii,
    encode_uint,
)
from stacks_api.client import StacksApiClient
from stacks_api.exceptions import (
    ClarityDecodeError,
    ContractNotFoundError,
    FunctionNotAvailableError,
    NetworkUnreachableError,
    RateLimitError,
    StacksApiError,
)
from stacks_api.mock import MockStacksApi, indexed
from stacks_api.models import (
    NETWORKS,
    AccountBalance,
    Network,
    NetworkConfig,
    get_network_config,
)


__version__ = "1.0.0"

__all__ = [
    # Models
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "AccountBalance",
    "get_network_config",

    # Addresses
    "ContractAddress",
    "StandardPrincipal",
    "c32_address",
    "c32_address_decode",
    "is_valid_address",
    "is_valid_contract_name",
    "parse_contract_address",
    "parse_principal",

    # Clarity
    "ClarityValue",
    "TaggedValue",
    "decode_hex",
    "encode_bool",
    "encode_int",
    "encode_principal",
    "encode_string_ascii",
    "encode_uint",

    # Exceptions
    "StacksApiError",
    "ContractNotFoundError",
    "NetworkUnreachableError",
    "FunctionNotAvailableError",
    "RateLimitError",
    "ClarityDecodeError",

    # Clients
    "BaseStacksApi",
    "StacksApiClient",
    "MockStacksApi",
    "indexed",
]
