"""
Mock Stacks API - In-memory remote read interface.

FEATURES:
- Configurable balances, chain height and read-only functions
- Error injection (unreachable network, missing contracts)
- Full call recording for assertions
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Union

from stacks_api.base import BaseStacksApi
from stacks_api.clarity import ClarityValue, TaggedValue, decode_hex
from stacks_api.exceptions import (
    ContractNotFoundError,
    FunctionNotAvailableError,
    NetworkUnreachableError,
)
from stacks_api.models import AccountBalance, Network


logger = logging.getLogger(__name__)


FunctionResult = Union[ClarityValue, Callable[[list[str]], ClarityValue]]


@dataclass(frozen=True)
class MockCall:
    """A recorded call against the mock interface."""
    kind: str  # read_only, balance, block_height
    network: Network
    target: Optional[str] = None
    function_name: Optional[str] = None
    args: tuple[str, ...] = ()
    sender: Optional[str] = None


@dataclass
class MockContract:
    """Functions exposed by one mock contract."""
    contract_id: str
    functions: dict[str, FunctionResult] = field(default_factory=dict)


def indexed(results: dict[int, ClarityValue]) -> Callable[[list[str]], ClarityValue]:
    """
    Build a function result keyed by its single ``uint`` argument.

    Indices missing from ``results`` return None (absent).
    """
    def _lookup(args: list[str]) -> ClarityValue:
        if len(args) != 1:
            return None
        decoded = decode_hex(args[0])
        if not isinstance(decoded, TaggedValue):
            return None
        return results.get(int(decoded.value))

    return _lookup


class MockStacksApi(BaseStacksApi):
    """
    In-memory Stacks API for tests and offline runs.

    Contracts exist once a balance or a function is configured for them.
    """

    def __init__(self, block_height: int = 1000) -> None:
        self.block_height = block_height
        self.unreachable = False
        self._balances: dict[tuple[Network, str], AccountBalance] = {}
        self._contracts: dict[tuple[Network, str], MockContract] = {}
        self.calls: list[MockCall] = []

    # ─────────────────────────────────────────────────────────────
    # Configuration
    # ─────────────────────────────────────────────────────────────

    def set_balance(
        self,
        address: str,
        micro_stx: Union[int, str],
        fungible_tokens: Optional[dict[str, str]] = None,
        network: Network = Network.MAINNET,
    ) -> None:
        self._balances[(network, address)] = AccountBalance(
            stx_balance=str(micro_stx),
            fungible_tokens=dict(fungible_tokens or {}),
        )

    def set_function(
        self,
        contract_id: str,
        function_name: str,
        result: FunctionResult,
        network: Network = Network.MAINNET,
    ) -> None:
        """
        Expose a read-only function.

        ``result`` is returned as-is, or called with the hex argument list
        when callable. A callable may raise to simulate a rejected call.
        """
        key = (network, contract_id)
        contract = self._contracts.setdefault(key, MockContract(contract_id=contract_id))
        contract.functions[function_name] = result

    def remove_function(
        self,
        contract_id: str,
        function_name: str,
        network: Network = Network.MAINNET,
    ) -> None:
        contract = self._contracts.get((network, contract_id))
        if contract:
            contract.functions.pop(function_name, None)

    def calls_to(self, function_name: str) -> list[MockCall]:
        """Recorded read-only calls to one function."""
        return [c for c in self.calls if c.function_name == function_name]

    def read_only_calls(self) -> list[MockCall]:
        return [c for c in self.calls if c.kind == "read_only"]

    def reset_calls(self) -> None:
        self.calls.clear()

    # ─────────────────────────────────────────────────────────────
    # Read interface
    # ─────────────────────────────────────────────────────────────

    def _check_reachable(self, network: Network) -> None:
        if self.unreachable:
            raise NetworkUnreachableError(
                message="Simulated network outage",
                network=network.value,
            )

    def _contract_exists(self, network: Network, contract_id: str) -> bool:
        return (network, contract_id) in self._contracts or (network, contract_id) in self._balances

    async def call_read_only(
        self,
        principal: str,
        contract_name: str,
        function_name: str,
        args: Sequence[str],
        sender: str,
        network: Network,
    ) -> ClarityValue:
        contract_id = f"{principal}.{contract_name}"
        self.calls.append(MockCall(
            kind="read_only",
            network=network,
            target=contract_id,
            function_name=function_name,
            args=tuple(args),
            sender=sender,
        ))
        self._check_reachable(network)

        if not self._contract_exists(network, contract_id):
            raise ContractNotFoundError(
                message=f"Contract {contract_id} not found",
                network=network.value,
            )

        contract = self._contracts.get((network, contract_id))
        if contract is None or function_name not in contract.functions:
            raise FunctionNotAvailableError(
                message=f"Read-only call {function_name} rejected",
                function_name=function_name,
                contract_id=contract_id,
                cause="UndefinedFunction",
                network=network.value,
            )

        result = contract.functions[function_name]
        if callable(result):
            return result(list(args))
        return result

    async def fetch_account_balance(
        self,
        address: str,
        network: Network,
    ) -> AccountBalance:
        self.calls.append(MockCall(kind="balance", network=network, target=address))
        self._check_reachable(network)

        balance = self._balances.get((network, address))
        if balance is None:
            raise ContractNotFoundError(
                message=f"Account {address} not found",
                network=network.value,
                status_code=404,
            )
        return balance

    async def get_latest_block_height(self, network: Network) -> int:
        self.calls.append(MockCall(kind="block_height", network=network))
        self._check_reachable(network)
        return self.block_height

    def to_dict(self) -> dict[str, Any]:
        """Summary of configured state."""
        return {
            "block_height": self.block_height,
            "balances": len(self._balances),
            "contracts": len(self._contracts),
            "calls": len(self.calls),
        }
