"""
Remote Read Interface - Abstract read-only access to a Stacks node API.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from stacks_api.clarity import ClarityValue
from stacks_api.models import AccountBalance, Network


class BaseStacksApi(ABC):
    """
    Read-only operations the DAO adapters depend on.

    Implementations own any timeout or retry policy. Every failure is
    raised as a ``StacksApiError`` subclass.
    """

    @abstractmethod
    async def call_read_only(
        self,
        principal: str,
        contract_name: str,
        function_name: str,
        args: Sequence[str],
        sender: str,
        network: Network,
    ) -> ClarityValue:
        """
        Call a read-only contract function.

        Args:
            principal: Deployer principal of the contract
            contract_name: Contract name
            function_name: Read-only function to call
            args: Hex-encoded Clarity arguments
            sender: Principal the call is made on behalf of
            network: Network to query

        Returns:
            Decoded Clarity value (None when the result is absent)

        Raises:
            FunctionNotAvailableError: If the call is rejected
            ContractNotFoundError: If the contract does not exist
            NetworkUnreachableError: If the API cannot be reached
        """
        pass

    @abstractmethod
    async def fetch_account_balance(
        self,
        address: str,
        network: Network,
    ) -> AccountBalance:
        """Fetch STX and fungible token balances for a principal or contract."""
        pass

    @abstractmethod
    async def get_latest_block_height(self, network: Network) -> int:
        """Fetch the current chain tip height."""
        pass

    async def close(self) -> None:
        """Release resources."""

    async def __aenter__(self) -> "BaseStacksApi":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
