"""
Base DAO Adapter - Abstract interface for all DAO contract strategies.

All adapters MUST:
- Answer ``can_handle`` without raising (registry treats errors as "no")
- Keep probe failures internal
- Build fresh result objects on every call
- Route value interpretation through ``dao_adapters.coercion``
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from dao_adapters import coercion
from dao_adapters.models import AdapterMetadata, DaoTreasury, Proposal, ProposalDetails
from dao_adapters.probing import ProbeCandidate, ProbeResult, ReadOnlyCall, try_candidates
from stacks_api.address import ContractAddress, parse_contract_address
from stacks_api.base import BaseStacksApi
from stacks_api.clarity import ClarityValue
from stacks_api.models import Network


logger = logging.getLogger(__name__)


class BaseDaoAdapter(ABC):
    """
    Abstract base class for DAO adapters.

    Each adapter must:
    1. Implement ``name`` and ``metadata()``
    2. Implement ``can_handle()`` - capability probe used by the registry
    3. Implement ``get_treasury()``, ``get_proposals()`` and
       ``get_proposal_details()``

    The remote read interface and the optional caller address are passed
    in explicitly; adapters read no global state.
    """

    def __init__(
        self,
        api: BaseStacksApi,
        sender_address: Optional[str] = None,
    ) -> None:
        self._api = api
        self._sender_address = sender_address

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this adapter."""
        pass

    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Return adapter metadata."""
        pass

    @abstractmethod
    async def can_handle(self, contract_address: str, network: Network) -> bool:
        """Check if this adapter understands the given contract."""
        pass

    @abstractmethod
    async def get_treasury(self, contract_address: str, network: Network) -> DaoTreasury:
        """
        Get the DAO's treasury.

        Raises:
            TreasuryFetchError: If the baseline balance cannot be fetched
        """
        pass

    @abstractmethod
    async def get_proposals(self, contract_address: str, network: Network) -> list[Proposal]:
        """Get the DAO's proposals; empty when none are discoverable."""
        pass

    @abstractmethod
    async def get_proposal_details(
        self,
        proposal_id: str,
        network: Network,
        contract_address: Optional[str] = None,
    ) -> Optional[ProposalDetails]:
        """Get one proposal in detail; None when not available."""
        pass

    def get_name(self) -> str:
        """Human-readable adapter name for logging/debugging."""
        return self.metadata().display_name

    @property
    def api(self) -> BaseStacksApi:
        return self._api

    # ─────────────────────────────────────────────────────────────
    # Shared helpers
    # ─────────────────────────────────────────────────────────────

    def parse_address(
        self,
        contract_address: str,
        network: Optional[Network] = None,
    ) -> Optional[ContractAddress]:
        return parse_contract_address(contract_address, network)

    def extract_dao_name(self, contract_address: str) -> str:
        return coercion.extract_dao_name(contract_address)

    def _sender_for(self, contract: ContractAddress) -> str:
        return self._sender_address or contract.principal

    def read_only_call(self, contract: ContractAddress, network: Network) -> ReadOnlyCall:
        """Bind a contract and network into a ``(function_name, args)`` call."""
        sender = self._sender_for(contract)

        async def _call(function_name: str, args: list[str]) -> ClarityValue:
            return await self._api.call_read_only(
                contract.principal,
                contract.contract_name,
                function_name,
                args,
                sender,
                network,
            )

        return _call

    async def probe(
        self,
        contract: ContractAddress,
        network: Network,
        probe_candidates: tuple[ProbeCandidate, ...],
        **kwargs,
    ) -> ProbeResult:
        """Run ``try_candidates`` against one contract."""
        return await try_candidates(
            self.read_only_call(contract, network),
            probe_candidates,
            label=self.name,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"
