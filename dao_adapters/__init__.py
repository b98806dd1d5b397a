"""
DAO Adapters Package - Pluggable strategies for reading unknown DAO contracts.

Contracts expose no common interface discovery, so adapters probe for
well-known read-only functions and normalize whatever they find.

Features:
- Capability-probing registry with an always-matching fallback
- Ordered candidate lists with a per-probe attempt ledger
- One shared set of value coercion rules
- Graceful degradation: missing functions are never errors

Quick Start:
    from dao_adapters import create_default_registry
    from stacks_api import Network, StacksApiClient

    async def show_dao(address):
        async with StacksApiClient() as api:
            registry = create_default_registry(api)
            adapter = await registry.select_adapter(address, Network.MAINNET)

            treasury = await adapter.get_treasury(address, Network.MAINNET)
            proposals = await adapter.get_proposals(address, Network.MAINNET)

            print(f"{treasury.name}: {treasury.stx_balance} STX")
            for proposal in proposals:
                print(f"  #{proposal.id} {proposal.title} [{proposal.status.value}]")

Adding New Adapters:
    class FamilyAdapter(BaseDaoAdapter):
        @property
        def name(self) -> str:
            return "family"

        def metadata(self): ...
        async def can_handle(self, contract_address, network): ...
        async def get_treasury(self, contract_address, network): ...
        async def get_proposals(self, contract_address, network): ...
        async def get_proposal_details(self, proposal_id, network, contract_address=None): ...

    registry.register(FamilyAdapter(api), priority=10)
"""

from dao_adapters.base import BaseDaoAdapter
from dao_adapters.coercion import (
    extract_dao_name,
    is_numeric,
    micro_to_stx,
    to_number,
    to_status,
    to_text,
)
from dao_adapters.exceptions import (
    DaoAdapterError,
    InvalidAddressFormatError,
    NoAdapterMatchedError,
    TreasuryFetchError,
)
from dao_adapters.models import (
    AdapterMetadata,
    DaoTreasury,
    FungibleTokenBalance,
    KnownDao,
    Proposal,
    ProposalDetails,
    ProposalStatus,
    ProposalVotes,
    ValidationResult,
)
from dao_adapters.probing import (
    ProbeAttempt,
    ProbeCandidate,
    ProbeResult,
    candidates,
    try_candidates,
)
from dao_adapters.providers import GenericDaoAdapter
from dao_adapters.registry import (
    AdapterRegistry,
    create_default_registry,
    get_default_registry,
    reset_default_registry,
)


__version__ = "1.0.0"

__all__ = [
    # Base
    "BaseDaoAdapter",

    # Models
    "AdapterMetadata",
    "DaoTreasury",
    "FungibleTokenBalance",
    "KnownDao",
    "Proposal",
    "ProposalDetails",
    "ProposalStatus",
    "ProposalVotes",
    "ValidationResult",

    # Coercion
    "extract_dao_name",
    "is_numeric",
    "micro_to_stx",
    "to_number",
    "to_status",
    "to_text",

    # Probing
    "ProbeAttempt",
    "ProbeCandidate",
    "ProbeResult",
    "candidates",
    "try_candidates",

    # Exceptions
    "DaoAdapterError",
    "InvalidAddressFormatError",
    "NoAdapterMatchedError",
    "TreasuryFetchError",

    # Providers
    "GenericDaoAdapter",

    # Registry
    "AdapterRegistry",
    "create_default_registry",
    "get_default_registry",
    "reset_default_registry",
]
