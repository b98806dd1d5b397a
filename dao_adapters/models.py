"""
DAO Data Models - Normalized treasury and proposal records.

Every fetch builds fresh instances; nothing here is mutated in place.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from stacks_api.models import Network


class ProposalStatus(Enum):
    """Normalized proposal status."""
    ACTIVE = "Active"
    PASSED = "Passed"
    REJECTED = "Rejected"


@dataclass(frozen=True)
class KnownDao:
    """A registered DAO the viewer knows about."""
    name: str
    contract_address: str
    network: Optional[Network] = None
    adapter_type: Optional[str] = None  # e.g. "generic"; None lets the registry choose

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "contract_address": self.contract_address,
            "network": self.network.value if self.network else None,
            "adapter_type": self.adapter_type,
        }


@dataclass(frozen=True)
class FungibleTokenBalance:
    """A non-STX token held by the DAO."""
    asset_id: str
    balance: str
    symbol: Optional[str] = None

    @classmethod
    def from_asset(cls, asset_id: str, balance: str) -> "FungibleTokenBalance":
        """Create from ``<contract>::<token>`` and a raw balance."""
        _, sep, token = asset_id.partition("::")
        return cls(asset_id=asset_id, balance=balance, symbol=token if sep else None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset_id": self.asset_id,
            "balance": self.balance,
            "symbol": self.symbol,
        }


@dataclass(frozen=True)
class DaoTreasury:
    """Treasury snapshot for a DAO contract."""
    name: str
    stx_balance: Decimal  # STX, not micro-STX
    last_updated_block: int
    fungible_tokens: tuple[FungibleTokenBalance, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "stx_balance": str(self.stx_balance),
            "last_updated_block": self.last_updated_block,
            "fungible_tokens": [t.to_dict() for t in self.fungible_tokens],
        }


@dataclass(frozen=True)
class Proposal:
    """A proposal discovered on a DAO contract."""
    id: str
    title: str
    status: ProposalStatus
    dao_contract_address: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "dao_contract_address": self.dao_contract_address,
        }


@dataclass(frozen=True)
class ProposalVotes:
    yes: int = 0
    no: int = 0


@dataclass(frozen=True)
class ProposalDetails(Proposal):
    """Proposal with description, tallies and provenance."""
    description: str = ""
    votes: ProposalVotes = field(default_factory=ProposalVotes)
    creation_block: int = 0
    proposer: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({
            "description": self.description,
            "votes": {"yes": self.votes.yes, "no": self.votes.no},
            "creation_block": self.creation_block,
            "proposer": self.proposer,
        })
        return data


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a DAO contract liveness check."""
    is_valid: bool
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"is_valid": self.is_valid, "error": self.error}


@dataclass(frozen=True)
class AdapterMetadata:
    """Descriptive information about an adapter."""
    name: str
    display_name: str
    version: str
    description: str = ""
    priority: int = 0
    is_fallback: bool = False
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "version": self.version,
            "description": self.description,
            "priority": self.priority,
            "is_fallback": self.is_fallback,
            "tags": list(self.tags),
        }
