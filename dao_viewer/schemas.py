"""
Pydantic schemas for DAO Viewer API requests and responses.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from dao_adapters.models import (
    DaoTreasury,
    KnownDao,
    Proposal,
    ProposalDetails,
    ValidationResult,
)
from stacks_api.models import Network

# =======================
# COMMON
# =======================

class BaseResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
    default_network: str
    adapters: List[str]

# =======================
# 1. KNOWN DAOS
# =======================

class KnownDaoSchema(BaseModel):
    name: str
    contract_address: str
    network: Optional[Network] = None
    adapter_type: Optional[str] = None

    @classmethod
    def from_model(cls, dao: KnownDao) -> "KnownDaoSchema":
        return cls(
            name=dao.name,
            contract_address=dao.contract_address,
            network=dao.network,
            adapter_type=dao.adapter_type,
        )

class KnownDaoListResponse(BaseResponse):
    data: List[KnownDaoSchema]

class RegisterDaoRequest(BaseModel):
    name: str = Field(min_length=3, description="A user-friendly name for the DAO")
    contract_address: str = Field(description="Full Stacks address of the deployed DAO contract")
    network: Optional[Network] = None
    adapter_type: Optional[str] = None
    validate_contract: bool = Field(
        default=False,
        description="Fetch the treasury first and reject unreachable contracts",
    )

class KnownDaoResponse(BaseResponse):
    data: KnownDaoSchema

# =======================
# 2. TREASURY
# =======================

class FungibleTokenSchema(BaseModel):
    asset_id: str
    balance: str
    symbol: Optional[str] = None

class TreasurySchema(BaseModel):
    name: str
    stx_balance: Decimal
    last_updated_block: int
    fungible_tokens: List[FungibleTokenSchema] = []

    @classmethod
    def from_model(cls, treasury: DaoTreasury) -> "TreasurySchema":
        return cls(
            name=treasury.name,
            stx_balance=treasury.stx_balance,
            last_updated_block=treasury.last_updated_block,
            fungible_tokens=[
                FungibleTokenSchema(asset_id=t.asset_id, balance=t.balance, symbol=t.symbol)
                for t in treasury.fungible_tokens
            ],
        )

class TreasuryResponse(BaseResponse):
    data: TreasurySchema

# =======================
# 3. PROPOSALS
# =======================

class ProposalSchema(BaseModel):
    id: str
    title: str
    status: str
    dao_contract_address: str

    @classmethod
    def from_model(cls, proposal: Proposal) -> "ProposalSchema":
        return cls(
            id=proposal.id,
            title=proposal.title,
            status=proposal.status.value,
            dao_contract_address=proposal.dao_contract_address,
        )

class ProposalListResponse(BaseResponse):
    data: List[ProposalSchema]

class VotesSchema(BaseModel):
    yes: int = 0
    no: int = 0

class ProposalDetailsSchema(ProposalSchema):
    description: str = ""
    votes: VotesSchema = VotesSchema()
    creation_block: int = 0
    proposer: str = ""

    @classmethod
    def from_model(cls, details: ProposalDetails) -> "ProposalDetailsSchema":
        return cls(
            id=details.id,
            title=details.title,
            status=details.status.value,
            dao_contract_address=details.dao_contract_address,
            description=details.description,
            votes=VotesSchema(yes=details.votes.yes, no=details.votes.no),
            creation_block=details.creation_block,
            proposer=details.proposer,
        )

class ProposalDetailsResponse(BaseResponse):
    data: ProposalDetailsSchema

# =======================
# 4. VALIDATION
# =======================

class ValidationSchema(BaseModel):
    is_valid: bool
    error: Optional[str] = None

    @classmethod
    def from_model(cls, result: ValidationResult) -> "ValidationSchema":
        return cls(is_valid=result.is_valid, error=result.error)

class ValidationResponse(BaseResponse):
    data: ValidationSchema
