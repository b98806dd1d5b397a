"""
Generic DAO Adapter - Works with any DAO contract by probing common function names.

Treasury:
- Account balance is the baseline (always available for a deployed contract)
- ``get-balance``, ``get-treasury``, ``get-stx-balance``,
  ``get-treasury-balance`` may override it with a positive value

Proposals:
- A count from ``get-proposal-count``, ``get-proposals-count`` or
  ``proposal-count``, capped at 50
- Each index read through ``get-proposal``, ``get-proposal-by-id`` or
  ``proposal``; indices without data are skipped
"""

import asyncio
import logging
import re
from typing import Any, Optional

from dao_adapters import coercion
from dao_adapters.base import BaseDaoAdapter
from dao_adapters.exceptions import TreasuryFetchError
from dao_adapters.models import (
    AdapterMetadata,
    DaoTreasury,
    FungibleTokenBalance,
    Proposal,
    ProposalDetails,
    ProposalStatus,
    ProposalVotes,
)
from dao_adapters.probing import candidates, uint_arg
from stacks_api.address import ContractAddress
from stacks_api.base import BaseStacksApi
from stacks_api.clarity import UINT128_MAX, ClarityValue
from stacks_api.exceptions import StacksApiError
from stacks_api.models import Network


logger = logging.getLogger(__name__)


TREASURY_FUNCTIONS = candidates(
    "get-balance",
    "get-treasury",
    "get-stx-balance",
    "get-treasury-balance",
)

PROPOSAL_COUNT_FUNCTIONS = candidates(
    "get-proposal-count",
    "get-proposals-count",
    "proposal-count",
)

PROPOSAL_GETTER_FUNCTIONS = candidates(
    "get-proposal",
    "get-proposal-by-id",
    "proposal",
    build_args=uint_arg,
)

PROPOSAL_DETAIL_FUNCTIONS = candidates(
    "get-proposal-details",
    "get-proposal",
    "get-proposal-by-id",
    "proposal",
    build_args=uint_arg,
)

# Upper bound on indices read per listing
MAX_PROPOSALS = 50

_PROPOSAL_ID_RE = re.compile(r"[0-9]+")

TITLE_FIELDS = ("title", "name", "description")
STATUS_FIELDS = ("status", "state")
DESCRIPTION_FIELDS = ("description", "details", "body")
YES_VOTE_FIELDS = ("yes-votes", "votes-for", "for")
NO_VOTE_FIELDS = ("no-votes", "votes-against", "against")
CREATION_BLOCK_FIELDS = ("created-at", "start-block-height", "creation-block", "start-block")
PROPOSER_FIELDS = ("proposer", "creator", "submitter")


def _positive_number(value: ClarityValue) -> bool:
    return coercion.to_number(value) > 0


class GenericDaoAdapter(BaseDaoAdapter):
    """
    Fallback adapter that attempts to work with any DAO structure.

    Always answers ``can_handle`` with True, so it must be registered last.
    """

    def __init__(
        self,
        api: BaseStacksApi,
        sender_address: Optional[str] = None,
        proposal_concurrency: int = 1,
    ) -> None:
        super().__init__(api, sender_address)
        self._proposal_concurrency = max(1, proposal_concurrency)

    @property
    def name(self) -> str:
        return "generic"

    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name=self.name,
            display_name="Generic DAO Adapter",
            version="1.0.0",
            description="Probes common read-only function names on any contract",
            priority=1000,
            is_fallback=True,
            tags=("fallback", "probing"),
        )

    async def can_handle(self, contract_address: str, network: Network) -> bool:
        return True

    # ─────────────────────────────────────────────────────────────
    # Treasury
    # ─────────────────────────────────────────────────────────────

    async def get_treasury(self, contract_address: str, network: Network) -> DaoTreasury:
        try:
            balance = await self._api.fetch_account_balance(contract_address, network)
            last_updated_block = await self._api.get_latest_block_height(network)
        except StacksApiError as e:
            logger.error(f"[{self.name}] Failed to fetch treasury for {contract_address}: {e}")
            raise TreasuryFetchError(
                message=f"Unable to fetch treasury data for {contract_address}: {e.message}",
                adapter_name=self.name,
                contract_address=contract_address,
                network=network.value,
                original_error=e,
            )

        name = self.extract_dao_name(contract_address)
        stx_balance = coercion.micro_to_stx(balance.stx_balance)
        fungible_tokens = tuple(
            FungibleTokenBalance.from_asset(asset_id, amount)
            for asset_id, amount in sorted(balance.fungible_tokens.items())
        )

        contract = self.parse_address(contract_address, network)
        if contract is not None:
            result = await self.probe(
                contract,
                network,
                TREASURY_FUNCTIONS,
                accept=_positive_number,
            )
            if result.found:
                logger.info(
                    f"[{self.name}] Found treasury via {result.candidate.function_name} "
                    f"for {contract_address}"
                )
                stx_balance = coercion.micro_to_stx(coercion.to_number(result.value))

        return DaoTreasury(
            name=name,
            stx_balance=stx_balance,
            last_updated_block=last_updated_block,
            fungible_tokens=fungible_tokens,
        )

    # ─────────────────────────────────────────────────────────────
    # Proposals
    # ─────────────────────────────────────────────────────────────

    async def get_proposals(self, contract_address: str, network: Network) -> list[Proposal]:
        contract = self.parse_address(contract_address, network)
        if contract is None:
            logger.warning(f"[{self.name}] Invalid contract address format for proposals: {contract_address}")
            return []

        count_result = await self.probe(
            contract,
            network,
            PROPOSAL_COUNT_FUNCTIONS,
            accept=coercion.is_numeric,
        )
        if not count_result.found:
            logger.info(f"[{self.name}] No proposal count function on {contract_address}")
            return []

        declared = coercion.to_number(count_result.value)
        limit = max(0, min(declared, MAX_PROPOSALS))
        logger.info(
            f"[{self.name}] Found {declared} proposals via "
            f"{count_result.candidate.function_name}, reading {limit}"
        )

        if self._proposal_concurrency == 1:
            fetched = [
                await self._fetch_proposal(contract, network, index)
                for index in range(limit)
            ]
        else:
            fetched = []
            for start in range(0, limit, self._proposal_concurrency):
                batch = range(start, min(start + self._proposal_concurrency, limit))
                fetched.extend(await asyncio.gather(*(
                    self._fetch_proposal(contract, network, index) for index in batch
                )))

        return [proposal for proposal in fetched if proposal is not None]

    async def _fetch_proposal(
        self,
        contract: ContractAddress,
        network: Network,
        index: int,
    ) -> Optional[Proposal]:
        result = await self.probe(contract, network, PROPOSAL_GETTER_FUNCTIONS, context=(index,))
        if not result.found:
            logger.debug(f"[{self.name}] No data for proposal {index} (tried {result.tried})")
            return None
        return self.parse_proposal(index, result.value, contract.contract_id)

    def parse_proposal(self, index: int, data: ClarityValue, dao_contract_address: str) -> Proposal:
        """
        Build a Proposal from a getter response.

        Any response counts as a real proposal: non-record values yield a
        default title and Active status.
        """
        title = f"Proposal {index}"
        status = ProposalStatus.ACTIVE

        if isinstance(data, dict):
            title = coercion.first_text(data, *TITLE_FIELDS) or title
            status = coercion.to_status(coercion.first_field(data, *STATUS_FIELDS))

        return Proposal(
            id=str(index),
            title=title,
            status=status,
            dao_contract_address=dao_contract_address,
        )

    # ─────────────────────────────────────────────────────────────
    # Proposal details
    # ─────────────────────────────────────────────────────────────

    async def get_proposal_details(
        self,
        proposal_id: str,
        network: Network,
        contract_address: Optional[str] = None,
    ) -> Optional[ProposalDetails]:
        if contract_address is None:
            logger.warning(f"[{self.name}] Cannot fetch proposal details without DAO context")
            return None

        contract = self.parse_address(contract_address, network)
        if contract is None:
            logger.warning(f"[{self.name}] Invalid contract address format for details: {contract_address}")
            return None

        proposal_id = str(proposal_id).strip()
        if not _PROPOSAL_ID_RE.fullmatch(proposal_id):
            logger.warning(f"[{self.name}] Proposal id {proposal_id!r} is not a numeric index")
            return None
        index = int(proposal_id)
        if index > UINT128_MAX:
            logger.warning(f"[{self.name}] Proposal id {proposal_id} exceeds uint128")
            return None

        result = await self.probe(contract, network, PROPOSAL_DETAIL_FUNCTIONS, context=(index,))
        if not result.found:
            logger.info(f"[{self.name}] Proposal {index} not found on {contract_address}")
            return None

        return self.parse_proposal_details(index, result.value, contract.contract_id)

    def parse_proposal_details(
        self,
        index: int,
        data: ClarityValue,
        dao_contract_address: str,
    ) -> ProposalDetails:
        proposal = self.parse_proposal(index, data, dao_contract_address)
        record: dict[str, Any] = data if isinstance(data, dict) else {}

        return ProposalDetails(
            id=proposal.id,
            title=proposal.title,
            status=proposal.status,
            dao_contract_address=proposal.dao_contract_address,
            description=coercion.first_text(record, *DESCRIPTION_FIELDS),
            votes=ProposalVotes(
                yes=max(0, coercion.to_number(coercion.first_field(record, *YES_VOTE_FIELDS))),
                no=max(0, coercion.to_number(coercion.first_field(record, *NO_VOTE_FIELDS))),
            ),
            creation_block=max(0, coercion.to_number(coercion.first_field(record, *CREATION_BLOCK_FIELDS))),
            proposer=coercion.first_text(record, *PROPOSER_FIELDS),
        )
