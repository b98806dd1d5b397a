"""
DAO Viewer - Public Facade.

============================================================
RESPONSIBILITY
============================================================
The only entry point UI and API callers use.

- Validates address syntax before any adapter work
- Picks the adapter (pinned by a known DAO, else by probe)
- Turns adapter/network failures into absent or empty results

Treasury failures surface as None, proposal failures as an empty
list. An empty list is therefore indistinguishable from a DAO that
has no proposals.
============================================================
"""

import logging
from typing import Optional

from dao_adapters.base import BaseDaoAdapter
from dao_adapters.exceptions import InvalidAddressFormatError
from dao_adapters.models import (
    DaoTreasury,
    KnownDao,
    Proposal,
    ProposalDetails,
    ValidationResult,
)
from dao_adapters.registry import AdapterRegistry, create_default_registry
from dao_viewer.config import ViewerConfig
from dao_viewer.known_daos import KnownDaoRegistry
from stacks_api.address import ContractAddress, parse_contract_address
from stacks_api.base import BaseStacksApi
from stacks_api.models import Network


logger = logging.getLogger(__name__)


INVALID_ADDRESS_MESSAGE = "Invalid Stacks contract address format"
CONTRACT_UNAVAILABLE_MESSAGE = "Contract not found or not accessible"
MIN_DAO_NAME_LENGTH = 3


class DaoService:
    """
    Facade over the adapter registry.

    Owns no state beyond its configuration, collaborators and the
    known-DAO list.
    """

    def __init__(
        self,
        api: BaseStacksApi,
        registry: Optional[AdapterRegistry] = None,
        known_daos: Optional[KnownDaoRegistry] = None,
        config: Optional[ViewerConfig] = None,
    ) -> None:
        self._config = config or ViewerConfig()
        self._api = api
        # Both collaborators define __len__, so an empty one is falsy.
        if registry is None:
            registry = create_default_registry(
                api,
                sender_address=self._config.sender_address,
                proposal_concurrency=self._config.proposal_concurrency,
            )
        if known_daos is None:
            known_daos = KnownDaoRegistry(default_network=self._config.default_network)
        self._registry = registry
        self._known_daos = known_daos

    @property
    def default_network(self) -> Network:
        return self._config.default_network

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    @property
    def config(self) -> ViewerConfig:
        return self._config

    def _network(self, network: Optional[Network]) -> Network:
        return network or self._config.default_network

    # ─────────────────────────────────────────────────────────────
    # Address handling
    # ─────────────────────────────────────────────────────────────

    def check_address(
        self,
        contract_address: str,
        network: Optional[Network] = None,
    ) -> ContractAddress:
        """
        Validate a contract address for a network.

        Raises:
            InvalidAddressFormatError: If malformed or from another network
        """
        network = self._network(network)
        parsed = parse_contract_address(contract_address, network)
        if parsed is None:
            raise InvalidAddressFormatError(
                message=f"{INVALID_ADDRESS_MESSAGE}: {contract_address!r}",
                contract_address=contract_address,
                network=network.value,
            )
        return parsed

    def is_valid_address(
        self,
        contract_address: str,
        network: Optional[Network] = None,
    ) -> bool:
        return parse_contract_address(contract_address, self._network(network)) is not None

    async def _resolve_adapter(self, contract_address: str, network: Network) -> BaseDaoAdapter:
        known = self._known_daos.find(contract_address, network)
        if known and known.adapter_type:
            pinned = self._registry.get_adapter(known.adapter_type)
            if pinned is not None:
                return pinned
            logger.warning(
                f"Known DAO {contract_address} names unknown adapter "
                f"'{known.adapter_type}', probing instead"
            )
        return await self._registry.select_adapter(contract_address, network)

    # ─────────────────────────────────────────────────────────────
    # Known DAOs
    # ─────────────────────────────────────────────────────────────

    async def list_known_daos(self, network: Optional[Network] = None) -> list[KnownDao]:
        """Get known/curated DAOs for a network."""
        return self._known_daos.list_daos(self._network(network))

    def register_known_dao(
        self,
        name: str,
        contract_address: str,
        network: Optional[Network] = None,
        adapter_type: Optional[str] = None,
    ) -> KnownDao:
        """
        Register an existing DAO contract with the viewer.

        Nothing is deployed; the entry is only remembered.

        Raises:
            InvalidAddressFormatError: If the address is malformed
            ValueError: If the name is too short or the adapter is unknown
        """
        network = self._network(network)
        name = name.strip()
        if len(name) < MIN_DAO_NAME_LENGTH:
            raise ValueError(
                f"DAO name must be at least {MIN_DAO_NAME_LENGTH} characters long."
            )
        contract = self.check_address(contract_address, network)
        if adapter_type and adapter_type not in self._registry:
            raise ValueError(f"Unknown adapter type: {adapter_type}")

        return self._known_daos.register(KnownDao(
            name=name,
            contract_address=contract.contract_id,
            network=network,
            adapter_type=adapter_type,
        ))

    # ─────────────────────────────────────────────────────────────
    # DAO data
    # ─────────────────────────────────────────────────────────────

    async def get_dao_treasury(
        self,
        contract_address: str,
        network: Optional[Network] = None,
    ) -> Optional[DaoTreasury]:
        """
        Get DAO treasury information.

        Args:
            contract_address: Full contract address (e.g. SP000...123.dao-contract)
            network: Network to query (default network when None)

        Returns:
            DaoTreasury, or None on invalid address or fetch failure
        """
        network = self._network(network)
        if not self.is_valid_address(contract_address, network):
            logger.error(f"{INVALID_ADDRESS_MESSAGE}: {contract_address}")
            return None

        try:
            adapter = await self._resolve_adapter(contract_address, network)
            logger.info(f"Fetching treasury for {contract_address} using {adapter.get_name()}")
            return await adapter.get_treasury(contract_address, network)
        except Exception as e:
            logger.error(f"Failed to fetch DAO treasury: {e}")
            return None

    async def get_dao_proposals(
        self,
        contract_address: str,
        network: Optional[Network] = None,
    ) -> list[Proposal]:
        """
        Get all discoverable proposals for a DAO.

        Returns an empty list on invalid address or fetch failure.
        """
        network = self._network(network)
        if not self.is_valid_address(contract_address, network):
            logger.error(f"{INVALID_ADDRESS_MESSAGE}: {contract_address}")
            return []

        try:
            adapter = await self._resolve_adapter(contract_address, network)
            logger.info(f"Fetching proposals for {contract_address} using {adapter.get_name()}")
            return await adapter.get_proposals(contract_address, network)
        except Exception as e:
            logger.error(f"Failed to fetch DAO proposals: {e}")
            return []

    async def get_proposal_details(
        self,
        proposal_id: str,
        dao_contract_address: Optional[str] = None,
        network: Optional[Network] = None,
    ) -> Optional[ProposalDetails]:
        """
        Get detailed information about one proposal.

        Args:
            proposal_id: Proposal identifier
            dao_contract_address: DAO contract address (required for context)
            network: Network to query
        """
        network = self._network(network)
        if not dao_contract_address:
            logger.warning("DAO contract address required for proposal details")
            return None
        if not self.is_valid_address(dao_contract_address, network):
            logger.error(f"{INVALID_ADDRESS_MESSAGE}: {dao_contract_address}")
            return None

        try:
            adapter = await self._resolve_adapter(dao_contract_address, network)
            logger.info(f"Fetching proposal {proposal_id} using {adapter.get_name()}")
            return await adapter.get_proposal_details(
                proposal_id,
                network,
                contract_address=dao_contract_address,
            )
        except Exception as e:
            logger.error(f"Failed to fetch proposal details: {e}")
            return None

    async def validate_dao_contract(
        self,
        contract_address: str,
        network: Optional[Network] = None,
    ) -> ValidationResult:
        """
        Check that a contract exists by fetching its treasury.

        This performs a full treasury fetch; keep it off hot paths.
        """
        network = self._network(network)
        if not self.is_valid_address(contract_address, network):
            return ValidationResult(is_valid=False, error=INVALID_ADDRESS_MESSAGE)

        treasury = await self.get_dao_treasury(contract_address, network)
        if treasury is None:
            return ValidationResult(is_valid=False, error=CONTRACT_UNAVAILABLE_MESSAGE)
        return ValidationResult(is_valid=True)

    async def close(self) -> None:
        await self._api.close()


# Singleton instance
_default_service: Optional[DaoService] = None


def get_default_service(config: Optional[ViewerConfig] = None) -> DaoService:
    """Get or create the default service backed by the public Stacks API."""
    global _default_service
    if _default_service is None:
        from stacks_api.client import StacksApiClient

        config = config or ViewerConfig.from_env()
        api = StacksApiClient(
            base_urls=config.api_urls,
            timeout=config.api_timeout_seconds,
        )
        _default_service = DaoService(api, config=config)
    return _default_service
