"""
Known DAO Registry - Curated and user-registered DAO entries.

Entries are immutable; registering the same address on the same network
replaces the previous entry.
"""

import logging
from typing import Iterable, Optional

from dao_adapters.models import KnownDao
from stacks_api.models import Network


logger = logging.getLogger(__name__)


SEED_DAOS: tuple[KnownDao, ...] = (
    KnownDao(
        name="ALEX Lab DAO",
        contract_address="SP3K8BC0PPEVCV7NZ6QSRWPQ2JE9E5B6N3PA0KBR9.executor-dao",
        network=Network.MAINNET,
    ),
    KnownDao(
        name="Devnet Sample DAO",
        contract_address="ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM.sample-dao",
        network=Network.TESTNET,
        adapter_type="generic",
    ),
)


class KnownDaoRegistry:
    """
    In-memory list of known DAOs, seeded with a curated set.

    Entries without a network are listed on every network.
    """

    def __init__(
        self,
        seed: Iterable[KnownDao] = SEED_DAOS,
        default_network: Network = Network.MAINNET,
    ) -> None:
        self._default_network = default_network
        self._entries: list[KnownDao] = []
        for dao in seed:
            self.register(dao)

    def _network_of(self, dao: KnownDao) -> Network:
        return dao.network or self._default_network

    def register(self, dao: KnownDao) -> KnownDao:
        """Add an entry, replacing one with the same address and network."""
        network = self._network_of(dao)
        for i, existing in enumerate(self._entries):
            if (
                existing.contract_address == dao.contract_address
                and self._network_of(existing) == network
            ):
                logger.info(f"Replacing known DAO {dao.contract_address} ({network.value})")
                self._entries[i] = dao
                return dao

        self._entries.append(dao)
        logger.info(f"Registered known DAO '{dao.name}' at {dao.contract_address}")
        return dao

    def list_daos(self, network: Optional[Network] = None) -> list[KnownDao]:
        """Entries for ``network`` (all entries when None)."""
        if network is None:
            return list(self._entries)
        return [
            dao for dao in self._entries
            if dao.network is None or dao.network == network
        ]

    def find(self, contract_address: str, network: Network) -> Optional[KnownDao]:
        for dao in self.list_daos(network):
            if dao.contract_address == contract_address:
                return dao
        return None

    def __len__(self) -> int:
        return len(self._entries)
